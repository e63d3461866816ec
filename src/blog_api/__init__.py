"""
Blog Posts API - a FastAPI CRUD service for blog posts
"""

__version__ = "1.0.0"
