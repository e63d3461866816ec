"""
Entry point for the Blog Posts API
"""

import logging

import uvicorn

from blog_api.app import create_app
from blog_api.config.settings import HOST, PORT, configure_logging

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)

app = create_app()

if __name__ == "__main__":
    logger.info(f"Starting Blog Posts API on port {PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
