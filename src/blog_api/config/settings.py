"""
Configuration settings for the Blog Posts API
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Environment configuration
ENV = os.getenv("ENV", "PROD")  # PROD, QA or TEST
DATABASE_URL = os.getenv("DATABASE_URL")
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8080))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Connection pool bounds
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 1))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = 60

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]


def get_database_url(env: str = None) -> str:
    """Select the store connection string for the given environment"""
    env = (env or ENV).upper()
    if env == "TEST":
        if not TEST_DATABASE_URL:
            raise ValueError("TEST_DATABASE_URL environment variable is required")
        return TEST_DATABASE_URL

    if not DATABASE_URL:
        raise ValueError("DATABASE_URL environment variable is required")
    return DATABASE_URL


def configure_logging(level: str = None):
    """Configure root logging for the process entry points"""
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    logger.info(f"Environment: {ENV}")
