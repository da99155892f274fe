"""
Configuration settings for the Blog Posts API
"""

import os
import logging

logger = logging.getLogger(__name__)

def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")

# Environment configuration
DATABASE_URL = os.getenv("DATABASE_URL")
PORT = int(os.getenv("PORT", 3000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Database pool configuration
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 1))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = 60

# Insert sample posts on startup when the posts table is empty
SEED_SAMPLE_DATA = _env_flag("SEED_SAMPLE_DATA", "true")

# CORS settings
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

# Validate required environment variables
if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is required")

logger.info(f"Database pool size: {DB_POOL_MIN_SIZE}-{DB_POOL_MAX_SIZE}, seed sample data: {SEED_SAMPLE_DATA}")
