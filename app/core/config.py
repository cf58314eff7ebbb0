"""
Basic configuration

- CORS origins for development and production
- Storage backend and data directory
- Supports environment variables (loaded from .env when present)
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Project root is the parent of app/
project_root = Path(__file__).parent.parent.parent
load_dotenv(dotenv_path=project_root / '.env')

# Default localhost origins for development
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8081",
]

# Get additional CORS origins from environment variable
ADDITIONAL_CORS_ORIGINS = os.getenv("CORS_ORIGINS", "").split(",") if os.getenv("CORS_ORIGINS") else []

# Filter out empty strings from split
ADDITIONAL_CORS_ORIGINS = [origin.strip() for origin in ADDITIONAL_CORS_ORIGINS if origin.strip()]

# Combine default and additional origins
CORS_ORIGINS = DEFAULT_CORS_ORIGINS + ADDITIONAL_CORS_ORIGINS

# Storage: "json" persists to DATA_DIR, "memory" keeps everything in-process
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json").strip().lower()
DATA_DIR = os.getenv("DATA_DIR", "data")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Default accounts created when the staff store is empty
SEED_DEFAULT_STAFF = _env_flag("SEED_DEFAULT_STAFF", True)
DEFAULT_STAFF_PASSWORD = os.getenv("DEFAULT_STAFF_PASSWORD", "123456")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin")
