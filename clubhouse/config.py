from __future__ import annotations

import os
import secrets
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

APP_ENV = os.getenv("APP_ENV", "development")


def get_database_url() -> str:
    """Return the SQLAlchemy connection string."""
    return os.getenv("DATABASE_URL", "sqlite:///./clubhouse.db")


def get_admin_username() -> str:
    return os.getenv("ADMIN_USERNAME", "admin")


def get_admin_password() -> str:
    """Return the admin password. Empty means admin login is disabled."""
    return os.getenv("ADMIN_PASSWORD", "")


# Generated once per process when SECRET_KEY is not configured, so existing
# sessions are dropped on restart.
_FALLBACK_SECRET = secrets.token_hex(32)


def get_secret_key() -> str:
    return os.getenv("SECRET_KEY") or _FALLBACK_SECRET


def get_cookie_secure() -> bool:
    default = "1" if APP_ENV == "production" else "0"
    return os.getenv("COOKIE_SECURE", default).lower() in ("1", "true", "yes")


def get_admin_session_max_age() -> int:
    return int(os.getenv("ADMIN_SESSION_MAX_AGE", str(60 * 60 * 24)))


def get_player_session_max_age() -> int:
    return int(os.getenv("PLAYER_SESSION_MAX_AGE", str(60 * 60 * 24 * 30)))


def get_cloudinary_config() -> dict:
    """Return the hosted image service credentials (values may be empty)."""
    return {
        "cloud_name": os.getenv("CLOUDINARY_CLOUD_NAME", ""),
        "api_key": os.getenv("CLOUDINARY_API_KEY", ""),
        "api_secret": os.getenv("CLOUDINARY_API_SECRET", ""),
        "folder": os.getenv("CLOUDINARY_FOLDER", "clubhouse"),
    }


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


__all__ = [
    "TEMPLATES_DIR",
    "STATIC_DIR",
    "get_database_url",
    "get_admin_username",
    "get_admin_password",
    "get_secret_key",
    "get_cookie_secure",
    "get_admin_session_max_age",
    "get_player_session_max_age",
    "get_cloudinary_config",
    "get_log_level",
]
