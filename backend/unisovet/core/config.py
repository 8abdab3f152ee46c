"""
Centralized configuration module for application-wide settings.

This module provides centralized configuration for timezone handling,
storage and the virtual assistant integration. Values are read from
environment variables so tests and deployments can override them.
"""

import os
import logging
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Returns:
        ZoneInfo: Application timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'America/Sao_Paulo', 'UTC')
            Default: 'UTC'
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


APP_TZ = get_app_timezone()


def log_timezone_config():
    """Log the active timezone configuration."""
    logger.info(
        "Timezone configuration initialized",
        extra={
            "context": {
                "timezone": str(APP_TZ),
                "tz_env_var": os.getenv("TZ", "UTC"),
            }
        },
    )


# ===========================
# Storage Configuration
# ===========================

DEFAULT_DATABASE_URL = "sqlite:///./unisovet.db"


def get_database_url() -> str:
    """
    Get the URL of the database that backs the key/value storage slots.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL
            Default: 'sqlite:///./unisovet.db'
            Tests: 'sqlite:///:memory:'
    """
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


# ===========================
# Virtual Assistant Configuration
# ===========================

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_CLINIC_PHONE = "(15) 99999-8888"


def get_gemini_api_key() -> str | None:
    """
    Get the credential for the Gemini API.

    Returns:
        str | None: API key if configured, None otherwise

    Environment Variables:
        GEMINI_API_KEY: Preferred variable name
        API_KEY: Accepted as a fallback

    A missing key is not an error at startup: the assistant answers with
    its apology message when a request cannot be sent.
    """
    key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    if key is not None and not key.strip():
        return None
    return key


def get_gemini_model() -> str:
    """Model identifier sent with every assistant request (GEMINI_MODEL)."""
    return os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)


def get_gemini_base_url() -> str:
    """Base URL of the Gemini REST API (GEMINI_BASE_URL)."""
    return os.getenv("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL).rstrip("/")


def get_gemini_timeout() -> float:
    """
    Get the timeout in seconds for a single assistant request.

    Environment Variables:
        GEMINI_TIMEOUT: Seconds as a number
            Default: 60
    """
    raw = os.getenv("GEMINI_TIMEOUT", "60")
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(
            "Invalid GEMINI_TIMEOUT value, using default",
            extra={"context": {"value": raw}},
        )
        return 60.0
    return timeout if timeout > 0 else 60.0


def get_clinic_phone() -> str:
    """Phone number the assistant hands out for complex requests (CLINIC_PHONE)."""
    return os.getenv("CLINIC_PHONE", DEFAULT_CLINIC_PHONE)


def log_assistant_config():
    """
    Log the active assistant configuration.

    The API key itself is never logged, only whether one is present.
    """
    logger.info(
        "Assistant configuration initialized",
        extra={
            "context": {
                "model": get_gemini_model(),
                "base_url": get_gemini_base_url(),
                "timeout": get_gemini_timeout(),
                "has_api_key": bool(get_gemini_api_key()),
            }
        },
    )


# ===========================
# Runtime Flags
# ===========================


def is_test_mode() -> bool:
    """Check if we're running in test mode (TESTING env var)."""
    return os.getenv("TESTING", "").lower().strip() in ("true", "1", "yes")


def is_rate_limit_enabled() -> bool:
    """Rate limiting can be disabled with RATE_LIMIT_ENABLED=0."""
    return os.getenv("RATE_LIMIT_ENABLED", "1").strip() != "0"


def is_log_to_file_enabled() -> bool:
    """Rotating log files are written unless LOG_TO_FILE=0."""
    return os.getenv("LOG_TO_FILE", "1").strip() != "0"
