"""
Environment variable validation.

Checks configuration before the application starts serving requests:
errors abort startup, missing optional integrations only log a warning.
"""

import os
import shutil
import sys
from pathlib import Path
from typing import List, Tuple

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_DATABASE_DRIVERS = ("postgresql+asyncpg://", "sqlite+aiosqlite://")


def validate_database_url() -> List[str]:
    """
    Validate database URL configuration.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")
        return errors

    if not settings.DATABASE_URL.startswith(SUPPORTED_DATABASE_DRIVERS):
        errors.append(
            "DATABASE_URL must use an async driver "
            "(postgresql+asyncpg://... or sqlite+aiosqlite://...)"
        )

    if settings.is_production and settings.is_sqlite:
        errors.append("SQLite is not supported in production - use PostgreSQL")

    return errors


def validate_upload_dir() -> List[str]:
    """
    Make sure uploaded files can be written.

    The directory is created if missing (uploads would create it anyway).
    """
    errors = []
    upload_dir = Path(settings.UPLOAD_DIR)

    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        errors.append(f"UPLOAD_DIR {upload_dir} cannot be created: {e}")
        return errors

    if not os.access(upload_dir, os.W_OK):
        errors.append(f"UPLOAD_DIR {upload_dir} is not writable")

    if settings.UPLOAD_MAX_BYTES <= 0:
        errors.append("UPLOAD_MAX_BYTES must be positive")

    return errors


def check_optional_integrations() -> None:
    """Log a warning for every optional integration that is not available."""
    warnings = []

    tesseract = settings.TESSERACT_CMD or "tesseract"
    if not shutil.which(tesseract):
        warnings.append(
            f"Tesseract binary '{tesseract}' not found - image uploads will report OCR failures"
        )

    if not settings.YOUTUBE_API_KEY:
        warnings.append(
            "YOUTUBE_API_KEY not set - YouTube links will be rejected with 503"
        )

    for warning in warnings:
        logger.warning("environment_validation_warning", message=warning)


def check_production_settings() -> None:
    """Warn about development defaults left on in production."""
    if not settings.is_production:
        return

    if settings.DEBUG:
        logger.warning("debug_enabled_in_production", message="DEBUG should be false in production")

    if "localhost" in ",".join(settings.ALLOWED_ORIGINS):
        logger.warning(
            "localhost_in_allowed_origins",
            message="ALLOWED_ORIGINS includes localhost in production - may be insecure"
        )

    if settings.LOG_FORMAT != "json":
        logger.warning(
            "log_format_not_json",
            message="LOG_FORMAT should be 'json' in production for better log aggregation"
        )


def validate_environment() -> Tuple[bool, List[str]]:
    """
    Validate all environment variables.

    Returns:
        (is_valid, list_of_errors)
    """
    logger.info(
        "validating_environment",
        app_env=settings.APP_ENV,
        app_name=settings.APP_NAME
    )

    all_errors = []
    all_errors.extend(validate_database_url())
    all_errors.extend(validate_upload_dir())

    check_optional_integrations()
    check_production_settings()

    if all_errors:
        logger.error(
            "environment_validation_failed",
            errors=all_errors,
            error_count=len(all_errors)
        )
        return False, all_errors

    logger.info(
        "environment_validation_successful",
        app_env=settings.APP_ENV,
        features_enabled={
            "youtube": bool(settings.YOUTUBE_API_KEY),
            "youtube_transcripts": settings.YOUTUBE_FETCH_TRANSCRIPTS,
        }
    )
    return True, []


def validate_or_exit() -> None:
    """
    Validate environment and exit if validation fails.

    Called during application startup.
    """
    is_valid, errors = validate_environment()

    if not is_valid:
        logger.critical(
            "startup_aborted_invalid_environment",
            errors=errors
        )
        sys.exit(1)

    logger.info("environment_validation_passed")
