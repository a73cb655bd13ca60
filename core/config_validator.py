# core/config_validator.py

from typing import List
from core.config import settings, DEV_PORTAL_SECRET
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    # Portal tokens signed with the dev key are forgeable by anyone
    if settings.is_production and settings.PLAYER_PORTAL_SECRET == DEV_PORTAL_SECRET:
        missing.append("PLAYER_PORTAL_SECRET")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of missing optional variables (warnings only).
    """
    warnings = []

    if not settings.SUPABASE_ANON_KEY:
        warnings.append("SUPABASE_ANON_KEY (optional but recommended)")

    if not settings.is_production and settings.PLAYER_PORTAL_SECRET == DEV_PORTAL_SECRET:
        warnings.append("PLAYER_PORTAL_SECRET (using development key)")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    In production, missing required config raises RuntimeError.
    Everywhere else it is only logged so local runs and tests still boot.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        if settings.is_production:
            raise RuntimeError(error_msg)

    for warning in missing_optional:
        logger.warning(f"Optional configuration missing: {warning}")

    if not missing_required:
        logger.info("Configuration validation passed")
