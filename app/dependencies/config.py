"""
FastAPI dependency utilities for injecting configuration.
"""

from typing import Optional

from fastapi import Depends

from app.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning the process-wide settings."""
    return get_settings()


def get_preferred_field_name(
    settings: AppSettings = Depends(get_app_settings),
) -> Optional[str]:
    """Operator-configured display name of the membership field, if any."""
    return settings.usa_fencing_field_name or None


__all__ = ["get_app_settings", "get_preferred_field_name"]
