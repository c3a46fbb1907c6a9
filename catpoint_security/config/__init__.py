"""Configuration components for the security monitor."""

from .defaults import (
    SYSTEM_CONSTANTS,
    DEFAULT_PATHS,
    IMAGE_ANALYSIS_SETTINGS,
    VALID_IMAGE_SERVICES,
    VALID_LOG_LEVELS
)

__all__ = [
    'SYSTEM_CONSTANTS',
    'DEFAULT_PATHS',
    'IMAGE_ANALYSIS_SETTINGS',
    'VALID_IMAGE_SERVICES',
    'VALID_LOG_LEVELS'
]
