"""
Utility modules for the audit engine.

Contains logging helpers and shared rule constants.
"""

from .log import setup_logger, get_logger
from .constants import (
    ALLOWED_ARIA_ATTRIBUTES,
    NAMED_COLORS,
    DEFAULT_FOREGROUND,
    DEFAULT_BACKGROUND,
    AA_CONTRAST_THRESHOLD,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "ALLOWED_ARIA_ATTRIBUTES",
    "NAMED_COLORS",
    "DEFAULT_FOREGROUND",
    "DEFAULT_BACKGROUND",
    "AA_CONTRAST_THRESHOLD",
]
