"""Shared utilities: exceptions and diagnostic logging."""

from mdpaste.utils.exceptions import (
    GuardRejection,
    PasteError,
    UnsupportedPlatform,
    UserCancelled,
)
from mdpaste.utils.logger import DiagnosticLog, configure_logging

__all__ = [
    "DiagnosticLog",
    "GuardRejection",
    "PasteError",
    "UnsupportedPlatform",
    "UserCancelled",
    "configure_logging",
]
