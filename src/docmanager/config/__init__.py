"""Configuration for docmanager: settings, constants and logging."""

from .constants import (
    FlashCategory,
    PasswordPolicy,
    PasswordResetLimits,
    PermissionLevel,
    Roles,
    SessionKeys,
)
from .logging_config import LoggingConfig, setup_logging
from .settings import DocManagerSettings, get_settings

__all__ = [
    "DocManagerSettings",
    "get_settings",
    "FlashCategory",
    "PasswordPolicy",
    "PasswordResetLimits",
    "PermissionLevel",
    "Roles",
    "SessionKeys",
    "LoggingConfig",
    "setup_logging",
]
