"""Permissions feature: the static permission catalog and presets."""

from .catalog import (
    Permission,
    PermissionSet,
    all_permissions,
    defaults_for_role,
    filter_known,
    groups,
    is_known,
    is_ui_permission,
    label_for,
    permission_level,
    permission_set,
    permission_sets,
    ui_permissions,
)

__all__ = [
    "Permission",
    "PermissionSet",
    "all_permissions",
    "defaults_for_role",
    "filter_known",
    "groups",
    "is_known",
    "is_ui_permission",
    "label_for",
    "permission_level",
    "permission_set",
    "permission_sets",
    "ui_permissions",
]
