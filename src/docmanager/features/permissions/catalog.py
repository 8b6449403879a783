"""Permission catalog for docmanager.

Single source of truth for every permission key that can exist, the named
presets used to bulk-assign them, role defaults and the coarse permission
level classification. Everything here is static; no function can fail.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ...config.constants import PermissionLevel, Roles


class Permission(str, Enum):
    """Permission keys in ``domain.action`` form."""

    # Clients: list/view
    CLIENTS_VIEW_LIST = "clients.view_list"
    CLIENTS_VIEW_DETAILS = "clients.view_details"
    # Clients: actions
    CLIENTS_CREATE = "clients.create"
    CLIENTS_EDIT = "clients.edit"
    CLIENTS_DELETE = "clients.delete"
    # Clients: UI control (column and button visibility)
    CLIENTS_VIEW_DOCUMENTS_COLUMN = "clients.view_documents_column"
    CLIENTS_VIEW_ACTIONS_COLUMN = "clients.view_actions_column"
    CLIENTS_VIEW_BUTTON = "clients.view_view_button"

    # Documents
    DOCUMENTS_VIEW_LIST = "documents.view_list"
    DOCUMENTS_VIEW_DETAILS = "documents.view_details"
    DOCUMENTS_CREATE_UPLOAD = "documents.create_upload"
    DOCUMENTS_EDIT = "documents.edit"
    DOCUMENTS_DELETE = "documents.delete"
    DOCUMENTS_DOWNLOAD = "documents.download"

    # User management
    USERS_VIEW = "users.view"
    USERS_CREATE = "users.create"
    USERS_EDIT = "users.edit"
    USERS_DELETE = "users.delete"
    USERS_ASSIGN_ROLES = "users.assign_roles"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PermissionSet:
    """Named preset of permission keys offered when editing a user."""

    name: str
    label: str
    description: str
    permissions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "label": self.label,
            "description": self.description,
            "permissions": list(self.permissions),
        }


_GROUPS: Dict[str, Dict[str, str]] = {
    "Clients": {
        Permission.CLIENTS_VIEW_LIST.value: "View Clients List",
        Permission.CLIENTS_VIEW_DETAILS.value: "View Client Details",
        Permission.CLIENTS_CREATE.value: "Create Clients",
        Permission.CLIENTS_EDIT.value: "Edit Clients",
        Permission.CLIENTS_DELETE.value: "Delete Clients",
        Permission.CLIENTS_VIEW_DOCUMENTS_COLUMN.value: "See Documents Column",
        Permission.CLIENTS_VIEW_ACTIONS_COLUMN.value: "See Actions Column",
        Permission.CLIENTS_VIEW_BUTTON.value: "See View Button",
    },
    "Documents": {
        Permission.DOCUMENTS_VIEW_LIST.value: "View Documents List",
        Permission.DOCUMENTS_VIEW_DETAILS.value: "View Document Details",
        Permission.DOCUMENTS_CREATE_UPLOAD.value: "Upload Documents",
        Permission.DOCUMENTS_EDIT.value: "Edit Documents",
        Permission.DOCUMENTS_DELETE.value: "Delete Documents",
        Permission.DOCUMENTS_DOWNLOAD.value: "Download Documents",
    },
    "User Management": {
        Permission.USERS_VIEW.value: "View Users",
        Permission.USERS_CREATE.value: "Create Users",
        Permission.USERS_EDIT.value: "Edit Users",
        Permission.USERS_DELETE.value: "Delete Users",
        Permission.USERS_ASSIGN_ROLES.value: "Assign Roles & Permissions",
    },
}

_UI_PERMISSIONS: Tuple[str, ...] = (
    Permission.CLIENTS_VIEW_DOCUMENTS_COLUMN.value,
    Permission.CLIENTS_VIEW_ACTIONS_COLUMN.value,
    Permission.CLIENTS_VIEW_BUTTON.value,
)

_READ_ONLY: Tuple[str, ...] = (
    Permission.CLIENTS_VIEW_LIST.value,
    Permission.CLIENTS_VIEW_DETAILS.value,
    Permission.CLIENTS_VIEW_DOCUMENTS_COLUMN.value,
    Permission.CLIENTS_VIEW_ACTIONS_COLUMN.value,
    Permission.CLIENTS_VIEW_BUTTON.value,
    Permission.DOCUMENTS_VIEW_LIST.value,
    Permission.DOCUMENTS_VIEW_DETAILS.value,
    Permission.DOCUMENTS_DOWNLOAD.value,
)

# Same keys as read-only; kept separate so the presets can diverge.
_CLIENT_VIEW_ONLY: Tuple[str, ...] = _READ_ONLY

_LIMITED: Tuple[str, ...] = (
    Permission.CLIENTS_VIEW_LIST.value,
    Permission.CLIENTS_VIEW_DETAILS.value,
    Permission.CLIENTS_VIEW_DOCUMENTS_COLUMN.value,
    Permission.CLIENTS_VIEW_ACTIONS_COLUMN.value,
    Permission.CLIENTS_VIEW_BUTTON.value,
    Permission.DOCUMENTS_VIEW_LIST.value,
    Permission.DOCUMENTS_VIEW_DETAILS.value,
    Permission.DOCUMENTS_CREATE_UPLOAD.value,
    Permission.DOCUMENTS_EDIT.value,
    Permission.DOCUMENTS_DOWNLOAD.value,
)

_FULL: Tuple[str, ...] = (
    Permission.CLIENTS_VIEW_LIST.value,
    Permission.CLIENTS_VIEW_DETAILS.value,
    Permission.CLIENTS_CREATE.value,
    Permission.CLIENTS_EDIT.value,
    Permission.CLIENTS_DELETE.value,
    Permission.CLIENTS_VIEW_DOCUMENTS_COLUMN.value,
    Permission.CLIENTS_VIEW_ACTIONS_COLUMN.value,
    Permission.CLIENTS_VIEW_BUTTON.value,
    Permission.DOCUMENTS_VIEW_LIST.value,
    Permission.DOCUMENTS_VIEW_DETAILS.value,
    Permission.DOCUMENTS_CREATE_UPLOAD.value,
    Permission.DOCUMENTS_EDIT.value,
    Permission.DOCUMENTS_DELETE.value,
    Permission.DOCUMENTS_DOWNLOAD.value,
)

_PERMISSION_SETS: Tuple[PermissionSet, ...] = (
    PermissionSet("read_only", "Read-only", "Can view lists and details only", _READ_ONLY),
    PermissionSet("client_view_only", "Client-view-only", "Can view clients and documents", _CLIENT_VIEW_ONLY),
    PermissionSet("limited", "Limited", "Can view and upload documents", _LIMITED),
    PermissionSet("full", "Full", "Full access (except user management)", _FULL),
    PermissionSet("custom", "Custom", "Choose individual permissions", ()),
)


def groups() -> Dict[str, Dict[str, str]]:
    """Ordered mapping of group name to ``{permission key: label}``.

    Returns a fresh copy; callers may mutate it freely.
    """
    return {name: dict(perms) for name, perms in _GROUPS.items()}


def all_permissions() -> List[str]:
    """Every permission key, in group order then declaration order."""
    return [key for perms in _GROUPS.values() for key in perms]


def is_known(permission: str) -> bool:
    """True when ``permission`` exists in the catalog."""
    return any(permission in perms for perms in _GROUPS.values())


def label_for(permission: str) -> Optional[str]:
    """Human label of a permission key, or None when unknown."""
    for perms in _GROUPS.values():
        if permission in perms:
            return perms[permission]
    return None


def ui_permissions() -> List[str]:
    """Permissions that only control column/button visibility."""
    return list(_UI_PERMISSIONS)


def is_ui_permission(permission: str) -> bool:
    return permission in _UI_PERMISSIONS


def permission_sets() -> Dict[str, PermissionSet]:
    """Named presets in display order (``custom`` is always empty)."""
    return {preset.name: preset for preset in _PERMISSION_SETS}


def permission_set(name: str) -> Optional[PermissionSet]:
    return permission_sets().get(name)


def defaults_for_role(role: str) -> List[str]:
    """Fallback permissions for an actor without an explicit list.

    Plain users get the full preset: access is open by default and an
    admin restricts it by storing an explicit list.
    """
    if role == Roles.ADMIN:
        return all_permissions()
    if role == Roles.USER:
        return list(_FULL)
    return []


def permission_level(permissions: Iterable[str]) -> PermissionLevel:
    """Classify a permission list.

    Checks run in a fixed order: empty is ``None``; full create/edit/delete
    on both clients and documents is ``Full``; client list view without any
    client mutation is ``Read-only``; anything else is ``Limited``.
    """
    granted = set(permissions)
    if not granted:
        return PermissionLevel.NONE

    has_full_clients = {
        Permission.CLIENTS_CREATE.value,
        Permission.CLIENTS_EDIT.value,
        Permission.CLIENTS_DELETE.value,
    } <= granted
    has_full_documents = {
        Permission.DOCUMENTS_CREATE_UPLOAD.value,
        Permission.DOCUMENTS_EDIT.value,
        Permission.DOCUMENTS_DELETE.value,
    } <= granted
    if has_full_clients and has_full_documents:
        return PermissionLevel.FULL

    client_mutations = {
        Permission.CLIENTS_CREATE.value,
        Permission.CLIENTS_EDIT.value,
        Permission.CLIENTS_DELETE.value,
    }
    if Permission.CLIENTS_VIEW_LIST.value in granted and not (client_mutations & granted):
        return PermissionLevel.READ_ONLY

    return PermissionLevel.LIMITED


def filter_known(permissions: Iterable[str]) -> List[str]:
    """Keep only catalog keys, deduplicated in first-seen order."""
    known = set(all_permissions())
    result: List[str] = []
    for permission in permissions:
        key = str(permission)
        if key in known and key not in result:
            result.append(key)
    return result
