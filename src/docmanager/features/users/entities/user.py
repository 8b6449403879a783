"""User domain entity.

The user is the actor of every authorization decision: it carries the
stored role tags, the optional explicit permission list and the hashed
credential. Role and permission semantics live here so that voters,
the session layer and the admin tooling all agree on them.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ....config.constants import PermissionLevel, Roles
from ...permissions import catalog


def _dedupe(values: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping first-seen order."""
    seen: List[str] = []
    for value in values:
        value = str(value)
        if value not in seen:
            seen.append(value)
    return seen


@dataclass
class User:
    """User domain entity.

    ``roles`` holds only what is stored; ``ROLE_USER`` is implied and added by
    :meth:`effective_roles`. ``permissions`` is ``None`` or empty when the user
    relies on role defaults.
    """

    id: Optional[int]
    email: str
    password: Optional[str] = None
    username: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    permissions: Optional[List[str]] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Normalize stored lists."""
        self.roles = _dedupe(self.roles or [])
        if self.permissions is not None:
            self.permissions = _dedupe(self.permissions)

    @property
    def user_identifier(self) -> str:
        """Visual identifier used in logs and sessions."""
        return self.email or ""

    # Roles

    def effective_roles(self) -> List[str]:
        """Stored roles plus the implicit base role, deduplicated."""
        return _dedupe([*self.roles, Roles.USER])

    def has_role(self, role: str) -> bool:
        return role in self.effective_roles()

    def is_admin(self) -> bool:
        """Admins bypass every permission check."""
        return self.has_role(Roles.ADMIN)

    def set_roles(self, roles: Iterable[str]) -> "User":
        self.roles = _dedupe(roles)
        return self

    # Permissions

    def get_permissions(self) -> List[str]:
        """Stored explicit permissions, or an empty list when unset."""
        return list(self.permissions or [])

    def set_permissions(self, permissions: Iterable[str]) -> "User":
        self.permissions = _dedupe(permissions)
        return self

    def add_permission(self, permission: str) -> "User":
        current = self.get_permissions()
        if str(permission) not in current:
            current.append(str(permission))
        self.permissions = current
        return self

    def remove_permission(self, permission: str) -> "User":
        self.permissions = [p for p in self.get_permissions() if p != str(permission)]
        return self

    def has_permission(self, permission: str) -> bool:
        """Check a permission key.

        Admins are granted everything without looking at their own list, even
        for keys the catalog does not know. Otherwise a non-empty stored list
        is authoritative; an empty or unset list falls back to the
        ``ROLE_USER`` defaults. An explicitly stored empty list therefore
        behaves exactly like "never configured".
        """
        if self.is_admin():
            return True

        permissions = self.get_permissions()
        if not permissions:
            return str(permission) in catalog.defaults_for_role(Roles.USER)

        return str(permission) in permissions

    def effective_permissions(self) -> List[str]:
        """Permissions the actor is actually granted, for display."""
        if self.is_admin():
            return catalog.all_permissions()
        return self.get_permissions() or catalog.defaults_for_role(Roles.USER)

    def permission_level(self) -> PermissionLevel:
        """Coarse level label; computed over the stored list, never the defaults."""
        if self.is_admin():
            return PermissionLevel.ADMIN
        return catalog.permission_level(self.get_permissions())

    # Serialization

    def to_session_payload(self) -> Dict[str, Any]:
        """Snapshot stored on the session; the password hash is never included."""
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "roles": list(self.roles),
            "permissions": None if self.permissions is None else list(self.permissions),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "User":
        """Build a user from a database row (JSONB columns may arrive as text)."""
        return cls(
            id=record["id"],
            email=record["email"],
            password=record.get("password"),
            username=record.get("username"),
            roles=_decode_list(record.get("roles")) or [],
            permissions=_decode_list(record.get("permissions")),
            created_at=record.get("created_at") or datetime.now(timezone.utc),
        )


def _decode_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        value = json.loads(value)
    return list(value)
