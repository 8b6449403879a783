"""User-management voter."""

from ...permissions.catalog import Permission
from ...users.entities.user import User
from .base import ResourceVoter


class UserVoter(ResourceVoter):
    family = "user"
    subject_type = User

    instance_attributes = frozenset({
        Permission.USERS_VIEW.value,
        Permission.USERS_EDIT.value,
        Permission.USERS_DELETE.value,
        Permission.USERS_ASSIGN_ROLES.value,
    })

    collection_attributes = frozenset({
        Permission.USERS_VIEW.value,
        Permission.USERS_CREATE.value,
        Permission.USERS_EDIT.value,
        Permission.USERS_DELETE.value,
        Permission.USERS_ASSIGN_ROLES.value,
    })
