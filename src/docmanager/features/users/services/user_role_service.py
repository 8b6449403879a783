"""Admin editing of user roles and explicit permissions."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ....config.constants import Roles
from ....core.exceptions import RoleAssignmentError, UserNotFoundError
from ...authorization.checker import AuthorizationChecker
from ...permissions import catalog
from ..entities.user import User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserRoleService:
    """Lets an administrator change another user's roles and permissions.

    Admin accounts cannot be edited (they bypass permissions anyway) and an
    administrator cannot edit their own account.
    """

    def __init__(self, user_repository: UserRepository, checker: Optional[AuthorizationChecker] = None):
        self.user_repository = user_repository
        self.checker = checker or AuthorizationChecker()

    async def list_users(self, admin: Optional[User]) -> List[User]:
        self.checker.deny_access_unless_granted(admin, Roles.ADMIN)
        return await self.user_repository.list_all()

    async def update_access(
        self,
        admin: Optional[User],
        target_id: int,
        roles: Iterable[str],
        permissions: Optional[Iterable[str]],
    ) -> User:
        """Replace the target's stored roles and explicit permission list.

        Roles are stored as given (deduplicated) with ``ROLE_USER`` always kept.
        Unknown permission keys are dropped.
        An empty permission list is stored as-is and therefore falls back to
        the role defaults.

        Raises:
            AuthenticationError: no actor
            AuthorizationError: actor is not an administrator
            UserNotFoundError: target does not exist
            RoleAssignmentError: target is an admin or the actor themselves
        """
        self.checker.deny_access_unless_granted(admin, Roles.ADMIN)

        target = await self.user_repository.get_by_id(target_id)
        if target is None:
            raise UserNotFoundError(user_id=target_id)

        if target.is_admin():
            raise RoleAssignmentError(
                "Cannot edit admin users. Admin accounts have full access by default.",
                target_user_id=target_id,
            )

        if admin.id == target.id:
            raise RoleAssignmentError("You cannot edit your own roles.", target_user_id=target_id)

        new_roles = [str(role) for role in roles]
        if Roles.USER not in new_roles:
            new_roles.append(Roles.USER)
        new_permissions = catalog.filter_known(permissions or [])

        old_roles, old_permissions = list(target.roles), target.get_permissions()
        target.set_roles(new_roles).set_permissions(new_permissions)

        updated = await self.user_repository.update_roles_and_permissions(
            target.id, target.roles, target.permissions
        )
        if not updated:
            raise UserNotFoundError(user_id=target_id)

        logger.info(
            f"User {admin.id} updated access of user {target.id}: "
            f"roles {old_roles} -> {target.roles}, permissions {old_permissions} -> {target.permissions}"
        )
        return target


def permission_editor_context() -> Dict[str, Any]:
    """Groups and presets rendered by the permission editor."""
    return {
        "permission_groups": catalog.groups(),
        "permission_sets": {name: preset.to_dict() for name, preset in catalog.permission_sets().items()},
        "ui_permissions": catalog.ui_permissions(),
    }
