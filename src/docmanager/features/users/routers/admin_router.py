"""Admin endpoints for user roles and permissions."""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends

from ....config.constants import Roles
from ....dependencies import get_actor, get_user_role_service
from ...auth.models.requests import UpdateUserAccessRequest
from ...auth.models.responses import PermissionEditorResponse, UserAccessResponse
from ...authorization.dependencies import require_granted
from ..entities.user import User
from ..services.user_role_service import UserRoleService, permission_editor_context

logger = logging.getLogger(__name__)
router = APIRouter()


def _access_response(user: User) -> UserAccessResponse:
    return UserAccessResponse(
        id=user.id,
        email=user.email,
        roles=user.effective_roles(),
        permissions=user.permissions,
        permission_level=user.permission_level().value,
    )


@router.get(
    "/permissions",
    response_model=PermissionEditorResponse,
    summary="Permission groups and presets for the permission editor",
    dependencies=[Depends(require_granted(Roles.ADMIN))],
)
async def get_permission_editor() -> PermissionEditorResponse:
    return PermissionEditorResponse(**permission_editor_context())


@router.get("/users", response_model=List[UserAccessResponse], summary="List users with their access")
async def list_users(
    admin: Annotated[Optional[User], Depends(get_actor)],
    role_service: Annotated[UserRoleService, Depends(get_user_role_service)],
) -> List[UserAccessResponse]:
    users = await role_service.list_users(admin)
    return [_access_response(user) for user in users]


@router.put(
    "/users/{user_id}/access",
    response_model=UserAccessResponse,
    summary="Replace a user's roles and explicit permissions",
)
async def update_user_access(
    user_id: int,
    access_request: UpdateUserAccessRequest,
    admin: Annotated[Optional[User], Depends(get_actor)],
    role_service: Annotated[UserRoleService, Depends(get_user_role_service)],
) -> UserAccessResponse:
    updated = await role_service.update_access(
        admin, user_id, access_request.roles, access_request.permissions
    )
    return _access_response(updated)
