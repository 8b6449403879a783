"""Auth API endpoints: login, logout and password reset."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from ....config.settings import DocManagerSettings
from ....dependencies import (
    get_auth_service,
    get_password_hasher,
    get_password_reset_service,
    get_session,
    get_settings_from_app,
    require_actor,
)
from ...users.entities.user import User
from ...users.services.password_hasher import PasswordHasher
from ..entities.session import SessionData
from ..models.requests import ForgotPasswordRequest, LoginRequest, ResetPasswordRequest
from ..models.responses import MessageResponse, SessionResponse, TokenValidationResponse
from ..services.auth_service import AuthService
from ..services.password_reset_service import PasswordResetService

logger = logging.getLogger(__name__)
router = APIRouter()


def _session_response(user: User) -> SessionResponse:
    return SessionResponse(
        user_id=user.id,
        email=user.email,
        username=user.username,
        roles=user.effective_roles(),
        permissions=user.effective_permissions(),
        permission_level=user.permission_level().value,
    )


def set_session_cookie(response: Response, session_id: str, settings: DocManagerSettings) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        session_id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.post(
    "/login",
    response_model=SessionResponse,
    summary="Log in",
    description="Authenticate with email or username and password; opens a cookie session",
)
async def login(
    login_request: LoginRequest,
    request: Request,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[DocManagerSettings, Depends(get_settings_from_app)],
) -> SessionResponse:
    previous: Optional[SessionData] = get_session(request)
    if previous is not None:
        await auth_service.logout(previous.session_id)

    session, user = await auth_service.login(login_request.username, login_request.password)
    set_session_cookie(response, session.session_id, settings)
    return _session_response(user)


@router.post("/logout", response_model=MessageResponse, summary="Log out")
async def logout(
    request: Request,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[DocManagerSettings, Depends(get_settings_from_app)],
) -> MessageResponse:
    session = get_session(request)
    await auth_service.logout(session.session_id if session else None)
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(success=True, message="You have been logged out.")


@router.get("/me", response_model=SessionResponse, summary="Current actor")
async def me(user: Annotated[User, Depends(require_actor)]) -> SessionResponse:
    return _session_response(user)


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    summary="Request a password reset link",
    description="Always answers with the same message, whether or not the email is registered",
)
async def forgot_password(
    forgot_request: ForgotPasswordRequest,
    reset_service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
) -> MessageResponse:
    return await reset_service.request_reset(str(forgot_request.email))


@router.get(
    "/reset-password/{token}",
    response_model=TokenValidationResponse,
    summary="Check a password reset token without consuming it",
)
async def validate_reset_token(
    token: str,
    reset_service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
) -> TokenValidationResponse:
    return TokenValidationResponse(valid=await reset_service.validate_token(token))


@router.post(
    "/reset-password/{token}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Set a new password with a reset token",
)
async def reset_password(
    token: str,
    reset_request: ResetPasswordRequest,
    reset_service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> MessageResponse:
    hashed = password_hasher.hash(reset_request.password)
    return await reset_service.reset_password(token, hashed)
