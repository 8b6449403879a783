"""Exception handlers mapping docmanager errors onto JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .exceptions import (
    AuthorizationError,
    DocManagerError,
    RoleAssignmentError,
    SessionRevokedError,
    create_error_response,
    get_http_status_code,
)

logger = logging.getLogger(__name__)


def _error_body(exc: DocManagerError, **extra_details) -> dict:
    body = create_error_response(exc)
    body["error"]["details"] = {**exc.details, **extra_details}
    return body


def register_exception_handlers(app: FastAPI, is_production: bool = True) -> None:
    """Register docmanager exception handlers on ``app``."""

    @app.exception_handler(DocManagerError)
    async def docmanager_error_handler(request: Request, exc: DocManagerError):
        status_code = get_http_status_code(exc)
        if status_code >= 500:
            logger.error(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=status_code, content=create_error_response(exc))

    @app.exception_handler(RoleAssignmentError)
    async def role_assignment_error_handler(request: Request, exc: RoleAssignmentError):
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content=create_error_response(exc))

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(request: Request, exc: AuthorizationError):
        """Run the access-denied handler, which may end the session."""
        container = request.app.state.container
        outcome = await container.access_denied_handler.handle(getattr(request.state, "session", None), exc)

        if not outcome.logged_out:
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content=_error_body(exc, redirect_to=outcome.redirect_to),
            )

        request.state.user = None
        request.state.session = None
        revoked = SessionRevokedError()
        response = JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=_error_body(revoked, redirect_to=outcome.redirect_to),
        )
        settings = container.settings
        if outcome.session_id:
            response.set_cookie(
                settings.session_cookie_name,
                outcome.session_id,
                max_age=settings.session_ttl_seconds,
                httponly=True,
                secure=settings.session_cookie_secure,
                samesite="lax",
            )
        else:
            response.delete_cookie(settings.session_cookie_name)
        return response

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        message = "An unexpected error occurred" if is_production else str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": "internal_error", "message": message, "details": {}, "type": "InternalError"}},
        )
