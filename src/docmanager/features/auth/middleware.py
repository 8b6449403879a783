"""Session middleware: loads the session and refreshes the actor per request."""

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RefreshUserMiddleware(BaseHTTPMiddleware):
    """Attach ``request.state.session`` and a freshly loaded ``request.state.user``.

    The actor is always re-read from the database, never taken from the
    session snapshot.
    """

    def __init__(self, app, cookie_name: str = "docmanager_session", exempt_paths=None):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.exempt_paths = exempt_paths or ["/health", "/docs", "/openapi.json"]

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.session = None
        request.state.user = None

        if any(request.url.path.startswith(path) for path in self.exempt_paths):
            return await call_next(request)

        session_id = request.cookies.get(self.cookie_name)
        if session_id:
            session_service = request.app.state.container.session_service
            session = await session_service.load(session_id)
            request.state.session = session
            request.state.user = await session_service.refresh_actor(session)
            if session is not None and request.state.user is None:
                logger.debug(f"Session {session_id} carries no usable actor")

        return await call_next(request)
