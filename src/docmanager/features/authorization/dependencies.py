"""FastAPI dependencies for authorization checks."""

from typing import Callable

from fastapi import Request

from ...dependencies import get_actor, get_container
from ..users.entities.user import User


def require_granted(attribute: str) -> Callable:
    """Dependency factory denying the request unless the actor holds ``attribute``.

    Usage:
        @router.get("/documents", dependencies=[Depends(require_granted("documents.view_list"))])
    """

    async def dependency(request: Request) -> User:
        actor = get_actor(request)
        get_container(request).checker.deny_access_unless_granted(actor, attribute)
        return actor

    return dependency
