"""Role voter for ``ROLE_*`` attributes."""

from typing import Any

from ....config.constants import Roles
from ...users.entities.user import User
from .base import Voter


class RoleVoter(Voter):
    """Grants a ``ROLE_*`` attribute when the actor holds that role."""

    family = "role"

    def supports(self, attribute: str, subject: Any = None) -> bool:
        return str(attribute).startswith(Roles.PREFIX)

    def vote_on_attribute(self, attribute: str, subject: Any, actor: User) -> bool:
        return actor.has_role(str(attribute))
