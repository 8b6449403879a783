"""Authorization checker: single dispatch point over the voter registry."""

import logging
from typing import Any, Optional

from ...core.exceptions import AuthenticationError, AuthorizationError
from ..users.entities.user import User
from .registry import VoterRegistry, create_default_registry
from .voters import VoteResult

logger = logging.getLogger(__name__)


class AuthorizationChecker:
    """Affirmative decision over every voter that supports the request.

    Access is granted as soon as one voter grants. When every voter denies
    or abstains, access is denied.
    """

    def __init__(self, registry: Optional[VoterRegistry] = None):
        self.registry = registry or create_default_registry()

    def decide(self, actor: Optional[User], attribute: str, subject: Any = None) -> VoteResult:
        """Return the aggregated vote; ``ABSTAIN`` means no voter supported the pair."""
        result = VoteResult.ABSTAIN
        for voter in self.registry:
            vote = voter.vote(attribute, subject, actor)
            if vote == VoteResult.GRANTED:
                return VoteResult.GRANTED
            if vote == VoteResult.DENIED:
                result = VoteResult.DENIED
        return result

    def is_granted(self, actor: Optional[User], attribute: str, subject: Any = None) -> bool:
        decision = self.decide(actor, attribute, subject)
        if decision == VoteResult.ABSTAIN:
            logger.debug(f"No voter supports {attribute} on {type(subject).__name__}; denying")
        return decision == VoteResult.GRANTED

    def deny_access_unless_granted(
        self,
        actor: Optional[User],
        attribute: str,
        subject: Any = None,
        message: str = "Access denied.",
    ) -> None:
        """Raise unless ``actor`` is granted ``attribute``.

        Raises:
            AuthenticationError: there is no authenticated actor
            AuthorizationError: the actor is authenticated but denied
        """
        if actor is None:
            raise AuthenticationError()

        if not self.is_granted(actor, attribute, subject):
            logger.info(f"Access denied for user {actor.id} on {attribute}")
            raise AuthorizationError(message, attribute=str(attribute))
