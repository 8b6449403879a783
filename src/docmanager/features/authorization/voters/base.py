"""Voter protocol shared by every resource family.

A voter answers one question: may ``actor`` use ``attribute`` on ``subject``.
It abstains for attribute/subject pairs it does not understand so the
checker can consult other voters.
"""

import logging
from enum import IntEnum
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Type

from ...users.entities.user import User

logger = logging.getLogger(__name__)


class VoteResult(IntEnum):
    """Outcome of a single voter."""

    DENIED = -1
    ABSTAIN = 0
    GRANTED = 1


def is_privileged(actor: Optional[User]) -> bool:
    """Admin bypass, evaluated first by every voter."""
    return actor is not None and actor.is_admin()


class Voter:
    """Base voter: subclasses implement ``supports`` and ``vote_on_attribute``."""

    family: ClassVar[str] = ""

    def supports(self, attribute: str, subject: Any = None) -> bool:
        raise NotImplementedError

    def vote_on_attribute(self, attribute: str, subject: Any, actor: User) -> bool:
        raise NotImplementedError

    def vote(self, attribute: str, subject: Any, actor: Optional[User]) -> VoteResult:
        """Vote on ``attribute``; unauthenticated actors are always denied."""
        if not self.supports(attribute, subject):
            return VoteResult.ABSTAIN

        if actor is None:
            return VoteResult.DENIED

        if is_privileged(actor):
            return VoteResult.GRANTED

        granted = self.vote_on_attribute(attribute, subject, actor)
        return VoteResult.GRANTED if granted else VoteResult.DENIED


class ResourceVoter(Voter):
    """Permission-key voter for one resource family.

    With a subject of ``subject_type`` only ``instance_attributes`` are
    supported. Without a subject the family's collection attributes and the
    legacy aliases are. Any other subject makes the voter abstain. The
    subject is never inspected beyond its type.
    """

    subject_type: ClassVar[Optional[Type]] = None
    instance_attributes: ClassVar[FrozenSet[str]] = frozenset()
    collection_attributes: ClassVar[FrozenSet[str]] = frozenset()
    legacy_aliases: ClassVar[Dict[str, str]] = {}

    def supports(self, attribute: str, subject: Any = None) -> bool:
        attribute = str(attribute)
        if self.subject_type is not None and isinstance(subject, self.subject_type):
            return attribute in self.instance_attributes

        if subject is not None:
            return False

        return attribute in self.collection_attributes or attribute in self.legacy_aliases

    def canonical_permission(self, attribute: str) -> str:
        """Map a legacy attribute onto its permission key."""
        attribute = str(attribute)
        return self.legacy_aliases.get(attribute, attribute)

    def vote_on_attribute(self, attribute: str, subject: Any, actor: User) -> bool:
        permission = self.canonical_permission(attribute)
        if permission != str(attribute):
            logger.debug(f"Mapped legacy attribute {attribute} to {permission}")
        return actor.has_permission(permission)
