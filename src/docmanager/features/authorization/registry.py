"""Explicit voter registry keyed by resource family tag."""

import logging
from typing import Dict, Iterator, List, Optional

from .voters import ClientVoter, DocumentVoter, RoleVoter, UserVoter, Voter

logger = logging.getLogger(__name__)


class VoterRegistry:
    """Ordered mapping of family tag to voter."""

    def __init__(self):
        self._voters: Dict[str, Voter] = {}

    def register(self, voter: Voter, family: Optional[str] = None) -> "VoterRegistry":
        """Register ``voter`` under ``family`` (defaults to ``voter.family``)."""
        tag = family or voter.family
        if not tag:
            raise ValueError(f"Voter {type(voter).__name__} has no family tag")
        if tag in self._voters:
            logger.warning(f"Replacing voter registered for family '{tag}'")
        self._voters[tag] = voter
        return self

    def unregister(self, family: str) -> None:
        self._voters.pop(family, None)

    def get(self, family: str) -> Optional[Voter]:
        return self._voters.get(family)

    def families(self) -> List[str]:
        return list(self._voters)

    def voters(self) -> List[Voter]:
        return list(self._voters.values())

    def __contains__(self, family: str) -> bool:
        return family in self._voters

    def __iter__(self) -> Iterator[Voter]:
        return iter(self.voters())

    def __len__(self) -> int:
        return len(self._voters)


def create_default_registry() -> VoterRegistry:
    """Registry with the role, client, document and user voters."""
    registry = VoterRegistry()
    registry.register(RoleVoter())
    registry.register(ClientVoter())
    registry.register(DocumentVoter())
    registry.register(UserVoter())
    return registry
