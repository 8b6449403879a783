"""Authorization engine: voters, registry and checker."""

from .checker import AuthorizationChecker
from .registry import VoterRegistry, create_default_registry
from .voters import (
    ClientVoter,
    DocumentVoter,
    ResourceVoter,
    RoleVoter,
    UserVoter,
    VoteResult,
    Voter,
    is_privileged,
)

__all__ = [
    "AuthorizationChecker",
    "VoterRegistry",
    "create_default_registry",
    "ClientVoter",
    "DocumentVoter",
    "ResourceVoter",
    "RoleVoter",
    "UserVoter",
    "VoteResult",
    "Voter",
    "is_privileged",
]
