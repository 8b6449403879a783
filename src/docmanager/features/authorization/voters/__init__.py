"""Voters, one per resource family."""

from .base import ResourceVoter, Voter, VoteResult, is_privileged
from .client_voter import ClientVoter
from .document_voter import DocumentVoter
from .role_voter import RoleVoter
from .user_voter import UserVoter

__all__ = [
    "ClientVoter",
    "DocumentVoter",
    "ResourceVoter",
    "RoleVoter",
    "UserVoter",
    "VoteResult",
    "Voter",
    "is_privileged",
]
