"""bcrypt password hashing."""

from typing import Optional

import bcrypt

from ....config.constants import PasswordPolicy
from ....core.exceptions import ValidationError


class PasswordHasher:
    """Hashes and verifies user credentials with bcrypt."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        encoded = password.encode("utf-8")
        # bcrypt only reads the first 72 bytes
        if len(encoded) > PasswordPolicy.MAX_BYTES:
            raise ValidationError(
                f"Password must be at most {PasswordPolicy.MAX_BYTES} bytes long.",
                error_code="password_too_long",
            )
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, hashed: Optional[str]) -> bool:
        """Check ``password`` against a stored hash; a missing or malformed hash never matches."""
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False
