"""Password reset token lifecycle.

A request issues a random secret, stores only its SHA-256 hash with a fixed
expiry and emails a link carrying the secret. Issuing supersedes every
earlier token of the user; consuming a token burns all of them. Unknown
emails and rate-limited requests get the same answer as a successful one.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from ....config.constants import PasswordResetLimits
from ....core.exceptions import InvalidOrExpiredTokenError, RateLimitError
from ....database.connection import DatabaseManager
from ....utils.datetime import utc_now
from ...users.entities.user import User
from ...users.repositories.user_repository import UserRepository
from ..adapters.reset_link_builder import ResetLinkBuilder
from ..adapters.smtp_mailer import Mailer
from ..models.responses import RESET_SUCCESS_MESSAGE, MessageResponse, reset_requested_response
from ..repositories.password_reset_repository import PasswordResetRepository
from .reset_email import build_reset_email

logger = logging.getLogger(__name__)


def hash_token(raw_token: str) -> str:
    """SHA-256 hex digest of the raw secret as sent in the link."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


class PasswordResetService:
    """Issues, validates and consumes password reset tokens."""

    def __init__(
        self,
        database: DatabaseManager,
        user_repository: UserRepository,
        reset_repository: PasswordResetRepository,
        mailer: Mailer,
        link_builder: ResetLinkBuilder,
        email_from: str = "noreply@docmanager.com",
        clock: Callable[[], datetime] = utc_now,
        token_factory: Callable[[int], bytes] = secrets.token_bytes,
        retention_days: int = PasswordResetLimits.DEFAULT_RETENTION_DAYS,
    ):
        self.database = database
        self.user_repository = user_repository
        self.reset_repository = reset_repository
        self.mailer = mailer
        self.link_builder = link_builder
        self.email_from = email_from
        self.clock = clock
        self.token_factory = token_factory
        self.retention_days = retention_days

    async def request_reset(self, email: str) -> MessageResponse:
        """Issue a token for ``email`` and mail it.

        Always returns the same response whether or not the email exists,
        the user is rate limited or delivery failed.
        """
        response = reset_requested_response()

        user = await self.user_repository.get_by_email(email)
        if user is None:
            logger.info(f"Password reset requested for non-existent email: {email}")
            return response

        now = self.clock()
        window_start = now - timedelta(minutes=PasswordResetLimits.RATE_LIMIT_WINDOW_MINUTES)

        async with self.database.transaction() as conn:
            # Serializes concurrent requests for the same user.
            await self.user_repository.lock_for_update(user.id, conn)

            recent = await self.reset_repository.count_recent_requests(user.id, window_start, conn=conn)
            if recent >= PasswordResetLimits.MAX_REQUESTS_PER_HOUR:
                limited = RateLimitError(user_id=user.id, count=recent, window_start=window_start)
                logger.warning(f"{limited.message}: {limited.details}")
                return response

            superseded = await self.reset_repository.invalidate_all_for_user(user.id, now, conn=conn)
            raw_token = self._generate_token()
            await self.reset_repository.create(
                user_id=user.id,
                token_hash=hash_token(raw_token),
                expires_at=now + timedelta(minutes=PasswordResetLimits.TOKEN_EXPIRY_MINUTES),
                created_at=now,
                conn=conn,
            )

        logger.info(f"Password reset requested for user {user.id} ({superseded} earlier token(s) superseded)")
        await self._send_reset_email(user, raw_token)
        return response

    async def validate_token(self, raw_token: str) -> bool:
        """True when the token exists, is unused and unexpired. Does not consume it."""
        reset = await self.reset_repository.find_valid_token(hash_token(raw_token), self.clock())
        return reset is not None

    async def reset_password(self, raw_token: str, new_hashed_password: str) -> MessageResponse:
        """Consume ``raw_token`` and set the already-hashed credential.

        Raises:
            InvalidOrExpiredTokenError: unknown, expired or already used token
        """
        now = self.clock()
        async with self.database.transaction() as conn:
            reset = await self.reset_repository.find_valid_token(
                hash_token(raw_token), now, conn=conn, for_update=True
            )
            if reset is None:
                logger.warning("Invalid or expired password reset token used")
                raise InvalidOrExpiredTokenError()

            if not await self.user_repository.update_password(reset.user_id, new_hashed_password, conn=conn):
                logger.warning(f"Password reset token {reset.id} points at a missing user")
                raise InvalidOrExpiredTokenError()

            await self.reset_repository.mark_used(reset.id, now, conn=conn)
            await self.reset_repository.invalidate_all_for_user(reset.user_id, now, conn=conn)

        logger.info(f"Password reset successful for user {reset.user_id}")
        return MessageResponse(success=True, message=RESET_SUCCESS_MESSAGE)

    async def purge_expired(self, days_old: Optional[int] = None) -> int:
        """Delete tokens created more than ``days_old`` days ago."""
        days = self.retention_days if days_old is None else days_old
        cutoff = self.clock() - timedelta(days=days)
        deleted = await self.reset_repository.cleanup_expired(cutoff)
        logger.info(f"Purged {deleted} password reset token(s) created before {cutoff.isoformat()}")
        return deleted

    def _generate_token(self) -> str:
        raw = self.token_factory(PasswordResetLimits.TOKEN_BYTES)
        if len(raw) < PasswordResetLimits.TOKEN_BYTES:
            raise ValueError(f"Token source returned {len(raw)} bytes, need {PasswordResetLimits.TOKEN_BYTES}")
        return raw.hex()

    async def _send_reset_email(self, user: User, raw_token: str) -> None:
        message = build_reset_email(user.email, self.link_builder.build(raw_token), self.email_from)
        try:
            await self.mailer.send(message)
        except Exception as e:
            # The token is already committed; the user can request again.
            logger.error(f"Failed to send password reset email to user {user.id}: {e}")
