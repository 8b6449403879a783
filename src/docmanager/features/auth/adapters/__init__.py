"""Auth adapters: session store, mailer and link builder."""

from .redis_session_store import RedisSessionStore, SessionStore, create_redis_client
from .reset_link_builder import ResetLinkBuilder
from .smtp_mailer import EmailMessage, Mailer, SmtpMailer

__all__ = [
    "EmailMessage",
    "Mailer",
    "RedisSessionStore",
    "ResetLinkBuilder",
    "SessionStore",
    "SmtpMailer",
    "create_redis_client",
]
