"""Exceptions module for docmanager.

Complete exception hierarchy, organized by auth concerns and
infrastructure concerns, plus the HTTP status mapping.
"""

from .base import DocManagerError, create_error_response
from .auth import (
    AuthenticationError,
    AuthorizationError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    RateLimitError,
    RoleAssignmentError,
    SessionRevokedError,
    UserNotFoundError,
)
from .domain import (
    ConfigurationError,
    ConnectionError,
    DatabaseError,
    MailDeliveryError,
    QueryError,
    SessionStoreError,
    ValidationError,
)
from .http_mapping import HTTP_STATUS_MAP, get_http_status_code

__all__ = [
    "DocManagerError",
    "create_error_response",
    "get_http_status_code",
    "HTTP_STATUS_MAP",
    # Auth
    "AuthenticationError",
    "AuthorizationError",
    "InvalidCredentialsError",
    "InvalidOrExpiredTokenError",
    "RateLimitError",
    "RoleAssignmentError",
    "SessionRevokedError",
    "UserNotFoundError",
    # Infrastructure
    "ConfigurationError",
    "ConnectionError",
    "DatabaseError",
    "MailDeliveryError",
    "QueryError",
    "SessionStoreError",
    "ValidationError",
]
