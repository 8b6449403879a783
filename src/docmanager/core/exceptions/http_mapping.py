"""HTTP status code mapping for docmanager exceptions."""

from typing import Dict, Type

from fastapi import status

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


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    InvalidOrExpiredTokenError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,

    # 401 Unauthorized
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    SessionRevokedError: status.HTTP_401_UNAUTHORIZED,

    # 403 Forbidden
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    RoleAssignmentError: status.HTTP_403_FORBIDDEN,

    # 404 Not Found
    UserNotFoundError: status.HTTP_404_NOT_FOUND,

    # 429 Too Many Requests
    RateLimitError: status.HTTP_429_TOO_MANY_REQUESTS,

    # 500 Internal Server Error
    DatabaseError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConnectionError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    QueryError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,

    # 502/503 Upstream failures
    MailDeliveryError: status.HTTP_502_BAD_GATEWAY,
    SessionStoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception.

    Walks the exception's MRO so subclasses without their own entry inherit
    the status of the nearest mapped ancestor.
    """
    for exc_type in type(exception).__mro__:
        if exc_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exc_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR
