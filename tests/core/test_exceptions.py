"""Tests for the exception hierarchy and HTTP mapping."""

import pytest

from docmanager.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConnectionError,
    DocManagerError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    MailDeliveryError,
    RateLimitError,
    RoleAssignmentError,
    SessionRevokedError,
    SessionStoreError,
    UserNotFoundError,
    create_error_response,
    get_http_status_code,
)
from docmanager.database.connection import parse_command_count

from tests.fakes import T0


@pytest.mark.parametrize(
    "exc, status",
    [
        (InvalidOrExpiredTokenError(), 400),
        (AuthenticationError(), 401),
        (InvalidCredentialsError(), 401),
        (SessionRevokedError(), 401),
        (AuthorizationError(), 403),
        (RoleAssignmentError("no"), 403),
        (UserNotFoundError(user_id=3), 404),
        (RateLimitError(), 429),
        (ConnectionError("down"), 500),
        (MailDeliveryError("smtp"), 502),
        (SessionStoreError("redis"), 503),
        (DocManagerError("generic"), 500),
        (RuntimeError("plain"), 500),
    ],
)
def test_http_status_mapping(exc, status):
    assert get_http_status_code(exc) == status


def test_error_response_shape():
    body = create_error_response(UserNotFoundError(user_id=3))
    assert body == {
        "error": {
            "code": "user_not_found",
            "message": "User not found",
            "details": {"user_id": 3},
            "type": "UserNotFoundError",
        }
    }


def test_default_error_code_is_class_name():
    assert DocManagerError("x").error_code == "DocManagerError"


def test_rate_limit_details():
    error = RateLimitError(user_id=2, count=3, window_start=T0)
    assert error.details == {"user_id": 2, "count": 3, "window_start": T0.isoformat()}


def test_role_assignment_is_authorization_error():
    error = RoleAssignmentError("You cannot edit your own roles.", target_user_id=2)
    assert isinstance(error, AuthorizationError)
    assert error.error_code == "role_assignment_refused"
    assert error.details["target_user_id"] == 2


@pytest.mark.parametrize(
    "status, count",
    [("UPDATE 3", 3), ("DELETE 0", 0), ("INSERT 0 1", 1), ("", 0), (None, 0)],
)
def test_parse_command_count(status, count):
    assert parse_command_count(status) == count
