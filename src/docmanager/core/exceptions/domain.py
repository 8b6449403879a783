"""Infrastructure and configuration exceptions for docmanager."""

from .base import DocManagerError


# Configuration Errors
class ConfigurationError(DocManagerError):
    """Raised when there's a configuration issue."""
    pass


# Database Errors
class DatabaseError(DocManagerError):
    """Base class for database-related errors."""
    pass


class ConnectionError(DatabaseError):
    """Raised when database connection fails."""
    pass


class QueryError(DatabaseError):
    """Raised when database query execution fails."""
    pass


# Session Store Errors
class SessionStoreError(DocManagerError):
    """Raised when the session backend is unreachable."""
    pass


# Mail Errors
class MailDeliveryError(DocManagerError):
    """Raised when an email could not be handed to the SMTP server."""
    pass


# Validation Errors
class ValidationError(DocManagerError):
    """Raised when request data fails a business rule."""
    pass
