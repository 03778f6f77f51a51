"""
Custom exceptions for the application.
"""


class StudioException(Exception):
    """Base exception for all Studio application exceptions."""
    pass


class ValidationError(StudioException):
    """Raised when input is malformed (bad interval, bad date, bad duration)."""
    pass


class NotFoundError(StudioException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(StudioException):
    """Raised when there's a conflict (overlapping lesson, duplicate feedback)."""
    pass


class AuthorizationError(StudioException):
    """Raised when the acting user may not touch the resource."""
    pass
