"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class DuplicateTicketIdException(RepositoryException):
    """Raised when an insert collides with an existing ticket ID."""

    def __init__(self, ticket_id: str):
        self.ticket_id = ticket_id
        super().__init__(
            f"Ticket ID '{ticket_id}' already exists",
            {"ticket_id": ticket_id}
        )


class ValidationException(ApplicationException):
    """Exception for validation errors."""


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class AuthenticationException(ApplicationException):
    """Credentials or access token rejected."""


class AuthorizationException(ApplicationException):
    """Authenticated user may not act on the resource."""


class TicketIdExhaustedException(DomainException):
    """
    Raised when no unused ticket ID could be found within the retry budget.

    This is the one routing failure that must reach the caller: handing out
    a duplicate or missing ticket ID would break submission tracking.
    """

    def __init__(self, attempts: int, last_candidate: Optional[str] = None):
        self.attempts = attempts
        self.last_candidate = last_candidate
        super().__init__(
            f"Could not allocate a unique ticket ID after {attempts} attempts",
            {"attempts": attempts, "last_candidate": last_candidate}
        )
