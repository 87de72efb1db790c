"""Domain-level exception hierarchy for service and repository layers."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NotFoundError(DomainError):
    """Raised when a requested school or zone does not exist."""


class ValidationError(DomainError):
    """Raised when a request parameter is missing or malformed."""


class InfrastructureError(DomainError):
    """Raised when the spatial store (or another backend) cannot serve a query.

    The message is logged, never returned to the caller.
    """
