"""Domain exceptions.

Services raise these; ``gigmarket.main`` maps them to HTTP responses using the
``status_code`` carried by each class.
"""

from __future__ import annotations


class MarketplaceError(Exception):
    """Base class for all domain errors."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(MarketplaceError):
    """Input rejected before reaching the backend."""

    status_code = 422


class AuthenticationError(MarketplaceError):
    """Missing or invalid session token."""

    status_code = 401


class PermissionDeniedError(MarketplaceError):
    """Caller does not own the resource."""

    status_code = 403


class NotFoundError(MarketplaceError):
    status_code = 404


class ConflictError(MarketplaceError):
    """State-machine violation or lost race."""

    status_code = 409


class WorkflowInconsistentError(MarketplaceError):
    """A multi-step transition failed part way and could not be undone.

    ``applied_steps`` lists the steps whose effects remain in the store.
    """

    status_code = 500

    def __init__(self, message: str, applied_steps: list[str]) -> None:
        super().__init__(message)
        self.applied_steps = applied_steps
