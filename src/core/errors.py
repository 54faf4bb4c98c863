"""Domain exceptions shared by the service and API layers."""

from typing import Any


class ClientRegistryError(Exception):
    """Base exception for client registry operations.

    Attributes:
        message: Human-readable error message returned to callers.
        details: Optional structured payload (e.g. the offending field).
    """

    status_code: int = 500

    def __init__(self, message: str, details: Any | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidArgumentError(ClientRegistryError):
    """Raised when input is malformed, out of range, or missing."""

    status_code = 400


class NotFoundError(ClientRegistryError):
    """Raised when the referenced client does not exist."""

    status_code = 404


class StoreFailureError(ClientRegistryError):
    """Raised when the underlying database call fails."""

    status_code = 500


class PlanCatalogError(Exception):
    """Raised when the plan catalog cannot be loaded or is empty."""

    def __init__(self, message: str, path: Any | None = None, errors: list[str] | None = None):
        self.path = path
        self.errors = errors or []
        super().__init__(message)
