"""
Custom exceptions for the service layer.

Services raise these; the application-level handlers in ``eventgo.main``
translate them to HTTP status codes and ``{"error": ...}`` bodies.
"""

from typing import Any, Iterable, Optional


class ServiceError(Exception):
    """Base exception for service layer errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found")


class ValidationError(ServiceError):
    """Raised when a field is missing or malformed. ``field`` names the first failing one."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class InvalidReferenceError(ServiceError):
    """Raised when an association id does not resolve to an existing row."""

    status_code = 400

    def __init__(self, resource: str, identifiers: Iterable[int]):
        self.resource = resource
        self.identifiers = sorted(identifiers)
        ids = ", ".join(str(i) for i in self.identifiers)
        super().__init__(f"Unknown {resource} id(s): {ids}")
