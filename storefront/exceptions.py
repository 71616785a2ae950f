"""
Storefront exceptions.

Exception Hierarchy:
--------------------
StorefrontError (base)
├── EmptyCartError           400
├── InsufficientStockError   400
├── InvalidStatusError       400
├── ConflictError            400
├── AuthenticationError      401
├── ForbiddenError           403
├── NotFoundError            404
└── StorageFailureError      500

Services and databases raise these; the application exception handler renders
them as ``{"detail": message, **details}`` with the class's status code.
"""

from typing import Any, Iterable


class StorefrontError(Exception):
    """
    Base exception for all storefront errors.

    Attributes:
        message: Human-readable error message
        details: Additional context returned to the client alongside the message
    """

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class EmptyCartError(StorefrontError):
    """Raised when placing an order from a missing or empty cart."""

    status_code = 400

    def __init__(self, user_id: str):
        super().__init__("Cart is empty", details={"user_id": user_id})
        self.user_id = user_id


class InsufficientStockError(StorefrontError):
    """Raised when a product cannot cover the requested quantity."""

    status_code = 400

    def __init__(self, product_id: str, available: int, requested: int, product_name: str | None = None):
        label = product_name or product_id
        super().__init__(
            f"Insufficient stock for product: {label}. Available: {available}, Requested: {requested}",
            details={"product_id": product_id, "available": available, "requested": requested},
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


class InvalidStatusError(StorefrontError):
    """Raised when an order status is outside the allowed set."""

    status_code = 400

    def __init__(self, status: Any, allowed: Iterable[str]):
        allowed = list(allowed)
        super().__init__(
            f"Invalid status. Allowed values: {', '.join(allowed)}",
            details={"status": status, "allowed": allowed},
        )
        self.status = status
        self.allowed = allowed


class ConflictError(StorefrontError):
    """Raised when a unique value is already taken."""

    status_code = 400


class AuthenticationError(StorefrontError):
    """Raised when a request carries no identity or an invalid token."""

    status_code = 401


class ForbiddenError(StorefrontError):
    """Raised when the requester may not access a resource."""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class NotFoundError(StorefrontError):
    """Raised when a referenced entity does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} not found",
            details={"entity": entity.lower(), "entity_id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class StorageFailureError(StorefrontError):
    """Raised when a persistence operation fails unexpectedly.

    Only the generic message reaches the client; the cause is logged.
    """

    status_code = 500
