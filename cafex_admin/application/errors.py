"""Exceptions raised by the back-office application layer."""

from typing import Optional


class BackofficeError(Exception):
    """Base exception for all back-office errors."""

    pass


class ValidationError(BackofficeError):
    """Raised when a request is missing required fields or carries malformed values."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class ProductReferenceError(BackofficeError):
    """Raised when an order item references a product that is not in the catalog."""

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class NotFoundError(BackofficeError):
    """Raised when a record addressed by identifier doesn't exist."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class StateError(BackofficeError):
    """Raised when an order status change is not allowed from the current status."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change order status from {current} to {target}")


class StoreError(BackofficeError):
    """Raised when the underlying database operation fails."""

    def __init__(self, operation: str, cause: Optional[Exception] = None):
        self.operation = operation
        self.cause = cause
        msg = f"Store operation failed: {operation}"
        if cause:
            msg = f"{msg} ({cause})"
        super().__init__(msg)
