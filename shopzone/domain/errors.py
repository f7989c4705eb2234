# shopzone/domain/errors.py
from typing import Any


class ShopError(Exception):
    """
    Caller-facing business error.

    `kind` is the machine-readable name returned to clients, `status_code`
    the HTTP status used by the API layer.
    """

    kind = "ShopError"
    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "details": self.details}


class ValidationError(ShopError):
    kind = "ValidationError"
    status_code = 400


class InvalidStatusTransition(ValidationError):
    kind = "InvalidStatusTransition"


class NotFound(ShopError):
    kind = "NotFound"
    status_code = 404


class DuplicateEmail(ShopError):
    kind = "DuplicateEmail"
    status_code = 409


class InvalidCredentials(ShopError):
    kind = "InvalidCredentials"
    status_code = 401

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class NotAuthenticated(ShopError):
    kind = "NotAuthenticated"
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotAuthorized(ShopError):
    kind = "NotAuthorized"
    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class InsufficientStock(ShopError):
    kind = "InsufficientStock"
    status_code = 409

    def __init__(self, product_id: str, product_name: str, available: int, requested: int):
        super().__init__(
            f"Not enough stock for {product_name!r}: available {available}, requested {requested}",
            details={
                "product_id": product_id,
                "product_name": product_name,
                "available": available,
                "requested": requested,
            },
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


class EmptyCart(ShopError):
    kind = "EmptyCart"
    status_code = 400

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class CheckoutInProgress(ShopError):
    kind = "CheckoutInProgress"
    status_code = 409

    def __init__(self, message: str = "A checkout for this cart is already in progress"):
        super().__init__(message)
