# shopzone/domain/order_status.py
"""
Order status state machine.

    pending -> processing -> shipped -> delivered
    pending | processing -> cancelled      (owner or admin)
    any non-terminal -> any other status   (admin only)

delivered, cancelled and refunded are terminal. Customer cancellation uses
the same `cancelled` status as an admin cancellation.
"""
from shopzone.domain.errors import InvalidStatusTransition, NotAuthorized, ValidationError

PENDING = "pending"
PROCESSING = "processing"
SHIPPED = "shipped"
DELIVERED = "delivered"
CANCELLED = "cancelled"
REFUNDED = "refunded"

ALL_STATUSES = (PENDING, PROCESSING, SHIPPED, DELIVERED, CANCELLED, REFUNDED)
TERMINAL_STATUSES = frozenset({DELIVERED, CANCELLED, REFUNDED})
CUSTOMER_CANCELLABLE = frozenset({PENDING, PROCESSING})


def normalize_status(status: str) -> str:
    value = (status or "").strip().lower()
    if value not in ALL_STATUSES:
        raise ValidationError(
            f"Unknown order status {status!r}",
            details={"allowed": list(ALL_STATUSES)},
        )
    return value


def check_transition(current: str, target: str, *, is_admin: bool, is_owner: bool) -> None:
    """Raise unless the caller may move an order from `current` to `target`."""
    if not is_admin:
        if not is_owner:
            raise NotAuthorized("You can only change your own orders")
        if target != CANCELLED:
            raise NotAuthorized("Customers may only cancel their orders")

    if current in TERMINAL_STATUSES:
        raise InvalidStatusTransition(
            f"Order is {current} and can no longer change status",
            details={"current": current, "target": target},
        )

    if current == target:
        raise InvalidStatusTransition(
            f"Order is already {current}",
            details={"current": current, "target": target},
        )

    if not is_admin and current not in CUSTOMER_CANCELLABLE:
        raise InvalidStatusTransition(
            f"An order that is {current} can no longer be cancelled",
            details={"current": current, "target": target},
        )
