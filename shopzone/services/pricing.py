# shopzone/services/pricing.py
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Tuple

TAX_RATE = Decimal("0.085")
# matches the storefront's "free shipping over $50"
FREE_SHIPPING_THRESHOLD = Decimal("50")
FLAT_SHIPPING = Decimal("5.99")

CENT = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


def compute_totals(lines: Iterable[Tuple[Decimal, int]]) -> Totals:
    """
    lines: (unit price, quantity) pairs at current prices.

    Shipping is free only when the subtotal is strictly above the threshold.
    """
    subtotal = money(sum((Decimal(price) * qty for price, qty in lines), Decimal("0")))
    tax = money(subtotal * TAX_RATE)
    shipping = Decimal("0.00") if subtotal > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING
    return Totals(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=money(subtotal + tax + shipping),
    )
