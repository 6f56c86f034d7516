from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Tuple

FREE_SHIPPING_THRESHOLD = 499
SHIPPING_FEE = 50
TAX_RATE = Decimal("0.18")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: int
    shipping: int
    tax: Decimal
    total: Decimal

    def to_dict(self):
        return {
            "subtotal": self.subtotal,
            "shipping": self.shipping,
            "tax": float(self.tax),
            "total": float(self.total),
        }


def compute_totals(lines: Iterable[Tuple[int, int]]) -> OrderTotals:
    """Price a cart given ``(unit_price, quantity)`` pairs.

    Shipping is free strictly above the threshold; tax is a flat rate on the
    subtotal and is not itemized.
    """
    subtotal = sum(price * quantity for price, quantity in lines)
    shipping = 0 if subtotal > FREE_SHIPPING_THRESHOLD else SHIPPING_FEE
    tax = Decimal(subtotal) * TAX_RATE
    total = Decimal(subtotal) + shipping + tax
    return OrderTotals(subtotal=subtotal, shipping=shipping, tax=tax, total=total)
