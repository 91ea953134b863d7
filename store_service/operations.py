# store_service/operations.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """Convert to a Decimal rounded to cents. Floats go through str() first."""
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_discounted_value(total, percent) -> Decimal:
    """Value of `total` after taking off `percent` percent."""
    total = to_money(total)
    return to_money(total - total * Decimal(percent) / Decimal(100))


def line_total(price, quantity: int) -> Decimal:
    return to_money(to_money(price) * quantity)


def get_total_from_products(cart_items: Iterable) -> Decimal:
    """Sum of price x quantity over cart items, using each item's price snapshot."""
    return sum((line_total(item.price, item.quantity) for item in cart_items), Decimal("0.00"))
