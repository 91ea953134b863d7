from decimal import Decimal
from types import SimpleNamespace

from store_service.operations import (
    calculate_discounted_value,
    get_total_from_products,
    line_total,
    to_money,
)


def test_to_money_rounds_half_up_to_cents():
    assert to_money("2.345") == Decimal("2.35")
    assert to_money(0.1) == Decimal("0.10")
    assert to_money(3) == Decimal("3.00")


def test_discounted_value():
    assert calculate_discounted_value("100", 15) == Decimal("85.00")
    assert calculate_discounted_value("19.99", 33) == Decimal("13.39")
    assert calculate_discounted_value("10", 0) == Decimal("10.00")


def test_line_total():
    assert line_total(Decimal("3.35"), 3) == Decimal("10.05")


def test_total_has_no_float_drift():
    items = [SimpleNamespace(price=Decimal("0.10"), quantity=1) for _ in range(3)]
    assert get_total_from_products(items) == Decimal("0.30")


def test_total_of_nothing_is_zero():
    assert get_total_from_products([]) == Decimal("0.00")
