"""Tests for checkout value types and receipt computation."""

import pytest

from club_api.domain.checkout import (
    LineItem,
    build_receipt,
    format_amount,
    from_minor_units,
    to_minor_units,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "price,expected",
    [(10, 1000), (10.5, 1050), (19.99, 1999), (0.015, 2), (0, 0)],
)
def test_to_minor_units(price, expected):
    assert to_minor_units(price) == expected


def test_from_minor_units():
    assert from_minor_units(1050) == 10.5


@pytest.mark.parametrize("amount,expected", [(1050, "$10.50"), (500, "$5.00"), (7, "$0.07")])
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected


def test_receipt_totals():
    receipt = build_receipt([LineItem("Club Tee", 2, 1000), LineItem("Cap", 1, 500)])

    assert receipt.total_amount == 2500
    assert receipt.total_quantity == 3


def test_receipt_drops_zero_quantity_lines():
    receipt = build_receipt([LineItem("Club Tee", 0, 1000), LineItem("Cap", 1, 500)])

    assert [line.name for line in receipt.lines] == ["Cap"]


def test_empty_receipt():
    receipt = build_receipt([])

    assert receipt.total_amount == 0
    assert receipt.total_quantity == 0


def test_order_item_snapshot():
    assert LineItem("Club Tee", 2, 1050).to_order_item() == {
        "name": "Club Tee",
        "quantity": 2,
        "unit_price": 10.5,
    }
