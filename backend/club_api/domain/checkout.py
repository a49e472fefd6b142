"""Checkout value types and receipt computation.

Pure functions with no external dependencies. Amounts handed to or received
from the payment gateway are integer minor units (cents); amounts stored on
merch rows and order items are major units.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class LineItem:
    """A priced (product, quantity) pair within a session or order."""

    name: str
    quantity: int
    unit_amount: int  # minor units

    @property
    def subtotal(self) -> int:
        return self.unit_amount * self.quantity

    def to_order_item(self) -> dict:
        """Snapshot stored on Order.items."""
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit_price": from_minor_units(self.unit_amount),
        }


@dataclass(frozen=True)
class Receipt:
    """Derived at fulfilment time from the gateway's authoritative line items."""

    lines: tuple[LineItem, ...]

    @property
    def total_amount(self) -> int:
        return sum(line.subtotal for line in self.lines)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)


def to_minor_units(price: float | Decimal) -> int:
    """Convert a major-unit price to integer minor units.

    Goes through the decimal string form so 19.99 becomes 1999, not 1998.
    """
    amount = Decimal(str(price)) * 100
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> float:
    return float(Decimal(amount) / 100)


def format_amount(amount: int) -> str:
    """Render minor units for humans, e.g. 1050 -> "$10.50"."""
    return f"${Decimal(amount) / 100:.2f}"


def build_receipt(line_items: list[LineItem]) -> Receipt:
    """Collect line items into a receipt, dropping zero-quantity rows."""
    return Receipt(lines=tuple(item for item in line_items if item.quantity > 0))
