"""Re-export all models so Base.metadata sees them."""

from club_api.db.models.event import Event
from club_api.db.models.index_swap import IndexSwap
from club_api.db.models.merch import Merch
from club_api.db.models.order import Order
from club_api.db.models.otp import Otp
from club_api.db.models.processed_checkout import ProcessedCheckout
from club_api.db.models.user import User

__all__ = [
    "Event",
    "IndexSwap",
    "Merch",
    "Order",
    "Otp",
    "ProcessedCheckout",
    "User",
]
