"""Order history routes."""

from fastapi import APIRouter
from sqlalchemy import select

from club_api.db.base import get_session_factory
from club_api.db.models.order import Order
from club_api.schemas.common import ApiResponse, fail, ok
from club_api.schemas.orders import OrderResponse

router = APIRouter()


@router.get("/{email}", response_model=ApiResponse[list[OrderResponse]])
async def list_orders_for_email(email: str):
    """All orders placed with this e-mail, newest first."""
    factory = get_session_factory()
    async with factory() as session:
        result = await session.execute(
            select(Order).where(Order.email == email).order_by(Order.created_at.desc())
        )
        orders = result.scalars().all()

    if not orders:
        return fail("No orders found")
    return ok("Orders found", [OrderResponse.model_validate(o) for o in orders])
