"""Order Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class OrderItem(BaseModel):
    name: str
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    items: list[OrderItem] = Field(default_factory=list)
    status: str
    created_at: datetime
