"""Merch and checkout Pydantic schemas."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _normalise_variants(values: list[str]) -> list[str]:
    """Treat variants as a set: strip, drop blanks and duplicates, sort."""
    return sorted({v.strip() for v in values if v and v.strip()})


Variants = Annotated[list[str], AfterValidator(_normalise_variants)]


class MerchCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    sizes: Variants = Field(default_factory=list)
    colors: Variants = Field(default_factory=list)
    price: float = Field(..., ge=0)
    quantity: int = 0
    photo_url: str | None = None
    category: str | None = None


class MerchUpdate(BaseModel):
    """Partial update: only fields present in the body are written."""

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    sizes: Variants | None = None
    colors: Variants | None = None
    price: float | None = Field(None, ge=0)
    quantity: int | None = None
    photo_url: str | None = None
    category: str | None = None


class MerchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    sizes: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    price: float
    quantity: int
    photo_url: str | None
    category: str | None


class CartItem(BaseModel):
    id: str
    quantity: int = Field(..., ge=1)


class CheckoutRequest(BaseModel):
    items: list[CartItem]
    email: str = Field(..., min_length=3)


class CheckoutSessionData(BaseModel):
    url: str
    session_id: str
