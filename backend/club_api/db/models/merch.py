"""Merch model: storefront catalogue rows."""

from sqlalchemy import Column, Float, Integer, JSON, String, Text

from club_api.db.base import Base, new_id


class Merch(Base):
    __tablename__ = "merch"

    id = Column(String(36), primary_key=True, default=new_id)

    # Uniqueness is checked by the handlers, not by a constraint
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=True)
    photo_url = Column(String(1000), nullable=True)

    # Variants, stored as sorted lists of distinct strings
    sizes = Column(JSON, nullable=False, default=list)
    colors = Column(JSON, nullable=False, default=list)

    price = Column(Float, nullable=False, default=0.0)  # major currency units
    quantity = Column(Integer, nullable=False, default=0)  # may go negative under racing checkouts
