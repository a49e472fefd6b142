"""Order model: purchases recorded from completed checkout sessions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, JSON, String

from club_api.db.base import Base, new_id


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, index=True)
    items = Column(JSON, nullable=False, default=list)  # [{"name", "quantity", "unit_price"}]
    status = Column(String(50), nullable=False, default="Processing")
    checkout_session_id = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
