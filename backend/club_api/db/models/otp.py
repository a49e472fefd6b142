"""Otp model: one pending sign-up code per e-mail address."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from club_api.db.base import Base, new_id


class Otp(Base):
    __tablename__ = "otps"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    code = Column(String(32), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
