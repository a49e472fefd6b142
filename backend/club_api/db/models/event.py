"""Event model: club event listings."""

from sqlalchemy import Column, DateTime, String, Text

from club_api.db.base import Base, new_id


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    time = Column(String(100), nullable=True)  # free text, e.g. "7pm - 9pm"
    photo_url = Column(String(1000), nullable=True)
