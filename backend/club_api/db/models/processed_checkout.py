"""ProcessedCheckout model: ledger of fulfilled checkout session ids."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String

from club_api.db.base import Base


class ProcessedCheckout(Base):
    """Claimed before fulfilment when webhook de-duplication is enabled."""

    __tablename__ = "processed_checkouts"

    session_id = Column(String(255), primary_key=True)
    processed_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
