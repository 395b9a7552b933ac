from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import BigInteger, Date, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, IdType


class UnavailableSlot(Base):
    """Marks a generated slot as not offered on one calendar date."""

    __tablename__ = "unavailable_slots"
    __table_args__ = (Index("ix_unavailable_slots_venue_date", "venue_id", "date"),)

    id: Mapped[int] = mapped_column(IdType, primary_key=True, index=True)
    venue_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False
    )
    slot_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("slots.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    # Absolute UTC instants of the slot on ``date``.
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<UnavailableSlot(venue_id={self.venue_id}, slot_id={self.slot_id}, date={self.date})>"


__all__ = ["UnavailableSlot"]
