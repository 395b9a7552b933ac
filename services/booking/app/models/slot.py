from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType

if TYPE_CHECKING:  # pragma: no cover
    from app.models.venue import Venue


class Slot(Base):
    """A bookable weekly interval generated from operational hours."""

    __tablename__ = "slots"
    __table_args__ = (Index("ix_slots_venue_day_start", "venue_id", "day", "start_time"),)

    id: Mapped[int] = mapped_column(IdType, primary_key=True, index=True)
    venue_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False
    )
    day: Mapped[str] = mapped_column(String(10), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    venue: Mapped["Venue"] = relationship("Venue", back_populates="slots")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<Slot(id={self.id}, venue_id={self.venue_id}, day={self.day}, "
            f"{self.start_time}-{self.end_time})>"
        )


__all__ = ["Slot"]
