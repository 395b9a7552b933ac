from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType

if TYPE_CHECKING:  # pragma: no cover
    from app.models.venue import Venue


class OperationalHour(Base):
    """Opening window of a venue for one weekday."""

    __tablename__ = "operational_hours"
    __table_args__ = (UniqueConstraint("venue_id", "day", name="uq_operational_hours_venue_day"),)

    id: Mapped[int] = mapped_column(IdType, primary_key=True, index=True)
    venue_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[str] = mapped_column(String(10), nullable=False)
    is_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    start_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    end_time: Mapped[str | None] = mapped_column(String(5), nullable=True)

    venue: Mapped["Venue"] = relationship("Venue", back_populates="operational_hours")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<OperationalHour(venue_id={self.venue_id}, day={self.day}, "
            f"closed={self.is_closed}, {self.start_time}-{self.end_time})>"
        )


__all__ = ["OperationalHour"]
