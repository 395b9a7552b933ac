from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Numeric, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType

if TYPE_CHECKING:  # pragma: no cover
    from app.models.booking import Booking


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, index=True)
    booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    customer_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    venue_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("venues.id"), nullable=False, index=True
    )
    rating: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False)
    remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    booking: Mapped["Booking"] = relationship("Booking", back_populates="review")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Review(id={self.id}, booking_id={self.booking_id}, rating={self.rating})>"


__all__ = ["Review"]
