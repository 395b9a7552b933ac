from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType
from app.core.enums import BookingStatus

if TYPE_CHECKING:  # pragma: no cover
    from app.models.review import Review
    from app.models.user import User
    from app.models.venue import Venue

_ACTIVE_BOOKING = text("status <> 'cancelled'")


class Booking(Base):
    """A customer's reservation of one slot on one calendar date."""

    __tablename__ = "bookings"
    __table_args__ = (
        # At most one non-cancelled booking per customer, venue, slot start and date.
        Index(
            "uq_bookings_active_slot",
            "customer_id",
            "venue_id",
            "slot_start_time",
            "booking_date",
            unique=True,
            postgresql_where=_ACTIVE_BOOKING,
            sqlite_where=_ACTIVE_BOOKING,
        ),
        Index("ix_bookings_customer_status", "customer_id", "status"),
        Index("ix_bookings_venue_status", "venue_id", "status"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, index=True)
    customer_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    venue_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("venues.id"), nullable=False)
    slot_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("slots.id", ondelete="SET NULL"), nullable=True
    )
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    slot_start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    slot_end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    day: Mapped[str] = mapped_column(String(10), nullable=False)
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    time_zone: Mapped[str] = mapped_column(String(64), nullable=False)
    guest_count: Mapped[int] = mapped_column(Integer, nullable=False)
    special_request: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BookingStatus.SCHEDULED.value
    )
    cancel_by: Mapped[str | None] = mapped_column(String(20), nullable=True)
    cancel_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    cancel_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    check_in_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    review_added: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=func.now()
    )

    customer: Mapped["User"] = relationship("User", lazy="joined")
    venue: Mapped["Venue"] = relationship("Venue", lazy="joined")
    review: Mapped["Review | None"] = relationship(
        "Review", back_populates="booking", uselist=False, lazy="selectin"
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, status={self.status}, "
            f"date={self.booking_date}, slot={self.slot_start_time}-{self.slot_end_time})>"
        )


__all__ = ["Booking"]
