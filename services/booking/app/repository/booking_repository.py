from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional, Sequence

from sqlalchemy.orm import Query, Session

from app.core.enums import BookingStatus
from app.models.booking import Booking


def _scoped(
    db: Session,
    *,
    customer_id: Optional[int] = None,
    venue_id: Optional[int] = None,
) -> Query:
    query = db.query(Booking)
    if customer_id is not None:
        query = query.filter(Booking.customer_id == customer_id)
    if venue_id is not None:
        query = query.filter(Booking.venue_id == venue_id)
    return query


def get_booking(
    db: Session,
    booking_id: int,
    *,
    customer_id: Optional[int] = None,
    venue_id: Optional[int] = None,
) -> Optional[Booking]:
    return (
        _scoped(db, customer_id=customer_id, venue_id=venue_id)
        .filter(Booking.id == booking_id)
        .first()
    )


def find_active_duplicate(
    db: Session,
    *,
    customer_id: int,
    venue_id: int,
    slot_start_time: str,
    booking_date: date,
    exclude_booking_id: Optional[int] = None,
) -> Optional[Booking]:
    """Return a non-cancelled booking holding the same customer/venue/slot/date."""

    query = (
        db.query(Booking)
        .filter(Booking.customer_id == customer_id)
        .filter(Booking.venue_id == venue_id)
        .filter(Booking.slot_start_time == slot_start_time)
        .filter(Booking.booking_date == booking_date)
        .filter(Booking.status != BookingStatus.CANCELLED.value)
    )

    if exclude_booking_id is not None:
        query = query.filter(Booking.id != exclude_booking_id)

    return query.first()


def create_booking(db: Session, booking_data: Dict[str, object]) -> Booking:
    booking = Booking(**booking_data)
    db.add(booking)
    db.flush()
    return booking


def save_booking(db: Session, booking: Booking) -> Booking:
    db.add(booking)
    db.flush()
    return booking


def list_overdue_scheduled_ids(
    db: Session,
    *,
    now: datetime,
    customer_id: Optional[int] = None,
    venue_id: Optional[int] = None,
    offset: int = 0,
    limit: int = 10,
) -> list[int]:
    rows = (
        _scoped(db, customer_id=customer_id, venue_id=venue_id)
        .with_entities(Booking.id)
        .filter(Booking.status == BookingStatus.SCHEDULED.value)
        .filter(Booking.end_date_time < now)
        .order_by(Booking.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return [row[0] for row in rows]


def bulk_update_status(db: Session, booking_ids: Sequence[int], values: Dict[str, object]) -> int:
    if not booking_ids:
        return 0
    return (
        db.query(Booking)
        .filter(Booking.id.in_(list(booking_ids)))
        .update(values, synchronize_session="fetch")
    )


def list_by_status(
    db: Session,
    *,
    statuses: Sequence[str],
    customer_id: Optional[int] = None,
    venue_id: Optional[int] = None,
    ends_after: Optional[datetime] = None,
    ends_before: Optional[datetime] = None,
    order_by_start: bool = False,
    offset: int = 0,
    limit: int = 10,
) -> tuple[list[Booking], int]:
    query = _scoped(db, customer_id=customer_id, venue_id=venue_id).filter(
        Booking.status.in_(list(statuses))
    )

    if ends_after is not None:
        query = query.filter(Booking.end_date_time > ends_after)
    if ends_before is not None:
        query = query.filter(Booking.end_date_time < ends_before)

    total = query.count()
    order_clause = (
        (Booking.start_date_time.asc(), Booking.id.asc())
        if order_by_start
        else (Booking.id.desc(),)
    )
    bookings = query.order_by(*order_clause).offset(offset).limit(limit).all()
    return bookings, total
