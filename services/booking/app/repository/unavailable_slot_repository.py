from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from app.models.unavailable_slot import UnavailableSlot


def list_slot_ids_for_date(db: Session, venue_id: int, target_date: date) -> set[int]:
    rows = (
        db.query(UnavailableSlot.slot_id)
        .filter(UnavailableSlot.venue_id == venue_id)
        .filter(UnavailableSlot.date == target_date)
        .all()
    )
    return {row[0] for row in rows}


def is_slot_unavailable(db: Session, slot_id: int, target_date: date) -> bool:
    return (
        db.query(UnavailableSlot.id)
        .filter(UnavailableSlot.slot_id == slot_id)
        .filter(UnavailableSlot.date == target_date)
        .first()
        is not None
    )


def delete_for_date(db: Session, venue_id: int, target_date: date) -> int:
    return (
        db.query(UnavailableSlot)
        .filter(UnavailableSlot.venue_id == venue_id)
        .filter(UnavailableSlot.date == target_date)
        .delete(synchronize_session=False)
    )


def delete_for_venue(db: Session, venue_id: int) -> int:
    return (
        db.query(UnavailableSlot)
        .filter(UnavailableSlot.venue_id == venue_id)
        .delete(synchronize_session=False)
    )


def create_unavailable_slots(db: Session, rows: Sequence[dict]) -> list[UnavailableSlot]:
    unavailable_slots = [UnavailableSlot(**row) for row in rows]
    db.add_all(unavailable_slots)
    db.flush()
    return unavailable_slots


def list_unavailable_slots(
    db: Session,
    venue_id: int,
    *,
    target_date: Optional[date] = None,
    starts_after: Optional[datetime] = None,
    offset: int = 0,
    limit: int = 10,
) -> tuple[list[UnavailableSlot], int]:
    query = db.query(UnavailableSlot).filter(UnavailableSlot.venue_id == venue_id)

    if target_date is not None:
        query = query.filter(UnavailableSlot.date == target_date)
    if starts_after is not None:
        query = query.filter(UnavailableSlot.start_time > starts_after)

    total = query.count()
    rows = (
        query.order_by(UnavailableSlot.start_time, UnavailableSlot.id)
        .offset(offset)
        .limit(limit)
        .all()
    )
    return rows, total
