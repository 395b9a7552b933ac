from __future__ import annotations

from typing import Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.enums import WEEKDAYS
from app.models.slot import Slot


def get_slot(db: Session, slot_id: int) -> Optional[Slot]:
    return db.query(Slot).filter(Slot.id == slot_id).first()


def get_slots_by_ids(db: Session, slot_ids: Sequence[int]) -> list[Slot]:
    if not slot_ids:
        return []
    return db.query(Slot).filter(Slot.id.in_(list(slot_ids))).all()


def list_slots(
    db: Session,
    venue_id: int,
    *,
    day: Optional[str] = None,
    active_only: bool = False,
    exclude_ids: Iterable[int] = (),
    start_from: Optional[str] = None,
) -> list[Slot]:
    query = db.query(Slot).filter(Slot.venue_id == venue_id)

    if day is not None:
        query = query.filter(Slot.day == day)
    if active_only:
        query = query.filter(Slot.is_active.is_(True))

    excluded = [slot_id for slot_id in exclude_ids if slot_id is not None]
    if excluded:
        query = query.filter(Slot.id.notin_(excluded))
    if start_from is not None:
        query = query.filter(Slot.start_time >= start_from)

    slots = query.order_by(Slot.start_time, Slot.id).all()
    if day is None:
        slots.sort(key=lambda slot: (WEEKDAYS.index(slot.day), slot.start_time))
    return slots


def count_slots(db: Session, venue_id: int) -> int:
    return db.query(Slot).filter(Slot.venue_id == venue_id).count()


def delete_slots_for_venue(db: Session, venue_id: int) -> int:
    return (
        db.query(Slot)
        .filter(Slot.venue_id == venue_id)
        .delete(synchronize_session=False)
    )


def create_slots(db: Session, slots_data: Sequence[dict]) -> list[Slot]:
    slots = [Slot(**slot_data) for slot_data in slots_data]
    db.add_all(slots)
    db.flush()
    return slots
