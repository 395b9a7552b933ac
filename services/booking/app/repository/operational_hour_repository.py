from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.core.enums import WEEKDAYS
from app.models.operational_hour import OperationalHour


def list_for_venue(db: Session, venue_id: int, *, open_only: bool = False) -> list[OperationalHour]:
    query = db.query(OperationalHour).filter(OperationalHour.venue_id == venue_id)
    if open_only:
        query = query.filter(OperationalHour.is_closed.is_(False))

    return sorted(query.all(), key=lambda hour: WEEKDAYS.index(hour.day))


def get_for_day(db: Session, venue_id: int, day: str) -> Optional[OperationalHour]:
    return (
        db.query(OperationalHour)
        .filter(OperationalHour.venue_id == venue_id)
        .filter(OperationalHour.day == day)
        .first()
    )


def create_operational_hour(db: Session, hour_data: dict) -> OperationalHour:
    hour = OperationalHour(**hour_data)
    db.add(hour)
    db.flush()
    return hour
