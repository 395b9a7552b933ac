"""Rebuilds a venue's weekly slot grid from its operational hours."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.enums import SlotGenerationStatus
from app.core.exceptions import ValidationException
from app.core.locks import KeyedLock
from app.repository import (
    operational_hour_repository,
    slot_repository,
    unavailable_slot_repository,
    venue_repository,
)
from app.services.time_utils import format_hhmm, minutes_of, utc_now

logger = logging.getLogger(__name__)

_ADVISORY_LOCK_NAMESPACE = 7310


def build_slot_grid(start_time: str, end_time: str, duration_minutes: int) -> List[Tuple[str, str]]:
    """Partition ``[start_time, end_time)`` into consecutive slots.

    Every slot lasts ``duration_minutes`` except possibly the last one, which is
    cut at ``end_time`` so the grid covers the window exactly.
    """
    if duration_minutes <= 0:
        raise ValidationException("Slot duration must be a positive number of minutes")

    start = minutes_of(start_time)
    end = minutes_of(end_time)
    if end <= start:
        raise ValidationException(
            f"End time {end_time} must be after start time {start_time}"
        )

    grid: List[Tuple[str, str]] = []
    current = start
    while current < end:
        slot_end = min(current + duration_minutes, end)
        grid.append((format_hhmm(current), format_hhmm(slot_end)))
        current = slot_end
    return grid


class SlotGenerator:
    """Runs regenerations one venue at a time.

    ``lock`` serializes work inside the process; on PostgreSQL a
    transaction-scoped advisory lock serializes it across processes too.
    Delete and insert share one transaction, so readers see either the old grid
    or the new one.
    """

    def __init__(self, session_factory: Callable[[], Session], lock: Optional[KeyedLock] = None):
        self.session_factory = session_factory
        self.lock = lock or KeyedLock()

    def is_running(self, venue_id: int) -> bool:
        return self.lock.is_locked(venue_id)

    def regenerate(self, venue_id: int) -> bool:
        """Rebuild the grid; returns ``False`` when another run holds the venue."""
        with self.lock.hold(venue_id) as acquired:
            if not acquired:
                logger.info("Slot generation already in progress for venue %s; skipping", venue_id)
                return False
            return self._regenerate_locked(venue_id)

    def _regenerate_locked(self, venue_id: int) -> bool:
        db = self.session_factory()
        try:
            venue = venue_repository.get_venue(db, venue_id)
            if venue is None:
                logger.warning("Venue %s vanished before slot generation", venue_id)
                return False

            if not self._try_advisory_lock(db, venue_id):
                logger.info("Venue %s is being regenerated by another process; skipping", venue_id)
                db.rollback()
                return False

            logger.info("Generating slots for venue %s", venue_id)

            duration = venue.slot_duration_minutes
            hours = operational_hour_repository.list_for_venue(db, venue_id, open_only=True)

            unavailable_slot_repository.delete_for_venue(db, venue_id)
            slot_repository.delete_slots_for_venue(db, venue_id)

            slots_data = []
            for hour in hours:
                if not hour.start_time or not hour.end_time:
                    continue
                for slot_start, slot_end in build_slot_grid(hour.start_time, hour.end_time, duration):
                    slots_data.append(
                        {
                            "venue_id": venue_id,
                            "day": hour.day,
                            "start_time": slot_start,
                            "end_time": slot_end,
                            "is_active": True,
                        }
                    )
            slot_repository.create_slots(db, slots_data)

            venue.slot_generation_status = SlotGenerationStatus.READY.value
            venue.slot_generation_error = None
            venue.slots_generated_at = utc_now()
            db.commit()
            logger.info("Generated %s slots for venue %s", len(slots_data), venue_id)
            return True
        except Exception as exc:
            db.rollback()
            logger.exception("Slot generation failed for venue %s", venue_id)
            self._record_failure(db, venue_id, exc)
            return False
        finally:
            db.close()

    @staticmethod
    def _try_advisory_lock(db: Session, venue_id: int) -> bool:
        if db.get_bind().dialect.name != "postgresql":
            return True
        result = db.execute(
            text("SELECT pg_try_advisory_xact_lock(:namespace, :venue_id)"),
            {"namespace": _ADVISORY_LOCK_NAMESPACE, "venue_id": venue_id},
        )
        return bool(result.scalar())

    @staticmethod
    def _record_failure(db: Session, venue_id: int, exc: Exception) -> None:
        try:
            venue = venue_repository.get_venue(db, venue_id)
            if venue is None:
                return
            venue.slot_generation_status = SlotGenerationStatus.FAILED.value
            venue.slot_generation_error = str(exc) or exc.__class__.__name__
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Could not record slot generation failure for venue %s", venue_id)


__all__ = ["SlotGenerator", "build_slot_grid"]
