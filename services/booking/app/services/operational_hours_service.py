from __future__ import annotations

import logging
from typing import Optional, Sequence

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from app.core.enums import SlotGenerationStatus, WEEKDAYS
from app.core.exceptions import ConflictException, ValidationException
from app.models import OperationalHour, Venue
from app.repository import operational_hour_repository, slot_repository
from app.schemas import OperationalHourEntry
from app.services.slot_generator import SlotGenerator
from app.services.time_utils import as_utc, minutes_of
from app.services.venue_service import VenueService

logger = logging.getLogger(__name__)

MIN_SLOT_DURATION = 5
MAX_SLOT_DURATION = 240


def validate_week(entries: Sequence[OperationalHourEntry]) -> None:
    if len(entries) != len(WEEKDAYS):
        raise ValidationException("Operational hours must contain exactly 7 days")

    seen = set()
    for entry in entries:
        if entry.day in seen:
            raise ValidationException(f"Operational hours for {entry.day} were provided twice")
        seen.add(entry.day)

        if entry.is_closed:
            continue
        if not entry.start_time or not entry.end_time:
            raise ValidationException(f"Start time and end time are required for {entry.day}")
        if minutes_of(entry.end_time) <= minutes_of(entry.start_time):
            raise ValidationException(f"End time must be after start time for {entry.day}")


class OperationalHoursService:
    """Weekly hours and slot duration; every change triggers a slot regeneration."""

    def __init__(self, db: Session, generator: SlotGenerator):
        self.db = db
        self.generator = generator
        self.venues = VenueService(db)

    def _ensure_not_regenerating(self, venue: Venue) -> None:
        if self.generator.is_running(venue.id):
            raise ConflictException(
                "Slots are being regenerated for this restaurant, please try again shortly"
            )

    def _schedule_regeneration(
        self, venue_id: int, background_tasks: Optional[BackgroundTasks]
    ) -> None:
        if background_tasks is None:
            self.generator.regenerate(venue_id)
            return
        background_tasks.add_task(self.generator.regenerate, venue_id)
        logger.info("Scheduled slot regeneration for venue %s", venue_id)

    def set_week(
        self,
        owner_id: int,
        entries: Sequence[OperationalHourEntry],
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> list[OperationalHour]:
        venue = self.venues.get_owned_venue(owner_id)
        validate_week(entries)
        self._ensure_not_regenerating(venue)

        for entry in entries:
            start_time = None if entry.is_closed else entry.start_time
            end_time = None if entry.is_closed else entry.end_time
            hour = operational_hour_repository.get_for_day(self.db, venue.id, entry.day)
            if hour is None:
                operational_hour_repository.create_operational_hour(
                    self.db,
                    {
                        "venue_id": venue.id,
                        "day": entry.day,
                        "is_closed": entry.is_closed,
                        "start_time": start_time,
                        "end_time": end_time,
                    },
                )
            else:
                hour.is_closed = entry.is_closed
                hour.start_time = start_time
                hour.end_time = end_time

        self.db.commit()
        self._schedule_regeneration(venue.id, background_tasks)
        return operational_hour_repository.list_for_venue(self.db, venue.id)

    def get_week(self, owner_id: int) -> list[OperationalHour]:
        venue = self.venues.get_owned_venue(owner_id)
        return operational_hour_repository.list_for_venue(self.db, venue.id)

    def set_slot_duration(
        self,
        owner_id: int,
        minutes: int,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> int:
        if not MIN_SLOT_DURATION <= minutes <= MAX_SLOT_DURATION:
            raise ValidationException(
                f"Slot duration must be between {MIN_SLOT_DURATION} and {MAX_SLOT_DURATION} minutes"
            )
        venue = self.venues.get_owned_venue(owner_id)
        self._ensure_not_regenerating(venue)

        venue.slot_duration_minutes = minutes
        self.db.commit()
        self._schedule_regeneration(venue.id, background_tasks)
        return minutes

    def get_slot_duration(self, owner_id: int) -> int:
        return self.venues.get_owned_venue(owner_id).slot_duration_minutes

    def get_generation_status(self, owner_id: int) -> dict:
        venue = self.venues.get_owned_venue(owner_id)
        status = venue.slot_generation_status
        if self.generator.is_running(venue.id):
            status = SlotGenerationStatus.RUNNING.value
        return {
            "status": status,
            "error": venue.slot_generation_error,
            "generated_at": as_utc(venue.slots_generated_at) if venue.slots_generated_at else None,
            "slot_count": slot_repository.count_slots(self.db, venue.id),
        }
