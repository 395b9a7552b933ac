"""Which slots of a venue can be booked on a given calendar date."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestException
from app.models import Slot, Venue
from app.repository import slot_repository, unavailable_slot_repository
from app.services.time_utils import local_now, utc_now, weekday_of
from app.services.venue_service import VenueService, effective_time_zone

logger = logging.getLogger(__name__)

PAST_DATE_MESSAGE = "Kindly select a future date"


class AvailabilityService:
    def __init__(self, db: Session, clock: Callable[[], datetime] = utc_now):
        self.db = db
        self.clock = clock
        self.venues = VenueService(db)

    def _resolve_day(self, venue: Venue, time_zone: Optional[str], target_date: date) -> tuple[str, datetime]:
        zone = effective_time_zone(venue, time_zone)
        now_local = local_now(zone, self.clock())
        if target_date < now_local.date():
            raise BadRequestException(PAST_DATE_MESSAGE)
        return weekday_of(target_date, zone), now_local

    def get_availability(
        self, venue_id: int, time_zone: Optional[str], target_date: date
    ) -> list[Slot]:
        """Active slots for the weekday of ``target_date`` that are still bookable.

        Slots marked unavailable for that exact date are dropped, and on the
        venue's "today" so are slots that already started.
        """
        venue = self.venues.get_public_venue(venue_id)
        weekday, now_local = self._resolve_day(venue, time_zone, target_date)

        unavailable_ids = unavailable_slot_repository.list_slot_ids_for_date(
            self.db, venue.id, target_date
        )
        start_from = now_local.strftime("%H:%M") if target_date == now_local.date() else None

        return slot_repository.list_slots(
            self.db,
            venue.id,
            day=weekday,
            active_only=True,
            exclude_ids=unavailable_ids,
            start_from=start_from,
        )

    def list_for_owner(
        self, owner_id: int, time_zone: Optional[str], target_date: Optional[date] = None
    ) -> list[dict]:
        """The venue's own grid, flagged with per-date unavailability when a date is given."""
        venue = self.venues.get_owned_venue(owner_id)

        if target_date is None:
            slots = slot_repository.list_slots(self.db, venue.id)
            unavailable_ids: set[int] = set()
        else:
            weekday, _ = self._resolve_day(venue, time_zone, target_date)
            slots = slot_repository.list_slots(self.db, venue.id, day=weekday)
            unavailable_ids = unavailable_slot_repository.list_slot_ids_for_date(
                self.db, venue.id, target_date
            )

        return [
            {
                "id": slot.id,
                "day": slot.day,
                "start_time": slot.start_time,
                "end_time": slot.end_time,
                "is_active": slot.is_active,
                "is_unavailable": slot.id in unavailable_ids,
            }
            for slot in slots
        ]
