from __future__ import annotations

import logging
from datetime import date, datetime
from math import ceil
from typing import Callable, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestException, NotFoundException
from app.models import UnavailableSlot
from app.repository import slot_repository, unavailable_slot_repository
from app.services.availability_service import PAST_DATE_MESSAGE
from app.services.time_utils import as_utc, local_interval_to_utc, local_today, utc_now
from app.services.venue_service import VenueService, effective_time_zone

logger = logging.getLogger(__name__)


class UnavailabilityService:
    """Per-date exceptions to a venue's weekly slot grid."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utc_now):
        self.db = db
        self.clock = clock
        self.venues = VenueService(db)

    def replace_for_date(
        self,
        owner_id: int,
        target_date: date,
        slot_ids: Sequence[int],
        time_zone: Optional[str] = None,
    ) -> list[UnavailableSlot]:
        """Make ``slot_ids`` the complete set of unavailable slots on ``target_date``.

        An empty list clears the day.
        """
        venue = self.venues.get_owned_venue(owner_id)
        zone = effective_time_zone(venue, time_zone, required=False)
        if target_date < local_today(zone, self.clock()):
            raise BadRequestException(PAST_DATE_MESSAGE)

        unique_ids = list(dict.fromkeys(slot_ids))
        slots = slot_repository.get_slots_by_ids(self.db, unique_ids)
        if len(slots) != len(unique_ids):
            raise NotFoundException("One or more slots not found")
        for slot in slots:
            if slot.venue_id != venue.id:
                raise BadRequestException("One or more slots does not belong to this restaurant")

        unavailable_slot_repository.delete_for_date(self.db, venue.id, target_date)

        rows = []
        for slot in sorted(slots, key=lambda item: item.start_time):
            start_time, end_time = local_interval_to_utc(
                target_date, slot.start_time, slot.end_time, zone
            )
            rows.append(
                {
                    "venue_id": venue.id,
                    "slot_id": slot.id,
                    "date": target_date,
                    "start_time": start_time,
                    "end_time": end_time,
                }
            )
        created = unavailable_slot_repository.create_unavailable_slots(self.db, rows)
        self.db.commit()
        logger.info(
            "Marked %s slots unavailable for venue %s on %s", len(created), venue.id, target_date
        )
        return created

    def list_for_venue(
        self,
        owner_id: int,
        time_zone: Optional[str],
        target_date: Optional[date] = None,
        page: int = 1,
        limit: int = 10,
    ) -> dict:
        venue = self.venues.get_owned_venue(owner_id)
        zone = effective_time_zone(venue, time_zone)
        now = as_utc(self.clock())

        starts_after = None
        if target_date is not None:
            if target_date < local_today(zone, now):
                raise BadRequestException(PAST_DATE_MESSAGE)
        else:
            starts_after = now

        rows, count = unavailable_slot_repository.list_unavailable_slots(
            self.db,
            venue.id,
            target_date=target_date,
            starts_after=starts_after,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return {
            "slots": rows,
            "count": count,
            "page": page,
            "limit": limit,
            "total_pages": ceil(count / limit) if limit else 0,
        }
