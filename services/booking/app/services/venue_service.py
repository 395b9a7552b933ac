from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException, ValidationException
from app.models import Venue
from app.repository import venue_repository
from app.services.time_utils import get_timezone


def effective_time_zone(venue: Venue, requested: Optional[str], *, required: bool = True) -> str:
    """Zone used for weekday, "today" and UTC materialization.

    The venue's stored zone wins over the requested one. A requested zone is
    validated even when it is not used.
    """
    if requested:
        get_timezone(requested)
    elif required or not venue.timezone:
        raise ValidationException("timeZone is required")
    return venue.timezone or requested  # type: ignore[return-value]


class VenueService:
    def __init__(self, db: Session):
        self.db = db

    def get_owned_venue(self, owner_id: int) -> Venue:
        venue = venue_repository.get_venue_by_owner(self.db, owner_id)
        if not venue or venue.is_deleted:
            raise NotFoundException("Restaurant profile not found")
        return venue

    def get_public_venue(self, venue_id: int) -> Venue:
        venue = venue_repository.get_venue(self.db, venue_id)
        if not venue or venue.is_deleted:
            raise NotFoundException(f"Restaurant {venue_id} not found")
        return venue
