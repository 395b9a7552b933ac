from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestException, NotFoundException
from app.models import Slot
from app.repository import slot_repository
from app.schemas import SlotActiveUpdate
from app.services.venue_service import VenueService

logger = logging.getLogger(__name__)


class SlotService:
    """Owner-side toggles on the generated grid; a regeneration resets them."""

    def __init__(self, db: Session):
        self.db = db
        self.venues = VenueService(db)

    def update_active(self, owner_id: int, updates: Sequence[SlotActiveUpdate]) -> list[Slot]:
        venue = self.venues.get_owned_venue(owner_id)

        slots = {
            slot.id: slot
            for slot in slot_repository.get_slots_by_ids(self.db, [update.id for update in updates])
        }
        for update in updates:
            slot = slots.get(update.id)
            if slot is None:
                raise NotFoundException(f"Slot with ID {update.id} does not exist")
            if slot.venue_id != venue.id:
                raise BadRequestException(
                    f"Slot with ID {update.id} does not belong to this restaurant"
                )

        for update in updates:
            slots[update.id].is_active = update.is_active
        self.db.commit()
        logger.info("Updated %s slots for venue %s", len(updates), venue.id)
        return [slots[update.id] for update in updates]
