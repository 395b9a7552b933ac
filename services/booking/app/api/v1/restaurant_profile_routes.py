"""Venue-owner routes for weekly hours, slot grid and per-date unavailability."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from app.core.security import get_current_restaurant_id
from app.dependencies import get_db, get_slot_generator
from app.schemas import (
    MessageResponse,
    OperationalHoursRequest,
    OperationalHoursResponse,
    SlotDurationRequest,
    SlotDurationResponse,
    SlotGenerationStatusResponse,
    SlotListResponse,
    SlotsUpdateRequest,
    UnavailableSlotPage,
    UnavailableSlotRequest,
)
from app.services import (
    AvailabilityService,
    OperationalHoursService,
    SlotGenerator,
    SlotService,
    UnavailabilityService,
)

router = APIRouter(tags=["restaurant-profile"])


@router.post("/setOperationalHours", response_model=OperationalHoursResponse)
def set_operational_hours(
    hours_in: OperationalHoursRequest,
    background_tasks: BackgroundTasks,
    *,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
    generator: SlotGenerator = Depends(get_slot_generator),
):
    """Replace the weekly schedule and regenerate slots in the background."""

    service = OperationalHoursService(db, generator)
    hours = service.set_week(owner_id, hours_in.operational_hours, background_tasks)
    return {"message": "Operational hours saved successfully", "operational_hours": hours}


@router.get("/getOperationalHours", response_model=OperationalHoursResponse)
def get_operational_hours(
    *,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
    generator: SlotGenerator = Depends(get_slot_generator),
):
    hours = OperationalHoursService(db, generator).get_week(owner_id)
    return {"message": "Operational hours fetched successfully", "operational_hours": hours}


@router.post("/setSlotDuration", response_model=SlotDurationResponse)
def set_slot_duration(
    duration_in: SlotDurationRequest,
    background_tasks: BackgroundTasks,
    *,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
    generator: SlotGenerator = Depends(get_slot_generator),
):
    minutes = OperationalHoursService(db, generator).set_slot_duration(
        owner_id, duration_in.slot_duration_minutes, background_tasks
    )
    return {"slot_duration_minutes": minutes}


@router.get("/getSlotDuration", response_model=SlotDurationResponse)
def get_slot_duration(
    *,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
    generator: SlotGenerator = Depends(get_slot_generator),
):
    minutes = OperationalHoursService(db, generator).get_slot_duration(owner_id)
    return {"slot_duration_minutes": minutes}


@router.get("/getSlotGenerationStatus", response_model=SlotGenerationStatusResponse)
def get_slot_generation_status(
    *,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
    generator: SlotGenerator = Depends(get_slot_generator),
):
    """Outcome of the latest background regeneration."""

    return OperationalHoursService(db, generator).get_generation_status(owner_id)


@router.get("/getSlots", response_model=SlotListResponse)
def get_slots(
    *,
    slot_date: Optional[date] = Query(None, alias="date"),
    time_zone: Optional[str] = Query(None, alias="timeZone"),
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
):
    """The weekly grid, or one date's slots flagged with their unavailability."""

    slots = AvailabilityService(db).list_for_owner(owner_id, time_zone, slot_date)
    return {"slots": slots}


@router.put("/updateSlots", response_model=MessageResponse)
def update_slots(
    slots_in: SlotsUpdateRequest,
    *,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
):
    """Switch generated slots on or off until the next regeneration."""

    SlotService(db).update_active(owner_id, slots_in.slots)
    return {"message": "Slots updated successfully"}


@router.get("/getUnavailableSlots", response_model=UnavailableSlotPage)
def get_unavailable_slots(
    *,
    slot_date: Optional[date] = Query(None, alias="date"),
    time_zone: Optional[str] = Query(None, alias="timeZone"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
):
    service = UnavailabilityService(db)
    return service.list_for_venue(owner_id, time_zone, slot_date, page=page, limit=limit)


@router.post("/addUnavailableSlot", response_model=MessageResponse)
def add_unavailable_slot(
    unavailable_in: UnavailableSlotRequest,
    *,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
):
    """Replace the unavailable slots of one date."""

    UnavailabilityService(db).replace_for_date(
        owner_id, unavailable_in.date, unavailable_in.slot_ids, unavailable_in.time_zone
    )
    return {"message": "Unavailable slots added successfully"}
