"""Venue-owner routes over the bookings made at their venue."""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from app.core.enums import BookingStatus, CancelledBy
from app.core.security import get_current_restaurant_id
from app.dependencies import get_db, get_notification_dispatcher
from app.schemas import (
    BookingCancelRequest,
    BookingEnvelope,
    VenueBookingEnvelope,
    VenueBookingPage,
)
from app.services import BookingService
from app.services.notification_dispatcher import NotificationDispatcher

router = APIRouter(tags=["restaurant-booking"])


@router.get("/getBookings", response_model=VenueBookingPage)
def get_bookings(
    *,
    bucket: BookingStatus = Query(..., alias="booking"),
    time_zone: Optional[str] = Query(None, alias="timeZone"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
):
    return BookingService(db).list_for_venue(owner_id, bucket, time_zone, page=page, limit=limit)


@router.get("/getBooking/{booking_id}", response_model=VenueBookingEnvelope)
def get_booking(
    booking_id: int = Path(..., ge=1),
    *,
    time_zone: Optional[str] = Query(None, alias="timeZone"),
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
):
    return {"booking": BookingService(db).get_for_venue(owner_id, booking_id, time_zone)}


@router.put("/cancel/{booking_id}", response_model=BookingEnvelope)
def cancel_booking(
    cancel_in: BookingCancelRequest,
    booking_id: int = Path(..., ge=1),
    *,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    booking = BookingService(db, dispatcher).cancel(
        owner_id,
        booking_id,
        cancel_in.cancel_reason,
        cancel_in.time_zone,
        CancelledBy.RESTAURANT,
    )
    return {"booking": booking}


@router.put("/checkIn/{booking_id}", response_model=BookingEnvelope)
def check_in_booking(
    booking_id: int = Path(..., ge=1),
    *,
    time_zone: Optional[str] = Query(None, alias="timeZone"),
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_current_restaurant_id),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Mark a scheduled booking as in progress before it ends."""

    booking = BookingService(db, dispatcher).check_in(owner_id, booking_id, time_zone)
    return {"booking": booking}
