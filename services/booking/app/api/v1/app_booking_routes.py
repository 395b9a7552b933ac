"""Customer-facing discovery and booking routes."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.core.enums import BookingStatus, CancelledBy
from app.core.security import get_current_customer_id
from app.dependencies import get_db, get_notification_dispatcher
from app.schemas import (
    BookingCancelRequest,
    BookingCreate,
    BookingEnvelope,
    BookingUpdate,
    CustomerBookingEnvelope,
    CustomerBookingPage,
    NearbySearchRequest,
    NearbySearchResponse,
    ReviewCreate,
    SlotListResponse,
    VenueDetailEnvelope,
)
from app.services import AvailabilityService, BookingService, ProximityService, VenueService
from app.services.notification_dispatcher import NotificationDispatcher

router = APIRouter(tags=["app-booking"])


@router.post("/findRestaurantsNearby", response_model=NearbySearchResponse)
def find_restaurants_nearby(
    search: NearbySearchRequest,
    *,
    db: Session = Depends(get_db),
    _customer_id: int = Depends(get_current_customer_id),
):
    """Venues within the search radius, nearest first unless sorted by rating."""

    return ProximityService(db).find_nearby(search)


@router.get("/getRestaurantSlots/{restaurant_id}", response_model=SlotListResponse)
def get_restaurant_slots(
    restaurant_id: int = Path(..., ge=1),
    *,
    slot_date: date = Query(..., alias="date"),
    time_zone: Optional[str] = Query(None, alias="timeZone"),
    db: Session = Depends(get_db),
    _customer_id: int = Depends(get_current_customer_id),
):
    """Bookable slots of a restaurant for one calendar date."""

    slots = AvailabilityService(db).get_availability(restaurant_id, time_zone, slot_date)
    return {"slots": slots}


@router.get("/getRestaurant/{restaurant_id}", response_model=VenueDetailEnvelope)
def get_restaurant(
    restaurant_id: int = Path(..., ge=1),
    *,
    db: Session = Depends(get_db),
    _customer_id: int = Depends(get_current_customer_id),
):
    return {"restaurant": VenueService(db).get_public_venue(restaurant_id)}


@router.post(
    "/createBooking",
    response_model=BookingEnvelope,
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    booking_in: BookingCreate,
    *,
    db: Session = Depends(get_db),
    customer_id: int = Depends(get_current_customer_id),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    booking = BookingService(db, dispatcher).create(customer_id, booking_in)
    return {"booking": booking}


@router.put("/updateBooking/{booking_id}", response_model=BookingEnvelope)
def update_booking(
    booking_in: BookingUpdate,
    booking_id: int = Path(..., ge=1),
    *,
    db: Session = Depends(get_db),
    customer_id: int = Depends(get_current_customer_id),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    booking = BookingService(db, dispatcher).update(customer_id, booking_id, booking_in)
    return {"booking": booking}


@router.get("/getBookings", response_model=CustomerBookingPage)
def get_bookings(
    *,
    bucket: BookingStatus = Query(..., alias="booking"),
    time_zone: Optional[str] = Query(None, alias="timeZone"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    customer_id: int = Depends(get_current_customer_id),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Bookings of the caller in one bucket; overdue and finished ones are swept first."""

    service = BookingService(db, dispatcher)
    return service.list_for_customer(customer_id, bucket, time_zone, page=page, limit=limit)


@router.get("/getBooking/{booking_id}", response_model=CustomerBookingEnvelope)
def get_booking(
    booking_id: int = Path(..., ge=1),
    *,
    time_zone: Optional[str] = Query(None, alias="timeZone"),
    db: Session = Depends(get_db),
    customer_id: int = Depends(get_current_customer_id),
):
    booking = BookingService(db).get_for_customer(customer_id, booking_id, time_zone)
    return {"booking": booking}


@router.put("/cancel/{booking_id}", response_model=BookingEnvelope)
def cancel_booking(
    cancel_in: BookingCancelRequest,
    booking_id: int = Path(..., ge=1),
    *,
    db: Session = Depends(get_db),
    customer_id: int = Depends(get_current_customer_id),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    booking = BookingService(db, dispatcher).cancel(
        customer_id,
        booking_id,
        cancel_in.cancel_reason,
        cancel_in.time_zone,
        CancelledBy.USER,
    )
    return {"booking": booking}


@router.put("/addReview/{booking_id}", response_model=BookingEnvelope)
def add_review(
    review_in: ReviewCreate,
    booking_id: int = Path(..., ge=1),
    *,
    db: Session = Depends(get_db),
    customer_id: int = Depends(get_current_customer_id),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    booking = BookingService(db, dispatcher).add_review(
        customer_id, booking_id, review_in.rating, review_in.review
    )
    return {"booking": booking}
