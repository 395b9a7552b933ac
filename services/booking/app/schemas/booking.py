from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field as PydanticField, field_validator

from .common import CamelModel, UTCDateTime


class BookingCreate(CamelModel):
    restaurant_id: int
    slot_id: int
    date: date
    time_zone: str
    guest_count: int = PydanticField(..., ge=1)
    special_request: Optional[str] = None

    @field_validator("time_zone")
    @classmethod
    def _strip_time_zone(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("timeZone is required")
        return value


class BookingUpdate(BookingCreate):
    pass


class BookingCancelRequest(CamelModel):
    cancel_reason: str = PydanticField(..., min_length=1)
    time_zone: str


class ReviewCreate(CamelModel):
    rating: Decimal = PydanticField(..., ge=1, le=5, decimal_places=2)
    review: str = ""


class ReviewResponse(CamelModel):
    id: int
    rating: float
    remarks: str
    created_at: Optional[UTCDateTime] = None


class BookingVenueSummary(CamelModel):
    id: int
    name: str
    address: Optional[str] = None
    type: str


class BookingResponse(CamelModel):
    id: int
    customer_id: int
    customer_name: str
    venue_id: int
    slot_id: Optional[int] = None
    slot_start_time: str
    slot_end_time: str
    day: str
    booking_date: date
    start_date_time: UTCDateTime
    end_date_time: UTCDateTime
    time_zone: str
    guest_count: int
    special_request: Optional[str] = None
    status: str
    cancel_by: Optional[str] = None
    cancel_reason: Optional[str] = None
    cancel_at: Optional[UTCDateTime] = None
    check_in_at: Optional[UTCDateTime] = None
    review_added: bool = False
    created_at: Optional[UTCDateTime] = None
    venue: Optional[BookingVenueSummary] = None
    review: Optional[ReviewResponse] = None


class CustomerBookingView(BookingResponse):
    scheduled: bool = False
    in_progress: bool = False
    completed: bool = False
    cancelled: bool = False
    can_cancel: bool = False
    can_add_review: bool = False


class VenueBookingView(BookingResponse):
    can_cancel: bool = False
    can_check_in: bool = False


class BookingEnvelope(CamelModel):
    booking: BookingResponse


class CustomerBookingEnvelope(CamelModel):
    booking: CustomerBookingView


class VenueBookingEnvelope(CamelModel):
    booking: VenueBookingView


class CustomerBookingPage(CamelModel):
    bookings: List[CustomerBookingView]
    total: int
    current_page: int
    total_pages: int


class VenueBookingPage(CamelModel):
    bookings: List[VenueBookingView]
    total: int
    current_page: int
    total_pages: int
