from .common import CamelModel, MessageResponse, UTCDateTime
from .operational_hours import (
    OperationalHourEntry,
    OperationalHourResponse,
    OperationalHoursRequest,
    OperationalHoursResponse,
    SlotDurationRequest,
    SlotDurationResponse,
    SlotGenerationStatusResponse,
)
from .slot import (
    SlotActiveUpdate,
    SlotListResponse,
    SlotResponse,
    SlotsUpdateRequest,
    UnavailableSlotPage,
    UnavailableSlotRequest,
    UnavailableSlotResponse,
)
from .nearby import (
    NearbySearchRequest,
    NearbySearchResponse,
    NearbyVenue,
    VenueDetail,
    VenueDetailEnvelope,
)
from .booking import (
    BookingCancelRequest,
    BookingCreate,
    BookingEnvelope,
    BookingResponse,
    BookingUpdate,
    BookingVenueSummary,
    CustomerBookingEnvelope,
    CustomerBookingPage,
    CustomerBookingView,
    ReviewCreate,
    ReviewResponse,
    VenueBookingEnvelope,
    VenueBookingPage,
    VenueBookingView,
)

__all__ = [
    "CamelModel",
    "MessageResponse",
    "UTCDateTime",
    "OperationalHourEntry",
    "OperationalHourResponse",
    "OperationalHoursRequest",
    "OperationalHoursResponse",
    "SlotDurationRequest",
    "SlotDurationResponse",
    "SlotGenerationStatusResponse",
    "SlotActiveUpdate",
    "SlotListResponse",
    "SlotResponse",
    "SlotsUpdateRequest",
    "UnavailableSlotPage",
    "UnavailableSlotRequest",
    "UnavailableSlotResponse",
    "NearbySearchRequest",
    "NearbySearchResponse",
    "NearbyVenue",
    "VenueDetail",
    "VenueDetailEnvelope",
    "BookingCancelRequest",
    "BookingCreate",
    "BookingEnvelope",
    "BookingResponse",
    "BookingUpdate",
    "BookingVenueSummary",
    "CustomerBookingEnvelope",
    "CustomerBookingPage",
    "CustomerBookingView",
    "ReviewCreate",
    "ReviewResponse",
    "VenueBookingEnvelope",
    "VenueBookingPage",
    "VenueBookingView",
]
