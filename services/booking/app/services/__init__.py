from .availability_service import AvailabilityService
from .booking_service import BookingService
from .operational_hours_service import OperationalHoursService
from .proximity_service import ProximityService
from .slot_service import SlotService
from .slot_generator import SlotGenerator
from .unavailability_service import UnavailabilityService
from .venue_service import VenueService

__all__ = [
    "AvailabilityService",
    "BookingService",
    "OperationalHoursService",
    "ProximityService",
    "SlotGenerator",
    "SlotService",
    "UnavailabilityService",
    "VenueService",
]
