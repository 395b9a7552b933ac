"""SQLAlchemy models for the booking service."""
from .user import User
from .venue import Venue
from .operational_hour import OperationalHour
from .slot import Slot
from .unavailable_slot import UnavailableSlot
from .booking import Booking
from .review import Review
from .notification import Notification

__all__ = [
    "User",
    "Venue",
    "OperationalHour",
    "Slot",
    "UnavailableSlot",
    "Booking",
    "Review",
    "Notification",
]
