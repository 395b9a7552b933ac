"""String enumerations shared by models, schemas and services."""

from enum import Enum

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


class BookingStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CancelledBy(str, Enum):
    USER = "user"
    RESTAURANT = "restaurant"
    SYSTEM = "system"


class VenueType(str, Enum):
    RESTAURANT = "restaurant"
    LEISURE = "leisure"
    WELLNESS = "wellness"


class SlotGenerationStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    READY = "ready"
    FAILED = "failed"


class NearbySort(str, Enum):
    DISTANCE = "distance"
    RATING = "rating"


class NotificationType(str, Enum):
    BOOKING_CREATED = "bookingCreated"
    BOOKING_UPDATED = "bookingUpdated"
    BOOKING_CUSTOMER_CANCELLED = "bookingCustomerCancelled"
    BOOKING_RESTAURANT_CANCELLED = "bookingRestaurantCancelled"
    BOOKING_CUSTOMER_CHECKIN = "bookingCustomerCheckin"
    BOOKING_ADD_REVIEW = "bookingAddReview"


# Numeric codes the mobile clients switch on.
NOTIFICATION_CODES = {
    NotificationType.BOOKING_CREATED: 1,
    NotificationType.BOOKING_UPDATED: 2,
    NotificationType.BOOKING_CUSTOMER_CANCELLED: 3,
    NotificationType.BOOKING_RESTAURANT_CANCELLED: 4,
    NotificationType.BOOKING_CUSTOMER_CHECKIN: 5,
    NotificationType.BOOKING_ADD_REVIEW: 6,
}

# Per-type rating criteria accepted as minimum thresholds by nearby search.
RATING_CRITERIA = {
    VenueType.RESTAURANT: ("service", "place", "portions", "ambiance"),
    VenueType.LEISURE: ("stageDirection", "actorPerformance", "textQuality", "scenography"),
    VenueType.WELLNESS: (
        "careQuality",
        "cleanliness",
        "welcome",
        "valueForMoney",
        "atmosphere",
        "staffExperience",
        "averageScore",
    ),
}
