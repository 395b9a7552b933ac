from .app_booking_routes import router as app_booking_router
from .restaurant_booking_routes import router as restaurant_booking_router
from .restaurant_profile_routes import router as restaurant_profile_router

__all__ = [
    "app_booking_router",
    "restaurant_booking_router",
    "restaurant_profile_router",
]
