"""Entry point for the Booking FastAPI application."""

import logging

from fastapi import FastAPI

from app.api.v1 import app_booking_router, restaurant_booking_router, restaurant_profile_router
from app.core.config import settings
from app.core.database import Base, engine
from app.core.error_handlers import register_exception_handlers
from app import models  # noqa: F401  registers every table on Base.metadata

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Ensure database tables exist when the application starts (for development purposes).
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.PROJECT_NAME)

register_exception_handlers(app)

app.include_router(app_booking_router, prefix="/api/app/booking")
app.include_router(restaurant_profile_router, prefix="/api/restaurant/profile")
app.include_router(restaurant_booking_router, prefix="/api/restaurant/booking")


@app.get("/health", tags=["health"])
def health_check() -> dict:
    return {"status": "ok"}
