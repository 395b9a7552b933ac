from __future__ import annotations

import logging
from math import ceil
from typing import Mapping, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.enums import RATING_CRITERIA, NearbySort, VenueType
from app.core.exceptions import ValidationException
from app.models import Venue
from app.repository import venue_repository
from app.schemas import NearbySearchRequest
from app.services.location_utils import bounding_box, eta_minutes, haversine_distance_meters

logger = logging.getLogger(__name__)


def _validate_thresholds(
    venue_type: Optional[VenueType], thresholds: Optional[Mapping[str, float]]
) -> dict[str, float]:
    if not thresholds:
        return {}
    if venue_type is None:
        raise ValidationException("type is required when filtering by ratings")

    allowed = RATING_CRITERIA[venue_type]
    unknown = sorted(set(thresholds) - set(allowed))
    if unknown:
        raise ValidationException(
            f"Unknown rating criteria for {venue_type.value}: {', '.join(unknown)}"
        )
    return {criterion: float(minimum) for criterion, minimum in thresholds.items()}


def _meets_thresholds(venue: Venue, thresholds: Mapping[str, float]) -> bool:
    ratings = venue.criteria_ratings or {}
    for criterion, minimum in thresholds.items():
        value = ratings.get(criterion)
        if value is None or float(value) < minimum:
            return False
    return True


class ProximityService:
    """Discovery of venues around a point; never touches bookings."""

    def __init__(self, db: Session):
        self.db = db

    def find_nearby(self, search: NearbySearchRequest) -> dict:
        radius = search.radius or settings.DEFAULT_SEARCH_RADIUS_METERS
        thresholds = _validate_thresholds(search.type, search.ratings)

        min_lat, max_lat, min_lon, max_lon = bounding_box(
            search.latitude, search.longitude, radius
        )
        candidates = venue_repository.list_nearby_candidates(
            self.db,
            min_latitude=min_lat,
            max_latitude=max_lat,
            min_longitude=min_lon,
            max_longitude=max_lon,
            venue_type=search.type.value if search.type else None,
            keyword=search.keyword,
        )

        matches: list[tuple[float, Venue]] = []
        for venue in candidates:
            distance = haversine_distance_meters(
                search.latitude,
                search.longitude,
                float(venue.latitude),
                float(venue.longitude),
            )
            if distance > radius:
                continue
            if thresholds and not _meets_thresholds(venue, thresholds):
                continue
            matches.append((distance, venue))

        if search.sort == NearbySort.RATING:
            matches.sort(
                key=lambda item: (
                    item[1].rating is None,
                    -float(item[1].rating or 0),
                    item[0],
                )
            )
        else:
            matches.sort(key=lambda item: item[0])

        total = len(matches)
        offset = (search.page - 1) * search.limit
        page_items = matches[offset : offset + search.limit]

        logger.debug(
            "Nearby search at (%s, %s) within %sm matched %s venues",
            search.latitude,
            search.longitude,
            radius,
            total,
        )

        return {
            "restaurants": [
                {
                    "id": venue.id,
                    "name": venue.name,
                    "address": venue.address,
                    "latitude": float(venue.latitude),
                    "longitude": float(venue.longitude),
                    "type": venue.type,
                    "rating": float(venue.rating) if venue.rating is not None else None,
                    "rating_count": venue.rating_count,
                    "distance": round(distance),
                    "eta_in_minutes": eta_minutes(distance, settings.ETA_SPEED_KMH),
                }
                for distance, venue in page_items
            ],
            "total_restaurants": total,
            "current_page": search.page,
            "total_pages": ceil(total / search.limit),
        }
