from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import Field as PydanticField

from app.core.enums import NearbySort, VenueType

from .common import CamelModel


class NearbySearchRequest(CamelModel):
    latitude: float = PydanticField(..., ge=-90, le=90)
    longitude: float = PydanticField(..., ge=-180, le=180)
    radius: Optional[float] = PydanticField(None, gt=0)
    type: Optional[VenueType] = None
    keyword: Optional[str] = None
    sort: NearbySort = NearbySort.DISTANCE
    # Minimum per-criterion ratings, keyed by the criteria of ``type``.
    ratings: Optional[Dict[str, float]] = None
    page: int = PydanticField(1, ge=1)
    limit: int = PydanticField(10, ge=1, le=100)


class NearbyVenue(CamelModel):
    id: int
    name: str
    address: Optional[str] = None
    latitude: float
    longitude: float
    type: str
    rating: Optional[float] = None
    rating_count: int = 0
    distance: int
    eta_in_minutes: int


class NearbySearchResponse(CamelModel):
    restaurants: List[NearbyVenue]
    total_restaurants: int
    current_page: int
    total_pages: int


class VenueDetail(CamelModel):
    id: int
    name: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    type: str
    rating: Optional[float] = None
    rating_count: int = 0
    timezone: Optional[str] = None
    slot_duration_minutes: int


class VenueDetailEnvelope(CamelModel):
    restaurant: VenueDetail
