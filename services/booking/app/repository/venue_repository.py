from __future__ import annotations

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.user import User
from app.models.venue import Venue


def get_venue(db: Session, venue_id: int) -> Optional[Venue]:
    return db.query(Venue).filter(Venue.id == venue_id).first()


def get_venue_by_owner(db: Session, owner_id: int) -> Optional[Venue]:
    return db.query(Venue).filter(Venue.owner_id == owner_id).first()


def list_nearby_candidates(
    db: Session,
    *,
    min_latitude: float,
    max_latitude: float,
    min_longitude: Optional[float] = None,
    max_longitude: Optional[float] = None,
    venue_type: Optional[str] = None,
    keyword: Optional[str] = None,
) -> list[Venue]:
    """Active, located venues of active owners inside a lat/lon box.

    Exact distance is left to the caller.
    """

    query = (
        db.query(Venue)
        .join(User, User.id == Venue.owner_id)
        .filter(User.is_active.is_(True))
        .filter(User.is_deleted.is_(False))
        .filter(Venue.is_active.is_(True))
        .filter(Venue.is_deleted.is_(False))
        .filter(Venue.latitude.isnot(None))
        .filter(Venue.longitude.isnot(None))
        .filter(Venue.latitude.between(min_latitude, max_latitude))
    )

    if min_longitude is not None and max_longitude is not None:
        query = query.filter(Venue.longitude.between(min_longitude, max_longitude))
    if venue_type is not None:
        query = query.filter(Venue.type == venue_type)

    normalized_keyword = (keyword or "").strip().lower()
    if normalized_keyword:
        query = query.filter(func.lower(Venue.name).contains(normalized_keyword, autoescape=True))

    return query.order_by(Venue.id).all()


def save_venue(db: Session, venue: Venue) -> Venue:
    db.add(venue)
    db.flush()
    return venue
