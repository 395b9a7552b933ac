from __future__ import annotations

from decimal import Decimal
from typing import Dict

from sqlalchemy.orm import Session

from app.models.review import Review


def create_review(db: Session, review_data: Dict[str, object]) -> Review:
    review = Review(**review_data)
    db.add(review)
    db.flush()
    return review


def list_ratings_for_venue(db: Session, venue_id: int) -> list[Decimal]:
    rows = db.query(Review.rating).filter(Review.venue_id == venue_id).all()
    return [row[0] for row in rows]
