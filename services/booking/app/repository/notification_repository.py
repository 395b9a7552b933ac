from __future__ import annotations

from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.models.notification import Notification


def create_notification(db: Session, notification_data: Dict[str, object]) -> Notification:
    notification = Notification(**notification_data)
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def list_for_receiver(db: Session, receiver_id: int, *, booking_id: Optional[int] = None) -> list[Notification]:
    query = db.query(Notification).filter(Notification.receiver_id == receiver_id)
    if booking_id is not None:
        query = query.filter(Notification.booking_id == booking_id)
    return query.order_by(Notification.id).all()
