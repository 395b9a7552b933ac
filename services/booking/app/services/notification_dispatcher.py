"""Booking lifecycle notifications: persisted record plus optional push."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.enums import NOTIFICATION_CODES, NotificationType
from app.repository import notification_repository
from app.services.notification_client import NotificationClient

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Fire-and-forget sender.

    Called after the booking change has been committed; every failure is logged
    and swallowed so the caller's state change stands.
    """

    def __init__(self, client: Optional[NotificationClient] = None) -> None:
        self.client = client or NotificationClient()

    def send(
        self,
        db: Session,
        *,
        sender_id: Optional[int],
        receiver_id: int,
        notification_type: NotificationType,
        title: str,
        body: str,
        booking_id: Optional[int] = None,
        device_token: Optional[str] = None,
    ) -> None:
        code = NOTIFICATION_CODES[notification_type]

        try:
            notification_repository.create_notification(
                db,
                {
                    "sender_id": sender_id,
                    "receiver_id": receiver_id,
                    "booking_id": booking_id,
                    "code": code,
                    "type": notification_type.value,
                    "title": title,
                    "body": body,
                },
            )
        except SQLAlchemyError:
            db.rollback()
            logger.exception(
                "Failed to store %s notification for user %s", notification_type.value, receiver_id
            )

        if not device_token:
            return

        try:
            self.client.send_push(
                token=device_token,
                title=title,
                body=body,
                data={
                    "notificationId": code,
                    "type": notification_type.value,
                    "bookingId": booking_id or "",
                    "userId": receiver_id,
                },
            )
        except Exception:  # pragma: no cover - push must never break a booking
            logger.exception("Unexpected error while pushing %s", notification_type.value)


__all__ = ["NotificationDispatcher"]
