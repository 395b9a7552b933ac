from collections.abc import Iterator

from app.core.database import SessionLocal
from app.core.locks import KeyedLock
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.slot_generator import SlotGenerator

slot_generator = SlotGenerator(SessionLocal, KeyedLock())
notification_dispatcher = NotificationDispatcher()


def get_db() -> Iterator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_slot_generator() -> SlotGenerator:
    return slot_generator


def get_notification_dispatcher() -> NotificationDispatcher:
    return notification_dispatcher
