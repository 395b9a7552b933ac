# tests/conftest.py

import os

# Must be set before the application modules read their settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["PUSH_SERVICE_URL"] = ""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.core.database import Base, engine
from app.core.enums import WEEKDAYS, VenueType
from app.core.locks import KeyedLock
from app.core.security import ROLE_CUSTOMER, ROLE_RESTAURANT
from app.dependencies import get_db, get_notification_dispatcher, get_slot_generator
from app.main import app
from app.models import OperationalHour, User, Venue
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.slot_generator import SlotGenerator

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 2030-01-07 is a Monday.
MONDAY = date(2030, 1, 7)


def fixed_clock(value: datetime):
    """A clock that always answers ``value`` (UTC)."""
    return lambda: value


class RecordingPushClient:
    """Stands in for the push gateway and remembers what would have been sent."""

    def __init__(self):
        self.sent = []

    @property
    def is_configured(self) -> bool:
        return True

    def send_push(self, *, token, title, body, data=None):
        self.sent.append({"token": token, "title": title, "body": body, "data": data or {}})
        return True


@pytest.fixture(scope="function")
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def slot_generator():
    return SlotGenerator(TestingSessionLocal, KeyedLock())


@pytest.fixture
def push_client():
    return RecordingPushClient()


@pytest.fixture
def dispatcher(push_client):
    return NotificationDispatcher(client=push_client)


@pytest.fixture
def make_user(db_session):
    def _make_user(role_name=ROLE_CUSTOMER, full_name="Jane Doe", device_token=None):
        user = User(
            full_name=full_name,
            first_name=full_name.split(" ")[0],
            role_name=role_name,
            device_token=device_token,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_venue(db_session, make_user):
    def _make_venue(
        owner=None,
        name="Chez Test",
        latitude=40.0,
        longitude=-3.7,
        venue_type=VenueType.RESTAURANT.value,
        **fields,
    ):
        owner = owner or make_user(role_name=ROLE_RESTAURANT, full_name="Owner", device_token="owner-token")
        venue = Venue(
            owner_id=owner.id,
            name=name,
            address="1 Test Street",
            latitude=None if latitude is None else Decimal(str(latitude)),
            longitude=None if longitude is None else Decimal(str(longitude)),
            type=venue_type,
            **fields,
        )
        db_session.add(venue)
        db_session.commit()
        return venue

    return _make_venue


@pytest.fixture
def set_hours(db_session):
    """Store weekly hours directly; ``open_days`` maps a weekday to (start, end)."""

    def _set_hours(venue, open_days):
        for day in WEEKDAYS:
            window = open_days.get(day)
            db_session.add(
                OperationalHour(
                    venue_id=venue.id,
                    day=day,
                    is_closed=window is None,
                    start_time=window[0] if window else None,
                    end_time=window[1] if window else None,
                )
            )
        db_session.commit()

    return _set_hours


@pytest.fixture
def seeded_venue(make_venue, set_hours, slot_generator, db_session):
    """A venue open Monday 09:00-11:00 with its slot grid generated."""
    venue = make_venue(slot_duration_minutes=60)
    set_hours(venue, {"Monday": ("09:00", "11:00")})
    assert slot_generator.regenerate(venue.id) is True
    db_session.expire_all()
    return venue


def make_token(user_id: int, role_name: str) -> str:
    return jwt.encode(
        {"userId": user_id, "roleName": role_name},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {make_token(user.id, user.role_name)}"}


def next_monday(today: date = None) -> date:
    today = today or datetime.now(timezone.utc).date()
    return today + timedelta(days=(7 - today.weekday()) or 7)


@pytest.fixture
def client(db_session, slot_generator, dispatcher):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_slot_generator] = lambda: slot_generator
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
