from datetime import datetime, timezone

import pytest

from app.core.enums import WEEKDAYS, BookingStatus, CancelledBy
from app.core.exceptions import BadRequestException, ConflictException
from app.schemas import BookingCreate, OperationalHourEntry
from app.services import AvailabilityService, BookingService, OperationalHoursService
from conftest import MONDAY, fixed_clock

BEFORE = fixed_clock(datetime(2030, 1, 1, 8, tzinfo=timezone.utc))


def test_monday_morning_scenario(db_session, make_user, make_venue, slot_generator, dispatcher):
    venue = make_venue(slot_duration_minutes=60)
    week = [
        OperationalHourEntry(day=day, is_closed=True)
        if day != "Monday"
        else OperationalHourEntry(day=day, start_time="09:00", end_time="11:00")
        for day in WEEKDAYS
    ]
    OperationalHoursService(db_session, slot_generator).set_week(venue.owner_id, week)
    db_session.expire_all()

    slots = AvailabilityService(db_session, clock=BEFORE).get_availability(venue.id, "UTC", MONDAY)
    assert [(slot.start_time, slot.end_time) for slot in slots] == [("09:00", "10:00"), ("10:00", "11:00")]

    first_customer = make_user(full_name="First Customer")
    second_customer = make_user(full_name="Second Customer")
    ledger = BookingService(db_session, dispatcher=dispatcher, clock=BEFORE)
    request = BookingCreate(
        restaurant_id=venue.id, slot_id=slots[0].id, date=MONDAY, time_zone="UTC", guest_count=2
    )

    booking = ledger.create(first_customer.id, request)
    assert booking.status == BookingStatus.SCHEDULED.value

    with pytest.raises(ConflictException):
        ledger.create(first_customer.id, request)

    cancelled = ledger.cancel(first_customer.id, booking.id, "Change of plans", "UTC", CancelledBy.USER)
    assert cancelled.status == BookingStatus.CANCELLED.value

    rebooked = ledger.create(second_customer.id, request)
    late_ledger = BookingService(
        db_session, dispatcher=dispatcher, clock=fixed_clock(datetime(2030, 1, 7, 10, 1, tzinfo=timezone.utc))
    )
    with pytest.raises(BadRequestException):
        late_ledger.check_in(venue.owner_id, rebooked.id)

    on_time = BookingService(
        db_session, dispatcher=dispatcher, clock=fixed_clock(datetime(2030, 1, 7, 9, 5, tzinfo=timezone.utc))
    )
    checked_in = on_time.check_in(venue.owner_id, rebooked.id, "UTC")
    assert checked_in.status == BookingStatus.IN_PROGRESS.value
