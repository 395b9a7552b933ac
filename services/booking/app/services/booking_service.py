"""
Booking ledger: creation, rescheduling, listing sweeps, cancellation,
check-in and reviews.

Every mutation commits before notifications go out, and a notification
failure never undoes the booking change.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from math import ceil
from typing import Callable, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.enums import BookingStatus, CancelledBy, NotificationType
from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
    ValidationException,
)
from app.models import Booking, Slot, User, Venue
from app.repository import (
    booking_repository,
    review_repository,
    slot_repository,
    unavailable_slot_repository,
    venue_repository,
)
from app.schemas import BookingCreate, BookingUpdate, CustomerBookingView, VenueBookingView
from app.services.availability_service import PAST_DATE_MESSAGE
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.time_utils import (
    as_utc,
    get_timezone,
    local_interval_to_utc,
    local_today,
    utc_now,
    weekday_of,
)
from app.services.venue_service import VenueService, effective_time_zone

logger = logging.getLogger(__name__)

OVERDUE_CANCEL_REASON = "system: overdue, no action taken"
DUPLICATE_BOOKING_MESSAGE = "Same slot already booked for you at this restaurant"
RATING_MIN = Decimal("1")
RATING_MAX = Decimal("5")
RATING_STEP = Decimal("0.01")


def _parse_bucket(bucket: Union[BookingStatus, str]) -> BookingStatus:
    try:
        return BookingStatus(bucket)
    except ValueError as exc:
        raise ValidationException("Invalid booking type requested") from exc


def _display_date(value: date) -> str:
    return value.strftime("%d-%m-%Y")


def to_customer_view(booking: Booking) -> CustomerBookingView:
    status = booking.status
    completed = status == BookingStatus.COMPLETED.value
    return CustomerBookingView.model_validate(booking).model_copy(
        update={
            "scheduled": status == BookingStatus.SCHEDULED.value,
            "in_progress": status == BookingStatus.IN_PROGRESS.value,
            "completed": completed,
            "cancelled": status == BookingStatus.CANCELLED.value,
            "can_cancel": status == BookingStatus.SCHEDULED.value,
            "can_add_review": completed and not booking.review_added,
        }
    )


def to_venue_view(booking: Booking, now: datetime) -> VenueBookingView:
    scheduled = booking.status == BookingStatus.SCHEDULED.value
    return VenueBookingView.model_validate(booking).model_copy(
        update={
            "can_cancel": scheduled,
            "can_check_in": scheduled and as_utc(booking.end_date_time) > now,
        }
    )


class BookingService:
    def __init__(
        self,
        db: Session,
        dispatcher: Optional[NotificationDispatcher] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self.dispatcher = dispatcher or NotificationDispatcher()
        self.clock = clock
        self.venues = VenueService(db)

    def _now(self) -> datetime:
        return as_utc(self.clock())

    # -- lookups -----------------------------------------------------------

    def _get_customer(self, customer_id: int) -> User:
        customer = self.db.get(User, customer_id)
        if not customer or customer.is_deleted:
            raise NotFoundException("User not found")
        return customer

    def _get_customer_booking(self, customer_id: int, booking_id: int) -> Booking:
        booking = booking_repository.get_booking(self.db, booking_id, customer_id=customer_id)
        if not booking:
            raise NotFoundException("Booking not found")
        return booking

    def _get_venue_booking(self, venue: Venue, booking_id: int) -> Booking:
        booking = booking_repository.get_booking(self.db, booking_id, venue_id=venue.id)
        if not booking:
            raise NotFoundException("Booking not found")
        return booking

    # -- create / update ----------------------------------------------------

    def _resolve_choice(
        self, venue_id: int, slot_id: int, target_date: date, time_zone: str
    ) -> tuple[Venue, Slot, str, str]:
        venue = venue_repository.get_venue(self.db, venue_id)
        if not venue:
            raise NotFoundException("Restaurant not found")
        if venue.is_deleted:
            raise BadRequestException("Restaurant is deleted, kindly book another one")
        if venue.latitude is None or venue.longitude is None:
            raise BadRequestException("Restaurant location is required")

        zone = effective_time_zone(venue, time_zone)

        slot = slot_repository.get_slot(self.db, slot_id)
        if not slot:
            raise NotFoundException("Slot not found")
        if slot.venue_id != venue.id:
            raise BadRequestException("Slot does not belong to this restaurant")
        if not slot.is_active:
            raise BadRequestException("Slot is not active, kindly choose another one")

        weekday = weekday_of(target_date, zone)
        if slot.day != weekday:
            raise BadRequestException(
                f"Slot is offered on {slot.day} but {target_date.isoformat()} is a {weekday}"
            )
        if unavailable_slot_repository.is_slot_unavailable(self.db, slot.id, target_date):
            raise BadRequestException(
                f"Slot is not available on {target_date.isoformat()}"
            )
        if target_date < local_today(zone, self._now()):
            raise BadRequestException(PAST_DATE_MESSAGE)

        return venue, slot, zone, weekday

    def _ensure_no_duplicate(
        self,
        *,
        customer_id: int,
        venue_id: int,
        slot: Slot,
        target_date: date,
        exclude_booking_id: Optional[int] = None,
    ) -> None:
        duplicate = booking_repository.find_active_duplicate(
            self.db,
            customer_id=customer_id,
            venue_id=venue_id,
            slot_start_time=slot.start_time,
            booking_date=target_date,
            exclude_booking_id=exclude_booking_id,
        )
        if duplicate:
            raise ConflictException(DUPLICATE_BOOKING_MESSAGE)

    def _commit_booking(self, write: Callable[[], Booking]) -> Booking:
        # The partial unique index catches what the pre-check misses under concurrency.
        try:
            booking = write()
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Unique index rejected a duplicate booking: %s", exc.orig)
            raise ConflictException(DUPLICATE_BOOKING_MESSAGE) from exc
        self.db.refresh(booking)
        return booking

    def create(self, customer_id: int, booking_in: BookingCreate) -> Booking:
        customer = self._get_customer(customer_id)
        venue, slot, zone, weekday = self._resolve_choice(
            booking_in.restaurant_id, booking_in.slot_id, booking_in.date, booking_in.time_zone
        )
        self._ensure_no_duplicate(
            customer_id=customer.id, venue_id=venue.id, slot=slot, target_date=booking_in.date
        )

        start_at, end_at = local_interval_to_utc(
            booking_in.date, slot.start_time, slot.end_time, zone
        )
        booking_data = {
            "customer_id": customer.id,
            "venue_id": venue.id,
            "slot_id": slot.id,
            "customer_name": customer.full_name,
            "slot_start_time": slot.start_time,
            "slot_end_time": slot.end_time,
            "day": weekday,
            "booking_date": booking_in.date,
            "start_date_time": start_at,
            "end_date_time": end_at,
            "time_zone": zone,
            "guest_count": booking_in.guest_count,
            "special_request": booking_in.special_request,
            "status": BookingStatus.SCHEDULED.value,
        }
        booking = self._commit_booking(
            lambda: booking_repository.create_booking(self.db, booking_data)
        )
        logger.info("Booking %s created for venue %s", booking.id, venue.id)

        self._notify_venue(
            booking,
            NotificationType.BOOKING_CREATED,
            "Booking Created",
            f"{customer.first_name or customer.full_name} has reserved a booking at your restaurant.",
        )
        return booking

    def update(self, customer_id: int, booking_id: int, booking_in: BookingUpdate) -> Booking:
        booking = self._get_customer_booking(customer_id, booking_id)
        if booking.status != BookingStatus.SCHEDULED.value:
            raise BadRequestException(
                f"Only scheduled bookings can be updated, this booking is {booking.status}"
            )
        if booking_in.restaurant_id != booking.venue_id:
            raise BadRequestException("Booking belongs to another restaurant")

        venue, slot, zone, weekday = self._resolve_choice(
            booking.venue_id, booking_in.slot_id, booking_in.date, booking_in.time_zone
        )
        self._ensure_no_duplicate(
            customer_id=customer_id,
            venue_id=venue.id,
            slot=slot,
            target_date=booking_in.date,
            exclude_booking_id=booking.id,
        )

        start_at, end_at = local_interval_to_utc(
            booking_in.date, slot.start_time, slot.end_time, zone
        )

        def apply_changes() -> Booking:
            booking.slot_id = slot.id
            booking.slot_start_time = slot.start_time
            booking.slot_end_time = slot.end_time
            booking.day = weekday
            booking.booking_date = booking_in.date
            booking.start_date_time = start_at
            booking.end_date_time = end_at
            booking.time_zone = zone
            booking.guest_count = booking_in.guest_count
            booking.special_request = booking_in.special_request
            return booking_repository.save_booking(self.db, booking)

        booking = self._commit_booking(apply_changes)
        logger.info("Booking %s updated", booking.id)

        self._notify_venue(
            booking,
            NotificationType.BOOKING_UPDATED,
            "Booking Updated",
            f"{booking.customer_name} has updated the booking for "
            f"{_display_date(booking.booking_date)}.",
        )
        return booking

    # -- listing ------------------------------------------------------------

    def _sweep_overdue(
        self,
        now: datetime,
        offset: int,
        limit: int,
        *,
        customer_id: Optional[int] = None,
        venue_id: Optional[int] = None,
    ) -> None:
        overdue_ids = booking_repository.list_overdue_scheduled_ids(
            self.db,
            now=now,
            customer_id=customer_id,
            venue_id=venue_id,
            offset=offset,
            limit=limit,
        )
        if not overdue_ids:
            return
        booking_repository.bulk_update_status(
            self.db,
            overdue_ids,
            {
                "status": BookingStatus.CANCELLED.value,
                "cancel_by": CancelledBy.SYSTEM.value,
                "cancel_reason": OVERDUE_CANCEL_REASON,
                "cancel_at": now,
            },
        )
        self.db.commit()
        logger.info("Cancelled %s overdue bookings", len(overdue_ids))

    def _list(
        self,
        bucket: Union[BookingStatus, str],
        page: int,
        limit: int,
        *,
        customer_id: Optional[int] = None,
        venue_id: Optional[int] = None,
    ) -> tuple[list[Booking], int]:
        status = _parse_bucket(bucket)
        now = self._now()
        offset = (page - 1) * limit
        scope = {"customer_id": customer_id, "venue_id": venue_id}

        self._sweep_overdue(now, offset, limit, **scope)

        if status == BookingStatus.SCHEDULED:
            return booking_repository.list_by_status(
                self.db,
                statuses=[BookingStatus.SCHEDULED.value],
                ends_after=now,
                order_by_start=True,
                offset=offset,
                limit=limit,
                **scope,
            )

        if status == BookingStatus.COMPLETED:
            bookings, total = booking_repository.list_by_status(
                self.db,
                statuses=[BookingStatus.IN_PROGRESS.value, BookingStatus.COMPLETED.value],
                ends_before=now,
                offset=offset,
                limit=limit,
                **scope,
            )
            finished_ids = [
                booking.id
                for booking in bookings
                if booking.status != BookingStatus.COMPLETED.value
            ]
            if finished_ids:
                booking_repository.bulk_update_status(
                    self.db, finished_ids, {"status": BookingStatus.COMPLETED.value}
                )
                self.db.commit()
                logger.info("Completed %s finished bookings", len(finished_ids))
            return bookings, total

        return booking_repository.list_by_status(
            self.db, statuses=[status.value], offset=offset, limit=limit, **scope
        )

    @staticmethod
    def _page(items: list, total: int, page: int, limit: int) -> dict:
        return {
            "bookings": items,
            "total": total,
            "current_page": page,
            "total_pages": ceil(total / limit) if limit else 0,
        }

    def list_for_customer(
        self,
        customer_id: int,
        bucket: Union[BookingStatus, str],
        time_zone: str,
        page: int = 1,
        limit: int = 10,
    ) -> dict:
        get_timezone(time_zone)
        self._get_customer(customer_id)
        bookings, total = self._list(bucket, page, limit, customer_id=customer_id)
        return self._page([to_customer_view(booking) for booking in bookings], total, page, limit)

    def list_for_venue(
        self,
        owner_id: int,
        bucket: Union[BookingStatus, str],
        time_zone: Optional[str],
        page: int = 1,
        limit: int = 10,
    ) -> dict:
        venue = self.venues.get_owned_venue(owner_id)
        effective_time_zone(venue, time_zone)
        bookings, total = self._list(bucket, page, limit, venue_id=venue.id)
        now = self._now()
        return self._page([to_venue_view(booking, now) for booking in bookings], total, page, limit)

    def get_for_customer(
        self, customer_id: int, booking_id: int, time_zone: Optional[str] = None
    ) -> CustomerBookingView:
        if time_zone:
            get_timezone(time_zone)
        return to_customer_view(self._get_customer_booking(customer_id, booking_id))

    def get_for_venue(
        self, owner_id: int, booking_id: int, time_zone: Optional[str] = None
    ) -> VenueBookingView:
        venue = self.venues.get_owned_venue(owner_id)
        if time_zone:
            get_timezone(time_zone)
        return to_venue_view(self._get_venue_booking(venue, booking_id), self._now())

    # -- lifecycle transitions ---------------------------------------------

    def cancel(
        self,
        actor_id: int,
        booking_id: int,
        reason: str,
        time_zone: Optional[str],
        cancelled_by: CancelledBy,
    ) -> Booking:
        if cancelled_by == CancelledBy.RESTAURANT:
            venue = self.venues.get_owned_venue(actor_id)
            effective_time_zone(venue, time_zone)
            booking = self._get_venue_booking(venue, booking_id)
        else:
            get_timezone(time_zone)
            booking = self._get_customer_booking(actor_id, booking_id)

        if booking.status == BookingStatus.CANCELLED.value:
            raise ConflictException("Booking is already cancelled")
        if booking.status != BookingStatus.SCHEDULED.value:
            raise BadRequestException(
                f"Booking cannot be cancelled because it is {booking.status}"
            )

        booking.status = BookingStatus.CANCELLED.value
        booking.cancel_by = cancelled_by.value
        booking.cancel_reason = reason
        booking.cancel_at = self._now()
        booking_repository.save_booking(self.db, booking)
        self.db.commit()
        self.db.refresh(booking)
        logger.info("Booking %s cancelled by %s", booking.id, cancelled_by.value)

        booked_for = _display_date(booking.booking_date)
        if cancelled_by == CancelledBy.RESTAURANT:
            self._notify_customer(
                booking,
                NotificationType.BOOKING_RESTAURANT_CANCELLED,
                "Reservation Cancelled By Restaurant",
                f"We're sorry! Your reservation at {booking.venue.name} scheduled for "
                f"{booked_for} has been cancelled by the restaurant.",
            )
        else:
            self._notify_venue(
                booking,
                NotificationType.BOOKING_CUSTOMER_CANCELLED,
                "Reservation Cancelled By Customer",
                f"We're sorry! The reservation at {booking.venue.name} scheduled for "
                f"{booked_for} has been cancelled by the customer.",
            )
        return booking

    def check_in(self, owner_id: int, booking_id: int, time_zone: Optional[str] = None) -> Booking:
        venue = self.venues.get_owned_venue(owner_id)
        if time_zone:
            get_timezone(time_zone)
        booking = self._get_venue_booking(venue, booking_id)

        if booking.status == BookingStatus.IN_PROGRESS.value:
            raise BadRequestException("Booking is already checked in")
        if booking.status != BookingStatus.SCHEDULED.value:
            raise BadRequestException(
                f"Booking cannot be checked in because it is {booking.status}"
            )
        now = self._now()
        if as_utc(booking.end_date_time) <= now:
            raise BadRequestException("Booking has already ended and cannot be checked in")

        booking.status = BookingStatus.IN_PROGRESS.value
        booking.check_in_at = now
        booking_repository.save_booking(self.db, booking)
        self.db.commit()
        self.db.refresh(booking)
        logger.info("Booking %s checked in", booking.id)

        self._notify_customer(
            booking,
            NotificationType.BOOKING_CUSTOMER_CHECKIN,
            "Checked In",
            f"You have been checked in at {venue.name}. Enjoy your visit!",
        )
        return booking

    def add_review(
        self, customer_id: int, booking_id: int, rating: Union[Decimal, float], remarks: str = ""
    ) -> Booking:
        score = Decimal(str(rating))
        if not RATING_MIN <= score <= RATING_MAX or score != score.quantize(RATING_STEP):
            raise ValidationException("Rating must be between 1 and 5 with at most two decimals")

        booking = self._get_customer_booking(customer_id, booking_id)
        if booking.status != BookingStatus.COMPLETED.value:
            raise BadRequestException("Only completed bookings can be reviewed")
        if booking.review_added:
            raise ConflictException("Review already added")

        review_repository.create_review(
            self.db,
            {
                "booking_id": booking.id,
                "customer_id": customer_id,
                "venue_id": booking.venue_id,
                "rating": score,
                "remarks": remarks or "",
            },
        )
        booking.review_added = True
        booking_repository.save_booking(self.db, booking)

        # Read-recompute-write; concurrent reviews race and the last write wins.
        ratings = [Decimal(str(value)) for value in review_repository.list_ratings_for_venue(
            self.db, booking.venue_id
        )]
        venue = booking.venue
        venue.rating = (sum(ratings, Decimal("0")) / len(ratings)).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        venue.rating_count = len(ratings)
        venue_repository.save_venue(self.db, venue)
        self.db.commit()
        self.db.refresh(booking)
        logger.info("Review added to booking %s; venue %s rating is %s", booking.id, venue.id, venue.rating)

        self._notify_venue(
            booking,
            NotificationType.BOOKING_ADD_REVIEW,
            "Review added by customer",
            f"{booking.customer_name} has added a review for the booking.",
        )
        return booking

    # -- notifications --------------------------------------------------------

    def _notify_venue(
        self, booking: Booking, notification_type: NotificationType, title: str, body: str
    ) -> None:
        owner = booking.venue.owner
        self.dispatcher.send(
            self.db,
            sender_id=booking.customer_id,
            receiver_id=booking.venue.owner_id,
            notification_type=notification_type,
            title=title,
            body=body,
            booking_id=booking.id,
            device_token=owner.device_token if owner else None,
        )

    def _notify_customer(
        self, booking: Booking, notification_type: NotificationType, title: str, body: str
    ) -> None:
        customer = booking.customer
        self.dispatcher.send(
            self.db,
            sender_id=booking.venue.owner_id,
            receiver_id=booking.customer_id,
            notification_type=notification_type,
            title=title,
            body=body,
            booking_id=booking.id,
            device_token=customer.device_token if customer else None,
        )
