from fastapi import status

from app.core.security import ROLE_RESTAURANT
from conftest import auth_headers, next_monday

WEEK = [
    {"day": "Monday", "isClosed": False, "startTime": "09:00", "endTime": "11:00"},
    {"day": "Tuesday", "isClosed": True},
    {"day": "Wednesday", "isClosed": True},
    {"day": "Thursday", "isClosed": True},
    {"day": "Friday", "isClosed": True},
    {"day": "Saturday", "isClosed": True},
    {"day": "Sunday", "isClosed": True},
]


def _owner_and_venue(make_user, make_venue, **fields):
    owner = make_user(role_name=ROLE_RESTAURANT, full_name="Rosa Owner", device_token="owner-token")
    venue = make_venue(owner=owner, name="Casa Rosa", **fields)
    return owner, venue


def test_health(client):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_requests_without_token_are_unauthorized(client):
    response = client.get("/api/app/booking/getBookings", params={"booking": "scheduled"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Not authenticated"}


def test_invalid_token_is_unauthorized(client):
    response = client.get(
        "/api/restaurant/profile/getSlotDuration",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_customers_cannot_use_restaurant_routes(client, make_user):
    customer = make_user()

    response = client.get("/api/restaurant/profile/getSlotDuration", headers=auth_headers(customer))

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_restaurants_cannot_book(client, make_user, make_venue):
    owner, venue = _owner_and_venue(make_user, make_venue)

    response = client.post(
        "/api/app/booking/createBooking",
        json={
            "restaurantId": venue.id,
            "slotId": 1,
            "date": next_monday().isoformat(),
            "timeZone": "UTC",
            "guestCount": 2,
        },
        headers=auth_headers(owner),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_operational_hours_need_seven_days(client, make_user, make_venue):
    owner, _ = _owner_and_venue(make_user, make_venue)

    response = client.post(
        "/api/restaurant/profile/setOperationalHours",
        json={"operationalHours": WEEK[:6]},
        headers=auth_headers(owner),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "exactly 7 days" in response.json()["message"]


def test_malformed_time_is_a_bad_request(client, make_user, make_venue):
    owner, _ = _owner_and_venue(make_user, make_venue)
    week = [dict(entry) for entry in WEEK]
    week[0]["startTime"] = "9am"

    response = client.post(
        "/api/restaurant/profile/setOperationalHours",
        json={"operationalHours": week},
        headers=auth_headers(owner),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_slot_duration_round_trip(client, make_user, make_venue):
    owner, _ = _owner_and_venue(make_user, make_venue)
    headers = auth_headers(owner)

    saved = client.post(
        "/api/restaurant/profile/setSlotDuration",
        json={"slotDurationMinutes": 45},
        headers=headers,
    )
    fetched = client.get("/api/restaurant/profile/getSlotDuration", headers=headers)
    too_long = client.post(
        "/api/restaurant/profile/setSlotDuration",
        json={"slotDurationMinutes": 300},
        headers=headers,
    )

    assert saved.json() == {"slotDurationMinutes": 45}
    assert fetched.json() == {"slotDurationMinutes": 45}
    assert too_long.status_code == status.HTTP_400_BAD_REQUEST


def test_find_restaurants_nearby(client, make_user, make_venue):
    _owner_and_venue(make_user, make_venue, latitude=40.001, longitude=-3.7)
    customer = make_user()

    response = client.post(
        "/api/app/booking/findRestaurantsNearby",
        json={"latitude": 40.0, "longitude": -3.7, "radius": 1000},
        headers=auth_headers(customer),
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["totalRestaurants"] == 1
    assert body["currentPage"] == 1
    venue = body["restaurants"][0]
    assert venue["name"] == "Casa Rosa"
    assert venue["distance"] == 111
    assert set(venue) >= {"etaInMinutes", "ratingCount", "latitude", "longitude"}


def test_get_restaurant(client, make_user, make_venue):
    _, venue = _owner_and_venue(make_user, make_venue, timezone="Europe/Madrid")
    customer = make_user()

    response = client.get(f"/api/app/booking/getRestaurant/{venue.id}", headers=auth_headers(customer))
    missing = client.get("/api/app/booking/getRestaurant/9999", headers=auth_headers(customer))

    assert response.json()["restaurant"]["timezone"] == "Europe/Madrid"
    assert response.json()["restaurant"]["slotDurationMinutes"] == 60
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_past_date_slots_are_rejected(client, make_user, make_venue):
    _, venue = _owner_and_venue(make_user, make_venue)
    customer = make_user()

    response = client.get(
        f"/api/app/booking/getRestaurantSlots/{venue.id}",
        params={"date": "2000-01-03", "timeZone": "UTC"},
        headers=auth_headers(customer),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Kindly select a future date"}


def test_unknown_booking_bucket_is_a_bad_request(client, make_user):
    customer = make_user()

    response = client.get(
        "/api/app/booking/getBookings",
        params={"booking": "archived", "timeZone": "UTC"},
        headers=auth_headers(customer),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_booking_flow(client, make_user, make_venue, push_client):
    owner, venue = _owner_and_venue(make_user, make_venue)
    customer = make_user(full_name="Ana Lopez", device_token="ana-token")
    owner_headers = auth_headers(owner)
    customer_headers = auth_headers(customer)
    monday = next_monday().isoformat()

    saved = client.post(
        "/api/restaurant/profile/setOperationalHours",
        json={"operationalHours": WEEK},
        headers=owner_headers,
    )
    assert saved.status_code == status.HTTP_200_OK
    assert len(saved.json()["operationalHours"]) == 7

    generation = client.get("/api/restaurant/profile/getSlotGenerationStatus", headers=owner_headers)
    assert generation.json()["status"] == "ready"
    assert generation.json()["slotCount"] == 2

    slots = client.get(
        f"/api/app/booking/getRestaurantSlots/{venue.id}",
        params={"date": monday, "timeZone": "UTC"},
        headers=customer_headers,
    ).json()["slots"]
    assert [(slot["startTime"], slot["endTime"]) for slot in slots] == [("09:00", "10:00"), ("10:00", "11:00")]
    nine_id, ten_id = slots[0]["id"], slots[1]["id"]

    payload = {
        "restaurantId": venue.id,
        "slotId": nine_id,
        "date": monday,
        "timeZone": "UTC",
        "guestCount": 2,
        "specialRequest": "Terrace",
    }
    created = client.post("/api/app/booking/createBooking", json=payload, headers=customer_headers)
    assert created.status_code == status.HTTP_201_CREATED
    booking = created.json()["booking"]
    assert booking["status"] == "scheduled"
    assert booking["startDateTime"].startswith(f"{monday}T09:00:00")
    assert booking["specialRequest"] == "Terrace"
    assert push_client.sent[-1]["token"] == "owner-token"

    duplicate = client.post("/api/app/booking/createBooking", json=payload, headers=customer_headers)
    assert duplicate.status_code == status.HTTP_409_CONFLICT
    assert duplicate.json() == {"message": "Same slot already booked for you at this restaurant"}

    marked = client.post(
        "/api/restaurant/profile/addUnavailableSlot",
        json={"date": monday, "slotIds": [ten_id], "timeZone": "UTC"},
        headers=owner_headers,
    )
    assert marked.json() == {"message": "Unavailable slots added successfully"}

    remaining = client.get(
        f"/api/app/booking/getRestaurantSlots/{venue.id}",
        params={"date": monday, "timeZone": "UTC"},
        headers=customer_headers,
    ).json()["slots"]
    assert [slot["id"] for slot in remaining] == [nine_id]

    unavailable = client.get(
        "/api/restaurant/profile/getUnavailableSlots",
        params={"date": monday, "timeZone": "UTC"},
        headers=owner_headers,
    ).json()
    assert unavailable["count"] == 1
    assert unavailable["slots"][0]["slotId"] == ten_id

    mine = client.get(
        "/api/app/booking/getBookings",
        params={"booking": "scheduled", "timeZone": "UTC"},
        headers=customer_headers,
    ).json()
    assert mine["total"] == 1
    assert mine["bookings"][0]["canCancel"] is True

    theirs = client.get(
        "/api/restaurant/booking/getBookings",
        params={"booking": "scheduled", "timeZone": "UTC"},
        headers=owner_headers,
    ).json()
    assert theirs["bookings"][0]["customerName"] == "Ana Lopez"
    assert theirs["bookings"][0]["canCheckIn"] is True

    cancelled = client.put(
        f"/api/restaurant/booking/cancel/{booking['id']}",
        json={"cancelReason": "Private event", "timeZone": "UTC"},
        headers=owner_headers,
    )
    assert cancelled.status_code == status.HTTP_200_OK
    assert cancelled.json()["booking"]["cancelBy"] == "restaurant"
    assert push_client.sent[-1]["token"] == "ana-token"

    detail = client.get(f"/api/app/booking/getBooking/{booking['id']}", headers=customer_headers).json()
    assert detail["booking"]["cancelled"] is True
    assert detail["booking"]["canCancel"] is False

    check_in = client.put(f"/api/restaurant/booking/checkIn/{booking['id']}", headers=owner_headers)
    assert check_in.status_code == status.HTTP_400_BAD_REQUEST

    rebooked = client.post("/api/app/booking/createBooking", json=payload, headers=customer_headers)
    assert rebooked.status_code == status.HTTP_201_CREATED


def test_customer_update_and_cancel(client, make_user, make_venue):
    owner, venue = _owner_and_venue(make_user, make_venue)
    customer = make_user()
    customer_headers = auth_headers(customer)
    monday = next_monday().isoformat()
    client.post(
        "/api/restaurant/profile/setOperationalHours",
        json={"operationalHours": WEEK},
        headers=auth_headers(owner),
    )
    slots = client.get(
        f"/api/app/booking/getRestaurantSlots/{venue.id}",
        params={"date": monday, "timeZone": "UTC"},
        headers=customer_headers,
    ).json()["slots"]
    payload = {
        "restaurantId": venue.id,
        "slotId": slots[0]["id"],
        "date": monday,
        "timeZone": "UTC",
        "guestCount": 2,
    }
    booking_id = client.post(
        "/api/app/booking/createBooking", json=payload, headers=customer_headers
    ).json()["booking"]["id"]

    updated = client.put(
        f"/api/app/booking/updateBooking/{booking_id}",
        json={**payload, "slotId": slots[1]["id"], "guestCount": 4},
        headers=customer_headers,
    )
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["booking"]["slotStartTime"] == "10:00"
    assert updated.json()["booking"]["guestCount"] == 4

    cancelled = client.put(
        f"/api/app/booking/cancel/{booking_id}",
        json={"cancelReason": "Sick", "timeZone": "UTC"},
        headers=customer_headers,
    )
    again = client.put(
        f"/api/app/booking/cancel/{booking_id}",
        json={"cancelReason": "Sick", "timeZone": "UTC"},
        headers=customer_headers,
    )
    assert cancelled.json()["booking"]["status"] == "cancelled"
    assert again.status_code == status.HTTP_409_CONFLICT

    review = client.put(
        f"/api/app/booking/addReview/{booking_id}",
        json={"rating": 5, "review": "Great"},
        headers=customer_headers,
    )
    assert review.status_code == status.HTTP_400_BAD_REQUEST


def test_owner_switches_slots_off_and_on(client, make_user, make_venue):
    owner, venue = _owner_and_venue(make_user, make_venue)
    customer = make_user()
    owner_headers = auth_headers(owner)
    customer_headers = auth_headers(customer)
    monday = next_monday().isoformat()
    client.post(
        "/api/restaurant/profile/setOperationalHours",
        json={"operationalHours": WEEK},
        headers=owner_headers,
    )
    slots_url = f"/api/app/booking/getRestaurantSlots/{venue.id}"
    params = {"date": monday, "timeZone": "UTC"}
    listed = client.get(slots_url, params=params, headers=customer_headers).json()["slots"]
    nine_id, ten_id = [slot["id"] for slot in listed]

    switched = client.put(
        "/api/restaurant/profile/updateSlots",
        json={"slots": [{"id": nine_id, "isActive": False}]},
        headers=owner_headers,
    )
    assert switched.status_code == status.HTTP_200_OK
    assert switched.json() == {"message": "Slots updated successfully"}

    remaining = client.get(slots_url, params=params, headers=customer_headers).json()["slots"]
    assert [slot["id"] for slot in remaining] == [ten_id]

    booked = client.post(
        "/api/app/booking/createBooking",
        json={"restaurantId": venue.id, "slotId": nine_id, "date": monday, "timeZone": "UTC", "guestCount": 2},
        headers=customer_headers,
    )
    assert booked.status_code == status.HTTP_400_BAD_REQUEST
    assert booked.json() == {"message": "Slot is not active, kindly choose another one"}

    client.put(
        "/api/restaurant/profile/updateSlots",
        json={"slots": [{"id": nine_id, "isActive": True}]},
        headers=owner_headers,
    )
    restored = client.get(slots_url, params=params, headers=customer_headers).json()["slots"]
    assert [slot["id"] for slot in restored] == [nine_id, ten_id]


def test_update_slots_checks_ownership(client, make_user, make_venue):
    owner, _ = _owner_and_venue(make_user, make_venue)
    rival = make_user(role_name=ROLE_RESTAURANT, full_name="Rival Owner")
    make_venue(owner=rival, name="Rival")
    client.post(
        "/api/restaurant/profile/setOperationalHours",
        json={"operationalHours": WEEK},
        headers=auth_headers(owner),
    )
    owned = client.get(
        "/api/restaurant/profile/getSlots", headers=auth_headers(owner)
    ).json()["slots"]

    foreign = client.put(
        "/api/restaurant/profile/updateSlots",
        json={"slots": [{"id": owned[0]["id"], "isActive": False}]},
        headers=auth_headers(rival),
    )
    unknown = client.put(
        "/api/restaurant/profile/updateSlots",
        json={"slots": [{"id": 9999, "isActive": False}]},
        headers=auth_headers(owner),
    )
    empty = client.put(
        "/api/restaurant/profile/updateSlots", json={"slots": []}, headers=auth_headers(owner)
    )

    assert foreign.status_code == status.HTTP_400_BAD_REQUEST
    assert unknown.status_code == status.HTTP_404_NOT_FOUND
    assert unknown.json() == {"message": "Slot with ID 9999 does not exist"}
    assert empty.status_code == status.HTTP_400_BAD_REQUEST


def test_review_rating_with_three_decimals_is_a_bad_request(client, make_user):
    customer = make_user()

    response = client.put(
        "/api/app/booking/addReview/1",
        json={"rating": 4.255, "review": "Nice"},
        headers=auth_headers(customer),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
