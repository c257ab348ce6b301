"""HTTP tests: routing, status codes and the error body shape."""

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.api import deps
from app.main import create_app
from app.services.hotel import (
    AvailabilityService,
    OfferService,
    PricingService,
    ReservationService,
    ResolverService,
    RoomService,
)
from tests.conftest import fixed_clock

API = "/api/v1"


def _service_factory(service_cls, db):
    def build():
        return service_cls(db, clock=fixed_clock)
    return build


@pytest.fixture
def client(db):
    app = create_app()
    overrides = {
        deps.get_availability_service: AvailabilityService,
        deps.get_pricing_service: PricingService,
        deps.get_offer_service: OfferService,
        deps.get_reservation_service: ReservationService,
        deps.get_resolver_service: ResolverService,
        deps.get_room_service: RoomService,
    }
    for dependency, service_cls in overrides.items():
        app.dependency_overrides[dependency] = _service_factory(service_cls, db)
    return TestClient(app)


def _error(response) -> dict:
    body = response.json()
    assert set(body["error"]) == {"message", "code", "details", "type"}
    return body["error"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
    assert "X-Process-Time" in response.headers


# --- availability and pricing ---

def test_list_available_rooms(client, hotel, make_room):
    make_room(room_number="102")
    make_room(room_number="101")

    response = client.get(
        f"{API}/hotels/{hotel.id}/availability",
        params={"check_in": "2024-12-06", "check_out": "2024-12-08", "guests": 2},
    )

    assert response.status_code == 200
    assert [room["room_number"] for room in response.json()] == ["101", "102"]


def test_invalid_range_is_422(client, make_room):
    room = make_room()
    response = client.get(
        f"{API}/rooms/{room.id}/availability",
        params={"check_in": "2024-12-08", "check_out": "2024-12-06"},
    )

    assert response.status_code == 422
    error = _error(response)
    assert error["code"] == "INVALID_DATE_RANGE"
    assert error["type"] == "InvalidDateRangeError"


def test_unknown_room_is_404(client):
    response = client.get(
        f"{API}/rooms/missing/availability",
        params={"check_in": "2024-12-06", "check_out": "2024-12-08"},
    )

    assert response.status_code == 404
    error = _error(response)
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["details"] == {"resource_type": "Room", "resource_id": "missing"}


def test_quote(client, make_room):
    room = make_room()
    response = client.post(
        f"{API}/rooms/{room.id}/quote",
        json={"check_in": "2024-12-06", "check_out": "2024-12-08", "guests": 2},
    )

    assert response.status_code == 200
    body = response.json()
    assert Decimal(body["subtotal"]) == Decimal("240.00")
    assert Decimal(body["total"]) == Decimal("268.80")
    assert len(body["per_night_breakdown"]) == 2


# --- reservations ---

def test_reserve_conflict_and_cancel(client, make_room):
    room = make_room()
    payload = {
        "room_id": room.id,
        "check_in": "2024-12-06",
        "check_out": "2024-12-08",
        "guests": 2,
        "customer_id": "cust-1",
    }

    created = client.post(f"{API}/reservations", json=payload)
    assert created.status_code == 201
    reservation_id = created.json()["id"]
    assert created.json()["status"] == "confirmed"

    clash = client.post(f"{API}/reservations", json={**payload, "customer_id": "cust-2"})
    assert clash.status_code == 409
    error = _error(clash)
    assert error["code"] == "ROOM_UNAVAILABLE"
    assert error["details"]["reason"] == "Room is already reserved for the selected dates"
    assert error["details"]["conflicting_ids"] == [reservation_id]

    cancelled = client.post(f"{API}/reservations/{reservation_id}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    conflicts = client.get(
        f"{API}/rooms/{room.id}/conflicts",
        params={"check_in": "2024-12-06", "check_out": "2024-12-08"},
    )
    assert conflicts.json()["is_free"] is True


def test_request_body_validation(client):
    response = client.post(f"{API}/reservations", json={"room_id": "r", "guests": 0})
    assert response.status_code == 422


def test_resolve(client, hotel, make_room):
    make_room()
    make_room(base_price=Decimal("80.00"))

    response = client.post(
        f"{API}/resolve",
        json={"hotel_id": hotel.id, "check_in": "2024-12-06", "check_out": "2024-12-08", "guests": 2},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["can_fulfil"] is True
    assert [candidate["room_number"] for candidate in body["candidates"]] == ["102", "101"]


# --- offers ---

def _create_offer(client, hotel, **overrides) -> dict:
    payload = {
        "hotel_id": hotel.id,
        "owner_id": hotel.owner_id,
        "title": "Winter Saver",
        "discount_type": "percentage",
        "discount_value": "20",
        "max_discount": "50",
        "valid_from": "2024-11-01T00:00:00",
        "valid_until": "2025-01-31T23:59:59",
        "promo_code": "winter20",
    }
    payload.update(overrides)
    response = client.post(f"{API}/offers", json=payload)
    assert response.status_code == 201
    return response.json()


def test_offer_lifecycle_and_redemption(client, hotel):
    offer = _create_offer(client, hotel, total_bookings=1)
    assert offer["status"] == "draft"
    assert offer["promo_code"] == "WINTER20"
    assert offer["savings_display"] == "Save 20%"

    approved = client.post(f"{API}/offers/{offer['id']}/approve", json={"approved_by": "admin-1"})
    assert approved.json()["status"] == "active"

    stay = {"check_in": "2024-12-06", "check_out": "2024-12-08", "amount": "1000.00"}
    redeemed = client.post(
        f"{API}/offers/{offer['id']}/redeem",
        json={"customer_id": "cust-1", "stay": stay, "booking_id": "bk-1"},
    )
    assert redeemed.status_code == 200
    assert Decimal(redeemed.json()["final_amount"]) == Decimal("950.00")

    exhausted = client.post(
        f"{API}/offers/{offer['id']}/redeem",
        json={"customer_id": "cust-2", "stay": stay},
    )
    assert exhausted.status_code == 409
    assert _error(exhausted)["code"] == "OFFER_LIMIT_EXCEEDED"

    by_code = client.get(f"{API}/offers/promo/winter20")
    assert by_code.json()["current_bookings"] == 1


def test_offer_applicability_reason(client, hotel):
    offer = _create_offer(client, hotel, minimum_stay=3)
    client.post(f"{API}/offers/{offer['id']}/approve", json={"approved_by": "admin-1"})

    response = client.post(
        f"{API}/offers/{offer['id']}/applicability",
        json={"stay": {"check_in": "2024-12-06", "check_out": "2024-12-08", "amount": "500"}},
    )

    assert response.status_code == 200
    assert response.json() == {
        "applicable": False,
        "reason": "Minimum stay of 3 nights required",
        "code": "MINIMUM_STAY",
    }


def test_illegal_offer_transition_is_409(client, hotel):
    offer = _create_offer(client, hotel)

    response = client.post(f"{API}/offers/{offer['id']}/resume")

    assert response.status_code == 409
    error = _error(response)
    assert error["code"] == "INVALID_STATE_TRANSITION"
    assert error["details"]["current_status"] == "draft"


def test_offer_counters(client, make_offer):
    offer = make_offer()

    assert client.post(f"{API}/offers/{offer.id}/views").status_code == 204
    assert client.post(f"{API}/offers/{offer.id}/clicks").status_code == 204

    analytics = client.get(f"{API}/offers/{offer.id}/analytics").json()
    assert analytics["views"] == 1
    assert analytics["clicks"] == 1


def test_active_offers_endpoint(client, hotel, make_offer):
    live = make_offer()
    make_offer(title="Lapsed", valid_until=datetime(2024, 11, 30))

    response = client.get(f"{API}/hotels/{hotel.id}/offers/active")

    assert [offer["id"] for offer in response.json()] == [live.id]


def test_store_outage_is_reported_as_503(client, db, hotel, monkeypatch):
    def timed_out(*args, **kwargs):
        raise OperationalError("SELECT offers", {}, Exception("statement timeout"))

    monkeypatch.setattr(db, "execute", timed_out)
    response = client.get(f"{API}/hotels/{hotel.id}/offers/active")

    assert response.status_code == 503
    error = _error(response)
    assert error["code"] == "DATABASE_ERROR"
    assert error["type"] == "InfrastructureError"
    assert error["details"] == {"operation": "find_active"}


# --- rooms ---

def test_room_registry_endpoints(client, hotel):
    payload = {
        "room_number": "501",
        "name": "Sea View",
        "room_type": "deluxe",
        "adults": 2,
        "base_price": "180.00",
    }
    created = client.post(f"{API}/hotels/{hotel.id}/rooms", json=payload)
    assert created.status_code == 201
    room_id = created.json()["id"]
    assert created.json()["max_occupancy"] == 2

    duplicate = client.post(f"{API}/hotels/{hotel.id}/rooms", json=payload)
    assert duplicate.status_code == 409

    cleaned = client.put(
        f"{API}/rooms/{room_id}/housekeeping",
        json={"status": "dirty", "notes": "Late checkout"},
    )
    assert cleaned.json()["housekeeping_status"] == "dirty"

    assert client.delete(f"{API}/rooms/{room_id}").status_code == 204
    assert client.get(f"{API}/rooms/{room_id}").status_code == 404
