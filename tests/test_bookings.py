"""
Booking lifecycle over HTTP: creation, ownership, admin-only status
changes, listing and best-effort notifications.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.core.security import create_access_token
from fixora.models.booking import Booking

BOOKINGS = "/api/v1/bookings"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def _book(client: AsyncClient, token: str, payload: dict) -> dict:
    resp = await client.post(BOOKINGS, json=payload, headers=bearer(token))
    assert resp.status_code == 201, resp.text
    return resp.json()["booking"]


async def _booking_count(db_session: AsyncSession) -> int:
    return (await db_session.execute(select(func.count(Booking.id)))).scalar_one()


# ── Create ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_create_booking(async_client, register, service, make_booking_payload, notifier):
    user, token = await register("u1@example.com")

    resp = await async_client.post(BOOKINGS, json=make_booking_payload(service.id), headers=bearer(token))
    assert resp.status_code == 201

    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "Booking created successfully!"
    booking = data["booking"]
    assert booking["status"] == "pending"
    assert booking["user_id"] == user["id"]
    assert booking["service_name"] == "AC Gas Refill"
    assert booking["service"]["title"] == "AC Gas Refill"
    assert booking["service"]["price"] == 1499.0
    assert booking["notes"] == "Ring the bell twice"

    assert notifier.calls == [("created", "u1@example.com", booking["id"])]


@pytest.mark.asyncio
async def test_client_supplied_status_and_name_are_ignored(
    async_client, register, service, make_booking_payload
):
    _, token = await register("u1@example.com")
    payload = make_booking_payload(service.id, status="completed", service_name="Free stuff")

    booking = await _book(async_client, token, payload)
    assert booking["status"] == "pending"
    assert booking["service_name"] == "AC Gas Refill"


@pytest.mark.asyncio
async def test_unknown_status_value_on_create_is_dropped(
    async_client, register, service, make_booking_payload
):
    _, token = await register("u1@example.com")

    resp = await async_client.post(
        BOOKINGS, json=make_booking_payload(service.id, status="approved"), headers=bearer(token)
    )
    assert resp.status_code == 201
    assert resp.json()["booking"]["status"] == "pending"


@pytest.mark.asyncio
async def test_create_for_unknown_service(async_client, register, make_booking_payload, db_session, notifier):
    _, token = await register("u1@example.com")

    resp = await async_client.post(BOOKINGS, json=make_booking_payload(424242), headers=bearer(token))
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Service not found", "success": False}
    assert await _booking_count(db_session) == 0
    assert notifier.calls == []


@pytest.mark.asyncio
async def test_create_requires_login(async_client, service, make_booking_payload):
    resp = await async_client.post(BOOKINGS, json=make_booking_payload(service.id))
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Please login first"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"address": "short"},
        {"phone": "123"},
        {"date": "   "},
        {"notes": "n" * 1001},
        {"price": 0},
    ],
)
async def test_create_validation(async_client, register, service, make_booking_payload, overrides):
    _, token = await register("u1@example.com")
    resp = await async_client.post(
        BOOKINGS, json=make_booking_payload(service.id, **overrides), headers=bearer(token)
    )
    assert resp.status_code == 400
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_notification_failure_does_not_fail_booking(
    async_client, register, service, make_booking_payload, notifier, db_session
):
    _, token = await register("u1@example.com")
    notifier.fail = True

    booking = await _book(async_client, token, make_booking_payload(service.id))
    assert booking["status"] == "pending"
    assert await _booking_count(db_session) == 1


# ── Read / ownership ────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_owner_and_admin_can_read_others_cannot(async_client, register, service, make_booking_payload):
    _, owner = await register("owner@example.com")
    _, stranger = await register("stranger@example.com")
    _, admin = await register("boss@example.com", admin=True)
    booking = await _book(async_client, owner, make_booking_payload(service.id))
    url = f"{BOOKINGS}/{booking['id']}"

    assert (await async_client.get(url, headers=bearer(owner))).status_code == 200
    assert (await async_client.get(url, headers=bearer(admin))).status_code == 200

    resp = await async_client.get(url, headers=bearer(stranger))
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Access denied. This is not your booking."


@pytest.mark.asyncio
async def test_read_missing_booking(async_client, register):
    _, token = await register("u1@example.com")
    resp = await async_client.get(f"{BOOKINGS}/999", headers=bearer(token))
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Booking not found"


@pytest.mark.asyncio
async def test_booking_survives_service_deletion(
    async_client, register, service, make_booking_payload
):
    _, owner = await register("owner@example.com")
    _, admin = await register("boss@example.com", admin=True)
    booking = await _book(async_client, owner, make_booking_payload(service.id))

    resp = await async_client.delete(f"/api/v1/services/{service.id}", headers=bearer(admin))
    assert resp.status_code == 200

    resp = await async_client.get(f"{BOOKINGS}/{booking['id']}", headers=bearer(owner))
    assert resp.status_code == 200
    assert resp.json()["booking"]["service"] is None
    assert resp.json()["booking"]["service_name"] == "AC Gas Refill"


# ── List ────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_list_is_scoped_to_owner(async_client, register, service, make_booking_payload):
    _, alice = await register("alice@example.com")
    _, bob = await register("bob@example.com")
    _, admin = await register("boss@example.com", admin=True)

    a1 = await _book(async_client, alice, make_booking_payload(service.id))
    a2 = await _book(async_client, alice, make_booking_payload(service.id, time="2:00 PM"))
    b1 = await _book(async_client, bob, make_booking_payload(service.id))

    mine = (await async_client.get(BOOKINGS, headers=bearer(alice))).json()
    assert mine["total"] == 2
    assert [b["id"] for b in mine["bookings"]] == [a2["id"], a1["id"]]

    everything = (await async_client.get(BOOKINGS, headers=bearer(admin))).json()
    assert [b["id"] for b in everything["bookings"]] == [b1["id"], a2["id"], a1["id"]]


@pytest.mark.asyncio
async def test_list_filters_by_status(async_client, register, service, make_booking_payload):
    _, user = await register("alice@example.com")
    _, admin = await register("boss@example.com", admin=True)
    first = await _book(async_client, user, make_booking_payload(service.id))
    await _book(async_client, user, make_booking_payload(service.id))

    await async_client.put(
        f"{BOOKINGS}/{first['id']}", json={"status": "confirmed"}, headers=bearer(admin)
    )

    resp = await async_client.get(BOOKINGS, params={"status": "confirmed"}, headers=bearer(user))
    assert [b["id"] for b in resp.json()["bookings"]] == [first["id"]]

    resp = await async_client.get(BOOKINGS, params={"status": "bogus"}, headers=bearer(user))
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_list_empty(async_client, register):
    _, token = await register("u1@example.com")
    resp = await async_client.get(BOOKINGS, headers=bearer(token))
    assert resp.json() == {"success": True, "bookings": [], "total": 0}


# ── Update ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_owner_status_change_is_ignored(
    async_client, register, service, make_booking_payload, notifier
):
    _, token = await register("u1@example.com")
    booking = await _book(async_client, token, make_booking_payload(service.id))
    notifier.calls.clear()

    resp = await async_client.put(
        f"{BOOKINGS}/{booking['id']}",
        json={"status": "completed", "notes": "Gate code 1234"},
        headers=bearer(token),
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Booking updated successfully!"
    updated = resp.json()["booking"]
    assert updated["status"] == "pending"
    assert updated["notes"] == "Gate code 1234"
    assert notifier.calls == []


@pytest.mark.asyncio
async def test_admin_status_change_notifies_owner(
    async_client, register, service, make_booking_payload, notifier
):
    _, owner = await register("owner@example.com")
    _, admin = await register("boss@example.com", admin=True)
    booking = await _book(async_client, owner, make_booking_payload(service.id))
    notifier.calls.clear()

    resp = await async_client.put(
        f"{BOOKINGS}/{booking['id']}", json={"status": "confirmed"}, headers=bearer(admin)
    )
    assert resp.status_code == 200
    assert resp.json()["booking"]["status"] == "confirmed"
    assert notifier.calls == [("status", "owner@example.com", booking["id"], "pending", "confirmed")]

    # Same status again: nothing changed, nothing sent
    await async_client.put(
        f"{BOOKINGS}/{booking['id']}", json={"status": "confirmed"}, headers=bearer(admin)
    )
    assert len(notifier.calls) == 1


@pytest.mark.asyncio
async def test_any_status_may_follow_any_other(async_client, register, service, make_booking_payload):
    _, owner = await register("owner@example.com")
    _, admin = await register("boss@example.com", admin=True)
    booking = await _book(async_client, owner, make_booking_payload(service.id))
    url = f"{BOOKINGS}/{booking['id']}"

    for status in ("completed", "pending", "cancelled", "confirmed"):
        resp = await async_client.put(url, json={"status": status}, headers=bearer(admin))
        assert resp.json()["booking"]["status"] == status


@pytest.mark.asyncio
async def test_stranger_cannot_update(async_client, register, service, make_booking_payload):
    _, owner = await register("owner@example.com")
    _, stranger = await register("stranger@example.com")
    booking = await _book(async_client, owner, make_booking_payload(service.id))

    resp = await async_client.put(
        f"{BOOKINGS}/{booking['id']}", json={"notes": "hijack"}, headers=bearer(stranger)
    )
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Access denied. You can only update your own bookings."


@pytest.mark.asyncio
async def test_update_rejects_null_and_unknown_fields(async_client, register, service, make_booking_payload):
    _, token = await register("u1@example.com")
    booking = await _book(async_client, token, make_booking_payload(service.id))
    url = f"{BOOKINGS}/{booking['id']}"

    assert (await async_client.put(url, json={"address": None}, headers=bearer(token))).status_code == 400
    assert (await async_client.put(url, json={"user_id": 99}, headers=bearer(token))).status_code == 400


@pytest.mark.asyncio
async def test_status_notification_failure_keeps_update(
    async_client, register, service, make_booking_payload, notifier
):
    _, owner = await register("owner@example.com")
    _, admin = await register("boss@example.com", admin=True)
    booking = await _book(async_client, owner, make_booking_payload(service.id))
    notifier.fail = True

    resp = await async_client.put(
        f"{BOOKINGS}/{booking['id']}", json={"status": "cancelled"}, headers=bearer(admin)
    )
    assert resp.status_code == 200

    resp = await async_client.get(f"{BOOKINGS}/{booking['id']}", headers=bearer(owner))
    assert resp.json()["booking"]["status"] == "cancelled"


# ── Delete ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_owner_can_cancel(async_client, register, service, make_booking_payload, db_session):
    _, token = await register("u1@example.com")
    booking = await _book(async_client, token, make_booking_payload(service.id))

    resp = await async_client.delete(f"{BOOKINGS}/{booking['id']}", headers=bearer(token))
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Booking cancelled successfully!"}
    assert await _booking_count(db_session) == 0

    resp = await async_client.get(f"{BOOKINGS}/{booking['id']}", headers=bearer(token))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_stranger_cannot_cancel_but_admin_can(async_client, register, service, make_booking_payload):
    _, owner = await register("owner@example.com")
    _, stranger = await register("stranger@example.com")
    _, admin = await register("boss@example.com", admin=True)
    booking = await _book(async_client, owner, make_booking_payload(service.id))
    url = f"{BOOKINGS}/{booking['id']}"

    resp = await async_client.delete(url, headers=bearer(stranger))
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Access denied. You can only cancel your own bookings."

    assert (await async_client.delete(url, headers=bearer(admin))).status_code == 200


@pytest.mark.asyncio
async def test_cancel_missing_booking(async_client, register):
    _, user = await register("u1@example.com")
    _, admin = await register("boss@example.com", admin=True)

    for token in (user, admin):
        resp = await async_client.delete(f"{BOOKINGS}/31337", headers=bearer(token))
        assert resp.status_code == 404


# ── Sessions ────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_expired_session_is_unauthenticated(async_client):
    token = create_access_token(1, "u1@example.com", "user", expires_delta=timedelta(seconds=-1))
    resp = await async_client.get(BOOKINGS, headers=bearer(token))
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid or expired session"


@pytest.mark.asyncio
async def test_session_cookie_authenticates_bookings(async_client, register, service, make_booking_payload):
    _, token = await register("u1@example.com")

    resp = await async_client.post(
        BOOKINGS, json=make_booking_payload(service.id), headers={"Cookie": f"token={token}"}
    )
    assert resp.status_code == 201
