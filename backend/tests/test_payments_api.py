"""Payment recording and owner transaction tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def _booking_id(
    client: AsyncClient, headers: dict[str, str], venue_id: object, booking_date: str, time: str
) -> str:
    response = await client.post(
        "/api/v1/bookings",
        json={"venue_id": str(venue_id), "booking_date": booking_date, "time": time},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


async def test_wallet_payment_confirms_booking(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    password = app_context["password"]
    player_headers = await _authenticate(client, app_context["player_email"], password)
    booking_id = await _booking_id(
        client, player_headers, app_context["venue_id"], "2024-06-17", "09:00-10:00"
    )

    missing_reference = await client.post(
        "/api/v1/payments",
        json={"booking_id": booking_id, "payment_method": "jazzcash"},
        headers=player_headers,
    )
    assert missing_reference.status_code == 422

    response = await client.post(
        "/api/v1/payments",
        json={
            "booking_id": booking_id,
            "payment_method": "jazzcash",
            "transaction_id": "JC-123456",
        },
        headers=player_headers,
    )
    assert response.status_code == 201
    payment = response.json()
    assert payment["status"] == "paid"
    assert payment["owner_id"] == str(app_context["owner_id"])
    assert payment["slot_date"] == "2024-06-17"
    assert payment["slot_time"] == "09:00-10:00"

    booking = await client.get(f"/api/v1/bookings/{booking_id}", headers=player_headers)
    assert booking.json()["payment_status"] == "paid"
    assert booking.json()["status"] == "confirmed"

    again = await client.post(
        "/api/v1/payments",
        json={"booking_id": booking_id, "payment_method": "cash"},
        headers=player_headers,
    )
    assert again.status_code == 400


async def test_cash_payment_is_received_by_owner(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    password = app_context["password"]
    player_headers = await _authenticate(client, app_context["player_email"], password)
    owner_headers = await _authenticate(client, app_context["owner_email"], password)
    venue_id = app_context["venue_id"]

    cash_booking = await _booking_id(
        client, player_headers, venue_id, "2024-06-14", "20:00-21:00"
    )
    wallet_booking = await _booking_id(
        client, player_headers, venue_id, "2024-06-12", "18:00-19:00"
    )
    cash = await client.post(
        "/api/v1/payments",
        json={"booking_id": cash_booking, "payment_method": "cash"},
        headers=player_headers,
    )
    assert cash.status_code == 201
    assert cash.json()["status"] == "pending"
    await client.post(
        "/api/v1/payments",
        json={
            "booking_id": wallet_booking,
            "payment_method": "easypaisa",
            "transaction_id": "EP-42",
        },
        headers=player_headers,
    )

    listing = {}
    for kind in ("all", "paid", "pending", "cash"):
        response = await client.get(
            "/api/v1/payments", params={"kind": kind}, headers=owner_headers
        )
        assert response.status_code == 200
        listing[kind] = [item["booking_id"] for item in response.json()]
    assert sorted(listing["all"]) == sorted([cash_booking, wallet_booking])
    assert listing["paid"] == [wallet_booking]
    assert listing["pending"] == [cash_booking]
    assert listing["cash"] == [cash_booking]

    bad_filter = await client.get(
        "/api/v1/payments", params={"kind": "refunded"}, headers=owner_headers
    )
    assert bad_filter.status_code == 422

    players_cannot = await client.post(
        f"/api/v1/payments/{cash.json()['id']}/receive", headers=player_headers
    )
    assert players_cannot.status_code == 403

    received = await client.post(
        f"/api/v1/payments/{cash.json()['id']}/receive", headers=owner_headers
    )
    assert received.status_code == 200
    assert received.json()["status"] == "paid"

    booking = await client.get(f"/api/v1/bookings/{cash_booking}", headers=player_headers)
    assert booking.json()["payment_status"] == "paid"

    twice = await client.post(
        f"/api/v1/payments/{cash.json()['id']}/receive", headers=owner_headers
    )
    assert twice.status_code == 400

    cash_left = await client.get(
        "/api/v1/payments", params={"kind": "cash"}, headers=owner_headers
    )
    assert cash_left.json() == []


async def test_player_cannot_pay_for_someone_else(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    password = app_context["password"]
    player_headers = await _authenticate(client, app_context["player_email"], password)
    other_headers = await _authenticate(
        client, app_context["other_player_email"], password
    )
    booking_id = await _booking_id(
        client, player_headers, app_context["venue_id"], "2024-06-17", "10:00-11:00"
    )

    response = await client.post(
        "/api/v1/payments",
        json={"booking_id": booking_id, "payment_method": "cash"},
        headers=other_headers,
    )
    assert response.status_code == 403


async def test_cancelled_booking_cannot_be_paid(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    password = app_context["password"]
    player_headers = await _authenticate(client, app_context["player_email"], password)
    booking_id = await _booking_id(
        client, player_headers, app_context["venue_id"], "2024-06-17", "10:00-11:00"
    )
    await client.patch(
        f"/api/v1/bookings/{booking_id}/status",
        json={"status": "cancelled"},
        headers=player_headers,
    )

    response = await client.post(
        "/api/v1/payments",
        json={"booking_id": booking_id, "payment_method": "cash"},
        headers=player_headers,
    )
    assert response.status_code == 400
