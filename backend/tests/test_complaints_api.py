"""Complaint filing and admin review tests."""

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


async def _headers(app_context: dict[str, Any], role: str) -> dict[str, str]:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    return await _authenticate(
        client, app_context[f"{role}_email"], app_context["password"]
    )


async def test_player_files_complaint_and_admin_resolves(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    player_headers = await _headers(app_context, "player")

    created = await client.post(
        "/api/v1/complaints",
        json={
            "complaint_type": "no_show",
            "description": "  Owner locked the gate before our slot.  ",
            "venue_id": str(app_context["venue_id"]),
            "against_user_id": str(app_context["owner_id"]),
            "against_name": "Omar",
        },
        headers=player_headers,
    )
    assert created.status_code == 201
    complaint = created.json()
    assert complaint["status"] == "pending"
    assert complaint["filer_role"] == "player"
    assert complaint["description"] == "Owner locked the gate before our slot."
    assert complaint["reviewed_by_admin"] is False
    assert complaint["resolved_at"] is None

    admin_headers = await _headers(app_context, "admin")
    url = f"/api/v1/complaints/{complaint['id']}/status"
    resolved = await client.patch(
        url,
        json={"status": "resolved", "note": "Refund issued to the player."},
        headers=admin_headers,
    )
    assert resolved.status_code == 200
    body = resolved.json()
    assert body["status"] == "resolved"
    assert body["admin_note"] == "Refund issued to the player."
    assert body["reviewed_by_admin"] is True
    assert body["resolved_at"].startswith("2024-06-12T15:30")

    reopened = await client.patch(url, json={"status": "pending"}, headers=admin_headers)
    assert reopened.json()["status"] == "pending"
    assert reopened.json()["resolved_at"] is None

    mine = await client.get(f"/api/v1/complaints/{complaint['id']}", headers=player_headers)
    assert mine.status_code == 200


async def test_complaints_are_private_to_their_filer(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner_headers = await _headers(app_context, "owner")
    player_headers = await _headers(app_context, "player")

    owner_complaint = await client.post(
        "/api/v1/complaints",
        json={
            "complaint_type": "property_damage",
            "description": "Broken goal net after the Friday game.",
            "against_user_id": str(app_context["player_id"]),
        },
        headers=owner_headers,
    )
    assert owner_complaint.status_code == 201
    assert owner_complaint.json()["filer_role"] == "owner"
    await client.post(
        "/api/v1/complaints",
        json={"complaint_type": "payment_issue", "description": "Charged twice."},
        headers=player_headers,
    )

    player_view = await client.get("/api/v1/complaints", headers=player_headers)
    assert [item["complaint_type"] for item in player_view.json()] == ["payment_issue"]
    hidden = await client.get(
        f"/api/v1/complaints/{owner_complaint.json()['id']}", headers=player_headers
    )
    assert hidden.status_code == 404

    admin_headers = await _headers(app_context, "admin")
    everything = await client.get("/api/v1/complaints", headers=admin_headers)
    assert len(everything.json()) == 2
    from_owners = await client.get(
        "/api/v1/complaints", params={"role": "owner"}, headers=admin_headers
    )
    assert [item["complaint_type"] for item in from_owners.json()] == [
        "property_damage"
    ]
    pending_damage = await client.get(
        "/api/v1/complaints",
        params={"status": "pending", "complaint_type": "property_damage"},
        headers=admin_headers,
    )
    assert len(pending_damage.json()) == 1


async def test_complaint_validation(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    player_headers = await _headers(app_context, "player")

    blank = await client.post(
        "/api/v1/complaints",
        json={"complaint_type": "other", "description": "   "},
        headers=player_headers,
    )
    assert blank.status_code == 422

    unknown_type = await client.post(
        "/api/v1/complaints",
        json={"complaint_type": "weather", "description": "Too hot."},
        headers=player_headers,
    )
    assert unknown_type.status_code == 422

    missing_venue = await client.post(
        "/api/v1/complaints",
        json={
            "complaint_type": "other",
            "description": "Lights were off.",
            "venue_id": "00000000-0000-0000-0000-000000000000",
        },
        headers=player_headers,
    )
    assert missing_venue.status_code == 404

    against_self = await client.post(
        "/api/v1/complaints",
        json={
            "complaint_type": "other",
            "description": "Testing.",
            "against_user_id": str(app_context["player_id"]),
        },
        headers=player_headers,
    )
    assert against_self.status_code == 400


async def test_only_admins_review_and_only_users_file(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    player_headers = await _headers(app_context, "player")
    created = await client.post(
        "/api/v1/complaints",
        json={"complaint_type": "behavior_issue", "description": "Rude staff."},
        headers=player_headers,
    )
    owner_headers = await _headers(app_context, "owner")
    forbidden = await client.patch(
        f"/api/v1/complaints/{created.json()['id']}/status",
        json={"status": "resolved"},
        headers=owner_headers,
    )
    assert forbidden.status_code == 403

    admin_headers = await _headers(app_context, "admin")
    admin_filing = await client.post(
        "/api/v1/complaints",
        json={"complaint_type": "other", "description": "Admins do not file."},
        headers=admin_headers,
    )
    assert admin_filing.status_code == 403
