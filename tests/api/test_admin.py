"""Tests for admin endpoints: participants, certificates, ambassadors, forms."""

import io

from httpx import AsyncClient
from openpyxl import Workbook
from PIL import Image

from tests.conftest import USER_UID


def _xlsx(rows: list[list]) -> bytes:
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _png(width: int, height: int) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(0, 120, 200)).save(buf, format="PNG")
    return buf.getvalue()


async def test_admin_login_requires_admin_namespace(client: AsyncClient, identity, store) -> None:
    uid = identity.add_account("boss@example.com", "secret123")
    await store.set(f"admin/{uid}", {"id": uid, "email": "boss@example.com"})

    response = await client.post(
        "/api/v1/admin/login", json={"email": "boss@example.com", "password": "secret123"}
    )
    token = response.json()["token"]
    users = await client.get("/api/v1/admin/users", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert USER_UID in users.json()["users"]


async def test_admin_edits_team_and_marks_attendance(client: AsyncClient, store, admin_headers) -> None:
    await store.update(f"users/{USER_UID}", {"team": {"teamName": "Rockets", "members": [{"name": "A"}]}})

    updated = await client.put(
        f"/api/v1/admin/users/{USER_UID}/team",
        json={"mentor": {"name": "New Mentor"}, "members": [{"name": "B", "authCode": "TM9"}]},
        headers=admin_headers,
    )
    attendance = await client.post(f"/api/v1/admin/users/{USER_UID}/attendance", headers=admin_headers)
    user = (await client.get(f"/api/v1/admin/users/{USER_UID}", headers=admin_headers)).json()["user"]

    assert updated.status_code == 200
    assert attendance.status_code == 200
    assert user["team"]["teamName"] == "Rockets"
    assert user["team"]["mentor"] == {"name": "New Mentor"}
    assert user["attendance"] is True


async def test_event_certificate_issue_verify_delete(client: AsyncClient, admin_headers) -> None:
    payload = {
        "authCode": "EV100",
        "type": "event",
        "campusAmbassador": "Ravi",
        "date": "2024-02-01",
        "school": "Central School",
        "academicYear": "2023-24",
    }

    created = await client.post("/api/v1/admin/certificates", json=payload, headers=admin_headers)
    duplicate = await client.post("/api/v1/admin/certificates", json=payload, headers=admin_headers)
    verified = await client.post("/api/v1/certificates/verify", json={"authCode": "EV100"})
    deleted = await client.delete(
        f"/api/v1/admin/certificates/{created.json()['id']}", headers=admin_headers
    )
    gone = await client.post("/api/v1/certificates/verify", json={"authCode": "EV100"})

    assert created.status_code == 201
    assert duplicate.status_code == 409
    assert verified.json()["certificate"]["school"] == "Central School"
    assert deleted.status_code == 200
    assert gone.status_code == 404


async def test_spreadsheet_upload_and_lookup(client: AsyncClient, admin_headers) -> None:
    sheet = _xlsx(
        [
            ["name", "authCode", "year"],
            ["Asha", "WS1", 2024],
            ["Ben", "", 2024],
            ["Cara", "WS3", 2024],
        ]
    )

    uploaded = await client.post(
        "/api/v1/admin/certificates/upload",
        files={"file": ("certs.xlsx", sheet, "application/octet-stream")},
        headers=admin_headers,
    )
    lookup = await client.post(
        "/api/v1/admin/certificates/lookup",
        files={"file": ("codes.xlsx", _xlsx([["authCode"], ["WS3"], ["NOPE"]]), "application/octet-stream")},
        headers=admin_headers,
    )
    bad_file = await client.post(
        "/api/v1/admin/certificates/upload",
        files={"file": ("certs.csv", b"name,authCode\n", "text/csv")},
        headers=admin_headers,
    )

    body = uploaded.json()
    assert (body["issued"], body["skipped"], body["failed"]) == (2, 1, 0)
    assert [c["name"] for c in lookup.json()["certificates"]] == ["Cara"]
    assert bad_file.status_code == 400


async def test_session_certificates(client: AsyncClient, store, admin_headers) -> None:
    await store.set("certificationForms", {"p1": {"name": "Asha"}, "p2": {"name": "Ben"}})

    single = await client.post("/api/v1/admin/session-certificates/p1", headers=admin_headers)
    again = await client.post("/api/v1/admin/session-certificates/p1", headers=admin_headers)
    bulk = await client.post("/api/v1/admin/session-certificates", headers=admin_headers)
    participants = await client.get("/api/v1/admin/session-certificates", headers=admin_headers)

    assert single.status_code == 201
    assert single.json()["type"] == "sec"
    assert again.status_code == 409
    assert (bulk.json()["issued"], bulk.json()["skipped"]) == (1, 1)
    assert set(participants.json()["participants"]) == {"p1", "p2"}


async def test_campus_ambassador_lifecycle(client: AsyncClient, storage, admin_headers) -> None:
    created = await client.post(
        "/api/v1/admin/campus-ambassadors/domestic",
        data={"name": "Ravi", "linkedInLink": "https://linkedin.test/ravi", "place": "Pune"},
        files={"image": ("ravi.png", _png(1200, 600), "image/png")},
        headers=admin_headers,
    )
    assert created.status_code == 201
    ambassador = created.json()
    object_path = storage.object_path_from_url(ambassador["imageUrl"])
    data, content_type = storage.objects[object_path]
    assert content_type == "image/webp"
    assert Image.open(io.BytesIO(data)).size == (800, 400)

    updated = await client.put(
        f"/api/v1/admin/campus-ambassadors/domestic/{ambassador['id']}",
        json={"place": "Mumbai"},
        headers=admin_headers,
    )
    listed = await client.get("/api/v1/admin/campus-ambassadors/domestic", headers=admin_headers)
    deleted = await client.delete(
        f"/api/v1/admin/campus-ambassadors/domestic/{ambassador['id']}", headers=admin_headers
    )

    assert updated.status_code == 200
    assert listed.json()["ambassadors"][ambassador["id"]]["place"] == "Mumbai"
    assert deleted.status_code == 200
    assert object_path not in storage.objects


async def test_admin_olympiad_entries_and_phone_numbers(client: AsyncClient, store, admin_headers) -> None:
    await store.set("gio-event/u9", {"name": "Z", "isRegistered": True})
    await store.set("sessionForms", {"f1": {"name": "A", "number": "12345"}})

    entries = await client.get("/api/v1/admin/olympiad/entries", headers=admin_headers)
    numbers = await client.get("/api/v1/admin/session-forms/phone-numbers", headers=admin_headers)

    assert "u9" in entries.json()["entries"]
    assert numbers.json() == {"phoneNumbers": ["12345"]}
