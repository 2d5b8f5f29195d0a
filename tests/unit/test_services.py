"""Tests for form, judging, ambassador, team, auth and certificate services."""

import pytest

from app.application.services import (
    AmbassadorService,
    AuthService,
    CertificateService,
    FormService,
    JudgingService,
    TeamService,
)
from app.application.services.form_service import unwrap_form
from app.application.services.judging_service import rubric_totals
from app.domain.enums import IssueStatus
from app.domain.exceptions import (
    AuthenticationException,
    BlobStorageException,
    CertificateAlreadyIssuedException,
    DocumentStoreException,
    DuplicateAuthCodeException,
    EmailAlreadyInUseException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import (
    FAKE_NOW_MS,
    FakeBlobStorage,
    FakeIdentityProvider,
    InMemoryDocumentStore,
)


# ---- Forms ----


def test_unwrap_form_accepts_bare_object_and_envelope() -> None:
    assert unwrap_form({"a": 1}) == {"a": 1}
    assert unwrap_form({"formData": {"a": 1}}) == {"a": 1}


@pytest.mark.parametrize("payload", [None, {}, {"formData": {}}, {"formData": "x"}])
def test_unwrap_form_rejects_empty(payload) -> None:
    with pytest.raises(ValidationException):
        unwrap_form(payload)


async def test_form_submit_stamps_server_time_and_lists_with_ids() -> None:
    store = InMemoryDocumentStore()
    forms = FormService(store)

    form_id = await forms.submit("sessionForms", {"formData": {"name": "A", "number": "99"}})

    assert await forms.list("sessionForms") == [
        {"id": form_id, "name": "A", "number": "99", "timestamp": FAKE_NOW_MS}
    ]
    assert await forms.session_phone_numbers() == ["99"]


async def test_form_list_empty_is_not_found() -> None:
    with pytest.raises(ResourceNotFoundException):
        await FormService(InMemoryDocumentStore()).list("internshipForms")


async def test_form_status_update_writes_only_given_flags() -> None:
    store = InMemoryDocumentStore({"forms": {"f1": {"name": "A", "viewed": False}}})
    forms = FormService(store)

    await forms.update_status("f1", is_selected=True, viewed=None)

    assert await store.get("forms/f1") == {"name": "A", "viewed": False, "isSelected": True}
    with pytest.raises(ValidationException):
        await forms.update_status("f1", None, None)
    with pytest.raises(ResourceNotFoundException):
        await forms.update_status("missing", True, None)


async def test_ambassador_application_requires_every_field() -> None:
    forms = FormService(InMemoryDocumentStore())
    with pytest.raises(ValidationException):
        await forms.submit_ambassador_application({"name": "A", "email": "a@b.c"})


# ---- Judging ----


def test_rubric_totals_ignore_non_numeric_values() -> None:
    totals = rubric_totals(
        {
            "innovation": {"idea": 5, "novelty": "3"},
            "technical": {"build": "n/a", "flag": True},
            "presentation": {"talk": 2.5},
            "other": {"x": 100},
        }
    )
    assert totals["sectionTotals"]["innovation"] == 8
    assert totals["sectionTotals"]["technical"] == 0
    assert totals["sectionTotals"]["challenge"] == 0
    assert totals["overallTotal"] == 10.5


async def test_judging_stores_marks_with_totals() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"id": "u1"}}})
    judging = JudgingService(store)

    totals = await judging.record_marks("u1", {"innovation": {"idea": 4}, "Total marks": "spoofed"})

    marks = await judging.get_marks("u1")
    assert marks["Total marks"] == totals
    assert totals["overallTotal"] == 4


async def test_judging_rejects_unsafe_or_unknown_uid() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"id": "u1"}}})
    judging = JudgingService(store)

    with pytest.raises(ValidationException):
        await judging.record_marks("u1/marks", {"innovation": {"idea": 4}})
    with pytest.raises(ResourceNotFoundException):
        await judging.record_marks("u2", {"innovation": {"idea": 4}})
    assert await store.get("users/u2") is None
    assert await store.get("users/u1/marks") is None


# ---- Campus ambassadors ----


async def _optimize(data: bytes) -> bytes:
    return b"webp:" + data


async def test_ambassador_add_uploads_photo_and_delete_removes_it() -> None:
    store, storage = InMemoryDocumentStore(), FakeBlobStorage()
    service = AmbassadorService(store, storage, _optimize)

    record = await service.add(
        "domestic", {"name": "A", "linkedInLink": "https://li/a", "place": "Pune"}, b"img", "me.png"
    )

    object_path = storage.object_path_from_url(record["imageUrl"])
    assert object_path.startswith("campus_ambassadors_web/")
    assert object_path.endswith("_me.webp")
    assert storage.objects[object_path] == (b"webp:img", "image/webp")

    await service.delete("domestic", record["id"])
    assert object_path not in storage.objects
    with pytest.raises(ResourceNotFoundException):
        await service.list("domestic")


async def test_ambassador_store_failure_removes_uploaded_photo() -> None:
    class FailingStore(InMemoryDocumentStore):
        async def set(self, path, value):
            raise DocumentStoreException("write failed")

    storage = FakeBlobStorage()
    service = AmbassadorService(FailingStore(), storage, _optimize)

    with pytest.raises(DocumentStoreException):
        await service.add("international", {"name": "A", "linkedInLink": "l", "place": "p"}, b"img")
    assert storage.objects == {}


async def test_ambassador_unknown_kind_and_empty_update_are_rejected() -> None:
    service = AmbassadorService(InMemoryDocumentStore(), FakeBlobStorage(), _optimize)
    with pytest.raises(ValidationException):
        await service.list("martian")
    with pytest.raises(ValidationException):
        await service.update("domestic", "a1", {})


async def test_ambassador_add_without_storage_fails() -> None:
    service = AmbassadorService(InMemoryDocumentStore(), None, _optimize)
    with pytest.raises(BlobStorageException):
        await service.add("domestic", {"name": "A", "linkedInLink": "l", "place": "p"}, b"img")


# ---- Team ----


async def test_register_team_sets_pending_without_touching_payments() -> None:
    store = InMemoryDocumentStore(
        {"users": {"u1": {"id": "u1", "payments": {"o1": {"isPaid": False}}}}}
    )
    teams = TeamService(store)

    await teams.register_team(
        "u1",
        {"teamName": "Rockets", "topic": "AI", "mentorName": "M", "amountDue": 500},
        [{"name": "Asha", "authCode": "TM1"}],
    )

    user = await store.get("users/u1")
    assert user["paymentStatus"] == "pending"
    assert user["amountDue"] == 500
    assert user["team"]["mentor"]["name"] == "M"
    assert user["payments"] == {"o1": {"isPaid": False}}
    assert "teamRegistered" not in user
    assert await teams.team_name_exists("  rockets ") is True
    assert await teams.team_name_exists("Comets") is False


async def test_member_image_replaces_previous_blob() -> None:
    store, storage = InMemoryDocumentStore(), FakeBlobStorage()
    old_url = await storage.upload("profile_images/u1/old.png", b"old", "image/png")
    await store.set(
        "users/u1",
        {"id": "u1", "team": {"members": [{"name": "Asha", "profileImageUrl": old_url}]}},
    )
    teams = TeamService(store, storage)

    url = await teams.upload_member_image("u1", "Asha", b"new", "image/png", "new.png")

    assert (await store.get("users/u1/team/members"))[0]["profileImageUrl"] == url
    assert "profile_images/u1/old.png" in storage.deleted
    assert storage.object_path_from_url(url).endswith(".png")
    with pytest.raises(ResourceNotFoundException):
        await teams.upload_member_image("u1", "Nobody", b"x", "image/png")


async def test_reregistering_after_payment_keeps_fee_state() -> None:
    store = InMemoryDocumentStore(
        {
            "users": {
                "u1": {
                    "id": "u1",
                    "paymentStatus": "completed",
                    "teamRegistered": True,
                    "amountDue": 0,
                    "payments": {"o1": {"isPaid": True, "status": "paid"}},
                }
            }
        }
    )
    teams = TeamService(store)

    await teams.register_team(
        "u1",
        {"teamName": "Comets", "topic": "AI", "amountDue": 500},
        [{"name": "Asha", "authCode": "TM1"}],
    )

    user = await store.get("users/u1")
    assert user["team"]["teamName"] == "Comets"
    assert user["paymentStatus"] == "completed"
    assert user["amountDue"] == 0
    assert user["teamRegistered"] is True


async def test_member_image_targets_stored_slot_when_members_have_gaps() -> None:
    store, storage = InMemoryDocumentStore(), FakeBlobStorage()
    await store.set(
        "users/u1",
        {"id": "u1", "team": {"members": [{"name": "Asha"}, None, {"name": "Cy"}]}},
    )
    teams = TeamService(store, storage)

    url = await teams.upload_member_image("u1", "Cy", b"img", "image/png", "cy.png")

    members = await store.get("users/u1/team/members")
    assert set(members) == {"0", "2"}
    assert members["2"] == {"name": "Cy", "profileImageUrl": url}
    assert members["0"] == {"name": "Asha"}


# ---- Auth ----


async def test_register_mirrors_account_and_sends_verification() -> None:
    identity, store = FakeIdentityProvider(), InMemoryDocumentStore()
    auth = AuthService(identity, store)

    session = await auth.register("a@b.c", "secret123")

    assert await store.get(f"users/{session.uid}") == {"id": session.uid, "email": "a@b.c"}
    assert identity.verification_sent == ["a@b.c"]
    with pytest.raises(EmailAlreadyInUseException):
        await auth.register("a@b.c", "secret123")


async def test_login_and_credential_validation() -> None:
    identity = FakeIdentityProvider()
    identity.add_account("a@b.c", "secret123", verified=True)
    auth = AuthService(identity, InMemoryDocumentStore())

    assert await auth.check_verification("a@b.c", "secret123") is True
    with pytest.raises(AuthenticationException):
        await auth.login("a@b.c", "wrong")
    with pytest.raises(ValidationException):
        await auth.login("", "secret123")


async def test_resend_verification_modes() -> None:
    identity = FakeIdentityProvider()
    uid = identity.add_account("a@b.c", "secret123")
    identity.add_account("v@b.c", "secret123", verified=True)
    store = InMemoryDocumentStore({"users": {uid: {"id": uid, "email": "a@b.c"}}})
    auth = AuthService(identity, store)

    await auth.resend_verification("a@b.c", "secret123")
    await auth.resend_verification("A@B.C")
    assert identity.verification_sent == ["a@b.c", "A@B.C"]

    with pytest.raises(ValidationException):
        await auth.resend_verification("v@b.c", "secret123")
    with pytest.raises(ResourceNotFoundException):
        await auth.resend_verification("nobody@b.c")


# ---- Certificates ----


async def test_issue_rejects_duplicate_auth_code() -> None:
    store = InMemoryDocumentStore({"certificates": {"c1": {"authCode": "EV1"}}})
    certificates = CertificateService(store)
    data = {
        "authCode": "EV1",
        "type": "event",
        "campusAmbassador": "X",
        "date": "2024-01-01",
        "school": "S",
        "academicYear": "2024",
    }

    with pytest.raises(DuplicateAuthCodeException):
        await certificates.issue_event_certificate(data)
    with pytest.raises(ValidationException):
        await certificates.issue_event_certificate({**data, "authCode": "EV2", "school": ""})

    certificate_id = await certificates.issue_event_certificate({**data, "authCode": "EV2"})
    assert (await certificates.verify("EV2"))["id"] == certificate_id


async def test_import_rows_skips_blank_and_known_codes() -> None:
    store = InMemoryDocumentStore({"certificates": {"c1": {"authCode": "A1", "name": "Old"}}})
    certificates = CertificateService(store)

    result = await certificates.import_rows(
        [
            {"name": "Asha", "authCode": "A1"},
            {"name": "", "authCode": "A2"},
            {"name": "Ben", "authCode": "A3"},
            {"name": "Ben again", "authCode": "A3"},
        ]
    )

    assert [item.status for item in result.items] == [
        IssueStatus.SKIPPED,
        IssueStatus.SKIPPED,
        IssueStatus.ISSUED,
        IssueStatus.SKIPPED,
    ]
    assert (await certificates.verify("A3"))["name"] == "Ben"
    matches = await certificates.lookup_rows([{"authCode": "A3"}, {"authCode": "zzz"}, {}])
    assert [m["name"] for m in matches] == ["Ben"]


async def test_import_rows_marks_all_failed_when_write_fails() -> None:
    store = InMemoryDocumentStore()
    store.fail_updates = True
    result = await CertificateService(store).import_rows([{"name": "A", "authCode": "X1"}])
    assert result.failed == 1
    assert result.items[0].certificate_id is None


async def test_session_certificate_is_issued_once_per_participant() -> None:
    store = InMemoryDocumentStore(
        {
            "certificationForms": {
                "p1": {"name": "Asha", "whatsapp": "99"},
                "p2": {"name": "Ben"},
                "p3": {"whatsapp": "11"},
            }
        }
    )
    certificates = CertificateService(store)

    issued = await certificates.issue_session_certificate("p1")
    assert issued["name"] == "Asha"
    assert issued["type"] == "sec"
    assert issued["authCode"].startswith("SEC") and len(issued["authCode"]) == 11
    with pytest.raises(CertificateAlreadyIssuedException):
        await certificates.issue_session_certificate("p1")
    with pytest.raises(ResourceNotFoundException):
        await certificates.issue_session_certificate("p9")

    result = await certificates.issue_all_session_certificates()
    assert (result.issued, result.skipped) == (1, 2)
    assert (await store.get("certificates/p1"))["authCode"] == issued["authCode"]
