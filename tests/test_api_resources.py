"""Tests for the category, nomination, settings, RSVP and admin endpoints."""
import pytest
from httpx import AsyncClient, ASGITransport

from awards.models import NominationStatus, UserRole

API_BASE_URL = "http://test/api"

REASON = (
    "Built the mobile clinic program from scratch, coordinating volunteers across three counties "
    "and bringing preventive care to patients who had none."
)


@pytest.fixture
async def client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as http_client:
        yield http_client


@pytest.fixture
async def admin(user_factory):
    return await user_factory(role=UserRole.ADMIN)


@pytest.fixture
async def member(user_factory):
    return await user_factory()


class TestCategories:
    @pytest.mark.asyncio
    async def test_admin_creates_and_public_lists(self, client, admin, auth_headers):
        created = await client.post(
            "/categories",
            json={"name": "Innovation Award", "description": "New ideas"},
            headers=auth_headers(admin),
        )
        assert created.status_code == 201
        category_id = created.json()["categoryId"]

        listed = await client.get("/categories")
        assert listed.status_code == 200
        assert [item["categoryId"] for item in listed.json()] == [category_id]

    @pytest.mark.asyncio
    async def test_public_cannot_create(self, client, member, auth_headers):
        response = await client.post("/categories", json={"name": "Sneaky"}, headers=auth_headers(member))
        assert response.status_code == 403
        assert response.json()["detail"] == "admin_access_required"

    @pytest.mark.asyncio
    async def test_duplicate_name_conflict(self, client, admin, auth_headers, category_factory):
        existing = await category_factory()
        response = await client.post("/categories", json={"name": existing.name}, headers=auth_headers(admin))
        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "CATEGORY_NAME_TAKEN"

    @pytest.mark.asyncio
    async def test_deactivate_hides_category(self, client, admin, auth_headers, category_factory):
        category = await category_factory()

        updated = await client.put(
            f"/categories/{category.category_id}", json={"active": False}, headers=auth_headers(admin)
        )
        missing = await client.put("/categories/999999", json={"active": False}, headers=auth_headers(admin))

        assert updated.status_code == 200
        assert updated.json()["active"] is False
        assert (await client.get("/categories")).json() == []
        assert missing.status_code == 404


class TestNominations:
    @pytest.mark.asyncio
    async def test_submit_and_review(self, client, admin, member, auth_headers, category_factory):
        category = await category_factory()

        submitted = await client.post(
            "/nominations",
            json={
                "categoryId": category.category_id,
                "nomineeName": "Dr. Ada Park",
                "nomineeEmail": "ada@example.com",
                "organization": "Mercy Clinic",
                "reason": REASON,
            },
            headers=auth_headers(member),
        )
        assert submitted.status_code == 201
        nomination = submitted.json()
        assert nomination["status"] == "PENDING"

        public_view = await client.get("/nominations", headers=auth_headers(member))
        assert public_view.json() == []

        reviewed = await client.patch(
            f"/nominations/{nomination['nominationId']}/review",
            json={"status": "APPROVED"},
            headers=auth_headers(admin),
        )
        assert reviewed.status_code == 200
        assert reviewed.json()["status"] == "APPROVED"
        assert reviewed.json()["reviewedById"] == admin.user_id

        again = await client.patch(
            f"/nominations/{nomination['nominationId']}/review",
            json={"status": "REJECTED"},
            headers=auth_headers(admin),
        )
        assert again.status_code == 409
        assert again.json()["detail"]["error"] == "NOMINATION_ALREADY_REVIEWED"

        public_view = await client.get("/nominations", headers=auth_headers(member))
        listed = public_view.json()
        assert [item["nomineeName"] for item in listed] == ["Dr. Ada Park"]
        assert listed[0]["nomineeEmail"] is None
        assert listed[0]["categoryName"] == category.name

    @pytest.mark.asyncio
    async def test_short_reason_rejected(self, client, member, auth_headers, category_factory):
        category = await category_factory()
        response = await client.post(
            "/nominations",
            json={
                "categoryId": category.category_id,
                "nomineeName": "Someone",
                "nomineeEmail": "someone@example.com",
                "reason": "Great person",
            },
            headers=auth_headers(member),
        )
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "REASON_TOO_SHORT"

    @pytest.mark.asyncio
    async def test_admin_filters_by_status(self, client, admin, auth_headers, category_factory, nomination_factory):
        category = await category_factory()
        await nomination_factory(category, status=NominationStatus.PENDING)
        await nomination_factory(category, status=NominationStatus.APPROVED)

        response = await client.get("/nominations", params={"status": "PENDING"}, headers=auth_headers(admin))

        assert [item["status"] for item in response.json()] == ["PENDING"]
        assert response.json()[0]["submittedByEmail"] is not None

    @pytest.mark.asyncio
    async def test_unverified_cannot_submit(self, client, user_factory, auth_headers, category_factory):
        unverified = await user_factory(verified=False)
        category = await category_factory()
        response = await client.post(
            "/nominations",
            json={
                "categoryId": category.category_id,
                "nomineeName": "Someone",
                "nomineeEmail": "someone@example.com",
                "reason": REASON,
            },
            headers=auth_headers(unverified),
        )
        assert response.status_code == 403


class TestSettings:
    @pytest.mark.asyncio
    async def test_public_read_and_admin_update(self, client, admin, member, auth_headers):
        initial = await client.get("/settings")
        assert initial.status_code == 200
        assert initial.json()["votingEnabled"] is True

        forbidden = await client.put("/settings", json={"votingEnabled": False}, headers=auth_headers(member))
        assert forbidden.status_code == 403

        updated = await client.put(
            "/settings",
            json={"votingEnabled": False, "votingEndAt": "2030-01-01T00:00:00Z"},
            headers=auth_headers(admin),
        )
        assert updated.status_code == 200
        assert updated.json()["votingEnabled"] is False
        assert updated.json()["votingEndAt"] == "2030-01-01T00:00:00Z"

        cleared = await client.put("/settings", json={"votingEndAt": None}, headers=auth_headers(admin))
        assert cleared.json()["votingEndAt"] is None
        assert cleared.json()["votingEnabled"] is False

    @pytest.mark.asyncio
    async def test_invalid_window_rejected(self, client, admin, auth_headers):
        response = await client.put(
            "/settings",
            json={"votingStartAt": "2030-01-02T00:00:00Z", "votingEndAt": "2030-01-01T00:00:00Z"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_VOTING_WINDOW"

    @pytest.mark.asyncio
    async def test_admin_sets_voting_window(self, client, admin, auth_headers):
        response = await client.put(
            "/settings",
            json={"votingStartAt": "2030-01-01T09:00:00Z", "votingEndAt": "2030-01-31T17:00:00+00:00"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["votingStartAt"] == "2030-01-01T09:00:00Z"
        assert response.json()["votingEndAt"] == "2030-01-31T17:00:00Z"

        public = await client.get("/settings")
        assert public.json()["votingStartAt"] == "2030-01-01T09:00:00Z"


class TestRSVP:
    @pytest.mark.asyncio
    async def test_submit_and_read_rsvp(self, client, member, admin, auth_headers):
        empty = await client.get("/rsvp/me", headers=auth_headers(member))
        assert empty.json() == {"rsvp": None}

        first = await client.post("/rsvp", json={"attending": True, "guestCount": 2}, headers=auth_headers(member))
        second = await client.post("/rsvp", json={"attending": True, "guestCount": 3}, headers=auth_headers(member))
        assert first.status_code == 200
        assert second.json()["rsvpId"] == first.json()["rsvpId"]
        assert second.json()["guestCount"] == 3

        mine = await client.get("/rsvp/me", headers=auth_headers(member))
        assert mine.json()["rsvp"]["guestCount"] == 3

        stats = await client.get("/rsvp/stats", headers=auth_headers(admin))
        assert stats.json() == {"totalRsvps": 1, "attending": 1, "notAttending": 0, "totalGuests": 3}

    @pytest.mark.asyncio
    async def test_guest_count_out_of_range(self, client, member, auth_headers):
        response = await client.post("/rsvp", json={"attending": True, "guestCount": 11}, headers=auth_headers(member))
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_GUEST_COUNT"


class TestAdminDashboard:
    @pytest.mark.asyncio
    async def test_dashboard_stats(self, client, admin, member, auth_headers, category_factory, nomination_factory):
        category = await category_factory()
        await nomination_factory(category, status=NominationStatus.PENDING, submitter=member)

        response = await client.get("/admin/dashboard-stats", headers=auth_headers(admin))
        forbidden = await client.get("/admin/dashboard-stats", headers=auth_headers(member))

        assert response.status_code == 200
        assert response.json() == {
            "totalNominations": 1,
            "pendingNominations": 1,
            "approvedNominations": 0,
            "totalVotes": 0,
            "totalCategories": 1,
            "totalUsers": 1,
        }
        assert forbidden.status_code == 403

    @pytest.mark.asyncio
    async def test_audit_log_lists_recent_actions(self, client, admin, member, auth_headers):
        await client.put("/settings", json={"votingEnabled": False}, headers=auth_headers(admin))
        await client.post("/rsvp", json={"attending": True, "guestCount": 1}, headers=auth_headers(member))

        everything = await client.get("/admin/audit-log", headers=auth_headers(admin))
        mine = await client.get(f"/admin/audit-log?userId={member.user_id}", headers=auth_headers(admin))
        forbidden = await client.get("/admin/audit-log", headers=auth_headers(member))

        assert everything.status_code == 200
        assert [entry["action"] for entry in everything.json()["entries"]] == ["RSVP_SUBMITTED", "SETTINGS_UPDATED"]
        assert everything.json()["entries"][0]["createdAt"].endswith("Z")
        assert [entry["userId"] for entry in mine.json()["entries"]] == [member.user_id]
        assert forbidden.status_code == 403
