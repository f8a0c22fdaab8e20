"""SDG Goal 17 target registry and UN sync."""
import pytest

from partnersync.models.user import UserRole
from partnersync.services import sdg_service

TARGET = {
    "targetNumber": "17.9",
    "title": "Capacity-building",
    "description": "International support for effective capacity-building",
    "benchmark": "Two workshops a year",
}


@pytest.fixture
async def admin(make_user):
    return await make_user(UserRole.ADMIN)


@pytest.fixture
def un_down(monkeypatch):
    async def _fetch():
        raise sdg_service.UnApiUnavailable("connection refused")

    monkeypatch.setattr(sdg_service, "fetch_un_targets", _fetch)


class TestTargetCrud:
    async def test_create_and_fetch(self, client, admin, auth_headers):
        res = await client.post("/api/sdg/create", json=TARGET, headers=auth_headers(admin))
        assert res.status_code == 201
        data = res.json()["data"]
        assert data["targetNumber"] == "17.9"
        assert data["category"] == "Goal 17"
        assert data["isOfficialUN"] is False

        res = await client.get(f"/api/sdg/{data['id']}")
        assert res.status_code == 200
        assert res.json()["data"]["benchmark"] == "Two workshops a year"

    async def test_duplicate_target_number(self, client, admin, auth_headers):
        await client.post("/api/sdg/create", json=TARGET, headers=auth_headers(admin))
        res = await client.post("/api/sdg/create", json=TARGET, headers=auth_headers(admin))
        assert res.status_code == 400
        assert res.json()["error"] == "This target number already exists"

    async def test_partner_cannot_create(self, client, make_user, auth_headers):
        partner = await make_user(UserRole.PARTNER)
        res = await client.post("/api/sdg/create", json=TARGET, headers=auth_headers(partner))
        assert res.status_code == 403

    async def test_list_sorted_by_number(self, client, admin, auth_headers):
        for number in ("17.3", "17.1", "17.2"):
            await client.post(
                "/api/sdg/create",
                json={**TARGET, "targetNumber": number},
                headers=auth_headers(admin),
            )
        body = (await client.get("/api/sdg/all")).json()
        assert body["count"] == 3
        assert [t["targetNumber"] for t in body["data"]] == ["17.1", "17.2", "17.3"]

    async def test_update_and_delete(self, client, admin, auth_headers):
        target_id = (await client.post("/api/sdg/create", json=TARGET, headers=auth_headers(admin))).json()["data"]["id"]

        res = await client.put(
            f"/api/sdg/update/{target_id}",
            json={"benchmark": "Four workshops a year"},
            headers=auth_headers(admin),
        )
        assert res.status_code == 200
        assert res.json()["data"]["benchmark"] == "Four workshops a year"
        assert res.json()["data"]["title"] == "Capacity-building"

        res = await client.delete(f"/api/sdg/delete/{target_id}", headers=auth_headers(admin))
        assert res.status_code == 200
        assert (await client.get(f"/api/sdg/{target_id}")).status_code == 404

    async def test_malformed_id(self, client):
        res = await client.get("/api/sdg/17.1")
        assert res.status_code == 400
        assert res.json()["error"] == "Invalid SDG target ID"


class TestUnSync:
    async def test_fallback_inserts_samples_once(self, client, admin, auth_headers, un_down):
        res = await client.post("/api/sdg/sync-un", headers=auth_headers(admin))
        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "UN API unavailable. Created sample targets instead."
        assert body["stats"]["newTargets"] == 5

        res = await client.post("/api/sdg/sync-un", headers=auth_headers(admin))
        assert res.json()["stats"]["newTargets"] == 0

        numbers = [t["targetNumber"] for t in (await client.get("/api/sdg/all")).json()["data"]]
        assert numbers == ["17.1", "17.2", "17.3", "17.4", "17.5"]

    async def test_live_sync_upserts(self, client, admin, auth_headers, monkeypatch):
        await client.post(
            "/api/sdg/create",
            json={**TARGET, "targetNumber": "17.1"},
            headers=auth_headers(admin),
        )

        async def _fetch():
            return [
                {"code": "17.1", "title": "Strengthen domestic resource mobilization"},
                {"code": "17.2", "title": "Official development assistance", "description": "ODA commitments"},
                {"title": "No code, skipped"},
                "garbage",
            ]

        monkeypatch.setattr(sdg_service, "fetch_un_targets", _fetch)
        res = await client.post("/api/sdg/sync-un", headers=auth_headers(admin))
        body = res.json()
        assert body["message"] == "Successfully synced with UN Global Standards"
        stats = body["stats"]
        assert stats["newTargets"] == 1
        assert stats["updatedTargets"] == 1
        assert len(stats["failedTargets"]) == 1
        assert stats["totalProcessed"] == 3

        targets = {t["targetNumber"]: t for t in (await client.get("/api/sdg/all")).json()["data"]}
        assert targets["17.1"]["isOfficialUN"] is True
        assert targets["17.1"]["description"] == "Strengthen domestic resource mobilization"
        assert targets["17.2"]["description"] == "ODA commitments"
        assert targets["17.2"]["lastSynced"] is not None

    async def test_sync_requires_admin(self, client, make_user, auth_headers):
        partner = await make_user(UserRole.PARTNER)
        res = await client.post("/api/sdg/sync-un", headers=auth_headers(partner))
        assert res.status_code == 403
