"""Progress report submission, history and summary endpoints."""
import pytest

from partnersync.models.project import ProjectStatus
from partnersync.models.report import ReportType
from partnersync.models.user import UserRole
from partnersync.services import exchange_rate
from partnersync.services.report_service import USD_UNAVAILABLE_WARNING

RATE = 0.0033


@pytest.fixture
def fixed_rate(monkeypatch):
    async def _rate():
        return RATE

    monkeypatch.setattr(exchange_rate, "fetch_lkr_to_usd_rate", _rate)


@pytest.fixture
def rate_down(monkeypatch):
    async def _rate():
        raise exchange_rate.ExchangeRateUnavailable("timeout")

    monkeypatch.setattr(exchange_rate, "fetch_lkr_to_usd_rate", _rate)


@pytest.fixture
async def partner(make_user):
    return await make_user(UserRole.PARTNER)


def _financial(project, amount=10000, **extra):
    return {
        "project": project.id,
        "reportType": "financial",
        "amountLKR": amount,
        "description": "Pipes and pumps",
        **extra,
    }


class TestSubmit:
    async def test_financial_report_snapshots_rate(self, client, partner, auth_headers, make_project, fixed_rate):
        project = await make_project()
        res = await client.post("/api/reports/submit", json=_financial(project), headers=auth_headers(partner))
        assert res.status_code == 201
        body = res.json()
        assert body["success"] is True
        assert body["warning"] is None
        data = body["data"]
        assert data["project"] == project.id
        assert data["reportedBy"] == partner.id
        assert data["amountLKR"] == 10000
        assert data["amountUSD"] == 33.0
        assert data["exchangeRate"] == RATE

    async def test_rate_service_down_still_stores_report(
        self, client, partner, auth_headers, make_project, rate_down
    ):
        project = await make_project()
        res = await client.post("/api/reports/submit", json=_financial(project), headers=auth_headers(partner))
        assert res.status_code == 201
        body = res.json()
        assert body["warning"] == USD_UNAVAILABLE_WARNING
        assert body["data"]["amountUSD"] is None
        assert body["data"]["amountLKR"] == 10000

    async def test_people_helped_report(self, client, partner, auth_headers, make_project):
        project = await make_project()
        res = await client.post(
            "/api/reports/submit",
            json={
                "project": project.id,
                "reportType": "people_helped",
                "peopleImpacted": 40,
                "description": "Families reached",
            },
            headers=auth_headers(partner),
        )
        assert res.status_code == 201
        assert res.json()["data"]["peopleImpacted"] == 40
        assert res.json()["data"]["amountUSD"] is None

    async def test_requires_project(self, client, partner, auth_headers):
        res = await client.post(
            "/api/reports/submit",
            json={"reportType": "financial", "amountLKR": 10, "description": "x"},
            headers=auth_headers(partner),
        )
        assert res.status_code == 400
        assert res.json()["error"] == "Please select a project"

    @pytest.mark.parametrize(
        "payload, message",
        [
            ({"amountLKR": 10, "description": "x"}, "Please specify a report type"),
            ({"reportType": "financial", "amountLKR": 10, "description": "  "}, "Please provide a description"),
            ({"reportType": "financial", "amountLKR": 0, "description": "x"}, "Financial reports require a positive amount in LKR"),
            ({"reportType": "people_helped", "peopleImpacted": 2.5, "description": "x"}, "People helped reports require a positive whole number"),
            ({"reportType": "people_helped", "peopleImpacted": 0, "description": "x"}, "People helped reports require a positive whole number"),
        ],
    )
    async def test_rejects_incomplete_reports(
        self, client, partner, auth_headers, make_project, fixed_rate, payload, message
    ):
        project = await make_project()
        res = await client.post(
            "/api/reports/submit",
            json={"project": project.id, **payload},
            headers=auth_headers(partner),
        )
        assert res.status_code == 400
        assert res.json()["error"] == message

    async def test_project_must_be_in_progress(self, client, partner, auth_headers, make_project, fixed_rate):
        project = await make_project(status=ProjectStatus.COMPLETED)
        res = await client.post("/api/reports/submit", json=_financial(project), headers=auth_headers(partner))
        assert res.status_code == 400
        assert "In Progress" in res.json()["error"]

    async def test_unknown_project(self, client, partner, auth_headers, fixed_rate):
        res = await client.post(
            "/api/reports/submit",
            json={"project": "f" * 32, "reportType": "milestone", "description": "Phase 1"},
            headers=auth_headers(partner),
        )
        assert res.status_code == 404
        assert res.json()["error"] == "Project not found"

    async def test_public_user_cannot_submit(self, client, make_user, auth_headers, make_project):
        viewer = await make_user(UserRole.PUBLIC)
        project = await make_project()
        res = await client.post("/api/reports/submit", json=_financial(project), headers=auth_headers(viewer))
        assert res.status_code == 403


class TestHistoryAndSummary:
    async def test_project_reports(self, client, partner, make_project, make_report):
        project = await make_project()
        other = await make_project(title="Other")
        await make_report(project, partner, amount_lkr=100)
        await make_report(project, partner, ReportType.MILESTONE)
        await make_report(other, partner, amount_lkr=5)

        body = (await client.get(f"/api/reports/project/{project.id}")).json()
        assert body["count"] == 2
        assert {r["project"] for r in body["data"]} == {project.id}

    async def test_project_reports_malformed_id(self, client):
        res = await client.get("/api/reports/project/bad-id")
        assert res.status_code == 400

    async def test_summary(self, client, partner, make_project, make_report):
        first = await make_project()
        second = await make_project(title="Second")
        await make_report(first, partner, amount_lkr=1000)
        await make_report(second, partner, amount_lkr=500)
        await make_report(first, partner, ReportType.PEOPLE_HELPED, people_impacted=30)
        await make_report(first, partner, ReportType.PEOPLE_HELPED, people_impacted=12)

        data = (await client.get("/api/reports/stats/summary")).json()["data"]
        assert data["financial"]["totalLKR"] == 1500
        assert data["financial"]["reportCount"] == 2
        assert data["people"]["totalPeople"] == 42
        assert data["people"]["reportCount"] == 2
        assert data["projectsReported"] == 2
        assert data["totalReports"] == 4
        counts = {row["reportType"]: row["count"] for row in data["reportsByType"]}
        assert counts == {"financial": 2, "people_helped": 2}

    async def test_summary_empty(self, client):
        data = (await client.get("/api/reports/stats/summary")).json()["data"]
        assert data["financial"]["totalLKR"] == 0
        assert data["totalReports"] == 0
        assert data["reportsByType"] == []


class TestUpdateAndRemove:
    async def test_owner_updates_amount(self, client, partner, auth_headers, make_project, make_report, fixed_rate):
        project = await make_project()
        report = await make_report(project, partner, amount_lkr=1000)
        res = await client.put(
            f"/api/reports/update/{report.id}",
            json={"amountLKR": 20000},
            headers=auth_headers(partner),
        )
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["amountLKR"] == 20000
        assert data["amountUSD"] == 66.0

    async def test_update_keeps_snapshot_when_rate_down(
        self, client, partner, auth_headers, make_project, make_report, rate_down
    ):
        project = await make_project()
        report = await make_report(project, partner, amount_lkr=1000)
        res = await client.put(
            f"/api/reports/update/{report.id}",
            json={"amountLKR": 2000, "description": "Revised"},
            headers=auth_headers(partner),
        )
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["amountLKR"] == 2000
        assert data["amountUSD"] is None
        assert data["description"] == "Revised"

    async def test_other_partner_forbidden(self, client, partner, make_user, auth_headers, make_project, make_report):
        project = await make_project()
        report = await make_report(project, partner, amount_lkr=1000)
        stranger = await make_user(UserRole.PARTNER)

        res = await client.put(
            f"/api/reports/update/{report.id}",
            json={"description": "Hijacked"},
            headers=auth_headers(stranger),
        )
        assert res.status_code == 403
        assert res.json()["error"] == "Not authorized to update this report"

        res = await client.delete(f"/api/reports/remove/{report.id}", headers=auth_headers(stranger))
        assert res.status_code == 403
        assert res.json()["error"] == "Not authorized to delete this report"

    async def test_admin_removes_any_report(self, client, partner, make_user, auth_headers, make_project, make_report):
        project = await make_project()
        report = await make_report(project, partner, ReportType.MILESTONE)
        admin = await make_user(UserRole.ADMIN)

        res = await client.delete(f"/api/reports/remove/{report.id}", headers=auth_headers(admin))
        assert res.status_code == 200
        assert res.json()["data"] == {}
        body = (await client.get(f"/api/reports/project/{project.id}")).json()
        assert body["count"] == 0

    async def test_update_rejects_non_positive_amount(
        self, client, partner, auth_headers, make_project, make_report
    ):
        project = await make_project()
        report = await make_report(project, partner, amount_lkr=1000)
        res = await client.put(
            f"/api/reports/update/{report.id}",
            json={"amountLKR": -5},
            headers=auth_headers(partner),
        )
        assert res.status_code == 400

    async def test_update_unknown_report(self, client, partner, auth_headers):
        res = await client.put(
            f"/api/reports/update/{'a' * 32}",
            json={"description": "x"},
            headers=auth_headers(partner),
        )
        assert res.status_code == 404
