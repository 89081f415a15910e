"""
Resource Management Service — API Tests
========================================
Run:  pytest test_main.py -v
Every test runs against a fresh in-memory SQLite schema (see conftest.py).
"""
import json
import logging
import uuid
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.logging import JSONFormatter, request_id_var
from main import app

client = TestClient(app)

TODAY = date.today()
LAST_MONTH = (TODAY - timedelta(days=30)).isoformat()
YESTERDAY = (TODAY - timedelta(days=1)).isoformat()
NEXT_WEEK = (TODAY + timedelta(days=7)).isoformat()


# ── Helpers ──────────────────────────────────────────────────────────────
def _team(name="Platform"):
    r = client.post("/api/v1/teams", json={"name": name, "description": "Core infra"})
    assert r.status_code == 201, r.text
    return r.json()


def _member(name="Alice Martin", email=None, weekly_hours=40, team_id=None, **extra):
    payload = {
        "name": name,
        "role": "Engineer",
        "email": email or f"{uuid.uuid4().hex[:8]}@company.com",
        "weekly_hours": weekly_hours,
        "skills": ["python", "sql"],
        "team_id": team_id,
        **extra,
    }
    r = client.post("/api/v1/team-members", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def _work_item(item_type="project", status="planning", title="ERP rollout", **extra):
    payload = {"title": title, "type": item_type, "status": status, **extra}
    r = client.post("/api/v1/work-items", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def _allocate(member_id, item_id, hours, start=LAST_MONTH, end=None):
    payload = {
        "team_member_id": member_id, "work_item_id": item_id,
        "hours_per_week": hours, "start_date": start, "end_date": end,
    }
    r = client.post("/api/v1/allocations", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


# ═══════════════════════════════════════════════════════════════════════════
# HEALTH & METRICS
# ═══════════════════════════════════════════════════════════════════════════
class TestHealth:
    def test_health_ok(self):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["service"] == "resource-management"

    def test_readiness_ok(self):
        r = client.get("/health/ready")
        assert r.status_code == 200
        assert r.json()["database"] == "connected"

    def test_metrics_endpoint(self):
        client.get("/api/v1/teams")
        r = client.get("/metrics")
        assert r.status_code == 200
        assert "resource_requests_total" in r.text

    def test_request_id_propagated(self):
        r = client.get("/health", headers={"X-Request-ID": "my-req-42"})
        assert r.headers["X-Request-ID"] == "my-req-42"

    def test_request_id_generated(self):
        assert client.get("/health").headers.get("X-Request-ID")


# ═══════════════════════════════════════════════════════════════════════════
# TEAMS
# ═══════════════════════════════════════════════════════════════════════════
class TestTeams:
    def test_create_and_get(self):
        team = _team()
        r = client.get(f"/api/v1/teams/{team['id']}")
        assert r.status_code == 200
        assert r.json()["name"] == "Platform"
        assert r.json()["member_count"] == 0

    def test_list_counts_active_members(self):
        team = _team()
        _member(team_id=team["id"])
        gone = _member(team_id=team["id"])
        client.delete(f"/api/v1/team-members/{gone['id']}")
        teams = client.get("/api/v1/teams").json()
        assert teams[0]["member_count"] == 1

    def test_update(self):
        team = _team()
        r = client.patch(f"/api/v1/teams/{team['id']}", json={"name": "Platform Eng"})
        assert r.status_code == 200
        assert r.json()["name"] == "Platform Eng"
        assert r.json()["description"] == "Core infra"

    def test_update_not_found(self):
        r = client.patch(f"/api/v1/teams/{uuid.uuid4()}", json={"name": "X"})
        assert r.status_code == 404

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name):
        assert client.post("/api/v1/teams", json={"name": name}).status_code == 422

    def test_name_trimmed(self):
        team = _team("  Data  ")
        assert team["name"] == "Data"
        r = client.patch(f"/api/v1/teams/{team['id']}", json={"name": " Analytics "})
        assert r.json()["name"] == "Analytics"

    def test_update_blank_name_rejected(self):
        team = _team()
        r = client.patch(f"/api/v1/teams/{team['id']}", json={"name": "  "})
        assert r.status_code == 422
        assert client.get(f"/api/v1/teams/{team['id']}").json()["name"] == "Platform"

    def test_invalid_uuid(self):
        assert client.get("/api/v1/teams/not-a-uuid").status_code == 400

    def test_delete_detaches_members_and_keeps_allocations(self):
        team = _team()
        item = _work_item()
        members = [_member(name=f"M{i}", team_id=team["id"]) for i in range(3)]
        for m in members:
            _allocate(m["id"], item["id"], 10)

        r = client.delete(f"/api/v1/teams/{team['id']}")
        assert r.status_code == 200
        assert r.json()["members_detached"] == 3

        for m in members:
            d = client.get(f"/api/v1/team-members/{m['id']}").json()
            assert d["team_id"] is None
            assert d["is_active"] is True
            assert d["allocated_hours"] == 10
        assert len(client.get("/api/v1/allocations").json()) == 3
        assert client.get(f"/api/v1/teams/{team['id']}").status_code == 404

    def test_delete_not_found(self):
        assert client.delete(f"/api/v1/teams/{uuid.uuid4()}").status_code == 404


# ═══════════════════════════════════════════════════════════════════════════
# TEAM MEMBERS
# ═══════════════════════════════════════════════════════════════════════════
class TestTeamMembers:
    def test_create_returns_stats(self):
        team = _team()
        m = _member(team_id=team["id"])
        assert m["team_name"] == "Platform"
        assert m["skills"] == ["python", "sql"]
        assert m["allocated_hours"] == 0
        assert m["available_hours"] == 40
        assert m["capacity_percentage"] == 0
        assert m["capacity_status"] == "light-load"
        assert m["capacity_label"] == "Light Load"

    def test_duplicate_email_conflict(self):
        _member(email="dup@company.com")
        r = client.post("/api/v1/team-members", json={
            "name": "Other", "role": "Analyst", "email": "dup@company.com",
        })
        assert r.status_code == 409
        assert r.json()["error"] == "constraint_violation"

    def test_unknown_team_conflict(self):
        r = client.post("/api/v1/team-members", json={
            "name": "X", "role": "Dev", "email": "x@company.com", "team_id": str(uuid.uuid4()),
        })
        assert r.status_code == 409

    @pytest.mark.parametrize("hours", [0, -5])
    def test_weekly_hours_must_be_positive(self, hours):
        r = client.post("/api/v1/team-members", json={
            "name": "X", "role": "Dev", "email": "x@company.com", "weekly_hours": hours,
        })
        assert r.status_code == 422

    def test_update(self):
        m = _member()
        r = client.patch(f"/api/v1/team-members/{m['id']}", json={"weekly_hours": 32})
        assert r.status_code == 200
        assert r.json()["weekly_hours"] == 32

    def test_update_null_name_rejected(self):
        m = _member()
        r = client.patch(f"/api/v1/team-members/{m['id']}", json={"name": None})
        assert r.status_code == 422

    def test_get_not_found(self):
        assert client.get(f"/api/v1/team-members/{uuid.uuid4()}").status_code == 404

    def test_soft_delete_is_idempotent(self):
        m = _member()
        for _ in range(2):
            r = client.delete(f"/api/v1/team-members/{m['id']}")
            assert r.status_code == 200
            assert r.json()["is_active"] is False
        assert client.get(f"/api/v1/team-members/{m['id']}").json()["is_active"] is False

    def test_soft_deleted_member_hidden_from_roster_but_keeps_capacity(self):
        item = _work_item()
        m = _member()
        _allocate(m["id"], item["id"], 20)
        client.delete(f"/api/v1/team-members/{m['id']}")

        assert client.get("/api/v1/team-members").json() == []
        everyone = client.get("/api/v1/team-members", params={"include_inactive": True}).json()
        assert len(everyone) == 1
        d = client.get(f"/api/v1/team-members/{m['id']}").json()
        assert d["allocated_hours"] == 20
        assert d["capacity_percentage"] == 50
        assert len(client.get("/api/v1/allocations", params={"team_member_id": m["id"]}).json()) == 1

    def test_list_filter_by_team(self):
        a, b = _team("A"), _team("B")
        _member(team_id=a["id"])
        _member(team_id=b["id"])
        r = client.get("/api/v1/team-members", params={"team_id": a["id"]})
        assert [m["team_name"] for m in r.json()] == ["A"]


# ═══════════════════════════════════════════════════════════════════════════
# CAPACITY (derived on read)
# ═══════════════════════════════════════════════════════════════════════════
class TestCapacity:
    def test_over_allocation(self):
        m = _member(weekly_hours=40)
        _allocate(m["id"], _work_item(title="A")["id"], 25)
        _allocate(m["id"], _work_item(title="B")["id"], 20)
        d = client.get(f"/api/v1/team-members/{m['id']}").json()
        assert d["allocated_hours"] == 45
        assert d["available_hours"] == -5
        assert d["capacity_percentage"] == 113
        assert d["capacity_status"] == "over-capacity"
        assert d["capacity_label"] == "At/Over Capacity"

    def test_date_window(self):
        m = _member(weekly_hours=40)
        item = _work_item()
        _allocate(m["id"], item["id"], 8, start=NEXT_WEEK)
        _allocate(m["id"], item["id"], 8, start=LAST_MONTH, end=YESTERDAY)
        _allocate(m["id"], item["id"], 10, start=LAST_MONTH)
        d = client.get(f"/api/v1/team-members/{m['id']}").json()
        assert d["allocated_hours"] == 10
        assert d["capacity_percentage"] == 25

    def test_recomputed_after_allocation_edit(self):
        m = _member(weekly_hours=40)
        a = _allocate(m["id"], _work_item()["id"], 10)
        client.patch(f"/api/v1/allocations/{a['id']}", json={"hours_per_week": 30})
        assert client.get(f"/api/v1/team-members/{m['id']}").json()["capacity_percentage"] == 75
        client.delete(f"/api/v1/allocations/{a['id']}")
        assert client.get(f"/api/v1/team-members/{m['id']}").json()["capacity_percentage"] == 0

    def test_out_of_office_does_not_reduce_capacity(self):
        m = _member(weekly_hours=40)
        _allocate(m["id"], _work_item()["id"], 20)
        r = client.post("/api/v1/out-of-office", json={
            "team_member_id": m["id"], "start_date": YESTERDAY, "end_date": NEXT_WEEK,
        })
        assert r.status_code == 201
        d = client.get(f"/api/v1/team-members/{m['id']}").json()
        assert d["available_hours"] == 20
        assert d["capacity_percentage"] == 50

    def test_team_stats(self):
        item = _work_item(item_type="om", status="active")
        busy = _member(weekly_hours=40)
        _member(weekly_hours=40)
        _allocate(busy["id"], item["id"], 40)
        r = client.get("/api/v1/stats")
        assert r.status_code == 200
        d = r.json()
        assert d["total_members"] == 2
        assert d["average_capacity"] == 50
        assert d["overallocated_members"] == 1
        assert d["hours_by_type"]["om"] == 40


# ═══════════════════════════════════════════════════════════════════════════
# WORK ITEMS — type/status validation
# ═══════════════════════════════════════════════════════════════════════════
class TestWorkItems:
    def test_status_catalog(self):
        r = client.get("/api/v1/work-items/statuses")
        assert r.status_code == 200
        assert r.json()["demand"]["default"] == "draft"

    def test_create_round_trip(self):
        item = _work_item(item_type="demand", status="draft")
        d = client.get(f"/api/v1/work-items/{item['id']}").json()
        assert (d["type"], d["status"]) == ("demand", "draft")
        assert d["status_label"] == "Draft"
        assert d["priority"] == "normal"
        assert d["allocations"] == []
        assert d["total_allocated_hours"] == 0

    def test_create_with_foreign_status_rejected(self):
        r = client.post("/api/v1/work-items", json={
            "title": "T", "type": "demand", "status": "executing",
        })
        assert r.status_code == 422
        assert r.json()["field"] == "status"
        assert client.get("/api/v1/work-items").json() == []

    def test_create_without_status_gets_default(self):
        r = client.post("/api/v1/work-items", json={"title": "Patch servers", "type": "om"})
        assert r.status_code == 201
        assert r.json()["status"] == "planned"

    def test_create_invalid_type_422(self):
        r = client.post("/api/v1/work-items", json={"title": "T", "type": "epic", "status": "draft"})
        assert r.status_code == 422

    def test_estimated_hours_upper_bound(self):
        r = client.post("/api/v1/work-items", json={
            "title": "T", "type": "om", "estimated_hours": 1e9,
        })
        assert r.status_code == 422
        assert client.get("/api/v1/work-items").json() == []

    def test_estimated_hours_update_upper_bound(self):
        item = _work_item()
        r = client.patch(f"/api/v1/work-items/{item['id']}", json={"estimated_hours": 100000})
        assert r.status_code == 422

    def test_estimated_hours_kept_to_hundredths(self):
        item = _work_item(estimated_hours=12.345)
        assert item["estimated_hours"] == 12.35

    def test_create_invalid_priority_422(self):
        r = client.post("/api/v1/work-items", json={
            "title": "T", "type": "om", "status": "planned", "priority": "urgent",
        })
        assert r.status_code == 422

    def test_status_only_update_checked_against_stored_type(self):
        item = _work_item(item_type="project", status="planning")
        r = client.patch(f"/api/v1/work-items/{item['id']}", json={"status": "draft"})
        assert r.status_code == 422
        assert r.json()["field"] == "status"
        assert client.get(f"/api/v1/work-items/{item['id']}").json()["status"] == "planning"

    def test_type_change_without_status_rejected(self):
        item = _work_item(item_type="project", status="planning")
        r = client.patch(f"/api/v1/work-items/{item['id']}", json={"type": "om"})
        assert r.status_code == 422

    def test_type_and_status_change_together(self):
        item = _work_item(item_type="project", status="planning")
        r = client.patch(f"/api/v1/work-items/{item['id']}", json={"type": "om", "status": "on-hold"})
        assert r.status_code == 200
        assert r.json()["status_label"] == "On Hold"

    def test_update_unrelated_fields(self):
        item = _work_item()
        r = client.patch(f"/api/v1/work-items/{item['id']}", json={
            "priority": "critical", "estimated_hours": 120.5, "due_date": NEXT_WEEK,
        })
        assert r.status_code == 200
        d = r.json()
        assert d["priority"] == "critical"
        assert d["estimated_hours"] == 120.5
        assert d["due_date"] == NEXT_WEEK

    def test_update_not_found(self):
        r = client.patch(f"/api/v1/work-items/{uuid.uuid4()}", json={"status": "planning"})
        assert r.status_code == 404

    def test_list_filters(self):
        _work_item(item_type="demand", status="draft", title="D")
        _work_item(item_type="om", status="active", title="O")
        r = client.get("/api/v1/work-items", params={"type": "om"})
        assert [w["title"] for w in r.json()] == ["O"]

    def test_total_allocated_hours_ignores_date_window(self):
        item = _work_item()
        m = _member()
        _allocate(m["id"], item["id"], 10, start=LAST_MONTH, end=YESTERDAY)
        _allocate(m["id"], item["id"], 6, start=NEXT_WEEK)
        d = client.get(f"/api/v1/work-items/{item['id']}").json()
        assert d["total_allocated_hours"] == 16
        assert len(d["allocations"]) == 2
        assert d["allocations"][0]["team_member_name"] == "Alice Martin"
        assert client.get(f"/api/v1/team-members/{m['id']}").json()["allocated_hours"] == 0

    def test_delete_cascades_allocations(self):
        item = _work_item()
        a = _allocate(_member()["id"], item["id"], 10)
        r = client.delete(f"/api/v1/work-items/{item['id']}")
        assert r.status_code == 200
        assert r.json()["allocations_removed"] == 1
        assert client.get(f"/api/v1/allocations/{a['id']}").status_code == 404
        assert client.get(f"/api/v1/work-items/{item['id']}").status_code == 404


# ═══════════════════════════════════════════════════════════════════════════
# ALLOCATIONS
# ═══════════════════════════════════════════════════════════════════════════
class TestAllocations:
    def test_multiple_allocations_same_pair_allowed(self):
        m, item = _member(), _work_item()
        _allocate(m["id"], item["id"], 10, end=YESTERDAY)
        _allocate(m["id"], item["id"], 20, start=TODAY.isoformat())
        r = client.get("/api/v1/allocations", params={"work_item_id": item["id"]})
        assert len(r.json()) == 2

    def test_unknown_work_item_conflict(self):
        r = client.post("/api/v1/allocations", json={
            "team_member_id": _member()["id"], "work_item_id": str(uuid.uuid4()),
            "hours_per_week": 5, "start_date": LAST_MONTH,
        })
        assert r.status_code == 409

    def test_unknown_member_conflict(self):
        r = client.post("/api/v1/allocations", json={
            "team_member_id": str(uuid.uuid4()), "work_item_id": _work_item()["id"],
            "hours_per_week": 5, "start_date": LAST_MONTH,
        })
        assert r.status_code == 409

    def test_hours_above_week_422(self):
        r = client.post("/api/v1/allocations", json={
            "team_member_id": _member()["id"], "work_item_id": _work_item()["id"],
            "hours_per_week": 168.5, "start_date": LAST_MONTH,
        })
        assert r.status_code == 422

    def test_hours_kept_to_hundredths(self):
        a = _allocate(_member()["id"], _work_item()["id"], 12.345)
        assert a["hours_per_week"] == 12.35
        r = client.patch(f"/api/v1/allocations/{a['id']}", json={"hours_per_week": 7.125})
        assert r.json()["hours_per_week"] == 7.13

    def test_negative_hours_422(self):
        r = client.post("/api/v1/allocations", json={
            "team_member_id": _member()["id"], "work_item_id": _work_item()["id"],
            "hours_per_week": -1, "start_date": LAST_MONTH,
        })
        assert r.status_code == 422

    def test_missing_start_date_422(self):
        r = client.post("/api/v1/allocations", json={
            "team_member_id": _member()["id"], "work_item_id": _work_item()["id"],
            "hours_per_week": 4,
        })
        assert r.status_code == 422

    def test_end_before_start_rejected(self):
        r = client.post("/api/v1/allocations", json={
            "team_member_id": _member()["id"], "work_item_id": _work_item()["id"],
            "hours_per_week": 4, "start_date": NEXT_WEEK, "end_date": YESTERDAY,
        })
        assert r.status_code == 422
        assert r.json()["field"] == "end_date"

    def test_update_end_date_checked_against_stored_start(self):
        a = _allocate(_member()["id"], _work_item()["id"], 4, start=TODAY.isoformat())
        r = client.patch(f"/api/v1/allocations/{a['id']}", json={"end_date": YESTERDAY})
        assert r.status_code == 422

    def test_update_clears_end_date(self):
        a = _allocate(_member()["id"], _work_item()["id"], 4, end=NEXT_WEEK)
        r = client.patch(f"/api/v1/allocations/{a['id']}", json={"end_date": None})
        assert r.status_code == 200
        assert r.json()["end_date"] is None

    def test_delete_not_found(self):
        assert client.delete(f"/api/v1/allocations/{uuid.uuid4()}").status_code == 404


# ═══════════════════════════════════════════════════════════════════════════
# OUT OF OFFICE
# ═══════════════════════════════════════════════════════════════════════════
class TestOutOfOffice:
    def test_create_list_delete(self):
        m = _member()
        r = client.post("/api/v1/out-of-office", json={
            "team_member_id": m["id"], "start_date": TODAY.isoformat(), "end_date": NEXT_WEEK,
            "reason": "Annual leave",
        })
        assert r.status_code == 201
        entry = r.json()
        listed = client.get("/api/v1/out-of-office", params={"team_member_id": m["id"]}).json()
        assert [e["reason"] for e in listed] == ["Annual leave"]
        assert client.delete(f"/api/v1/out-of-office/{entry['id']}").status_code == 200
        assert client.get("/api/v1/out-of-office").json() == []

    def test_end_before_start_rejected(self):
        r = client.post("/api/v1/out-of-office", json={
            "team_member_id": _member()["id"], "start_date": NEXT_WEEK, "end_date": YESTERDAY,
        })
        assert r.status_code == 422

    def test_unknown_member_conflict(self):
        r = client.post("/api/v1/out-of-office", json={
            "team_member_id": str(uuid.uuid4()), "start_date": YESTERDAY, "end_date": NEXT_WEEK,
        })
        assert r.status_code == 409


# ═══════════════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════════════
class TestJSONLogging:
    def _record(self, **extra):
        record = logging.LogRecord("svc", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        record.__dict__.update(extra)
        return record

    def test_extra_keys_and_context_request_id(self):
        token = request_id_var.set("req-7")
        try:
            line = json.loads(JSONFormatter().format(self._record(work_item_id="w1")))
        finally:
            request_id_var.reset(token)
        assert line["message"] == "hello world"
        assert line["work_item_id"] == "w1"
        assert line["request_id"] == "req-7"
        assert line["service"] == "resource-management"

    def test_explicit_request_id_wins(self):
        token = request_id_var.set("ctx")
        try:
            line = json.loads(JSONFormatter().format(self._record(request_id="explicit")))
        finally:
            request_id_var.reset(token)
        assert line["request_id"] == "explicit"
