"""
Integration tests for API endpoints using the SQLite test DB.

2026-03-10 is a Tuesday, so no weekend adjustment applies.
"""
import pytest
from datetime import date

from app.models.consent import ScoringConsent
from app.models.threshold import EmployeeThresholdOverride
from app.services import store

DAY = date(2026, 3, 10)


@pytest.fixture()
def strained(db, make_employee):
    """Employee with 5 h sleep and 2 h overtime on DAY."""
    emp = make_employee()
    store.upsert_health_metrics(db, emp.id, DAY, sleep_hours=5.0)
    store.upsert_work_metrics(db, emp.id, DAY, overtime_hours=2.0)
    return emp


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestScore:
    def test_red_zone(self, client, strained):
        r = client.get(f"/employees/{strained.id}/score", params={"date": "2026-03-10"})
        assert r.status_code == 200
        body = r.json()
        assert body["employeeId"] == strained.id
        assert body["date"] == "2026-03-10"
        assert body["zone"] == "red"
        assert body["burnoutScore"] == pytest.approx(81.2, abs=0.05)
        assert body["thresholds"]["source"] == "system"
        assert body["aggregateEligible"] is True

    def test_idempotent(self, client, strained):
        url = f"/employees/{strained.id}/score?date=2026-03-10"
        assert client.get(url).json() == client.get(url).json()

    def test_override_lifts_red_cutoff(self, client, db, strained):
        db.add(EmployeeThresholdOverride(
            employee_id=strained.id, burnout_red_threshold=85, start_date=date(2026, 3, 1),
        ))
        db.commit()
        body = client.get(f"/employees/{strained.id}/score", params={"date": "2026-03-10"}).json()
        assert body["zone"] == "yellow"
        assert body["thresholds"]["source"] == "employee_override"

    def test_employee_without_data_is_neutral(self, client, make_employee):
        emp = make_employee()
        body = client.get(f"/employees/{emp.id}/score", params={"date": "2026-03-10"}).json()
        assert body["burnoutScore"] == 50.0
        assert body["zone"] == "yellow"

    def test_unknown_employee(self, client):
        r = client.get("/employees/999999/score", params={"date": "2026-03-10"})
        assert r.status_code == 404
        assert r.json()["code"] == "EMPLOYEE_NOT_FOUND"

    def test_ambiguous_override(self, client, db, strained):
        for threshold in (80, 85):
            db.add(EmployeeThresholdOverride(
                employee_id=strained.id, burnout_red_threshold=threshold, start_date=date(2026, 3, 1),
            ))
        db.commit()
        r = client.get(f"/employees/{strained.id}/score", params={"date": "2026-03-10"})
        assert r.status_code == 409
        body = r.json()
        assert body["code"] == "CONFIGURATION_ERROR"
        assert len(body["details"]["override_ids"]) == 2

    def test_invalid_date(self, client, strained):
        r = client.get(f"/employees/{strained.id}/score", params={"date": "yesterday"})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["details"]["errors"][0]["field"] == "date"


class TestExplanation:
    def test_self_view(self, client, strained):
        r = client.get(f"/employees/{strained.id}/explanation", params={"date": "2026-03-10"})
        assert r.status_code == 200
        body = r.json()
        assert body["zone"] == "red"
        assert body["burnoutScore"] == pytest.approx(81.2, abs=0.05)
        factors = {f["name"]: f for f in body["factors"]}
        assert factors["Sleep"]["value"] == "5.0h vs 8.0h ideal"
        assert factors["Sleep"]["impact"] == "negative"
        assert factors["Overtime"]["impact"] == "negative"
        assert body["recommendations"]["personal"]
        assert body["context"]["calibrationInfo"]["applied"] is False
        assert body["context"]["interactionEffects"] == []

    def test_factors_ordered_by_contribution(self, client, strained):
        body = client.get(f"/employees/{strained.id}/explanation", params={"date": "2026-03-10"}).json()
        assert [f["name"] for f in body["factors"]] == ["Overtime", "Sleep"]

    def test_manager_view_is_redacted(self, client, strained):
        r = client.get(
            f"/employees/{strained.id}/explanation",
            params={"date": "2026-03-10", "viewer_role": "manager"},
        )
        assert r.status_code == 200
        body = r.json()
        assert body["recommendations"]["personal"] == []
        assert body["recommendations"]["leadership"]
        assert all(": " in rec for rec in body["recommendations"]["leadership"])
        factors = {f["name"]: f for f in body["factors"]}
        assert factors["Sleep"]["value"] == "Below personal target"
        assert factors["Overtime"]["value"] == "2.0h overtime/day"
        assert "chronotype" not in body["context"]

    def test_manager_requesting_raw_values_forbidden(self, client, strained):
        r = client.get(
            f"/employees/{strained.id}/explanation",
            params={"date": "2026-03-10", "viewer_role": "admin", "include_raw_values": "true"},
        )
        assert r.status_code == 403
        assert r.json()["code"] == "CONSENT_VIOLATION"

    def test_employee_may_request_raw_values(self, client, strained):
        r = client.get(
            f"/employees/{strained.id}/explanation",
            params={"date": "2026-03-10", "include_raw_values": "true"},
        )
        assert r.status_code == 200

    def test_health_consent_withdrawn(self, client, db, strained):
        db.add(ScoringConsent(employee_id=strained.id, use_health_data=False))
        db.commit()
        body = client.get(f"/employees/{strained.id}/explanation", params={"date": "2026-03-10"}).json()
        names = [f["name"] for f in body["factors"]]
        assert "Sleep" not in names
        assert "Overtime" in names

    def test_unknown_viewer_role(self, client, strained):
        r = client.get(
            f"/employees/{strained.id}/explanation",
            params={"date": "2026-03-10", "viewer_role": "auditor"},
        )
        assert r.status_code == 422

    def test_weekend_day_context(self, client, db, make_employee):
        emp = make_employee()
        store.upsert_work_metrics(db, emp.id, date(2026, 3, 14), overtime_hours=2.0)
        body = client.get(f"/employees/{emp.id}/explanation", params={"date": "2026-03-14"}).json()
        assert body["context"]["dayContext"]["label"] == "Weekend"
