from datetime import datetime, timedelta, timezone
import pytest

from jobtrack.security.ownership import is_owner
from jobtrack.services.jobs import clean_job_payload, to_utc_datetime
from jobtrack.services.models import ValidationError

def new_job(**overrides):
    body = {
        "company": "Acme",
        "role": "Backend Engineer",
        "pay": "12 LPA",
        "dateApplied": datetime.now(timezone.utc).date().isoformat(),
        "jobType": "Full-Time",
        "notes": "referral",
    }
    body.update(overrides)
    return body

@pytest.fixture
def other_headers(signup_user):
    token = signup_user(username="mallory")["token"]
    return {"Authorization": f"Bearer {token}"}

def test_create_and_list(client, auth_headers):
    r = client.post("/api/jobs", json=new_job(), headers=auth_headers)
    assert r.status_code == 201
    job = r.get_json()
    assert job["status"] == "applied"
    assert job["mode"] == "on-campus"
    assert job["company"] == "Acme"

    older = new_job(company="Globex", dateApplied="2020-01-01")
    client.post("/api/jobs", json=older, headers=auth_headers)

    jobs = client.get("/api/jobs", headers=auth_headers).get_json()
    assert [j["company"] for j in jobs] == ["Acme", "Globex"]

@pytest.mark.parametrize("body, fragment", [
    ({"role": "x", "dateApplied": "2024-01-01"}, "company"),
    (new_job(status="ghosted"), "status"),
    (new_job(jobType="Contract"), "jobType"),
    (new_job(mode="remote"), "mode"),
    (new_job(dateApplied="yesterday"), "dateApplied"),
])
def test_create_validation(client, auth_headers, body, fragment):
    r = client.post("/api/jobs", json=body, headers=auth_headers)
    assert r.status_code == 400
    assert fragment in r.get_json()["message"]

def test_jobs_are_scoped_to_user(client, auth_headers, other_headers):
    client.post("/api/jobs", json=new_job(), headers=auth_headers)
    assert client.get("/api/jobs", headers=other_headers).get_json() == []

def test_filter_by_status(client, auth_headers):
    client.post("/api/jobs", json=new_job(status="interview"), headers=auth_headers)
    client.post("/api/jobs", json=new_job(company="Initech"), headers=auth_headers)
    r = client.get("/api/jobs/status/interview", headers=auth_headers)
    assert [j["company"] for j in r.get_json()] == ["Acme"]
    assert client.get("/api/jobs/status/bogus", headers=auth_headers).status_code == 400

def test_update_partial(client, auth_headers):
    job = client.post("/api/jobs", json=new_job(), headers=auth_headers).get_json()
    r = client.put(f"/api/jobs/{job['id']}", json={"status": "interview", "notes": ""}, headers=auth_headers)
    assert r.status_code == 200
    updated = r.get_json()
    assert updated["status"] == "interview"
    assert updated["notes"] is None
    assert updated["company"] == "Acme"

    bad = client.put(f"/api/jobs/{job['id']}", json={"status": "hired"}, headers=auth_headers)
    assert bad.status_code == 400

def test_foreign_owner_cannot_mutate(client, supabase, auth_headers, other_headers):
    job = client.post("/api/jobs", json=new_job(), headers=auth_headers).get_json()
    before = [dict(r) for r in supabase.tables["jobs"]]

    r = client.put(f"/api/jobs/{job['id']}", json={"status": "offered"}, headers=other_headers)
    assert r.status_code == 401
    r = client.delete(f"/api/jobs/{job['id']}", headers=other_headers)
    assert r.status_code == 401

    assert supabase.tables["jobs"] == before

def test_missing_job_is_404(client, auth_headers):
    assert client.put("/api/jobs/nope", json={"status": "offered"}, headers=auth_headers).status_code == 404
    assert client.delete("/api/jobs/nope", headers=auth_headers).status_code == 404

def test_delete(client, supabase, auth_headers):
    job = client.post("/api/jobs", json=new_job(), headers=auth_headers).get_json()
    r = client.delete(f"/api/jobs/{job['id']}", headers=auth_headers)
    assert r.get_json() == {"message": "Job removed"}
    assert supabase.tables["jobs"] == []

def test_analytics_endpoint(client, auth_headers):
    today = datetime.now(timezone.utc).date()
    client.post("/api/jobs", json=new_job(status="interview"), headers=auth_headers)
    client.post("/api/jobs", json=new_job(dateApplied=(today - timedelta(days=60)).isoformat()),
                headers=auth_headers)

    recent = client.get("/api/jobs/analytics?period=last30days", headers=auth_headers).get_json()
    assert recent["summary"]["totalApplications"] == 1
    assert recent["summary"]["interviewRate"] == "100.0%"
    assert recent["timeData"] == [{"date": today.isoformat(), "count": 1}]

    everything = client.get("/api/jobs/analytics", headers=auth_headers).get_json()
    assert everything["summary"]["totalApplications"] == 2

def test_analytics_store_failure(client, supabase, auth_headers):
    supabase.failing.add("jobs")
    r = client.get("/api/jobs/analytics?period=last90days", headers=auth_headers)
    assert r.status_code == 500
    assert r.get_json()["error"] == "server_error"

def test_is_owner():
    assert is_owner({"user_id": "u1"}, "u1")
    assert not is_owner({"user_id": "u1"}, "u2")
    assert not is_owner(None, "u1")
    assert not is_owner({"user_id": None}, None)

def test_clean_job_payload_normalizes_dates():
    row = clean_job_payload(new_job(dateApplied="2024-03-05T10:00:00Z", interviewDate="2024-03-10"))
    assert row["date_applied"] == "2024-03-05T10:00:00+00:00"
    assert row["interview_date"] == "2024-03-10T00:00:00+00:00"
    with pytest.raises(ValidationError):
        clean_job_payload(["not", "a", "dict"])

def test_to_utc_datetime_pads_short_fractions():
    assert to_utc_datetime("2024-06-03T10:00:00.12345+00:00") == \
        datetime(2024, 6, 3, 10, 0, 0, 123450, tzinfo=timezone.utc)
    assert to_utc_datetime("2024-06-03T10:00:00.1Z").microsecond == 100000
    assert to_utc_datetime("2024-06-03T12:00:00.123456789+02:00") == \
        datetime(2024, 6, 3, 10, 0, 0, 123456, tzinfo=timezone.utc)
