from fastapi.testclient import TestClient

from main import app

client = TestClient(app)

UNPARSEABLE = (
    "<html><body><p>JEE Main response sheet. The question paper and your answer "
    "options will appear here once the results are published.</p></body></html>"
)


def test_health():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json().get("ok") is True


def test_validate(sample_sheet):
    r = client.post("/validate", json={"html": sample_sheet})
    assert r.status_code == 200
    assert r.json() == {"valid": True, "message": "Valid response sheet"}


def test_parse(sample_sheet):
    r = client.post("/parse", json={"html": sample_sheet})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["strategy"] == "digialm"
    assert body["count"] == 5
    assert body["diagnostic"] == {}


def test_parse_nothing_includes_diagnostic():
    r = client.post("/parse", json={"html": "<p>nothing</p>"})
    body = r.json()
    assert body["ok"] is False
    assert body["strategy"] == "none"
    assert body["diagnostic"]["question_count"] == 0


def test_extract(sample_sheet):
    r = client.post("/extract", json={"html": sample_sheet})
    body = r.json()
    assert body["ok"] is True
    assert body["count"] == 5
    assert body["questions"][3]["is_numerical"] is True


def test_score():
    payload = {
        "responses": [
            {"question_id": "1", "claimed_option_ids": ["A"], "is_attempted": True},
            {"question_id": "2", "claimed_numeric_value": 3.15, "is_attempted": True},
        ],
        "answer_keys": [
            {"question_id": "1", "subject": "Physics", "question_type": "mcq_single", "correct_option_ids": ["A"]},
            {"question_id": "2", "subject": "Physics", "question_type": "numerical", "correct_numeric_value": 3.14},
        ],
        "marking_rules": {
            "mcq_single": {"correct": 4, "wrong": -1},
            "numerical": {"correct": 4, "wrong": 0},
        },
    }
    r = client.post("/score", json=payload)
    assert r.status_code == 200
    body = r.json()
    assert body["summary"]["total_marks"] == 8
    assert body["summary"]["physics_marks"] == 8
    assert body["skipped"] == []


def test_score_without_numerical_rule_skips_numerical():
    payload = {
        "responses": [{"question_id": "2", "claimed_numeric_value": 3.14, "is_attempted": True}],
        "answer_keys": [
            {"question_id": "2", "subject": "Physics", "question_type": "numerical", "correct_numeric_value": 3.14},
        ],
        "marking_rules": {"mcq_single": {"correct": 4, "wrong": -1}},
    }
    body = client.post("/score", json=payload).json()
    assert body["summary"]["total_marks"] == 0
    assert body["skipped"] == [{"question_id": "2", "reason": "no_marking_rule"}]


def test_percentile():
    r = client.get("/percentile", params={"marks": 121, "exam_date": "2026-01-28", "shift": "S1"})
    assert r.status_code == 200
    assert r.json()["percentile"] == 95


def test_percentile_bad_shift():
    r = client.get("/percentile", params={"marks": 100, "exam_date": "2026-01-28", "shift": "Shift 5"})
    assert r.status_code == 400


def test_analyze_and_fetch_submission(sample_sheet):
    r = client.post("/analyze", json={"html": sample_sheet, "exam_date": "2026-01-28", "shift": "Shift 1"})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["summary"]["total_marks"] == 7
    assert isinstance(body["stored_id"], int)
    assert isinstance(body["duration_ms"], int)

    r2 = client.get(f"/submissions/{body['submission_id']}")
    assert r2.status_code == 200
    stored = r2.json()
    assert stored["id"] == body["stored_id"]
    assert stored["total_marks"] == 7
    assert len(stored["responses"]) == 5


def test_analyze_errors(sample_sheet):
    r = client.post("/analyze", json={"html": "<p>x</p>", "exam_date": "2026-01-28", "shift": "Shift 1"})
    assert r.status_code == 400
    assert r.json()["detail"] == "File appears to be empty or too small"

    r = client.post("/analyze", json={"html": sample_sheet, "exam_date": "2026-01-21", "shift": "Shift 1"})
    assert r.status_code == 404

    r = client.post("/analyze", json={"html": UNPARSEABLE, "exam_date": "2026-01-28", "shift": "Shift 1"})
    assert r.status_code == 422


def test_submission_not_found():
    r = client.get("/submissions/does-not-exist")
    assert r.status_code == 404


def test_keys():
    r = client.get("/keys")
    assert r.status_code == 200
    sets = r.json()
    assert (sets[0]["exam_date"], sets[0]["shift"]) == ("2026-01-28", "Shift 1")
    assert sets[0]["subjects"] == {"Mathematics": 25, "Physics": 25, "Chemistry": 25}
    assert sets[0]["total"] == 75

    r = client.get("/keys/2026-01-28/s1")
    assert r.status_code == 200
    assert len(r.json()) == 75

    assert client.get("/keys/2026-01-21/Shift 1").status_code == 404
    assert client.get("/keys/2026-01-28/Shift 9").status_code == 400


def test_admin_reload_unauthorized(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    r = client.post("/admin/reload")
    assert r.status_code == 401


def test_admin_reload_ok(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    r = client.post("/admin/reload", headers={"x-admin-token": "secret"})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True and body["count"] == 1


def test_recent_submissions_requires_admin(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    assert client.get("/submissions/recent-list").status_code == 401
    r = client.get("/submissions/recent-list", headers={"x-admin-token": "secret"})
    assert r.status_code == 200
    assert all("responses" not in item for item in r.json()["items"])


def test_health_keys():
    r = client.get("/health/keys")
    assert r.json() == {"ok": True, "count": 1, "questions": 75}
