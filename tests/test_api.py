from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import main
from api.ai import get_ai_client


@pytest.fixture
def api(monkeypatch):
    monkeypatch.setattr(main, "API_KEY", None)
    with TestClient(main.app) as client:
        yield client
    main.app.dependency_overrides.clear()


@pytest.fixture
def snapshot(clean_data):
    clients, workers, tasks = clean_data
    return {"clients": clients, "workers": workers, "tasks": tasks}


def test_health(api):
    response = api.get("/api/health/check")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_api_key_is_enforced(api, monkeypatch):
    monkeypatch.setattr(main, "API_KEY", "secret")

    assert api.post("/api/validation/run", json={}).status_code == 401
    assert api.post("/api/validation/run", json={}, headers={"x-api-key": "secret"}).status_code == 200
    assert api.get("/api/health/check").status_code == 200


def test_validation_run(api, snapshot):
    snapshot["clients"][0]["RequestedTaskIDs"] = ["T1", "T99"]

    body = api.post("/api/validation/run", json=snapshot).json()

    assert body["findings"] == [
        {
            "id": "C1",
            "field": "RequestedTaskIDs",
            "message": 'Requested Task ID "T99" does not exist',
            "severity": "error",
        }
    ]
    assert body["readiness"]["score"] == 95
    assert body["readiness"]["exportReady"] is False


def test_numeric_ids_are_read_as_strings(api, snapshot):
    snapshot["tasks"][0]["TaskID"] = 1
    snapshot["clients"][0]["RequestedTaskIDs"] = [1]
    snapshot["clients"][1]["RequestedTaskIDs"] = ["1", "T2"]

    body = api.post("/api/validation/run", json=snapshot).json()

    assert body["findings"] == []


def test_rule_build_and_export(api):
    response = api.post("/api/rules/build", json={"type": "coRun", "tasks": "T1, T2"})
    assert response.status_code == 200
    assert response.json()["rule"] == {"type": "coRun", "tasks": ["T1", "T2"]}

    response = api.post("/api/rules/build", json={"type": "coRun", "tasks": ["T1"]})
    assert response.status_code == 400
    assert "at least two tasks" in response.json()["detail"]

    response = api.post(
        "/api/rules/export",
        json={"rules": [{"type": "phaseWindow", "taskID": "T1", "allowedPhases": "1,2"}]},
    )
    assert response.status_code == 200
    assert response.json()["rules"] == [{"type": "phaseWindow", "taskID": "T1", "allowedPhases": [1, 2]}]
    assert response.headers["content-disposition"] == 'attachment; filename="rules.json"'
    assert response.json()["priorities"]["fairDistribution"] == 0.5


def test_priorities(api):
    response = api.post("/api/rules/priorities", json={"updates": {"fairDistribution": 0.8}})
    assert response.json()["priorities"]["fairDistribution"] == 0.8

    response = api.post("/api/rules/priorities", json={"updates": {"fairDistribution": 3}})
    assert response.status_code == 400


def test_modify(api, snapshot):
    snapshot["action"] = {
        "action": "update_many",
        "entity": "workers",
        "filter": {"WorkerGroup": "GroupA"},
        "changes": {"MaxLoadPerPhase": 3},
    }

    body = api.post("/api/data/modify", json=snapshot).json()

    assert body["status"] == "applied"
    assert body["matched"] == 1
    assert body["collections"]["workers"][0]["MaxLoadPerPhase"] == 3
    assert body["findings"] == []


def test_modify_rejections_are_not_http_errors(api, snapshot):
    snapshot["action"] = {"action": "delete_one", "entity": "tasks", "filter": {"TaskID": "T1"}, "changes": {}}
    response = api.post("/api/data/modify", json=snapshot)
    assert response.status_code == 200
    assert response.json()["status"] == "not_supported"

    snapshot["action"] = {"entity": "tasks"}
    assert api.post("/api/data/modify", json=snapshot).json()["status"] == "rejected"


def test_search(api, snapshot):
    snapshot.update(entity="tasks", filters=[{"field": "RequiredSkills", "operator": "includes", "value": "java"}])
    body = api.post("/api/data/search", json=snapshot).json()
    assert [t["TaskID"] for t in body["results"]] == ["T2"]

    snapshot["entity"] = "projects"
    assert api.post("/api/data/search", json=snapshot).status_code == 400


def test_upload(api):
    csv = b"TaskID,TaskName,Duration,RequiredSkills,PreferredPhases,MaxConcurrent\nT1,Build,2,python,1-2,1\n"

    response = api.post("/api/data/upload/tasks", files={"file": ("tasks.csv", csv, "text/csv")})

    assert response.status_code == 200
    body = response.json()
    assert body["records"][0]["PreferredPhases"] == [1, 2]
    assert body["findings"][0]["message"] == 'No worker found with skill "python"'

    response = api.post("/api/data/upload/tasks", files={"file": ("tasks.txt", csv, "text/plain")})
    assert response.status_code == 400


def test_export(api, snapshot):
    response = api.post("/api/data/export/workers?format=csv", json=snapshot)
    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="workers.csv"'
    assert b"python, sql" in response.content

    assert api.post("/api/data/export/workers?format=pdf", json=snapshot).status_code == 400


def test_ai_convert_rule(api, fake_ai):
    ai = fake_ai({"type": "loadLimit", "workerGroup": "GroupA", "maxSlotsPerPhase": 2})
    main.app.dependency_overrides[get_ai_client] = lambda: ai

    body = api.post("/api/ai/convert-rule", json={"description": "GroupA max 2"}).json()

    assert body["rule"] == {"type": "loadLimit", "workerGroup": "GroupA", "maxSlotsPerPhase": 2}


def test_ai_copilot(api, snapshot, fake_ai):
    ai = fake_ai({"intent": "readiness_check"}, "Fine.")
    main.app.dependency_overrides[get_ai_client] = lambda: ai
    snapshot["message"] = "Are we ready?"

    body = api.post("/api/ai/copilot", json=snapshot).json()

    assert body["type"] == "readiness_score"
    assert body["data"]["score"] == 100
