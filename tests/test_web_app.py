import pytest

from preference_grouping.web_app import create_app


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200


def test_lists_algorithms(client):
    response = client.get("/algorithms")
    assert response.status_code == 200
    by_id = {entry["id"]: entry for entry in response.get_json()}
    assert len(by_id) == 7
    assert by_id["genetic"]["isSlow"] is True
    assert by_id["balanced"]["label"] == "Balanced"


def test_group_assignment(client):
    response = client.post("/group_assignment", json={
        "scenarioOwnerId": "owner",
        "participantIds": ["a", "b", "c", "d"],
        "algorithmConfig": {
            "algorithm": "preference-first",
            "seed": 3,
            "groups": [{"id": "G1", "name": "One", "capacity": 2}, {"id": "G2", "name": "Two", "capacity": 2}],
        },
        "preferences": [
            {"studentId": "a", "likeGroupIds": ["G2"]},
            {"studentId": "b", "payload": {"likeGroupIds": ["two"]}},
        ],
    })
    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    g2 = next(g for g in body["groups"] if g["id"] == "G2")
    assert sorted(g2["memberIds"]) == ["a", "b"]
    assert body["evaluation"]["percentAssignedTopChoice"] == 50


def test_failed_assignment_is_unprocessable(client):
    response = client.post("/group_assignment", json={
        "scenarioOwnerId": "owner",
        "participantIds": ["a", "b", "c"],
        "algorithmConfig": {"algorithm": "round-robin", "groups": [{"name": "Tiny", "capacity": 1}]},
    })
    assert response.status_code == 422
    body = response.get_json()
    assert body["success"] is False
    assert body["reason"] == "CAPACITY_EXHAUSTED"
    assert "2 student(s)" in body["message"]


@pytest.mark.parametrize("body", [
    {"participantIds": ["a"]},
    {"scenarioOwnerId": "owner", "participantIds": "a"},
    {"scenarioOwnerId": "owner", "participantIds": ["a"], "preferences": [{"likeGroupIds": ["G1"]}]},
])
def test_bad_request(client, body):
    response = client.post("/group_assignment", json=body)
    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_empty_body_is_bad_request(client):
    response = client.post("/group_assignment", data="not json", content_type="text/plain")
    assert response.status_code == 400


def test_candidates(client):
    response = client.post("/candidates", json={
        "scenarioOwnerId": "owner",
        "participantIds": [f"s{i}" for i in range(10)],
        "algorithmConfig": {"seed": 11},
        "count": 3,
    })
    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert [c["algorithmId"] for c in body["candidates"]] == ["balanced", "random", "round-robin"]
    assert [c["algorithmConfig"]["seed"] for c in body["candidates"]] == [11, 11 + 9973, 11 + 2 * 9973]
    assert body["candidates"][0]["evaluation"]["group_size_avg"] == 5


def test_candidates_failure_is_unprocessable(client):
    response = client.post("/candidates", json={
        "scenarioOwnerId": "owner",
        "participantIds": ["a", "b", "c"],
        "algorithmConfig": {"groups": [{"name": "Tiny", "capacity": 1}]},
    })
    assert response.status_code == 422
    body = response.get_json()
    assert body["reason"] == "GROUPING_ALGORITHM_FAILED"
    assert body["algorithmId"] == "balanced"
    assert body["candidates"] == []


@pytest.mark.parametrize("count", ["3", True, 21])
def test_candidates_rejects_bad_count(client, count):
    response = client.post("/candidates", json={
        "scenarioOwnerId": "owner",
        "participantIds": ["a"],
        "count": count,
    })
    assert response.status_code == 400
    assert response.get_json()["success"] is False
