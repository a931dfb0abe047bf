"""Tests for the HTTP layer."""

import pytest
from fastapi.testclient import TestClient

from beamdrill.main import app


@pytest.fixture
def client():
    return TestClient(app)


class TestService:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"


class TestGenerate:
    def test_pinned_category(self, client):
        response = client.post(
            "/api/problems/generate",
            json={"category": "buckling", "difficulty": "beginner", "seed": 3},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["category"] == "buckling"
        assert body["target"] == "l_k"
        assert len(body["choices"]) == 4
        assert body["answer"] in body["choices"]
        assert body["unit"] == "m"

    def test_seed_makes_response_reproducible(self, client):
        payload = {"difficulty": "mixed", "seed": 42}
        first = client.post("/api/problems/generate", json=payload).json()
        second = client.post("/api/problems/generate", json=payload).json()
        assert first == second

    def test_default_request(self, client):
        response = client.post("/api/problems/generate", json={})
        assert response.status_code == 200
        assert response.json()["explanation"]

    def test_weakness_mode(self, client):
        response = client.post(
            "/api/problems/generate",
            json={
                "difficulty": "advanced",
                "weakness_mode": True,
                "stats": {"frame": {"attempted": 5, "correct": 1}},
                "seed": 1,
            },
        )
        assert response.status_code == 200

    @pytest.mark.parametrize(
        "payload",
        [
            {"difficulty": "expert"},
            {"category": "arches"},
            {"weakness_mode": True, "stats": {"arches": {"attempted": 1, "correct": 0}}},
        ],
    )
    def test_bad_values_are_rejected(self, client, payload):
        response = client.post("/api/problems/generate", json=payload)
        assert response.status_code == 400

    def test_negative_counts_fail_validation(self, client):
        response = client.post(
            "/api/problems/generate",
            json={"stats": {"frame": {"attempted": -1, "correct": 0}}},
        )
        assert response.status_code == 422


class TestCatalogue:
    def test_categories(self, client):
        body = client.get("/api/problems/categories").json()
        assert len(body) == 13
        by_name = {item["category"]: item for item in body}
        assert by_name["deflection"]["tolerance"] == 0.001
        assert by_name["deflection"]["shares"]["intermediate"] == pytest.approx(0.02)
        assert by_name["frame"]["shares"]["beginner"] == 0.0

    def test_difficulties(self, client):
        assert client.get("/api/problems/difficulties").json() == [
            "beginner", "intermediate", "advanced", "mixed",
        ]


class TestGrade:
    @pytest.mark.parametrize(
        "category, answer, selected, expected",
        [
            ("simple-concentrated", 60, 60.005, True),
            ("simple-concentrated", 60, 60.02, False),
            ("section-properties", 648000, 648000, True),
            ("section-properties", 648000, 648000.001, False),
            ("deflection", 0.0625, 0.0629, True),
        ],
    )
    def test_grading_uses_category_tolerance(self, client, category, answer, selected, expected):
        response = client.post(
            "/api/problems/grade",
            json={"category": category, "answer": answer, "selected": selected},
        )
        assert response.status_code == 200
        assert response.json()["is_correct"] is expected

    def test_unknown_category(self, client):
        response = client.post(
            "/api/problems/grade",
            json={"category": "arches", "answer": 1, "selected": 1},
        )
        assert response.status_code == 400
