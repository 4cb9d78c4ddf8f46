"""
Tests for the FastAPI routes, using an in-process TestClient.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app import create_app, get_predictor
from echo_chamber.core import SequencePredictor


@pytest.fixture
def predictor():
    return SequencePredictor()


@pytest.fixture
def client(predictor):
    return TestClient(create_app(predictor))


# -----------------------------------------------------------------
# Prediction
# -----------------------------------------------------------------

class TestPredictRoute:

    def test_predict(self, client):
        response = client.post("/api/predict", json={"sequence": [3, 6, 9, 12]})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "nextNumber": 15,
            "commonDifference": 3,
            "message": "The next number in the sequence is: 15",
        }

    def test_non_arithmetic_sequence(self, client):
        body = client.post("/api/predict", json={"sequence": [1, 2, 4, 8]}).json()
        assert body["success"] is False
        assert body["nextNumber"] is None

    def test_non_array_is_a_structured_failure(self, client):
        response = client.post("/api/predict", json={"sequence": "not an array"})
        assert response.status_code == 200
        assert response.json()["success"] is False

    def test_empty_list_reaches_the_predictor(self, client):
        response = client.post("/api/predict", json={"sequence": []})
        assert response.status_code == 200
        assert "at least 2 numbers" in response.json()["message"]

    @pytest.mark.parametrize("payload", [{}, {"sequence": None}])
    def test_missing_sequence(self, client, payload):
        response = client.post("/api/predict", json=payload)
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Sequence is required"}

    def test_body_that_is_not_an_object(self, client):
        response = client.post("/api/predict", json=[1, 2, 3])
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid request body"}

    def test_unexpected_error_becomes_500(self, client, predictor, monkeypatch):
        def boom(sequence):
            raise RuntimeError("boom")

        monkeypatch.setattr(predictor, "predict", boom)
        response = client.post("/api/predict", json={"sequence": [1, 2, 3]})
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Server error: boom"}


# -----------------------------------------------------------------
# Validation
# -----------------------------------------------------------------

class TestValidateRoute:

    def test_valid(self, client):
        body = client.post("/api/validate", json={"sequence": [2, 4, 6, 8]}).json()
        assert body["isValid"] is True
        assert body["difference"] == 2

    def test_invalid(self, client):
        body = client.post("/api/validate", json={"sequence": [1, 2, 4, 8]}).json()
        assert body["isValid"] is False
        assert body["difference"] is None

    def test_missing_sequence(self, client):
        response = client.post("/api/validate", json={})
        assert response.status_code == 400
        assert response.json() == {"isValid": False, "message": "Sequence is required"}

    def test_body_that_is_not_an_object(self, client):
        response = client.post("/api/validate", json=[1, 2, 4])
        assert response.status_code == 400
        assert response.json() == {"isValid": False, "message": "Invalid request body"}

    def test_validate_does_not_record(self, client, predictor):
        client.post("/api/validate", json={"sequence": [1, 2, 3]})
        assert predictor.list_memories() == []


# -----------------------------------------------------------------
# Memories
# -----------------------------------------------------------------

class TestMemoriesRoute:

    def test_empty(self, client):
        assert client.get("/api/memories").json() == {"memories": [], "count": 0}

    def test_lists_predictions_in_order(self, client):
        client.post("/api/predict", json={"sequence": [1, 2, 3]})
        client.post("/api/predict", json={"sequence": [1, 2, 4]})
        client.post("/api/predict", json={"sequence": [10, 20]})

        body = client.get("/api/memories").json()
        assert body["count"] == 2
        assert [m["index"] for m in body["memories"]] == [1, 2]
        first = body["memories"][0]
        assert first["sequence"] == [1, 2, 3]
        assert first["nextNumber"] == 4
        assert first["commonDifference"] == 1
        datetime.fromisoformat(first["timestamp"])

    def test_clear(self, client):
        client.post("/api/predict", json={"sequence": [1, 2, 3]})
        response = client.delete("/api/memories")
        assert response.json() == {"success": True, "message": "All memories have been cleared"}
        assert client.get("/api/memories").json()["count"] == 0

        client.post("/api/predict", json={"sequence": [5, 10]})
        assert client.get("/api/memories").json()["memories"][0]["index"] == 1


# -----------------------------------------------------------------
# Misc routes
# -----------------------------------------------------------------

class TestMiscRoutes:

    def test_self_test_uses_a_fresh_predictor(self, client, predictor):
        body = client.get("/api/test").json()
        assert body["success"] is True
        assert body["result"]["nextNumber"] == 15
        assert body["message"] == "Server is working correctly"
        assert predictor.list_memories() == []

    def test_unknown_route(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Endpoint not found"}

    @pytest.mark.parametrize("method, path", [
        ("put", "/api/predict"),
        ("post", "/api/memories"),
        ("get", "/api/validate"),
    ])
    def test_wrong_method_is_not_found(self, client, method, path):
        response = client.request(method.upper(), path)
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Endpoint not found"}

    def test_crash_outside_a_route_body(self):
        def broken_predictor():
            raise RuntimeError("no predictor")

        app = create_app()
        app.dependency_overrides[get_predictor] = broken_predictor
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/health")
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Server error: no predictor"}

        response = client.post("/api/validate", json={"sequence": [1, 2, 3]})
        assert response.status_code == 500
        assert response.json() == {"isValid": False, "message": "Server error: no predictor"}

    def test_home_page(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Echo Chamber" in response.text

    def test_home_page_offers_examples_and_connection_check(self, client):
        page = client.get("/").text
        assert 'id="testBtn"' in page
        assert 'data-sequence="10,7,4,1"' in page
        assert 'data-sequence="1,2,4,8"' not in page

        script = client.get("/static/app.js").text
        assert "'/api/test'" in script
        assert "function loadExample" in script

    def test_health(self, client):
        client.post("/api/predict", json={"sequence": [1, 2, 3]})
        body = client.get("/api/health").json()
        assert body["status"] == "healthy"
        assert body["predictions"] == 1

    def test_apps_do_not_share_history(self):
        first = TestClient(create_app())
        second = TestClient(create_app())
        first.post("/api/predict", json={"sequence": [1, 2, 3]})
        assert first.get("/api/memories").json()["count"] == 1
        assert second.get("/api/memories").json()["count"] == 0
