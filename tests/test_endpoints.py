"""Tests for the dashboard API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import FakeClock, FakeOpenMeteo, build_service
from hourly_forecast.config import VERSION
from hourly_forecast.main import create_app
from hourly_forecast.session import SessionController


@pytest.fixture
def api(fake_api: FakeOpenMeteo, clock: FakeClock) -> TestClient:
    # No lifespan: the session is driven only by requests, without timers
    session = SessionController(service=build_service(fake_api, clock), clock=clock)
    return TestClient(create_app(session))


class TestServiceEndpoints:

    def test_health(self, api: TestClient) -> None:
        response = api.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "hourly-forecast"}

    def test_info(self, api: TestClient) -> None:
        body = api.get("/api/info").json()
        assert body["default_location"] == "Rajshahi"
        assert body["version"] == VERSION

    def test_openapi_version_matches_info(self, api: TestClient) -> None:
        assert api.get("/openapi.json").json()["info"]["version"] == api.get("/api/info").json()["version"]

    def test_index_page(self, api: TestClient) -> None:
        response = api.get("/")
        assert response.status_code == 200
        assert "Hour-by-Hour Forecast" in response.text


class TestDashboardEndpoints:

    def test_initial_dashboard(self, api: TestClient) -> None:
        body = api.get("/api/dashboard").json()
        assert body["status"] == "idle"
        assert body["location"] is None
        assert body["active_tab"] == "hourly"

    def test_search(self, api: TestClient) -> None:
        body = api.post("/api/search", json={"query": "Rajshahi"}).json()
        assert body["status"] == "ready"
        assert body["location"]["name"] == "Rajshahi"
        assert body["location"]["flag_code"] == "bd"
        assert len(body["daily"]) == 8
        assert body["current"]["condition"] == "Light rain"

    def test_search_not_found(self, api: TestClient) -> None:
        api.post("/api/search", json={"query": "Rajshahi"})
        body = api.post("/api/search", json={"query": "Zzzzznotaplace"}).json()
        assert body["status"] == "failed"
        assert body["error"] == "Location not found"
        assert body["error_kind"] == "LocationNotFound"
        assert body["location"]["name"] == "Rajshahi"

    def test_search_uses_typed_text(self, api: TestClient) -> None:
        api.post("/api/search/text", json={"text": "Rajkot"})
        body = api.post("/api/search", json={}).json()
        assert body["location"]["name"] == "Rajkot"

    def test_session_state(self, api: TestClient) -> None:
        api.post("/api/search", json={"query": "Rajshahi"})
        body = api.get("/api/session").json()
        assert body["status"] == "ready"
        assert body["snapshot"]["place"]["country_code"] == "bd"
        assert len(body["snapshot"]["hourly"]["time"]) == 48

    def test_tab(self, api: TestClient) -> None:
        assert api.post("/api/tab", json={"tab": "8day"}).json()["active_tab"] == "8day"

    def test_unknown_tab_rejected(self, api: TestClient) -> None:
        assert api.post("/api/tab", json={"tab": "weekly"}).status_code == 422


class TestSuggestionEndpoints:

    def test_typing_updates_suggestions(self, api: TestClient) -> None:
        api.post("/api/search/focus")
        body = api.post("/api/search/text", json={"text": "raj"}).json()
        assert body["show_suggestions"] is True
        assert [s["label"] for s in body["suggestions"]][:2] == ["Rajshahi, BD", "Rajkot, IN"]
        assert len(body["suggestions"]) == 5

    def test_lookup_only(self, api: TestClient, fake_api: FakeOpenMeteo) -> None:
        places = api.get("/api/suggestions", params={"q": "raj", "limit": 2}).json()
        assert [p["display_name"] for p in places] == ["Rajshahi", "Rajkot"]
        assert api.get("/api/dashboard").json()["suggestions"] == []

    def test_lookup_failure_returns_empty(self, api: TestClient, fake_api: FakeOpenMeteo) -> None:
        fake_api.geocoding_status = 503
        assert api.get("/api/suggestions", params={"q": "raj"}).json() == []

    def test_out_of_range_result_returns_empty(self, api: TestClient, fake_api: FakeOpenMeteo) -> None:
        fake_api.places = [{"name": "Odd", "latitude": 95.0, "longitude": 10.0}]
        response = api.get("/api/suggestions", params={"q": "odd"})
        assert response.status_code == 200
        assert response.json() == []

    def test_blank_lookup(self, api: TestClient, fake_api: FakeOpenMeteo) -> None:
        assert api.get("/api/suggestions", params={"q": " "}).json() == []
        assert fake_api.requests == []

    def test_select(self, api: TestClient) -> None:
        body = api.post("/api/suggestions/select", json={"name": "Rajpur"}).json()
        assert body["status"] == "ready"
        assert body["location"]["name"] == "Rajpur"
        assert body["search_query"] == "Rajpur"
        assert body["show_suggestions"] is False

    def test_select_requires_name(self, api: TestClient) -> None:
        assert api.post("/api/suggestions/select", json={"name": ""}).status_code == 422
