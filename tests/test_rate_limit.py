import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from slotbook import main
from slotbook.api.middleware import rate_limit_middleware
from slotbook.api.middleware.rate_limit_middleware import RateLimitMiddleware


@pytest.fixture
def clock(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(rate_limit_middleware, "monotonic", lambda: now[0])
    return now


@pytest.fixture
def limited_client():
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, max_requests=2, window_seconds=60)

    @app.get("/ping")
    def ping():
        return {"ok": True}

    return TestClient(app)


def test_requests_past_the_limit_get_429(clock, limited_client):
    assert limited_client.get("/ping").status_code == 200
    clock[0] += 10
    assert limited_client.get("/ping").status_code == 200

    blocked = limited_client.get("/ping")
    assert blocked.status_code == 429
    assert blocked.json()["error"] == "rate_limited"
    assert blocked.headers["Retry-After"] == "50"


def test_window_slides(clock, limited_client):
    limited_client.get("/ping")
    limited_client.get("/ping")
    assert limited_client.get("/ping").status_code == 429

    clock[0] += 60
    assert limited_client.get("/ping").status_code == 200


def test_app_factory_installs_the_limiter(monkeypatch):
    monkeypatch.setattr(main.settings, "RATE_LIMIT_ENABLED", True)
    monkeypatch.setattr(main.settings, "RATE_LIMIT_REQUESTS", 3)
    client = TestClient(main.create_app())

    statuses = [client.get("/health/").status_code for _ in range(5)]
    assert statuses == [200, 200, 200, 429, 429]
