"""API tests for CORS and application lifespan."""

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_gateway, get_payment_store
from app.config import settings
from app.main import create_application
from app.services.payment_store import InMemoryPaymentStore

pytestmark = pytest.mark.api

STOREFRONT = "https://shop.example.lk"


class RecordingStore(InMemoryPaymentStore):
    """In-memory store that counts close() calls."""

    def __init__(self):
        super().__init__()
        self.close_calls = 0

    async def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def storefront_client(monkeypatch, gateway, store):
    monkeypatch.setattr(settings, "frontend_url", STOREFRONT)
    application = create_application()
    application.dependency_overrides[get_gateway] = lambda: gateway
    application.dependency_overrides[get_payment_store] = lambda: store
    with TestClient(application) as test_client:
        yield test_client


def preflight(client, origin):
    return client.options(
        "/api/payment/hash",
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": "GET",
        },
    )


class TestCors:
    """CORS is limited to FRONTEND_URL."""

    def test_preflight_from_storefront_allowed(self, storefront_client):
        resp = preflight(storefront_client, STOREFRONT)

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == STOREFRONT
        assert resp.headers["access-control-allow-credentials"] == "true"

    def test_preflight_from_foreign_origin_refused(self, storefront_client):
        resp = preflight(storefront_client, "https://evil.example.com")

        assert resp.status_code == 400
        assert "access-control-allow-origin" not in resp.headers

    def test_simple_request_from_storefront_gets_cors_headers(self, storefront_client):
        resp = storefront_client.get(
            "/api/payment/hash",
            params={"amount": "10"},
            headers={"Origin": STOREFRONT},
        )

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == STOREFRONT
        assert resp.headers["access-control-allow-credentials"] == "true"

    def test_no_origin_allowed_when_frontend_url_unset(self, monkeypatch):
        monkeypatch.setattr(settings, "frontend_url", None)
        with TestClient(create_application()) as test_client:
            resp = preflight(test_client, STOREFRONT)

        assert resp.status_code == 400
        assert "access-control-allow-origin" not in resp.headers


class TestLifespan:
    """Application startup and shutdown."""

    def test_store_closed_on_shutdown(self, gateway):
        store = RecordingStore()
        application = create_application()
        application.dependency_overrides[get_gateway] = lambda: gateway
        application.dependency_overrides[get_payment_store] = lambda: store

        with TestClient(application) as test_client:
            assert test_client.get("/api/health").status_code == 200
            assert store.close_calls == 0

        assert store.close_calls == 1
