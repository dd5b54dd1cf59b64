import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from starlette.requests import Request

from app.auth.context import RequestContext
from app.main import app
from app.middleware.request_context import RequestContextMiddleware

client = TestClient(app)


class TestRequestContextFromClaims:
    def test_basic_claims(self):
        ctx = RequestContext.from_claims(
            {"sub": "user-123", "email": "talent@example.com", "role": "authenticated"}
        )

        assert ctx.user_id == "user-123"
        assert ctx.email == "talent@example.com"
        assert ctx.is_admin is False

    def test_admin_from_app_metadata(self):
        ctx = RequestContext.from_claims({"sub": "admin-1", "app_metadata": {"role": "admin"}})
        assert ctx.is_admin is True

    def test_user_metadata_cannot_grant_admin(self):
        ctx = RequestContext.from_claims({"sub": "user-9", "user_metadata": {"user_type": "admin"}})

        assert ctx.app_role is None
        assert ctx.is_admin is False

    def test_business_role_is_not_admin(self):
        ctx = RequestContext.from_claims({"sub": "biz-1", "app_metadata": {"role": "business"}})
        assert ctx.app_role == "business"
        assert ctx.is_admin is False

    def test_missing_sub_is_rejected(self):
        with pytest.raises(HTTPException) as exc_info:
            RequestContext.from_claims({"email": "nobody@example.com"})

        assert exc_info.value.status_code == 401

    def test_context_is_immutable(self):
        ctx = RequestContext(user_id="user-123")
        with pytest.raises(AttributeError):
            ctx.user_id = "someone-else"


class TestRequestMiddleware:
    def test_request_id_is_generated(self):
        response = client.get("/healthz")
        assert response.headers.get("X-Request-ID")

    def test_incoming_request_id_is_echoed(self):
        response = client.get("/healthz", headers={"X-Request-ID": "trace-abc"})
        assert response.headers["X-Request-ID"] == "trace-abc"

    def test_cors_headers_for_allowed_origin(self):
        response = client.get("/healthz", headers={"Origin": "http://localhost:5173"})

        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
        assert response.headers["Access-Control-Allow-Credentials"] == "true"

    def test_cors_preflight_allowed(self):
        response = client.options(
            "/notifications",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 204
        assert "GET" in response.headers["Access-Control-Allow-Methods"]

    def test_cors_preflight_rejected_for_unknown_origin(self):
        response = client.options(
            "/notifications",
            headers={
                "Origin": "https://evil.example.com",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 403
        assert "Access-Control-Allow-Origin" not in response.headers


def _request(client_host: str, forwarded_for: str | None = None) -> Request:
    headers = [(b"x-forwarded-for", forwarded_for.encode())] if forwarded_for else []
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/notifications",
            "headers": headers,
            "client": (client_host, 51234),
        }
    )


class TestClientIp:
    @pytest.fixture
    def middleware(self):
        return RequestContextMiddleware(app)

    def test_forwarded_for_ignored_by_default(self, middleware):
        request = _request("10.0.0.5", "203.0.113.7")
        assert middleware._extract_client_ip(request) == "10.0.0.5"

    def test_forwarded_for_from_trusted_proxy(self, middleware, monkeypatch):
        monkeypatch.setattr("app.middleware.request_context.settings.TRUST_X_FORWARDED_FOR", True)
        monkeypatch.setattr(
            "app.middleware.request_context.settings.TRUSTED_PROXY_IPS", ["10.0.0.5"]
        )

        request = _request("10.0.0.5", "203.0.113.7, 10.0.0.5")
        assert middleware._extract_client_ip(request) == "203.0.113.7"

    def test_forwarded_for_from_untrusted_peer(self, middleware, monkeypatch):
        monkeypatch.setattr("app.middleware.request_context.settings.TRUST_X_FORWARDED_FOR", True)
        monkeypatch.setattr(
            "app.middleware.request_context.settings.TRUSTED_PROXY_IPS", ["10.0.0.1"]
        )

        request = _request("198.51.100.9", "203.0.113.7")
        assert middleware._extract_client_ip(request) == "198.51.100.9"
