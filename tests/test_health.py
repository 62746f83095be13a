# tests/test_health.py
from __future__ import annotations

from typing import Any, Dict

import httpx
import pytest

from helpers import _dump_response


def _get_json(r: httpx.Response) -> Dict[str, Any]:
    ctype = r.headers.get("content-type", "").lower()
    assert ctype.startswith("application/json"), f"unexpected content-type: {ctype} | {_dump_response(r)}"
    return r.json()


@pytest.mark.timeout(5)
def test_health_ok(client: httpx.Client):
    r = client.get("/health")
    assert r.status_code == 200, _dump_response(r)
    # Contract minim: {"status": "ok"}
    assert _get_json(r).get("status") == "ok"


@pytest.mark.timeout(5)
def test_health_db_up(client: httpx.Client):
    r = client.get("/health/db")
    assert r.status_code == 200, _dump_response(r)
    body = _get_json(r)
    assert body["db"] == "up", body
    assert body["dialect"] == "sqlite", body


@pytest.mark.timeout(5)
def test_migrations_endpoint_reports_presence(client: httpx.Client):
    """Schema vine din create_all în teste, deci tabelul alembic_version lipsește."""
    r = client.get("/health/migrations")
    assert r.status_code == 200, _dump_response(r)
    body = _get_json(r)
    assert isinstance(body["present"], bool), body
    assert body["present"] is False, body


def test_request_id_is_propagated(client: httpx.Client):
    r = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert r.headers.get("X-Request-ID") == "abc123"
    assert r.headers.get("X-Content-Type-Options") == "nosniff"
    assert "X-Process-Time" in r.headers


def test_request_id_is_generated(client: httpx.Client):
    r = client.get("/health")
    assert len(r.headers.get("X-Request-ID", "")) == 12


def test_unknown_route_uses_envelope(client: httpx.Client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404, _dump_response(r)
    body = _get_json(r)
    assert body["success"] is False, body
    assert body["message"] == "Not Found", body


def test_head_or_options_do_not_error(client: httpx.Client):
    """Acceptăm 200/204/405/404 pentru HEAD/OPTIONS, dar nu 5xx."""
    assert client.head("/health").status_code < 500
    assert client.options("/health").status_code < 500


@pytest.mark.timeout(5)
def test_health_uptime_reports_seconds(client: httpx.Client):
    r = client.get("/health/uptime")
    assert r.status_code == 200, _dump_response(r)
    body = _get_json(r)
    assert isinstance(body["uptime_seconds"], (int, float)), body
    assert body["uptime_seconds"] >= 0, body
