# tests/test_errors.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from helpers import _assert_status
from storefront.crud import category as category_crud
from storefront.database import Base, engine
from storefront.main import app
from storefront.storage.images import ImageStore, get_image_store


@pytest.fixture()
def lenient_client(image_store: ImageStore):
    """TestClient care întoarce răspunsul 500 în loc să re-ridice excepția."""
    app.dependency_overrides[get_image_store] = lambda: image_store
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


def _boom(*args, **kwargs):
    raise RuntimeError("db exploded")


def _duplicate(*args, **kwargs):
    raise IntegrityError("INSERT INTO categories", {}, Exception("UNIQUE constraint failed: categories.name"))


@pytest.mark.timeout(5)
def test_unhandled_error_is_500_with_raw_message(lenient_client: TestClient, monkeypatch):
    monkeypatch.setattr(category_crud, "list_categories", _boom)

    r = lenient_client.get("/api/categories")
    _assert_status(r, 500)
    assert r.json() == {
        "success": False,
        "message": "Internal Server Error",
        "error": "db exploded",
    }
    assert r.headers.get("X-Request-ID")


@pytest.mark.timeout(5)
def test_escaped_integrity_error_is_400_envelope(lenient_client: TestClient, monkeypatch):
    monkeypatch.setattr(category_crud, "create", _duplicate)

    r = lenient_client.post("/api/categories", json={"name": "Phones", "description": "Mobile phones"})
    _assert_status(r, 400)
    j = r.json()
    assert j["success"] is False
    assert j["message"] == "Integrity error."
    assert "UNIQUE constraint failed" in j["error"]
