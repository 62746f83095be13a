# tests/conftest.py
from __future__ import annotations

import os
import tempfile

# --- Config din env (înainte de importul aplicației) ---------------------------
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SQLALCHEMY_CREATE_ALL"] = "1"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="storefront-uploads-")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from storefront.database import Base, engine  # noqa: E402
from storefront.main import app  # noqa: E402
from storefront.storage.images import ImageStore, get_image_store  # noqa: E402


@pytest.fixture()
def image_store(tmp_path) -> ImageStore:
    """Director de upload izolat per test."""
    return ImageStore(tmp_path / "uploads")


@pytest.fixture()
def client(image_store: ImageStore):
    """TestClient (httpx) cu DB SQLite in-memory, recreată la fiecare test."""
    app.dependency_overrides[get_image_store] = lambda: image_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)
