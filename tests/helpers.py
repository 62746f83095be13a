# tests/helpers.py
from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

import httpx

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"fake-jpeg-payload"


# --- Utilitare ----------------------------------------------------------------
def _dump_response(r: httpx.Response) -> str:
    """Diagnostic compact pentru mesaje de aserție."""
    try:
        j = r.json()
    except Exception:
        j = None
    snippet = (r.text or "")[:500].replace("\n", "\\n")
    return (
        f"status={r.status_code} {r.request.method} {r.request.url} "
        f"json={j!r} text='{snippet}...'"
    )


def _assert_status(r: httpx.Response, expected: int | tuple[int, ...]):
    if isinstance(expected, int):
        ok = r.status_code == expected
        exp_str = str(expected)
    else:
        ok = r.status_code in expected
        exp_str = "|".join(map(str, expected))
    assert ok, f"expected {exp_str} but got: {_dump_response(r)}"


# --- Helper-e API -------------------------------------------------------------
def create_category(
    c: httpx.Client, name: Optional[str] = None, description: str = "test category"
) -> Dict[str, Any]:
    payload = {"name": name or f"Cat_{uuid.uuid4().hex[:8]}", "description": description}
    r = c.post("/api/categories", json=payload)
    _assert_status(r, 201)
    j = r.json()
    assert j["success"] is True, j
    assert isinstance(j["data"]["id"], int), j
    assert j["data"]["name"] == payload["name"], j
    return j["data"]


def product_fields(category_id: int, **overrides: Any) -> Dict[str, str]:
    fields = {
        "name": f"Prod_{uuid.uuid4().hex[:8]}",
        "price": "10.50",
        "description": "A product used in tests",
        "categoryId": str(category_id),
        "imgTitle": "Product photo",
        "alt": "Product photo alt",
    }
    fields.update({k: str(v) for k, v in overrides.items()})
    return fields


def image_file(filename: str = "photo.jpg", content: bytes = JPEG_BYTES, content_type: str = "image/jpeg"):
    return {"image": (filename, content, content_type)}


def create_product(c: httpx.Client, category_id: int, **overrides: Any) -> Dict[str, Any]:
    r = c.post("/api/products", data=product_fields(category_id, **overrides), files=image_file())
    _assert_status(r, 201)
    j = r.json()
    assert j["success"] is True, j
    assert isinstance(j["data"]["id"], int), j
    return j["data"]
