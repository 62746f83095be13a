# tests/test_images.py
from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from helpers import JPEG_BYTES, _assert_status, create_category, create_product
from storefront.core.errors import NotFoundError, ValidationError
from storefront.core.settings import settings
from storefront.storage.images import ImageStore, UploadedImage

MiB = 1024 * 1024


# --- ImageStore ---------------------------------------------------------------
def test_store_writes_under_generated_name(image_store: ImageStore):
    url = image_store.store(UploadedImage("holiday photo.JPG", JPEG_BYTES))
    name = url.rsplit("/", 1)[-1]
    assert url == f"/uploads/{name}"
    assert name.startswith("image-") and name.endswith(".JPG")
    assert (image_store.root / name).read_bytes() == JPEG_BYTES
    assert image_store.list_images() == [name]


@pytest.mark.parametrize("filename", ["doc.pdf", "image.bmp", "noext", ""])
def test_validate_rejects_non_image_extensions(image_store: ImageStore, filename: str):
    with pytest.raises(ValidationError) as ei:
        image_store.validate(UploadedImage(filename, b"data"))
    assert ei.value.message == "Only image files are allowed!"


@pytest.mark.parametrize("size", [4 * MiB, 5 * MiB])
def test_validate_accepts_up_to_the_limit(image_store: ImageStore, size: int):
    assert image_store.validate(UploadedImage("a.png", b"\x00" * size)) == ".png"


def test_validate_rejects_over_the_limit(image_store: ImageStore):
    with pytest.raises(ValidationError) as ei:
        image_store.validate(UploadedImage("a.gif", b"\x00" * (6 * MiB)))
    assert ei.value.message == "File too large. Maximum size is 5MB"
    assert image_store.list_images() == []


def test_store_retries_on_name_collision(image_store: ImageStore, monkeypatch):
    (image_store.root / "image-1-1.jpg").write_bytes(b"existing")
    names = iter(["image-1-1.jpg", "image-1-2.jpg"])
    monkeypatch.setattr(image_store, "_generate_name", lambda field, ext: next(names))

    url = image_store.store(UploadedImage("x.jpg", JPEG_BYTES))
    assert url == "/uploads/image-1-2.jpg"
    # fișierul existent nu e suprascris
    assert (image_store.root / "image-1-1.jpg").read_bytes() == b"existing"


def test_store_gives_up_after_repeated_collisions(image_store: ImageStore, monkeypatch):
    (image_store.root / "image-1-1.jpg").write_bytes(b"existing")
    monkeypatch.setattr(image_store, "_generate_name", lambda field, ext: "image-1-1.jpg")
    with pytest.raises(RuntimeError):
        image_store.store(UploadedImage("x.jpg", JPEG_BYTES))


def test_list_images_is_sorted_and_filtered(image_store: ImageStore):
    for name in ("b.png", "a.jpg", "c.GIF", "notes.txt"):
        (image_store.root / name).write_bytes(b"x")
    (image_store.root / "sub.jpg").mkdir()
    assert image_store.list_images() == ["a.jpg", "b.png", "c.GIF"]


@pytest.mark.parametrize("filename", ["../secret.jpg", "..", ".", "a/b.jpg", "missing.jpg"])
def test_resolve_rejects_paths_and_missing_files(image_store: ImageStore, filename: str):
    with pytest.raises(NotFoundError):
        image_store.resolve(filename)


def test_details_reports_size_and_times(image_store: ImageStore):
    (image_store.root / "a.png").write_bytes(b"12345")
    info = image_store.details("a.png")
    assert info.filename == "a.png"
    assert info.size == 5
    assert info.modified.tzinfo is not None


def test_open_maps_content_type(image_store: ImageStore):
    (image_store.root / "a.jpeg").write_bytes(b"x")
    (image_store.root / "raw.bin").write_bytes(b"x")
    assert image_store.open("a.jpeg")[1] == "image/jpeg"
    assert image_store.open("raw.bin")[1] == "application/octet-stream"


# --- Endpoints ----------------------------------------------------------------
def test_list_images_endpoint(client: httpx.Client, image_store: ImageStore):
    for name in ("b.png", "a.jpg", "readme.txt"):
        (image_store.root / name).write_bytes(b"x")

    r = client.get("/api/images")
    _assert_status(r, 200)
    j = r.json()
    assert j["count"] == 2
    assert j["data"] == [
        {"filename": "a.jpg", "url": "/uploads/a.jpg", "fullUrl": "http://testserver/uploads/a.jpg"},
        {"filename": "b.png", "url": "/uploads/b.png", "fullUrl": "http://testserver/uploads/b.png"},
    ]


def test_list_images_endpoint_empty(client: httpx.Client):
    j = client.get("/api/images").json()
    assert j == {"success": True, "data": [], "count": 0}


def test_view_image_streams_bytes(client: httpx.Client, image_store: ImageStore):
    (image_store.root / "a.png").write_bytes(b"\x89PNG")
    r = client.get("/api/images/view/a.png")
    _assert_status(r, 200)
    assert r.content == b"\x89PNG"
    assert r.headers["content-type"] == "image/png"


def test_view_unknown_extension_is_octet_stream(client: httpx.Client, image_store: ImageStore):
    (image_store.root / "blob.dat").write_bytes(b"raw")
    r = client.get("/api/images/view/blob.dat")
    _assert_status(r, 200)
    assert r.headers["content-type"] == "application/octet-stream"


def test_view_missing_image_is_404(client: httpx.Client):
    r = client.get("/api/images/view/missing.jpg")
    _assert_status(r, 404)
    assert r.json() == {"success": False, "message": "Image not found"}


def test_details_endpoint(client: httpx.Client, image_store: ImageStore):
    (image_store.root / "a.gif").write_bytes(b"GIF89a")
    r = client.get("/api/images/details/a.gif")
    _assert_status(r, 200)
    d = r.json()["data"]
    assert d["filename"] == "a.gif"
    assert d["url"] == "/uploads/a.gif"
    assert d["fullUrl"] == "http://testserver/uploads/a.gif"
    assert d["size"] == 6
    assert "created" in d and "modified" in d


def test_details_missing_image_is_404(client: httpx.Client):
    _assert_status(client.get("/api/images/details/nope.png"), 404)


def test_uploaded_product_image_appears_in_gallery(client: httpx.Client):
    cat = create_category(client)
    p = create_product(client, cat["id"])
    filename = p["img"].rsplit("/", 1)[-1]

    names = [i["filename"] for i in client.get("/api/images").json()["data"]]
    assert filename in names
    _assert_status(client.get(f"/api/images/view/{filename}"), 200)


def test_static_uploads_mount_serves_files(client: httpx.Client):
    store = ImageStore(settings.UPLOAD_DIR)
    url = store.store(UploadedImage("static.png", b"\x89PNG-static"))
    try:
        r = client.get(url)
        _assert_status(r, 200)
        assert r.content == b"\x89PNG-static"
    finally:
        (Path(settings.UPLOAD_DIR) / url.rsplit("/", 1)[-1]).unlink()
