# storefront/routers/image.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from storefront.schemas.common import Envelope
from storefront.schemas.image import ImageDetailsRead, ImageRead
from storefront.storage.images import ImageStore, get_image_store, image_url

router = APIRouter(prefix="/images", tags=["images"])


def _full_url(request: Request, url: str) -> str:
    return f"{str(request.base_url).rstrip('/')}{url}"


@router.get(
    "",
    response_model=Envelope[List[ImageRead]],
    response_model_exclude_none=True,
    summary="List uploaded images",
)
def list_images(request: Request, images: ImageStore = Depends(get_image_store)):
    data = []
    for filename in images.list_images():
        url = image_url(filename)
        data.append(ImageRead(filename=filename, url=url, full_url=_full_url(request, url)))
    return Envelope[List[ImageRead]](data=data, count=len(data))


@router.get(
    "/view/{filename}",
    response_class=FileResponse,
    summary="Stream the raw image file",
)
def view_image(filename: str, images: ImageStore = Depends(get_image_store)):
    path, media_type = images.open(filename)
    return FileResponse(path, media_type=media_type)


@router.get(
    "/details/{filename}",
    response_model=Envelope[ImageDetailsRead],
    response_model_exclude_none=True,
    summary="Image file metadata",
)
def image_details(filename: str, request: Request, images: ImageStore = Depends(get_image_store)):
    info = images.details(filename)
    url = image_url(info.filename)
    return Envelope[ImageDetailsRead](
        data=ImageDetailsRead(
            filename=info.filename,
            url=url,
            full_url=_full_url(request, url),
            size=info.size,
            created=info.created,
            modified=info.modified,
        )
    )
