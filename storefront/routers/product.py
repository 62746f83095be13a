# storefront/routers/product.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from storefront.crud import product as crud
from storefront.database import get_db
from storefront.schemas.common import Envelope, Pagination
from storefront.schemas.product import ProductDetail, ProductForm, ProductRead
from storefront.storage.images import ImageStore, UploadedImage, get_image_store

router = APIRouter(prefix="/products", tags=["products"])


def product_form(
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None, alias="categoryId"),
    img_title: Optional[str] = Form(None, alias="imgTitle"),
    alt: Optional[str] = Form(None),
) -> ProductForm:
    """Câmpurile text din multipart; prezența lor se validează în crud."""
    return ProductForm(
        name=name,
        price=price,
        description=description,
        category_id=category_id,
        img_title=img_title,
        alt=alt,
    )


def uploaded_image(
    image: Optional[UploadFile] = File(None),
    images: ImageStore = Depends(get_image_store),
) -> Optional[UploadedImage]:
    """Citește fișierul 'image' (cel mult limita store-ului + 1 octet, suficient pentru verificarea mărimii)."""
    if image is None or not image.filename:
        return None
    content = image.file.read(images.max_bytes + 1)
    return UploadedImage(filename=image.filename, content=content, field_name="image")


@router.get(
    "",
    response_model=Envelope[List[ProductRead]],
    response_model_exclude_none=True,
    summary="List products (newest first), optional category filter",
)
def list_products(
    response: Response,
    category_id: Optional[int] = Query(default=None, alias="categoryId", description="Filter by category id"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=crud.DEFAULT_PAGE_SIZE, ge=1, le=crud.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    items, total = crud.list_products(db, category_id=category_id, page=page, limit=limit)
    # Header util pentru UI-uri/tablere
    response.headers["X-Total-Count"] = str(total)
    return Envelope[List[ProductRead]](
        data=[ProductRead.model_validate(p) for p in items],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get(
    "/{product_id}",
    response_model=Envelope[ProductDetail],
    response_model_exclude_none=True,
    summary="Get a product by id (category expanded)",
)
def get_product(product_id: int, db: Session = Depends(get_db)):
    obj = crud.get_or_404(db, product_id)
    return Envelope[ProductDetail](data=ProductDetail.model_validate(obj))


@router.post(
    "",
    response_model=Envelope[ProductRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product (multipart, image required)",
)
def create_product(
    form: ProductForm = Depends(product_form),
    image: Optional[UploadedImage] = Depends(uploaded_image),
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store),
):
    obj = crud.create(db, form, image, images=images)
    return Envelope[ProductRead](
        data=ProductRead.model_validate(obj),
        message="Product created successfully",
    )


@router.put(
    "/{product_id}",
    response_model=Envelope[ProductRead],
    response_model_exclude_none=True,
    summary="Update a product (multipart, image optional)",
)
def update_product(
    product_id: int,
    form: ProductForm = Depends(product_form),
    image: Optional[UploadedImage] = Depends(uploaded_image),
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store),
):
    obj = crud.update(db, product_id, form, image, images=images)
    return Envelope[ProductRead](
        data=ProductRead.model_validate(obj),
        message="Product updated successfully",
    )


@router.delete(
    "/{product_id}",
    response_model=Envelope[None],
    response_model_exclude_none=True,
    summary="Delete a product (image file is kept)",
)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    crud.delete(db, product_id)
    return Envelope[None](message="Product deleted successfully")
