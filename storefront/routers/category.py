# storefront/routers/category.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from storefront.crud import category as crud
from storefront.crud import product as product_crud
from storefront.database import get_db
from storefront.schemas.category import CategoryPayload, CategoryRead
from storefront.schemas.common import Envelope, Pagination
from storefront.schemas.product import ProductRead

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=Envelope[List[CategoryRead]],
    response_model_exclude_none=True,
    summary="List categories (sorted by name)",
)
def list_categories(db: Session = Depends(get_db)):
    items = [CategoryRead.model_validate(c) for c in crud.list_categories(db)]
    return Envelope[List[CategoryRead]](data=items, count=len(items))


@router.get(
    "/{category_id}",
    response_model=Envelope[CategoryRead],
    response_model_exclude_none=True,
    summary="Get category by id",
)
def get_category(category_id: int, db: Session = Depends(get_db)):
    obj = crud.get_or_404(db, category_id)
    return Envelope[CategoryRead](data=CategoryRead.model_validate(obj))


@router.post(
    "",
    response_model=Envelope[CategoryRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
def create_category(payload: CategoryPayload, db: Session = Depends(get_db)):
    obj = crud.create(db, payload.model_dump())
    return Envelope[CategoryRead](
        data=CategoryRead.model_validate(obj),
        message="Category created successfully",
    )


@router.put(
    "/{category_id}",
    response_model=Envelope[CategoryRead],
    response_model_exclude_none=True,
    summary="Update category",
)
def update_category(category_id: int, payload: CategoryPayload, db: Session = Depends(get_db)):
    obj = crud.update(db, category_id, payload.model_dump())
    return Envelope[CategoryRead](
        data=CategoryRead.model_validate(obj),
        message="Category updated successfully",
    )


@router.delete(
    "/{category_id}",
    response_model=Envelope[None],
    response_model_exclude_none=True,
    summary="Delete category (blocked while products reference it)",
)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    crud.delete(db, category_id)
    return Envelope[None](message="Category deleted successfully")


@router.get(
    "/{category_id}/products",
    response_model=Envelope[List[ProductRead]],
    response_model_exclude_none=True,
    summary="List products of one category (newest first)",
)
def list_category_products(
    response: Response,
    category_id: int,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=product_crud.DEFAULT_PAGE_SIZE, ge=1, le=product_crud.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    items, total = product_crud.list_by_category(db, category_id, page=page, limit=limit)
    # antet util pentru UI-uri/tabele
    response.headers["X-Total-Count"] = str(total)
    return Envelope[List[ProductRead]](
        data=[ProductRead.model_validate(p) for p in items],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )
