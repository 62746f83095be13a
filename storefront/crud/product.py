# storefront/crud/product.py
from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.core.errors import NotFoundError, ValidationError
from storefront.crud import category as category_crud
from storefront.models import Product
from storefront.schemas.product import ProductForm
from storefront.storage.images import ImageStore, UploadedImage

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# NUMERIC(12,2): cel mult 10 cifre înainte de virgulă
PRICE_CEILING = Decimal("1e10")


# -------------------------- Helpers --------------------------

def _normalize_pagination(page: int, limit: int, *, max_size: int = MAX_PAGE_SIZE) -> tuple[int, int]:
    page = max(1, int(page))
    limit = max(1, min(int(limit), max_size))
    return page, limit


def _parse_price(raw: str) -> Decimal:
    try:
        value = Decimal(raw)
        if not value.is_finite() or value < 0:
            raise ValidationError("Price must be a non-negative number")
        # Aliniază la NUMERIC(12,2)
        value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError("Price must be a non-negative number")
    if value >= PRICE_CEILING:
        raise ValidationError("Price must be a non-negative number")
    return value


def _resolve_category_id(db: Session, raw: str) -> int:
    try:
        category_id = int(raw)
    except ValueError:
        raise ValidationError("Category not found")
    if category_crud.get(db, category_id) is None:
        raise ValidationError("Category not found")
    return category_id


def _validated_fields(db: Session, form: ProductForm) -> dict:
    """Câmpurile obligatorii + conversii; ridică ValidationError la prima problemă."""
    missing = form.missing_fields()
    if missing:
        raise ValidationError("All fields are required", details={"missing": missing})
    return {
        "name": form.name,
        "price": _parse_price(form.price),
        "description": form.description,
        "img_title": form.img_title,
        "alt": form.alt,
        "category_id": _resolve_category_id(db, form.category_id),
    }


# -------------------------- Reads / listing --------------------------

def list_products(
    db: Session,
    *,
    category_id: Optional[int] = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> Tuple[List[Product], int]:
    """
    Pagină de produse, cele mai noi primele (id desc ca tiebreaker).
    Returnează: (items, total)
    """
    page, limit = _normalize_pagination(page, limit)

    conditions = []
    if category_id is not None:
        conditions.append(Product.category_id == category_id)

    total = db.scalar(select(func.count(Product.id)).where(*conditions)) or 0

    stmt = (
        select(Product)
        .where(*conditions)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    items = db.execute(stmt).scalars().all()
    return list(items), int(total)


def list_by_category(
    db: Session, category_id: int, *, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
) -> Tuple[List[Product], int]:
    """Categoria nu se validează: un id necunoscut dă o pagină goală."""
    return list_products(db, category_id=category_id, page=page, limit=limit)


def get(db: Session, product_id: int) -> Optional[Product]:
    """Returnează produsul după ID (sau None); categoria vine prin joined load."""
    return db.get(Product, product_id)


def get_or_404(db: Session, product_id: int) -> Product:
    obj = get(db, product_id)
    if obj is None:
        raise NotFoundError("Product not found")
    return obj


# -------------------------- Mutations --------------------------

def create(
    db: Session,
    form: ProductForm,
    image: Optional[UploadedImage],
    *,
    images: ImageStore,
) -> Product:
    """
    Validează câmpurile, scrie imaginea, apoi persistă produsul.
    Dacă persistarea eșuează după scrierea imaginii, fișierul rămâne orfan.
    """
    missing = form.missing_fields()
    if missing:
        raise ValidationError("All fields are required", details={"missing": missing})
    if image is None:
        raise ValidationError("Image file is required")
    fields = _validated_fields(db, form)

    fields["img"] = images.store(image)
    obj = Product(**fields)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    logger.info("Product created id=%s img=%s", obj.id, obj.img)
    return obj


def update(
    db: Session,
    product_id: int,
    form: ProductForm,
    image: Optional[UploadedImage] = None,
    *,
    images: ImageStore,
) -> Product:
    """Imaginea e opțională; fișierul vechi nu se șterge."""
    fields = _validated_fields(db, form)
    obj = get_or_404(db, product_id)

    if image is not None:
        fields["img"] = images.store(image)

    for k, v in fields.items():
        setattr(obj, k, v)
    db.commit()
    db.refresh(obj)
    return obj


def delete(db: Session, product_id: int) -> None:
    """Șterge produsul; imaginea rămâne pe disc."""
    obj = get_or_404(db, product_id)
    db.delete(obj)
    db.commit()
    logger.info("Product deleted id=%s", product_id)
