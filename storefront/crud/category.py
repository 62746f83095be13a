# storefront/crud/category.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.errors import ConflictError, NotFoundError, ValidationError
from storefront.models import Category, Product

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "Category name already exists"


# -------------------------- Helpers --------------------------

def _require_fields(data: dict) -> tuple[str, str]:
    name = data.get("name")
    description = data.get("description")
    if not name or not description:
        raise ValidationError("Name and description are required")
    return name, description


# -------------------------- Reads / listing --------------------------

def list_categories(db: Session) -> List[Category]:
    """Toate categoriile, alfabetic după nume (id ca tiebreaker)."""
    stmt = select(Category).order_by(Category.name.asc(), Category.id.asc())
    return list(db.execute(stmt).scalars().all())


def get(db: Session, category_id: int) -> Optional[Category]:
    return db.get(Category, category_id)


def get_or_404(db: Session, category_id: int) -> Category:
    obj = get(db, category_id)
    if obj is None:
        raise NotFoundError("Category not found")
    return obj


def get_by_name(db: Session, name: str) -> Optional[Category]:
    """Potrivire exactă (case-sensitive), la fel ca unique constraint-ul."""
    if not name:
        return None
    stmt = select(Category).where(Category.name == name)
    return db.execute(stmt).scalar_one_or_none()


def count_products(db: Session, category_id: int) -> int:
    stmt = select(func.count(Product.id)).where(Product.category_id == category_id)
    return int(db.scalar(stmt) or 0)


# -------------------------- Mutations --------------------------

def create(db: Session, data: dict) -> Category:
    name, description = _require_fields(data)
    if get_by_name(db, name):
        raise ConflictError(DUPLICATE_NAME_MESSAGE)

    obj = Category(name=name, description=description)
    db.add(obj)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # cursă între verificare și insert → tot conflict
        raise ConflictError(DUPLICATE_NAME_MESSAGE) from e
    db.refresh(obj)
    logger.info("Category created id=%s name=%r", obj.id, obj.name)
    return obj


def update(db: Session, category_id: int, data: dict) -> Category:
    name, description = _require_fields(data)
    obj = get_or_404(db, category_id)

    other = get_by_name(db, name)
    if other and other.id != obj.id:
        raise ConflictError(DUPLICATE_NAME_MESSAGE)

    obj.name = name
    obj.description = description
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(DUPLICATE_NAME_MESSAGE) from e
    db.refresh(obj)
    return obj


def delete(db: Session, category_id: int) -> None:
    """
    Verificare explicită înainte de ștergere (nu există cascade în DB).
    Verificarea și ștergerea nu sunt atomice una față de alta.
    """
    product_count = count_products(db, category_id)
    if product_count > 0:
        raise ConflictError(
            f"Cannot delete category. {product_count} products are assigned to this category.",
            details={"productCount": product_count},
        )
    obj = get_or_404(db, category_id)
    db.delete(obj)
    db.commit()
    logger.info("Category deleted id=%s", category_id)
