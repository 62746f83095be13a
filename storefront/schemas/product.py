# storefront/schemas/product.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from storefront.schemas.category import CategoryRef, CategorySummary

# Câmpurile text obligatorii (numele de pe fir, camelCase)
REQUIRED_FIELDS = ("name", "price", "description", "categoryId", "imgTitle", "alt")


class ProductForm(BaseModel):
    """
    Câmpurile multipart pentru create/update, așa cum vin de pe fir (string-uri).
    Conversia price/categoryId și validarea prezenței se fac în crud.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    price: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    img_title: Optional[str] = None
    alt: Optional[str] = None

    @field_validator("*")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    def missing_fields(self) -> List[str]:
        present = self.model_dump(by_alias=True)
        return [f for f in REQUIRED_FIELDS if present.get(f) is None]


class ProductRead(BaseModel):
    """Produs cu categoria expandată la {id, name} (listări, create, update)."""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    price: float
    description: str
    img: str
    img_title: str
    alt: str
    category: CategorySummary = Field(
        alias="categoryId",
        validation_alias=AliasChoices("category", "categoryId"),
    )
    created_at: datetime
    updated_at: datetime


class ProductDetail(ProductRead):
    """Produs cu categoria expandată la {id, name, description}."""
    category: CategoryRef = Field(
        alias="categoryId",
        validation_alias=AliasChoices("category", "categoryId"),
    )
