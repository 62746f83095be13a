# storefront/schemas/category.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _strip_or_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


class CategoryPayload(BaseModel):
    """
    Body pentru create/update. Câmpurile sunt opționale la nivel de schemă;
    prezența lor e verificată în crud (mesaj unitar "Name and description are required").
    """
    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        return _strip_or_none(v)

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"name": "Phones", "description": "Mobile phones"},
            ]
        },
    )


class CategorySummary(BaseModel):
    """Referință expandată în listări de produse."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CategoryRef(CategorySummary):
    """Referință expandată la citirea unui singur produs."""
    description: str


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
