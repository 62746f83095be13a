# storefront/schemas/common.py
from __future__ import annotations

import math
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Pagination(BaseModel):
    """Sumar de paginare: pages = ceil(total / limit)."""
    current: int = Field(ge=1)
    pages: int = Field(ge=0)
    total: int = Field(ge=0)
    limit: int = Field(ge=1)

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "Pagination":
        return cls(current=page, pages=math.ceil(total / limit), total=total, limit=limit)


class Envelope(BaseModel, Generic[T]):
    """
    Răspuns uniform: {success, data?, message?, error?, pagination?, count?}.
    Rutele folosesc response_model_exclude_none=True, deci cheile goale nu apar.
    """
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[Any] = None
    pagination: Optional[Pagination] = None
    count: Optional[int] = None
