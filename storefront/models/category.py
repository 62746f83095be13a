# storefront/models/category.py
from __future__ import annotations

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base
from storefront.models.base import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from storefront.models.product import Product


class Category(TimestampMixin, Base):
    """
    Tabelul 'categories'.
    - Unicitate exactă (case-sensitive) pe nume.
    - Fără cascade spre produse: ștergerea e blocată din aplicație cât timp există produse.
    """
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("name", name="uq_categories_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False)

    products: Mapped[List["Product"]] = relationship(back_populates="category")

    def __repr__(self) -> str:  # pragma: no cover
        name_preview = (self.name[:32] + "…") if self.name and len(self.name) > 33 else self.name
        return f"<Category id={self.id!r} name={name_preview!r}>"
