# storefront/models/product.py
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base
from storefront.models.base import TimestampMixin
from storefront.models.category import Category


class Product(TimestampMixin, Base):
    """
    Produs din catalog.

    Note:
    - `price` este obligatoriu și >= 0 (CHECK la nivel DB).
    - `img` reține calea relativă `/uploads/<fișier>`; existența fișierului nu se re-verifică.
    - `category_id` e validat în aplicație la scriere; FK fără ON DELETE CASCADE.
    """
    __tablename__ = "products"
    __table_args__ = (
        # listare pe categorie, cele mai noi primele
        Index("ix_products_category_id_created_at", "category_id", "created_at"),
        CheckConstraint("price >= 0", name="price_nonnegative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False)
    img: Mapped[str] = mapped_column(String(512), nullable=False)
    img_title: Mapped[str] = mapped_column(String(255), nullable=False)
    alt: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("categories.id"), nullable=False)

    category: Mapped[Category] = relationship(back_populates="products", lazy="joined")

    def __repr__(self) -> str:
        # scurtează numele în repr pentru loguri mai curate
        name_preview = (self.name[:32] + "…") if self.name and len(self.name) > 33 else self.name
        return f"<Product id={self.id!r} name={name_preview!r} category_id={self.category_id!r}>"
