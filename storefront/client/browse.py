# storefront/client/browse.py
"""
Starea UI pentru paginile de catalog: listare, detaliu produs, home, contact.

Căutarea și sortarea din ProductBrowser lucrează DOAR pe pagina deja încărcată,
nu pe tot catalogul.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from storefront.client.api import ApiError, StorefrontClient

logger = logging.getLogger(__name__)

PRODUCTS_PER_PAGE = 12
HOMEPAGE_PRODUCTS_LIMIT = 8
RELATED_PRODUCTS_LIMIT = 4

ALL_CATEGORIES = "all"
ALL_CATEGORIES_ENTRY = {"id": ALL_CATEGORIES, "name": "All Products"}

SortKey = Literal["name", "price"]
SortOrder = Literal["asc", "desc"]


def _sort_value(product: Dict[str, Any], key: SortKey):
    value = product.get(key)
    if key == "name":
        return (value or "").lower()
    return float(value or 0)


@dataclass
class ProductBrowser:
    client: StorefrontClient
    page_size: int = PRODUCTS_PER_PAGE
    categories: List[Dict[str, Any]] = field(default_factory=list)
    products: List[Dict[str, Any]] = field(default_factory=list)
    pagination: Dict[str, Any] = field(default_factory=dict)
    selected_category: Union[int, str] = ALL_CATEGORIES
    search_term: str = ""
    sort_by: SortKey = "name"
    sort_order: SortOrder = "asc"
    current_page: int = 1
    error: Optional[str] = None

    # -------------------------- Fetch --------------------------

    def load(self) -> None:
        self.load_categories()
        self.load_products()

    def load_categories(self) -> None:
        try:
            response = self.client.get_categories()
        except ApiError as e:
            self.error = e.message
            return
        self.categories = [dict(ALL_CATEGORIES_ENTRY), *response["data"]]

    def load_products(self) -> None:
        params: Dict[str, Any] = {"page": self.current_page, "limit": self.page_size}
        if self.selected_category != ALL_CATEGORIES:
            params["categoryId"] = self.selected_category
        try:
            response = self.client.get_products(**params)
        except ApiError as e:
            self.error = e.message
            return
        self.products = response["data"]
        self.pagination = response.get("pagination", {})

    def retry(self) -> None:
        """Reîncearcă manual aceleași cereri."""
        self.error = None
        self.load()

    # -------------------------- Actions --------------------------

    def select_category(self, category_id: Union[int, str]) -> None:
        self.selected_category = category_id
        self.current_page = 1
        self.load_products()

    def go_to_page(self, page: int) -> None:
        self.current_page = page
        self.load_products()

    def set_search_term(self, term: str) -> None:
        self.search_term = term

    def set_sort(self, key: SortKey) -> None:
        self.sort_by = key

    def toggle_sort_order(self) -> None:
        self.sort_order = "desc" if self.sort_order == "asc" else "asc"

    # -------------------------- Derived --------------------------

    @property
    def visible_products(self) -> List[Dict[str, Any]]:
        items = self.products
        if self.search_term:
            term = self.search_term.lower()
            items = [
                p for p in items
                if term in (p.get("name") or "").lower() or term in (p.get("description") or "").lower()
            ]
        return sorted(
            items,
            key=lambda p: _sort_value(p, self.sort_by),
            reverse=self.sort_order == "desc",
        )

    @property
    def page_numbers(self) -> List[int]:
        pages = int(self.pagination.get("pages") or 0)
        return list(range(1, pages + 1)) if pages > 1 else []

    def summary(self) -> str:
        text = f"Showing {len(self.visible_products)} products"
        total = self.pagination.get("total")
        if total:
            text += f" of {total} total"
        return text


@dataclass
class ProductDetailView:
    client: StorefrontClient
    product: Optional[Dict[str, Any]] = None
    related_products: List[Dict[str, Any]] = field(default_factory=list)
    quantity: int = 1
    error: Optional[str] = None

    def load(self, product_id: int) -> None:
        try:
            self.product = self.client.get_product(product_id)["data"]
            category = self.product.get("categoryId")
            if category:
                related = self.client.get_products_by_category(category["id"], limit=RELATED_PRODUCTS_LIMIT)
                self.related_products = [p for p in related["data"] if p["id"] != product_id]
        except ApiError as e:
            self.error = e.message

    def set_quantity(self, quantity: int) -> None:
        self.quantity = max(1, quantity)


def load_featured_products(client: StorefrontClient, limit: int = HOMEPAGE_PRODUCTS_LIMIT) -> List[Dict[str, Any]]:
    """Cele mai noi produse pentru pagina principală."""
    return client.get_products(page=1, limit=limit)["data"]


DEPARTMENTS = {
    "general": "General Inquiry",
    "sales": "Sales",
    "support": "Technical Support",
    "returns": "Returns & Refunds",
    "partnership": "Partnership",
}


class ContactMessage(BaseModel):
    """Formularul de contact; nu are endpoint în API, trimiterea e doar locală."""
    name: str = Field(min_length=1)
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = None
    subject: str = "general"
    message: str = Field(min_length=1)

    @field_validator("name", "message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("subject")
    @classmethod
    def _known_department(cls, v: str) -> str:
        if v not in DEPARTMENTS:
            raise ValueError(f"subject must be one of: {', '.join(DEPARTMENTS)}")
        return v

    @property
    def department(self) -> str:
        return DEPARTMENTS[self.subject]
