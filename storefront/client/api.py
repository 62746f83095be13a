# storefront/client/api.py
"""
Client HTTP subțire peste API-ul /api, folosit de stratul de prezentare.

Orice răspuns non-2xx sau cu `success: false` devine ApiError cu mesajul din envelope.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 10.0

# (filename, content, content_type)
ImageFile = Tuple[str, bytes, str]


class ApiError(Exception):
    def __init__(self, message: str, *, status_code: Optional[int] = None, payload: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class StorefrontClient:
    def __init__(self, http: httpx.Client, *, api_prefix: str = "/api"):
        self._http = http
        self._api_prefix = api_prefix.rstrip("/")

    @classmethod
    def connect(cls, base_url: str = DEFAULT_BASE_URL, *, timeout: float = DEFAULT_TIMEOUT) -> "StorefrontClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "StorefrontClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # -------------------------- Transport --------------------------

    def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        response = self._http.request(method, f"{self._api_prefix}{url}", **kwargs)
        try:
            body = response.json()
        except ValueError:
            raise ApiError(
                f"Unexpected response from server ({response.status_code})",
                status_code=response.status_code,
            )
        if not response.is_success or not body.get("success", False):
            message = body.get("message") or "Something went wrong"
            logger.debug("%s %s failed: %s %s", method, url, response.status_code, message)
            raise ApiError(message, status_code=response.status_code, payload=body)
        return body

    @staticmethod
    def _params(params: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in params.items() if v is not None}

    @staticmethod
    def _form(fields: Mapping[str, Any]) -> Dict[str, str]:
        return {k: str(v) for k, v in fields.items() if v is not None}

    def _upload(self, method: str, url: str, fields: Mapping[str, Any], image: Optional[ImageFile]) -> Dict[str, Any]:
        # fără Content-Type explicit: httpx pune singur boundary-ul multipart
        files = {"image": image} if image is not None else None
        return self._request(method, url, data=self._form(fields), files=files)

    # -------------------------- Categories --------------------------

    def get_categories(self) -> Dict[str, Any]:
        return self._request("GET", "/categories")

    def get_category(self, category_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/categories/{category_id}")

    def create_category(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/categories", json=dict(data))

    def update_category(self, category_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/categories/{category_id}", json=dict(data))

    def delete_category(self, category_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/categories/{category_id}")

    # -------------------------- Products --------------------------

    def get_products(self, **params: Any) -> Dict[str, Any]:
        return self._request("GET", "/products", params=self._params(params))

    def get_product(self, product_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/products/{product_id}")

    def get_products_by_category(self, category_id: int, **params: Any) -> Dict[str, Any]:
        return self._request("GET", f"/categories/{category_id}/products", params=self._params(params))

    def create_product(self, fields: Mapping[str, Any], image: Optional[ImageFile] = None) -> Dict[str, Any]:
        return self._upload("POST", "/products", fields, image)

    def update_product(self, product_id: int, fields: Mapping[str, Any], image: Optional[ImageFile] = None) -> Dict[str, Any]:
        return self._upload("PUT", f"/products/{product_id}", fields, image)

    def delete_product(self, product_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/products/{product_id}")

    # -------------------------- Images --------------------------

    def get_images(self) -> Dict[str, Any]:
        return self._request("GET", "/images")

    def get_image_details(self, filename: str) -> Dict[str, Any]:
        return self._request("GET", f"/images/details/{filename}")

    def image_url(self, path: str) -> str:
        if path.startswith("/uploads/"):
            return f"{str(self._http.base_url).rstrip('/')}{path}"
        return path
