# storefront/core/errors.py
from __future__ import annotations

from typing import Any, Optional


class StorefrontError(Exception):
    """Baza pentru erorile de domeniu; handler-ul din main le mapează pe envelope."""
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(StorefrontError):
    """Input lipsă sau invalid (400)."""
    status_code = 400


class ConflictError(StorefrontError):
    """Unicitate sau integritate referențială încălcată (400)."""
    status_code = 400


class NotFoundError(StorefrontError):
    status_code = 404
