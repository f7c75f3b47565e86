"""Catalog domain exceptions.

Raised by the service layer and the storage adapters. The API layer
translates them into HTTP responses in ``src.catalog.api.http.app``.
"""

from __future__ import annotations

from typing import Any


class CatalogError(Exception):
    """Base class for every error raised by the catalog core."""

    status_code: int = 500

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(CatalogError):
    """Malformed or missing product fields."""

    status_code = 422

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(CatalogError):
    """The product does not exist or has been soft-deleted."""

    status_code = 404


class AssetStoreError(CatalogError):
    """Upload, delete or existence check failed against the asset backend."""

    status_code = 503


class RecordStoreError(CatalogError):
    """The product record could not be persisted."""

    status_code = 500
