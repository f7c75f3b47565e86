"""Core services exports."""

# Database Services
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

# Product Services
from .product import PAGE_SIZE, CatalogQueryService, ImageAssetManager, ProductService

__all__ = [
    # Database Services
    "DbManageService",
    "DbSessionService",
    # Product Services
    "PAGE_SIZE",
    "CatalogQueryService",
    "ImageAssetManager",
    "ProductService",
]
