"""Product services: catalog queries, image assets and mutations."""

from .catalog_query import PAGE_SIZE, CatalogQueryService
from .image_assets import ImageAssetManager
from .product_service import ProductService

__all__ = ["PAGE_SIZE", "CatalogQueryService", "ImageAssetManager", "ProductService"]
