"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import (
    CatalogQueryService,
    ImageAssetManager,
    ProductService,
)
from src.catalog.core.storage import AssetStore
from src.catalog.runtime.context import get_config


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session scoped to the request."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_asset_store(request: Request) -> AssetStore:
    """Get the asset store instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.asset_store


def get_image_manager(
    asset_store: AssetStore = Depends(get_asset_store),
) -> ImageAssetManager:
    return ImageAssetManager(asset_store, namespace=get_config().storage.namespace)


def get_catalog_query_service(
    session: Session = Depends(get_db_session),
    asset_store: AssetStore = Depends(get_asset_store),
) -> CatalogQueryService:
    return CatalogQueryService(session, asset_store)


def get_product_service(
    session: Session = Depends(get_db_session),
    image_manager: ImageAssetManager = Depends(get_image_manager),
) -> ProductService:
    return ProductService(
        session,
        image_manager,
        delete_image_on_product_delete=get_config().storage.delete_image_on_product_delete,
    )
