"""Asset storage abstractions for product images."""

from .asset_store import (
    AssetStore,
    InMemoryAssetStore,
    LocalAssetStore,
    create_asset_store,
)

__all__ = ["AssetStore", "InMemoryAssetStore", "LocalAssetStore", "create_asset_store"]
