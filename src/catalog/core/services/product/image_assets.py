"""Image asset lifecycle for products.

Keeps a product's stored ``image`` path pointing at an existing file, or empty.
Every decision about what to upload and what to discard is made here, before
the product record is written.

There is no transaction spanning the asset store and the record store:

* a record write that fails after a successful upload leaves an orphaned file;
* on replacement the old file is deleted before the new one is stored, so a
  failed upload leaves the product pointing at a file that no longer exists;
* two concurrent updates of one product can each delete the other's upload.

Deletes are existence-checked and idempotent so that repeating an operation is
always safe.
"""

from loguru import logger

from src.catalog.core.exceptions import AssetStoreError
from src.catalog.core.models.upload import UploadedImage
from src.catalog.core.storage.asset_store import AssetStore

DEFAULT_NAMESPACE = "products"


class ImageAssetManager:
    """Uploads, replaces, deletes and resolves URLs for product images."""

    def __init__(self, asset_store: AssetStore, namespace: str = DEFAULT_NAMESPACE):
        self._store = asset_store
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def resolve_on_create(self, new_file: UploadedImage | None) -> str | None:
        """Return the image path for a new product.

        Raises:
            AssetStoreError: If the upload fails; the product must not be created.
        """
        if new_file is None:
            return None
        return self._upload(new_file)

    def resolve_on_update(
        self, new_file: UploadedImage | None, current_image: str | None
    ) -> str | None:
        """Return the image path to persist on an updated product.

        No new file keeps ``current_image`` as is. A new file replaces the
        current one: the old file is deleted first (a missing file is fine,
        a failing delete is logged and skipped), then the new file is stored.

        Raises:
            AssetStoreError: If storing the new file fails.
        """
        if new_file is None:
            return current_image

        if current_image:
            try:
                self.delete_asset(current_image)
            except AssetStoreError as e:
                logger.warning(
                    "Could not delete replaced image {}; leaving it orphaned: {}",
                    current_image,
                    e,
                )

        return self._upload(new_file)

    def delete_asset(self, path: str | None) -> bool:
        """Delete ``path`` if it exists. Returns True only when a file was removed."""
        if not path:
            return False

        if not self._store.exists(path):
            logger.debug("Image {} already absent; nothing to delete", path)
            return False

        deleted = self._store.delete(path)
        if deleted:
            logger.info("Deleted image {}", path)
        return deleted

    def resolve_url(self, path: str | None) -> str | None:
        """Map a stored path to its public URL without touching the store."""
        if not path:
            return None
        return self._store.public_url(path)

    def _upload(self, new_file: UploadedImage) -> str:
        path = self._store.store(
            new_file.content,
            self._namespace,
            filename=new_file.filename,
            content_type=new_file.content_type,
        )
        logger.info(
            "Stored image {} ({} bytes, {})",
            path,
            new_file.size,
            new_file.content_type or "unknown type",
        )
        return path
