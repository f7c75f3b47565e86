"""Product mutation flow: create, edit, update and soft-delete."""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from src.catalog.core.exceptions import (
    AssetStoreError,
    NotFoundError,
    RecordStoreError,
)
from src.catalog.core.models.upload import UploadedImage
from src.catalog.core.services.product.image_assets import ImageAssetManager
from src.catalog.entities.service.product import (
    Product,
    ProductFields,
    ProductRepository,
    ProductView,
)


class ProductService:
    """Coordinates the image asset manager with the product record store.

    The image is always resolved before the record is written, and the record
    write is the single point at which a change becomes visible to readers.
    """

    def __init__(
        self,
        db_session: Session,
        image_manager: ImageAssetManager,
        delete_image_on_product_delete: bool = False,
    ):
        self._db_session = db_session
        self._repo = ProductRepository(db_session)
        self._images = image_manager
        self._delete_image_on_product_delete = delete_image_on_product_delete

    def create_product(
        self, fields: ProductFields, image: UploadedImage | None = None
    ) -> ProductView:
        # An AssetStoreError here aborts before the record store is touched
        image_path = self._images.resolve_on_create(image)

        product = Product(**fields.model_dump(), image=image_path)
        self._commit(lambda: self._repo.create(product), orphan=image_path)

        logger.info("Created product {} ({})", product.id, product.sku)
        return self._to_view(product)

    def get_product(self, product_id: str) -> ProductView:
        return self._to_view(self._load(product_id))

    def update_product(
        self,
        product_id: str,
        fields: ProductFields,
        image: UploadedImage | None = None,
    ) -> ProductView:
        product = self._load(product_id)

        image_path = self._images.resolve_on_update(image, product.image)
        new_upload = image_path if image_path != product.image else None

        product.apply(fields)
        product.image = image_path
        self._commit(lambda: self._repo.update(product), orphan=new_upload)

        logger.info("Updated product {}", product.id)
        return self._to_view(product)

    def delete_product(self, product_id: str) -> None:
        product = self._load(product_id)
        self._commit(lambda: self._repo.soft_delete(product.id))
        logger.info("Soft-deleted product {}", product.id)

        if self._delete_image_on_product_delete and product.image:
            try:
                self._images.delete_asset(product.image)
            except AssetStoreError as e:
                logger.warning(
                    "Could not delete image {} of deleted product {}: {}",
                    product.image,
                    product.id,
                    e,
                )

    def _load(self, product_id: str) -> Product:
        product = self._repo.get(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found", product_id=product_id)
        return product

    def _commit(self, write, orphan: str | None = None) -> None:
        """Run ``write`` and commit; on failure roll back and report any orphaned upload."""
        try:
            write()
            self._db_session.commit()
        except SQLAlchemyError as e:
            self._db_session.rollback()
            if orphan:
                logger.error("Record write failed; stored image {} is orphaned", orphan)
            raise RecordStoreError(f"Failed to persist product: {e}") from e

    def _to_view(self, product: Product) -> ProductView:
        return ProductView.from_product(product, self._images.resolve_url(product.image))
