"""Tests for the product mutation flow and its image lifecycle."""

from decimal import Decimal
from unittest.mock import Mock, patch

import pytest
from sqlalchemy.exc import OperationalError

from src.catalog.core.exceptions import AssetStoreError, NotFoundError, RecordStoreError
from src.catalog.core.services import ImageAssetManager, ProductService
from src.catalog.core.storage import AssetStore
from src.catalog.entities.service.product import ProductFields, ProductRepository


def _fields(**overrides) -> ProductFields:
    data = {"name": "Desk Lamp", "sku": "LGT-100", "price": "19.90", "stock": 3}
    data.update(overrides)
    return ProductFields(**data)


class TestCreate:
    def test_create_without_file(self, product_service, catalog, asset_store):
        """Scenario A: no file, no image, no URL."""
        product = product_service.create_product(_fields())

        assert product.image is None
        assert product.image_url is None
        assert asset_store.paths() == []

        listed = catalog.list_products().items
        assert [p.id for p in listed] == [product.id]
        assert listed[0].image_url is None

    def test_create_with_file(self, product_service, session, asset_store, make_upload):
        """Scenario B: the stored path is persisted and resolved to a URL."""
        product = product_service.create_product(_fields(), make_upload(content=b"lamp"))

        assert product.image in asset_store.paths()
        assert asset_store.read(product.image) == b"lamp"
        assert product.image_url == f"/storage/{product.image}"

        stored = ProductRepository(session).get(product.id)
        assert stored.image == product.image
        assert stored.price == Decimal("19.90")

    def test_upload_failure_aborts_create(self, session, catalog, make_upload):
        store = Mock(spec=AssetStore)
        store.store.side_effect = AssetStoreError("disk full")
        service = ProductService(session, ImageAssetManager(store))

        with pytest.raises(AssetStoreError):
            service.create_product(_fields(), make_upload())

        assert catalog.list_products().total == 0

    def test_record_failure_leaves_orphan_and_raises(
        self, product_service, session, catalog, asset_store, make_upload
    ):
        with patch.object(session, "commit", side_effect=OperationalError("INSERT", {}, Exception("locked"))):
            with pytest.raises(RecordStoreError):
                product_service.create_product(_fields(), make_upload())

        # The uploaded file stays behind; the product never becomes visible
        assert len(asset_store.paths()) == 1
        assert catalog.list_products().total == 0


class TestUpdate:
    def test_update_replaces_image(self, product_service, session, asset_store, make_upload):
        """Scenario C: old file deleted, new path persisted."""
        created = product_service.create_product(_fields(), make_upload(content=b"old"))
        old_path = created.image

        updated = product_service.update_product(
            created.id, _fields(name="Floor Lamp"), make_upload(content=b"new")
        )

        assert updated.image != old_path
        assert not asset_store.exists(old_path)
        assert asset_store.read(updated.image) == b"new"
        assert updated.name == "Floor Lamp"
        assert ProductRepository(session).get(created.id).image == updated.image

    def test_update_replaces_image_when_old_file_already_gone(
        self, product_service, session, product_factory, asset_store, make_upload
    ):
        product_id = product_factory(image="products/old.png")

        updated = product_service.update_product(product_id, _fields(), make_upload())

        assert updated.image != "products/old.png"
        assert asset_store.paths() == [updated.image]

    def test_update_without_file_keeps_image(self, session, product_factory):
        """Scenario D: no new file, image untouched, no delete call."""
        product_id = product_factory(image="products/old.png")
        store = Mock(spec=AssetStore)
        store.public_url.side_effect = lambda path: f"/storage/{path}"
        service = ProductService(session, ImageAssetManager(store))

        updated = service.update_product(product_id, _fields(stock=42))

        assert updated.image == "products/old.png"
        assert updated.image_url == "/storage/products/old.png"
        assert updated.stock == 42
        store.delete.assert_not_called()
        store.exists.assert_not_called()
        store.store.assert_not_called()
        assert ProductRepository(session).get(product_id).image == "products/old.png"

    def test_update_unknown_product(self, product_service):
        with pytest.raises(NotFoundError):
            product_service.update_product("missing", _fields())

    def test_update_deleted_product(self, product_service, product_factory):
        product_id = product_factory(deleted=True)

        with pytest.raises(NotFoundError):
            product_service.update_product(product_id, _fields())

    def test_upload_failure_keeps_previous_reference(self, session, product_factory, make_upload):
        product_id = product_factory(image="products/old.png")
        store = Mock(spec=AssetStore)
        store.exists.return_value = True
        store.delete.return_value = True
        store.store.side_effect = AssetStoreError("quota exceeded")
        service = ProductService(session, ImageAssetManager(store))

        with pytest.raises(AssetStoreError):
            service.update_product(product_id, _fields(), make_upload())

        # Known gap: the record still points at the file that was just deleted
        assert ProductRepository(session).get(product_id).image == "products/old.png"
        store.delete.assert_called_once_with("products/old.png")


class TestDelete:
    def test_soft_delete_keeps_image(
        self, product_service, session, catalog, image_manager, asset_store, make_upload
    ):
        """Scenario E: hidden from listings, file and URL still available."""
        created = product_service.create_product(_fields(), make_upload())

        product_service.delete_product(created.id)

        assert catalog.list_products().total == 0
        assert ProductRepository(session).get(created.id) is None
        row = ProductRepository(session).get(created.id, include_deleted=True)
        assert row.deleted_at is not None
        assert row.image == created.image
        assert asset_store.exists(created.image)
        assert image_manager.resolve_url(row.image) == created.image_url

    def test_delete_twice_is_not_found(self, product_service):
        created = product_service.create_product(_fields())
        product_service.delete_product(created.id)

        with pytest.raises(NotFoundError):
            product_service.delete_product(created.id)

    def test_delete_can_remove_image_when_enabled(
        self, session, image_manager, asset_store, make_upload
    ):
        service = ProductService(session, image_manager, delete_image_on_product_delete=True)
        created = service.create_product(_fields(), make_upload())

        service.delete_product(created.id)

        assert not asset_store.exists(created.image)


class TestGet:
    def test_get_returns_view_with_url(self, product_service, make_upload):
        created = product_service.create_product(_fields(), make_upload())

        fetched = product_service.get_product(created.id)

        assert fetched.id == created.id
        assert fetched.image_url == created.image_url

    def test_get_unknown(self, product_service):
        with pytest.raises(NotFoundError):
            product_service.get_product("missing")
