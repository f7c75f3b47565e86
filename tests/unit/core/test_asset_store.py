"""Tests for asset store implementations."""

import re

import pytest

from src.catalog.core.exceptions import AssetStoreError
from src.catalog.core.storage import InMemoryAssetStore, LocalAssetStore, create_asset_store
from src.catalog.core.storage.asset_store import build_public_url, generate_asset_path
from src.catalog.runtime.config.config_data import StorageConfig


class TestGenerateAssetPath:
    """Generated paths are namespaced and unpredictable."""

    def test_extension_from_filename(self):
        path = generate_asset_path("products", "Holiday Photo.JPEG", "image/jpeg")

        assert re.fullmatch(r"products/[0-9a-f]{32}\.jpeg", path)

    def test_extension_from_content_type(self):
        path = generate_asset_path("products", None, "image/png")

        assert path.endswith(".png")

    def test_no_extension_when_unknown(self):
        path = generate_asset_path("products", "blob", None)

        assert re.fullmatch(r"products/[0-9a-f]{32}", path)

    def test_client_filename_is_not_reused(self):
        path = generate_asset_path("products", "../../etc/passwd.png")

        assert ".." not in path
        assert "passwd" not in path


class TestBuildPublicUrl:
    def test_joins_and_encodes(self):
        assert build_public_url("/storage/", "products/a b.png") == "/storage/products/a%20b.png"

    def test_absolute_base(self):
        url = build_public_url("https://cdn.example.com/storage", "/products/x.png")

        assert url == "https://cdn.example.com/storage/products/x.png"


class TestInMemoryAssetStore:
    def setup_method(self):
        self.store = InMemoryAssetStore(base_url="/storage")

    def test_store_exists_delete(self):
        path = self.store.store(b"data", "products", "a.png")

        assert self.store.exists(path)
        assert self.store.delete(path) is True
        assert self.store.exists(path) is False
        assert self.store.delete(path) is False

    def test_is_available(self):
        assert self.store.is_available() is True


class TestLocalAssetStore:
    """Filesystem-backed store."""

    def test_store_writes_file_under_root(self, local_asset_store):
        path = local_asset_store.store(b"\x89PNG", "products", "x.png", "image/png")

        target = local_asset_store.root / path
        assert target.read_bytes() == b"\x89PNG"
        assert local_asset_store.exists(path)

    def test_delete_existing_and_missing(self, local_asset_store):
        path = local_asset_store.store(b"bytes", "products", "x.png")

        assert local_asset_store.delete(path) is True
        assert local_asset_store.delete(path) is False
        assert local_asset_store.exists(path) is False

    def test_public_url_does_not_touch_filesystem(self, local_asset_store):
        url = local_asset_store.public_url("products/missing.png")

        assert url == "https://cdn.example.com/storage/products/missing.png"
        assert not local_asset_store.root.exists()

    @pytest.mark.parametrize("path", ["../outside.png", "products/../../outside.png"])
    def test_paths_outside_root_are_rejected(self, local_asset_store, path):
        with pytest.raises(AssetStoreError):
            local_asset_store.exists(path)
        with pytest.raises(AssetStoreError):
            local_asset_store.delete(path)

    def test_empty_path_is_rejected(self, local_asset_store):
        with pytest.raises(AssetStoreError):
            local_asset_store.exists("")

    def test_write_failure_becomes_asset_store_error(self, tmp_path):
        # A regular file where the root directory should be
        blocker = tmp_path / "public"
        blocker.write_text("not a directory")
        store = LocalAssetStore(blocker)

        with pytest.raises(AssetStoreError):
            store.store(b"data", "products", "x.png")

    def test_is_available_creates_root(self, local_asset_store):
        assert local_asset_store.is_available() is True
        assert local_asset_store.root.is_dir()


class TestCreateAssetStore:
    def test_memory_backend(self):
        store = create_asset_store(StorageConfig(backend="memory", public_url="/files"))

        assert isinstance(store, InMemoryAssetStore)
        assert store.public_url("products/a.png") == "/files/products/a.png"

    def test_local_backend(self, tmp_path):
        store = create_asset_store(StorageConfig(backend="local", root=str(tmp_path)))

        assert isinstance(store, LocalAssetStore)
        assert store.root == tmp_path.resolve()
