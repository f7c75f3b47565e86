"""Asset store interface and implementations.

An asset store keeps uploaded bytes under relative paths such as
``products/3f2a....png`` and knows the public URL of every path. Paths are
generated by the store; callers only choose the namespace.
"""

from __future__ import annotations

import mimetypes
import os
import uuid
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from urllib.parse import quote

from loguru import logger

from src.catalog.core.exceptions import AssetStoreError
from src.catalog.runtime.config.config_data import StorageConfig


def generate_asset_path(
    namespace: str, filename: str | None = None, content_type: str | None = None
) -> str:
    """Build a fresh, collision-resistant relative path inside ``namespace``.

    The extension comes from ``filename`` when it has one, otherwise it is
    guessed from ``content_type``. The original file name is never reused.
    """
    suffix = PurePosixPath(filename).suffix.lower() if filename else ""
    if not suffix and content_type:
        suffix = mimetypes.guess_extension(content_type.split(";")[0].strip()) or ""
    if suffix and not suffix[1:].isalnum():
        suffix = ""
    return f"{namespace.strip('/')}/{uuid.uuid4().hex}{suffix}"


def build_public_url(base_url: str, path: str) -> str:
    """Join ``base_url`` and a relative asset path, percent-encoding the path."""
    return f"{base_url.rstrip('/')}/{quote(path.lstrip('/'))}"


class AssetStore(ABC):
    """Abstract interface for asset storage backends."""

    @abstractmethod
    def store(
        self,
        data: bytes,
        namespace: str,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> str:
        """Store bytes under a freshly generated path.

        Args:
            data: File content
            namespace: Directory-like prefix for the generated path
            filename: Client-supplied file name, used for the extension only
            content_type: Declared MIME type, used when the name has no extension

        Returns:
            The relative path of the stored asset

        Raises:
            AssetStoreError: If the bytes could not be written
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether an asset is present at ``path``."""
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete the asset at ``path``.

        Returns:
            True if an asset was removed, False if nothing was there
        """
        pass

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Return the public URL for ``path`` without touching the backend."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the storage backend is available."""
        pass


class InMemoryAssetStore(AssetStore):
    """Asset store holding bytes in a dict; for tests and throwaway runs."""

    def __init__(self, base_url: str = "/storage"):
        self._base_url = base_url
        self._data: dict[str, bytes] = {}

    def store(
        self,
        data: bytes,
        namespace: str,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> str:
        path = generate_asset_path(namespace, filename, content_type)
        self._data[path] = bytes(data)
        return path

    def exists(self, path: str) -> bool:
        return path in self._data

    def delete(self, path: str) -> bool:
        return self._data.pop(path, None) is not None

    def read(self, path: str) -> bytes:
        """Return stored bytes; raises KeyError for unknown paths."""
        return self._data[path]

    def paths(self) -> list[str]:
        return sorted(self._data)

    def public_url(self, path: str) -> str:
        return build_public_url(self._base_url, path)

    def is_available(self) -> bool:
        """In-memory storage is always available."""
        return True


class LocalAssetStore(AssetStore):
    """Filesystem-backed asset store rooted at a public directory."""

    def __init__(self, root: str | Path, base_url: str = "/storage"):
        self._root = Path(root).resolve()
        self._base_url = base_url

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, path: str) -> Path:
        if not path:
            raise AssetStoreError("Asset path must not be empty")
        target = (self._root / path.lstrip("/")).resolve()
        if target != self._root and self._root not in target.parents:
            raise AssetStoreError(f"Asset path escapes storage root: {path}", path=path)
        return target

    def store(
        self,
        data: bytes,
        namespace: str,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> str:
        path = generate_asset_path(namespace, filename, content_type)
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # 'x' refuses to overwrite an existing file
            with open(target, "xb") as f:
                f.write(data)
        except OSError as e:
            raise AssetStoreError(f"Failed to store asset {path}: {e}", path=path) from e

        logger.debug("Wrote {} bytes to {}", len(data), target)
        return path

    def exists(self, path: str) -> bool:
        target = self._resolve(path)
        try:
            return target.is_file()
        except OSError as e:
            raise AssetStoreError(f"Failed to check asset {path}: {e}", path=path) from e

    def delete(self, path: str) -> bool:
        target = self._resolve(path)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise AssetStoreError(f"Failed to delete asset {path}: {e}", path=path) from e
        return True

    def public_url(self, path: str) -> str:
        return build_public_url(self._base_url, path)

    def is_available(self) -> bool:
        """Available when the root exists (or can be created) and is writable."""
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self._root, os.W_OK)


def create_asset_store(config: StorageConfig) -> AssetStore:
    """Build the asset store selected by ``config.backend``."""
    if config.backend == "memory":
        logger.warning("Using in-memory asset store; uploaded images are not persisted")
        return InMemoryAssetStore(base_url=config.public_url)

    store = LocalAssetStore(config.root, base_url=config.public_url)
    logger.info("Asset store rooted at {} served from {}", store.root, config.public_url)
    return store
