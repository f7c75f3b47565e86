"""Catalog listing: search, ordering and pagination of products."""

from sqlmodel import Session

from src.catalog.core.storage.asset_store import AssetStore
from src.catalog.entities.service.product import (
    ProductPage,
    ProductRepository,
    ProductView,
)

PAGE_SIZE = 10


class CatalogQueryService:
    """Read-only view of the catalog.

    Listings never write and take no locks; they can run alongside any number
    of other listings and mutations.
    """

    def __init__(self, db_session: Session, asset_store: AssetStore):
        self._repo = ProductRepository(db_session)
        self._asset_store = asset_store

    def list_products(self, search: str | None = None, page: int = 1) -> ProductPage:
        """Return one page of live products, newest first.

        A non-empty ``search`` keeps products whose name or SKU contains it,
        ignoring case. Pages are 1-based; anything below 1 is treated as 1 and
        a page past the end is simply empty.
        """
        term = search.strip() if search else None
        term = term or None
        page = max(page, 1)

        products, total = self._repo.search(
            term, offset=(page - 1) * PAGE_SIZE, limit=PAGE_SIZE
        )

        items = [
            ProductView.from_product(product, self._image_url(product.image))
            for product in products
        ]
        return ProductPage(
            items=items,
            total=total,
            page=page,
            per_page=PAGE_SIZE,
            search=term,
        )

    def _image_url(self, path: str | None) -> str | None:
        return self._asset_store.public_url(path) if path else None
