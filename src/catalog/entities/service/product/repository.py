"""Product repository for data access operations."""

from datetime import UTC, datetime

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from src.catalog.core.exceptions import NotFoundError

from .entity import Product
from .table import ProductTable


class ProductRepository:
    """Data-access layer for products.

    Soft-deleted rows are invisible to every read except
    ``get(..., include_deleted=True)``. The repository never commits; the
    caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: str, include_deleted: bool = False) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        if row.deleted_at is not None and not include_deleted:
            return None
        return Product.model_validate(row, from_attributes=True)

    def create(self, product: Product) -> Product:
        row = ProductTable.model_validate(product, from_attributes=True)
        self._session.add(row)
        return product

    def update(self, product: Product) -> Product:
        row = self._session.get(ProductTable, product.id)
        if row is None or row.deleted_at is not None:
            raise NotFoundError(f"Product {product.id} not found", product_id=product.id)

        row.name = product.name
        row.sku = product.sku
        row.price = product.price
        row.stock = product.stock
        row.image = product.image
        row.updated_at = datetime.now(UTC)
        self._session.add(row)

        product.updated_at = row.updated_at
        return product

    def soft_delete(self, product_id: str) -> bool:
        """Mark the product deleted. Returns False when there was nothing to delete."""
        row = self._session.get(ProductTable, product_id)
        if row is None or row.deleted_at is not None:
            return False

        row.deleted_at = datetime.now(UTC)
        self._session.add(row)
        return True

    def search(
        self, search: str | None, offset: int, limit: int
    ) -> tuple[list[Product], int]:
        """Return one slice of live products, newest first, plus the total match count.

        A non-empty ``search`` keeps products whose name or SKU contains it,
        case-insensitively. Wildcard characters in ``search`` match literally.
        """
        conditions = [col(ProductTable.deleted_at).is_(None)]
        if search:
            term = search.lower()
            conditions.append(
                or_(
                    func.lower(ProductTable.name).contains(term, autoescape=True),
                    func.lower(ProductTable.sku).contains(term, autoescape=True),
                )
            )

        count_statement = select(func.count()).select_from(ProductTable).where(*conditions)
        total = self._session.exec(count_statement).one()

        statement = (
            select(ProductTable)
            .where(*conditions)
            .order_by(col(ProductTable.created_at).desc(), col(ProductTable.id).desc())
            .offset(offset)
            .limit(limit)
        )
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows], total
