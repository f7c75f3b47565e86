"""Product database table model."""

from decimal import Decimal

from sqlmodel import Field

from src.catalog.entities.core._base import EntityTable, SoftDeleteMixin


class ProductTable(EntityTable, SoftDeleteMixin, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "products"

    name: str = Field(max_length=255)
    sku: str = Field(max_length=100, index=True)
    price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    stock: int = Field(default=0)
    image: str | None = Field(default=None, max_length=255)
