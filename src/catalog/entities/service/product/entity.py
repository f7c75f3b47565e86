"""Entity: Product."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from src.catalog.entities.core._base import Entity


class ProductFields(BaseModel):
    """Editable scalar fields of a product, as submitted by create and update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255, description="Display name")
    sku: str = Field(min_length=1, max_length=100, description="Stock keeping unit")
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2, description="Unit price")
    stock: int = Field(ge=0, description="Units in stock")


class Product(Entity):
    """Product entity representing a sellable item in the catalog.

    ``image`` holds the relative path of the stored image inside the asset
    store, never a URL. URLs are derived at presentation time, see
    :class:`ProductView`.
    """

    name: str = Field(description="Display name")
    sku: str = Field(description="Stock keeping unit")
    price: Decimal = Field(default=Decimal("0"), ge=0, description="Unit price")
    stock: int = Field(default=0, ge=0, description="Units in stock")
    image: str | None = Field(default=None, description="Relative path of the stored image")
    deleted_at: datetime | None = Field(default=None, description="Soft-delete marker")

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def apply(self, fields: ProductFields) -> None:
        """Copy the editable fields onto this product."""
        self.name = fields.name
        self.sku = fields.sku
        self.price = fields.price
        self.stock = fields.stock

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.sku == other.sku
            and self.price == other.price
            and self.stock == other.stock
            and self.image == other.image
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.sku,
            self.price,
            self.stock,
            self.image,
        ))


class ProductView(Product):
    """Presentation model: a product plus its resolved ``image_url``."""

    image_url: str | None = Field(default=None, description="Public URL of the image")

    @classmethod
    def from_product(cls, product: Product, image_url: str | None) -> "ProductView":
        data = product.model_dump()
        data["image_url"] = image_url
        return cls(**data)


class ProductPage(BaseModel):
    """One page of the catalog listing."""

    items: list[ProductView]
    total: int
    page: int
    per_page: int
    search: str | None = None

    @computed_field
    @property
    def last_page(self) -> int:
        return max(1, -(-self.total // self.per_page))
