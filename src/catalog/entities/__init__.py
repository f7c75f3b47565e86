"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .service.product import (
    Product,
    ProductFields,
    ProductPage,
    ProductRepository,
    ProductTable,
    ProductView,
)

__all__ = [
    "Product",
    "ProductFields",
    "ProductPage",
    "ProductRepository",
    "ProductTable",
    "ProductView",
]
