"""Entity package: Product."""

from .entity import Product, ProductFields, ProductPage, ProductView
from .repository import ProductRepository
from .table import ProductTable

__all__ = [
    "Product",
    "ProductFields",
    "ProductPage",
    "ProductRepository",
    "ProductTable",
    "ProductView",
]
