"""Product catalog service.

FastAPI application, SQLModel record store and pluggable asset store for a
catalog of products with one image per product.
"""

__version__ = "0.1.0"
