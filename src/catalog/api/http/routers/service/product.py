"""Product API router with CRUD operations."""

from typing import Annotated

import pydantic
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from src.catalog.api.http.deps import get_catalog_query_service, get_product_service
from src.catalog.core.exceptions import ValidationError
from src.catalog.core.models.upload import UploadedImage
from src.catalog.core.services import CatalogQueryService, ProductService
from src.catalog.entities.service.product import ProductFields, ProductPage, ProductView

router = APIRouter()


def product_fields(
    name: Annotated[str, Form()],
    sku: Annotated[str, Form()],
    price: Annotated[str, Form()],
    stock: Annotated[str, Form()],
) -> ProductFields:
    """Build validated product fields from the submitted form."""
    try:
        return ProductFields(name=name, sku=sku, price=price, stock=stock)
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Invalid product fields",
            errors=e.errors(include_url=False, include_context=False),
        ) from e


def uploaded_image(
    image: Annotated[UploadFile | None, File()] = None,
) -> UploadedImage | None:
    """Turn the optional ``image`` form part into an upload, or None."""
    if image is None:
        return None
    return UploadedImage.from_parts(
        image.file.read(),
        filename=image.filename,
        content_type=image.content_type,
    )


@router.get("/", response_model=ProductPage)
def list_products(
    search: Annotated[str | None, Query()] = None,
    page: Annotated[int, Query()] = 1,
    catalog: CatalogQueryService = Depends(get_catalog_query_service),
) -> ProductPage:
    """List products, newest first, optionally filtered by name or SKU."""
    return catalog.list_products(search=search, page=page)


@router.post("/", response_model=ProductView, status_code=status.HTTP_201_CREATED)
def create_product(
    fields: ProductFields = Depends(product_fields),
    image: UploadedImage | None = Depends(uploaded_image),
    service: ProductService = Depends(get_product_service),
) -> ProductView:
    """Create a new product."""
    return service.create_product(fields, image)


@router.get("/{product_id}", response_model=ProductView)
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ProductView:
    """Get a product by ID."""
    return service.get_product(product_id)


@router.put("/{product_id}", response_model=ProductView)
def update_product(
    product_id: str,
    fields: ProductFields = Depends(product_fields),
    image: UploadedImage | None = Depends(uploaded_image),
    service: ProductService = Depends(get_product_service),
) -> ProductView:
    """Update a product; the stored image is kept unless a new one is uploaded."""
    return service.update_product(product_id, fields, image)


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> dict[str, str]:
    """Soft-delete a product."""
    service.delete_product(product_id)
    return {"message": "Product deleted successfully"}
