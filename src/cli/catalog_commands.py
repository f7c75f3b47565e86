"""Catalog management CLI commands."""

import mimetypes
from pathlib import Path

import pydantic
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from src.catalog.core.exceptions import CatalogError
from src.catalog.core.models.upload import UploadedImage
from src.catalog.core.services import (
    CatalogQueryService,
    DbSessionService,
    ImageAssetManager,
    ProductService,
)
from src.catalog.core.storage import create_asset_store
from src.catalog.entities.service.product import ProductFields
from src.catalog.runtime.context import get_config
from src.catalog.runtime.init_db import init_db as create_tables

console = Console()

catalog_app = typer.Typer(
    help="🛒 Product Catalog CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@catalog_app.command("init-db")
def init_db() -> None:
    """Create the catalog tables."""
    create_tables()
    console.print("[green]✅ Database tables created[/green]")


@catalog_app.command("list-products")
def list_products(
    search: str | None = typer.Option(None, "--search", "-s", help="Filter by name or SKU"),
    page: int = typer.Option(1, "--page", "-p", help="Page number (1-based)"),
) -> None:
    """List products, newest first."""
    config = get_config()
    database_service = DbSessionService()
    asset_store = create_asset_store(config.storage)

    with database_service.session_scope() as session:
        result = CatalogQueryService(session, asset_store).list_products(search, page)

    if not result.items:
        console.print("[yellow]No products found[/yellow]")
        return

    table = Table(title=f"Products: page {result.page} of {result.last_page} ({result.total} total)")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("SKU", style="blue")
    table.add_column("Price", justify="right")
    table.add_column("Stock", justify="right")
    table.add_column("Image URL", style="magenta")

    for product in result.items:
        table.add_row(
            product.id,
            product.name,
            product.sku,
            f"{product.price:.2f}",
            str(product.stock),
            product.image_url or "",
        )

    console.print(table)


@catalog_app.command("add-product")
def add_product(
    name: str = typer.Option(..., "--name", help="Product name"),
    sku: str = typer.Option(..., "--sku", help="Stock keeping unit"),
    price: str = typer.Option(..., "--price", help="Unit price"),
    stock: int = typer.Option(0, "--stock", help="Units in stock"),
    image: Path | None = typer.Option(
        None, "--image", exists=True, dir_okay=False, help="Image file to attach"
    ),
) -> None:
    """Create a product, optionally with an image."""
    config = get_config()
    database_service = DbSessionService()
    image_manager = ImageAssetManager(
        create_asset_store(config.storage), namespace=config.storage.namespace
    )

    upload = None
    if image is not None:
        content_type, _ = mimetypes.guess_type(image.name)
        upload = UploadedImage.from_parts(
            image.read_bytes(), filename=image.name, content_type=content_type
        )

    session = database_service.get_session()
    try:
        fields = ProductFields(name=name, sku=sku, price=price, stock=stock)
        product = ProductService(session, image_manager).create_product(fields, upload)
    except pydantic.ValidationError as e:
        console.print(f"[red]❌ Invalid product fields: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except CatalogError as e:
        console.print(f"[red]❌ {escape(e.message)}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        session.close()

    console.print(
        Panel.fit(
            f"[bold green]Created {product.name}[/bold green]\n"
            f"ID: {product.id}\nImage: {product.image_url or '-'}",
            border_style="green",
        )
    )


@catalog_app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind the server to"),
    port: int = typer.Option(8000, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the catalog API server."""
    import uvicorn

    console.print(
        Panel.fit(
            "[bold green]Starting Product Catalog API[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run("src.catalog.api.http.app:app", host=host, port=port, reload=reload)
