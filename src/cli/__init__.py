"""Main CLI application module."""

from .catalog_commands import catalog_app as app


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
