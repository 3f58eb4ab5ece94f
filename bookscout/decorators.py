"""Decorators for bookscout CLI commands."""

import functools
import logging
from typing import Any, Callable

import typer
from rich.console import Console

from .catalog import JSON_SUFFIXES, JSONL_SUFFIXES, YAML_SUFFIXES, CatalogError

logger = logging.getLogger(__name__)
console = Console()

SUPPORTED_SUFFIXES = ", ".join(sorted(JSON_SUFFIXES | JSONL_SUFFIXES | YAML_SUFFIXES))


def handle_catalog_errors(func: Callable) -> Callable:
    """
    Decorator turning catalog and stop-word file problems into exit codes.

    - Missing catalog or stop-word file: exit 1, path shown
    - Unreadable or malformed catalog (CatalogError): exit 1, supported formats listed
    - Other invalid arguments (ValueError): exit 1
    - Ctrl-C: exit 130
    - Anything else is logged with its traceback, exit 1
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except FileNotFoundError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            console.print("[yellow]Tip: Pass the catalog path first, then the book ID[/yellow]")
            raise typer.Exit(code=1)
        except PermissionError as e:
            console.print(f"[bold red]Error:[/bold red] Cannot read {e.filename or 'catalog file'}")
            raise typer.Exit(code=1)
        except CatalogError as e:
            console.print(f"[bold red]Error:[/bold red] Could not read catalog: {e}")
            console.print(f"[yellow]Supported catalog files: {SUPPORTED_SUFFIXES}[/yellow]")
            raise typer.Exit(code=1)
        except ValueError as e:
            console.print(f"[bold red]Error:[/bold red] Invalid input: {e}")
            raise typer.Exit(code=1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Cancelled[/yellow]")
            raise typer.Exit(code=130)
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            console.print(f"[bold red]Unexpected error:[/bold red] {e}")
            raise typer.Exit(code=1)

    return wrapper
