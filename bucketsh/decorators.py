"""Decorators for bucketsh functionality."""

import functools
import logging
from typing import Callable, Any
import typer
from rich.console import Console
from rich.markup import escape

from bucketsh.store import StoreError, StoreOpenError

logger = logging.getLogger(__name__)
console = Console()


def handle_store_errors(func: Callable) -> Callable:
    """
    Decorator to turn store failures into CLI exit codes.

    Centralizes error handling for:
    - FileNotFoundError: Store file doesn't exist
    - StoreOpenError: File exists but is not a usable store
    - StoreError: The session ended with a failed store operation
    - KeyboardInterrupt: User cancelled
    - General exceptions: Unexpected errors
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except FileNotFoundError as e:
            console.print(f"Unable to stat database file {escape(str(e.filename or ''))}\n{escape(str(e))}")
            raise typer.Exit(code=1)
        except StoreOpenError as e:
            console.print(f"Unable to open database file: {escape(str(e.filename))}\n{escape(str(e))}")
            raise typer.Exit(code=1)
        except StoreError as e:
            console.print(f"[red]Problem viewing database:[/red] {escape(str(e))}")
            raise typer.Exit(code=1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(code=130)
        except typer.Exit:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(e))}")
            raise typer.Exit(code=1)

    return wrapper
