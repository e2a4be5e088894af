import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

from .config import load_config
from .decorators import handle_store_errors
from .repl import BucketShell
from .store import BucketStore

# Initialize Rich Traceback for better error messages
install(show_locals=True)

# Initialize Rich Console
console = Console()

# Configure logging to use Rich's RichHandler
logging.basicConfig(
    level=logging.INFO,  # Set to INFO by default, DEBUG if verbose
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


@app.command(context_settings={"allow_extra_args": True})
@handle_store_errors
def main(
    ctx: typer.Context,
    db_file: Optional[Path] = typer.Argument(None, help="Path to the store file"),
    raw: bool = typer.Option(False, "--raw", help="Dump values as byte arrays instead of strings"),
    create: bool = typer.Option(False, "--create", help="Create the store file if it does not exist"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    bsh - shell for browsing and editing a bucket store.

    Buckets behave like directories and values like files. The whole
    session runs in one transaction, committed when the shell exits.

    Example:
        bsh data.db
    """
    if db_file is None or ctx.args:
        console.print("Usage: bsh [db file]", markup=False)
        raise typer.Exit(code=1)

    if verbose:
        logging.getLogger("bucketsh").setLevel(logging.DEBUG)
        console.print("[bold green]Verbose mode enabled.[/bold green]")

    config = load_config()
    store = BucketStore.open(
        db_file,
        create=create,
        timeout=config.store.lock_timeout,
        echo=config.store.echo_sql,
    )

    with store.transaction():
        shell = BucketShell(store, raw=raw or config.shell.raw, config=config)
        shell.run()


if __name__ == "__main__":
    app()
