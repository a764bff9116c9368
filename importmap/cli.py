"""
importmap - CLI Interface.

Scans a build directory, fingerprints its scripts, modules and stylesheets,
and rewrites the region between <!-- IMPORTMAP --> and <!-- /IMPORTMAP -->
in the directory's index.html.

Usage Examples:
    # Update ./index.html from the current directory
    importmap

    # Update dist/index.html, serving assets under /static
    importmap dist --base-url /static

    # Development mode: clear the marker region
    importmap dist --dev

    # Preview without writing, with a log file
    importmap dist --dry-run --log-file importmap.log --verbose
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from importmap.errors import ImportMapError
from importmap.orchestration import UpdateOrchestrator
from importmap.scanning import ScanPolicy
from importmap.ui import ReportTUI

__version__ = "0.1.0"

app = typer.Typer(
    name="importmap",
    help="Generate a cache-busting import map and inject it into index.html.",
    add_completion=False,
)

# Rich consoles for consistent output formatting
console = Console()
err_console = Console(stderr=True, soft_wrap=True)


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"importmap v{__version__}")
        raise typer.Exit()


def fail(message: str) -> None:
    """Print an error on stderr and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise typer.Exit(1)


@app.command()
def main(
    directory: Path = typer.Argument(
        Path("."),
        help="Directory with index.html and the assets to fingerprint.",
        exists=False,  # We do our own validation
    ),
    html_name: str = typer.Option(
        "index.html",
        "--html",
        help="Name of the HTML document inside the directory.",
        envvar="IMPORTMAP_HTML",
    ),
    base_url: str = typer.Option(
        "",
        "--base-url",
        "-b",
        help="URL prefix for every asset (e.g. /static).",
        envvar="IMPORTMAP_BASE_URL",
    ),
    dev: bool = typer.Option(
        False,
        "--dev",
        help="Development mode: clear the marker region instead of scanning.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Report whether the document would change without writing it.",
    ),
    keep_tests: bool = typer.Option(
        False,
        "--keep-tests",
        help="Include _partials, tests/ directories and *.test.* files.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for log file output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Show every entry and every excluded file.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """
    Update the <!-- IMPORTMAP --> region of DIRECTORY/index.html.

    Every script, module and stylesheet under the directory is mapped to a
    URL that embeds a hash of its contents.
    """
    if not directory.exists():
        fail(f"Directory does not exist: {directory}")
    if not directory.is_dir():
        fail(f"Not a directory: {directory}")

    try:
        orchestrator = UpdateOrchestrator(
            base_path=directory,
            html_name=html_name,
            base_url=base_url,
            policy=ScanPolicy(exclude_internal=not keep_tests),
            dev_mode=dev,
            dry_run=dry_run,
            verbose=verbose,
            log_file_path=log_file,
            tui=ReportTUI(console),
        )
        orchestrator.run()

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except ImportMapError as e:
        # Missing document, missing markers and scan failures carry their own message
        fail(str(e))

    except PermissionError as e:
        fail(f"Permission denied - {e}")

    except (OSError, ValueError) as e:
        fail(str(e))


if __name__ == "__main__":
    app()
