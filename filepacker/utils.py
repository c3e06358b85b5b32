"""Shared utility functions for the file packer.

Provides Rich-based console reporting and the small file-system helpers used
by the emitter, the bundle strategy and the standalone host.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_text_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write UTF-8 text.

    Line endings are written verbatim so the output is byte-identical across
    platforms.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)


def read_text_file(path: Path) -> str:
    """Read a text file as UTF-8, dropping a BOM and replacing bad bytes."""
    return Path(path).read_bytes().decode("utf-8-sig", errors="replace")


def delete_if_exists(path: Path) -> bool:
    """Delete *path* if it is a file.  Returns ``True`` if something was removed."""
    if path.is_file():
        path.unlink()
        return True
    return False


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, escape(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_info(message: str) -> None:
    """Print a dim progress message."""
    console.print(f"[dim]{escape(message)}[/dim]")
