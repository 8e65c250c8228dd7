"""Rich table helpers for listing commands."""

from rich.console import Console
from rich.table import Table

MAX_TITLE_LENGTH = 50


def truncate_title(title: str) -> str:
    if len(title) > MAX_TITLE_LENGTH:
        return title[: MAX_TITLE_LENGTH - 3] + "..."
    return title


def linked_number(number: int, url: str) -> str:
    """Format `#number` in cyan, clickable via OSC 8 when a URL is known."""
    colored = f"[cyan]#{number}[/cyan]"
    if url:
        return f"[link={url}]{colored}[/link]"
    return colored


def print_table(table: Table) -> None:
    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(table)
