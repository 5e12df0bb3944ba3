"""Table rendering utilities for CLI output."""

from collections.abc import Iterable

from rich.table import Table

from assetprep.domain.models import Action
from assetprep.files.file import File


def _format_size(size: int | None) -> str:
    return f"{size:,} B" if size is not None else "-"


def create_file_table(files: Iterable[File], title_suffix: str = "") -> Table:
    """Create a table for displaying discovered files.

    Args:
        files: Ready files
        title_suffix: Optional suffix for table title

    Returns:
        Rich Table object ready for display
    """
    files = list(files)
    table = Table(title=f"Files ({len(files)} total){title_suffix}")
    table.add_column("Path", style="white")
    table.add_column("MIME", style="cyan")
    table.add_column("MD5", style="dim")
    table.add_column("Size", justify="right", style="dim")

    for file in files:
        table.add_row(file.path, file.mime or "-", file.md5 or "-", _format_size(file.size))

    return table


def create_action_table(actions: Iterable[Action]) -> Table:
    """Create a table for displaying planned actions.

    Args:
        actions: Planned actions

    Returns:
        Rich Table object ready for display
    """
    actions = list(actions)
    table = Table(title=f"Actions ({len(actions)} total)")
    table.add_column("Path", style="white")
    table.add_column("Action", style="yellow")
    table.add_column("Content-Type", style="cyan")
    table.add_column("Size", justify="right", style="dim")

    for action in actions:
        if action.do_delete:
            label = "[red]delete[/red]"
        elif action.do_upload:
            label = "[green]upload[/green]"
        else:
            label = "[yellow]headers[/yellow]"

        file = action.file
        table.add_row(
            action.path,
            label,
            file.headers.get("Content-Type", "-") if file else "-",
            _format_size(file.size) if file else "-",
        )

    return table
