"""Reporter for preparation output and progress tracking."""

from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn, TimeRemainingColumn

from assetprep.domain.models import ActionPlan
from assetprep.types import ProgressHook


class Reporter:
    """Reporter with rich progress bars and formatted output."""

    CHANGE_PREVIEW_LIMIT = 10

    def __init__(self, silent: bool = False) -> None:
        """Initialize reporter.

        Args:
            silent: If True, suppress all output (for testing/automation).
        """
        self.silent = silent
        self.console = Console(quiet=silent)
        self._hashing_progress: Progress | None = None
        self._hashing_task_id: int | None = None

    def report_scan_start(self, source_dir: str | Path) -> None:
        """Report the directory being scanned."""
        if not self.silent:
            self.console.print(f"Scanning [bold]{source_dir}[/bold]...")

    def report_scan_complete(self, count: int) -> None:
        """Report how many files were discovered."""
        if not self.silent:
            self.console.print(f"Found {count} files")

    @contextmanager
    def hashing_context(self):
        """Context manager for hashing progress display."""
        if self.silent:
            yield None
            return

        self._hashing_progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TextColumn("•"),
            TextColumn("{task.completed}/{task.total} files"),
            TimeRemainingColumn(),
            console=self.console,
        )
        self._hashing_task_id = self._hashing_progress.add_task("Hashing", total=None, start=False)
        try:
            with self._hashing_progress:
                yield self._hashing_progress
        finally:
            self._hashing_progress = None
            self._hashing_task_id = None

    def create_hashing_progress_hook(self) -> ProgressHook:
        """Create a progress hook fed as files become ready."""
        if self.silent:

            def hook(path: str, current: int, total: int) -> None:
                pass

            return hook

        if self._hashing_progress is None:
            raise RuntimeError("Must be called within hashing_context")

        def hook(path: str, current: int, total: int) -> None:
            if self._hashing_progress is None or self._hashing_task_id is None:
                return

            if self._hashing_progress.tasks[self._hashing_task_id].total is None:
                self._hashing_progress.update(self._hashing_task_id, total=total)
                self._hashing_progress.start_task(self._hashing_task_id)
            self._hashing_progress.update(self._hashing_task_id, completed=current)

        return hook

    def report_plan(self, plan: ActionPlan) -> None:
        """Report the planned actions."""
        if self.silent:
            return

        if plan.has_changes:
            self.console.print("\n[bold]Changes planned[/bold]")
            self._render_file_list("Upload", [a.path for a in plan.uploads], "green", "↑")
            self._render_file_list(
                "Update headers", [a.path for a in plan.header_updates], "yellow", "⚡"
            )
            self._render_file_list("Delete", [a.path for a in plan.deletes], "red", "✗")
            if plan.unchanged:
                self.console.print(f"  [dim]Unchanged files: {len(plan.unchanged)}[/dim]")
        else:
            self.console.print(f"\n[bold]No changes[/bold] ({len(plan.unchanged)} files)")

    def report_manifest(self, path: str | Path) -> None:
        """Report where the manifest was written."""
        if not self.silent:
            self.console.print(f"Manifest written to [bold]{path}[/bold]")

    def report_warning(self, message: str) -> None:
        """Report a warning message."""
        if not self.silent:
            self.console.print(f"\n[yellow]Warning:[/yellow] {message}")

    def report_error(self, message: str) -> None:
        """Report an error message."""
        if not self.silent:
            self.console.print(f"\n[red]Error:[/red] {message}")

    def _render_file_list(
        self,
        label: str,
        files: list[str],
        color: str,
        glyph: str,
    ) -> None:
        """Pretty-print a short list of files for the given action bucket."""
        if not files:
            return

        count = len(files)
        preview = files[: self.CHANGE_PREVIEW_LIMIT]
        self.console.print(f"  [{color}]{glyph} {label}: {count}[/{color}]")
        for file_path in preview:
            self.console.print(f"      {file_path}")

        remaining = count - len(preview)
        if remaining > 0:
            self.console.print(f"      ... (+{remaining} more)")
