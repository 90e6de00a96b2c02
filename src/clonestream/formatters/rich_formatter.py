"""Rich terminal formatter for clone reports."""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..detection import Clone, DetectionResult
from .base import BaseFormatter


def _span(start: int, end: int) -> str:
    return f"{start}-{end}" if start != end else str(start)


def _targets_label(clone: Clone) -> str:
    return "\n".join(
        f"[blue]{escape(t.name)}[/blue]:{_span(t.start_line, t.end_line)}" for t in clone.targets
    )


class RichFormatter(BaseFormatter):
    """Rich terminal output with a summary panel and one table per file."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def render(self, results: List[DetectionResult]) -> None:
        self._print_summary(results)
        for result in results:
            if result.clones:
                self._print_file(result)

    def format(self, results: List[DetectionResult]) -> str:
        with self.console.capture() as capture:
            self.render(results)
        return capture.get()

    def _print_summary(self, results: List[DetectionResult]) -> None:
        with_clones = [r for r in results if r.clones]
        clone_count = sum(len(r.clones) for r in results)
        elapsed = sum(r.elapsed_seconds for r in results)

        color = "yellow" if clone_count else "green"
        self.console.print(
            Panel(
                f"Files processed: [bold]{len(results)}[/bold]\n"
                f"Files with clones: [{color}]{len(with_clones)}[/{color}]\n"
                f"Clones: [{color}]{clone_count}[/{color}]\n"
                f"Time: {elapsed:.3f}s",
                title="[bold cyan]Clone Detection Summary[/bold cyan]",
                expand=False,
            )
        )

    def _print_file(self, result: DetectionResult) -> None:
        table = Table(title=f"[bold]{escape(result.name)}[/bold]", show_lines=True)
        table.add_column("Lines", style="cyan", no_wrap=True)
        table.add_column("Size", justify="right")
        table.add_column("Duplicated in")

        for clone in result.clones:
            table.add_row(
                _span(clone.source_start, clone.source_end),
                str(clone.line_count),
                _targets_label(clone),
            )
        self.console.print(table)
