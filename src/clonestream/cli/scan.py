"""Scan command: feeds files through the clone detector one at a time."""

import asyncio
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import typer
from rich.markup import escape

from ..detection import CloneDetector, DetectionResult, SourceFile
from ..exceptions import CloneStreamError, RejectedInputError
from ..formatters import JsonFormatter, RichFormatter
from ..logging_config import get_logger, setup_logging
from . import app
from ._common import collect_files, console, err_console, open_corpus, resolve_config

logger = get_logger(__name__)


@app.callback(invoke_without_command=True, no_args_is_help=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Detect duplicated code across a stream of source files.

    Each file is compared against every file submitted before it, so a
    duplicate pair is reported once, on the later file.
    """
    if ctx.invoked_subcommand is not None:
        return

    from .. import __version__

    if version:
        console.print(f"[bold cyan]clonestream[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


async def _process_all(
    detector: CloneDetector, files: Iterable[Tuple[str, Path]]
) -> Tuple[List[DetectionResult], List[RejectedInputError]]:
    results: List[DetectionResult] = []
    rejected: List[RejectedInputError] = []
    for name, path in files:
        source = SourceFile(name=name, contents=path.read_text(encoding="utf-8", errors="replace"))
        try:
            results.append(await detector.process_async(source))
        except RejectedInputError as e:
            logger.info("Rejected: %s", e.message)
            rejected.append(e)
    return results, rejected


@app.command()
def scan(
    paths: List[Path] = typer.Argument(
        ...,
        help="Files or directories to submit, in order",
        exists=True,
        readable=True,
    ),
    chunk_size: Optional[int] = typer.Option(
        None,
        "-k",
        "--chunk-size",
        help="Content lines per comparison window (default: 5)",
        min=1,
    ),
    suffix: Optional[str] = typer.Option(
        None,
        "--suffix",
        help="Accepted file suffix (default: .java)",
    ),
    corpus_dir: Optional[Path] = typer.Option(
        None,
        "--corpus-dir",
        help="Persistent corpus directory; files stay comparable across runs",
        file_okay=False,
        dir_okay=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Submit files to the detector and report the clones found in each.

    [bold cyan]Examples:[/bold cyan]

      clonestream scan src/

      clonestream scan old/ new/ --chunk-size 8 --json

      clonestream scan src/ --corpus-dir .clonestream
    """
    log_path = str(log_file) if log_file is not None else None
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_path)

    try:
        settings = resolve_config(
            config=config,
            chunk_size=chunk_size,
            suffix=suffix,
            corpus_dir=corpus_dir,
            verbose=verbose,
            quiet=quiet,
        )
        if settings.verbosity != "normal":
            setup_logging(
                verbose=settings.verbosity == "verbose",
                quiet=settings.verbosity == "quiet",
                log_file=log_path,
            )
        corpus = open_corpus(settings)
        try:
            detector = CloneDetector(corpus, settings)
            files = list(collect_files(paths, settings.accepted_suffix))
            results, rejected = asyncio.run(_process_all(detector, files))
            total = detector.number_of_processed_files
        finally:
            close = getattr(corpus, "close", None)
            if close is not None:
                close()

    except CloneStreamError as e:
        logger.error("%s: %s", e.__class__.__name__, e)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    for error in rejected:
        err_console.print(f"[yellow]Skipped:[/yellow] {escape(error.message)}")

    if json_output:
        JsonFormatter().render(results)
    else:
        RichFormatter(console).render(results)
        console.print(f"[dim]{total} files in corpus[/dim]")
