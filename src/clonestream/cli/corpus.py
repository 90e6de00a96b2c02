"""Persistent corpus management commands."""

from pathlib import Path

import typer

from ..storage import DiskCorpus
from . import app
from ._common import console


@app.command()
def corpus_info(
    corpus_dir: Path = typer.Argument(..., help="Corpus directory", file_okay=False),
):
    """Show persistent corpus information."""
    if not corpus_dir.exists():
        console.print(f"[yellow]No corpus at {corpus_dir}[/yellow]")
        raise typer.Exit(0)

    with DiskCorpus(corpus_dir) as corpus:
        stats = corpus.stats()

    console.print("[bold cyan]clonestream Corpus Info[/bold cyan]")
    console.print()
    console.print(f"Directory: [blue]{stats['directory']}[/blue]")
    console.print(f"Files: [yellow]{stats['files']}[/yellow]")
    console.print(f"Size: [yellow]{stats['volume']} bytes[/yellow]")


@app.command()
def corpus_clear(
    corpus_dir: Path = typer.Argument(..., help="Corpus directory", file_okay=False),
):
    """Remove every file from a persistent corpus."""
    if not corpus_dir.exists():
        console.print(f"[yellow]No corpus at {corpus_dir}[/yellow]")
        raise typer.Exit(0)

    with DiskCorpus(corpus_dir) as corpus:
        corpus.clear()
    console.print("[green]Corpus cleared successfully[/green]")
