"""CLI entry point: registers all subcommands."""

import typer

from ._common import console

app = typer.Typer(
    name="clonestream",
    help="clonestream - streaming line-window clone detection",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .scan import main as _main_callback, scan as _scan  # noqa: F401, E402
from .corpus import corpus_info as _corpus_info, corpus_clear as _corpus_clear  # noqa: F401, E402
