"""Shared CLI helpers."""

import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from rich.console import Console

from ..config import DetectorConfig, load_config
from ..storage import Corpus, DiskCorpus, InMemoryCorpus

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    chunk_size: Optional[int] = None,
    suffix: Optional[str] = None,
    corpus_dir: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> DetectorConfig:
    """Build configuration from CLI options."""
    overrides = {
        "chunk_size": chunk_size,
        "accepted_suffix": suffix,
        "corpus_dir": str(corpus_dir) if corpus_dir is not None else None,
        "verbose": verbose,
        "quiet": quiet,
    }
    return load_config(config_file=config, **overrides)


def open_corpus(config: DetectorConfig) -> Corpus:
    if config.corpus_dir:
        return DiskCorpus(config.corpus_dir)
    return InMemoryCorpus(retain_chunks=config.retain_chunks)


def scan_base(paths: List[Path]) -> Path:
    """Deepest directory containing every scan root."""
    parents = [str(p.resolve() if p.is_dir() else p.resolve().parent) for p in paths]
    return Path(os.path.commonpath(parents))


def collect_files(paths: List[Path], suffix: str) -> Iterator[Tuple[str, Path]]:
    """Yield (source name, path) in submission order.

    Names are relative to the deepest directory containing every root, so
    ``old/Foo.java`` and ``new/Foo.java`` stay distinct. Files named
    explicitly are always yielded so the admission check can reject them.
    Directories are walked in sorted order and only files with the accepted
    suffix are yielded.
    """
    if not paths:
        return
    base = scan_base(paths)
    for path in paths:
        if path.is_dir():
            root = path.resolve()
            for child in sorted(p for p in path.rglob(f"*{suffix}") if p.is_file()):
                yield (root / child.relative_to(path)).relative_to(base).as_posix(), child
        else:
            yield path.resolve().relative_to(base).as_posix(), path
