"""Candidate expander: grows sliding chunk matches into maximal clones."""

from __future__ import annotations

from typing import Iterable, List

from .models import Clone


def expand_candidates(candidates: Iterable[Clone]) -> List[Clone]:
    """Merge consecutive candidates into maximal clones.

    A candidate extends an existing clone when both its source and target
    chunk indices are exactly one past the clone's last absorbed pair. The
    first clone that accepts a candidate absorbs it; otherwise the candidate
    starts a new clone. Candidates are sorted first so the result does not
    depend on discovery order.
    """
    ordered = sorted(
        candidates,
        key=lambda c: (c.source_chunk_index, c.target_chunk_index, c.target.name),
    )
    expanded: List[Clone] = []
    for candidate in ordered:
        for clone in expanded:
            if clone.maybe_expand_with(candidate):
                break
        else:
            expanded.append(candidate)
    return expanded
