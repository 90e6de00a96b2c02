"""Clone consolidator: one clone per duplicated source span."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .models import Clone


def consolidate_clones(clones: Iterable[Clone]) -> List[Clone]:
    """Merge identity-equal clones into the first one seen.

    Two clones are identity-equal when they share source file and source
    span. Later duplicates contribute their targets to the earlier clone
    and are dropped; repeated targets are only listed once.
    """
    unique: List[Clone] = []
    by_identity: Dict[Tuple[str, int, int], Clone] = {}
    for clone in clones:
        hit = by_identity.get(clone.identity)
        if hit is not None:
            hit.add_target(clone)
        else:
            by_identity[clone.identity] = clone
            unique.append(clone)
    return unique
