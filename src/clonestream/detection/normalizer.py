"""Line normalizer: strips comments and blank content, keeping line numbers.

The only state carried from one physical line to the next is whether a
``/* ... */`` block comment is still open. Each call to ``normalize_lines``
starts ``OUTSIDE`` and owns its own scan state.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Tuple

from .models import SourceLine

LINE_SPLIT = re.compile(r"\r?\n")

BLOCK_COMMENT = re.compile(r"/\*.*?\*/")
LINE_COMMENT = re.compile(r"//.*")
BLOCK_CLOSE = re.compile(r"^.*?\*/")
BLOCK_OPEN = re.compile(r"/\*.*$")


class CommentState(Enum):
    OUTSIDE = "outside"
    INSIDE_COMMENT = "inside_comment"


def strip_line(line: str, state: CommentState) -> Tuple[str, CommentState]:
    """Strip comments from one physical line.

    Args:
        line: Raw line text without its line terminator
        state: Comment state carried over from the previous line

    Returns:
        (trimmed remainder, state for the next line)
    """
    if state is CommentState.INSIDE_COMMENT:
        closed = BLOCK_CLOSE.search(line)
        if closed is None:
            return "", CommentState.INSIDE_COMMENT
        line = line[closed.end():]
        state = CommentState.OUTSIDE

    line = BLOCK_COMMENT.sub("", line)
    line = LINE_COMMENT.sub("", line)
    if not line.strip():
        line = ""

    # Any /* left after removing complete block comments has no close here
    opened = BLOCK_OPEN.search(line)
    if opened is not None:
        line = line[: opened.start()]
        state = CommentState.INSIDE_COMMENT

    return line.strip(), state


def normalize_lines(contents: str) -> List[SourceLine]:
    """Normalize raw file text into one SourceLine per physical line.

    Comment-only and blank lines are kept with empty text so that line
    numbers stay 1-based positions in the original text.
    """
    state = CommentState.OUTSIDE
    lines: List[SourceLine] = []
    for number, raw in enumerate(LINE_SPLIT.split(contents), start=1):
        text, state = strip_line(raw, state)
        lines.append(SourceLine(number, text))
    return lines
