"""Line-oriented whitespace cleanup for extracted article text."""

from __future__ import annotations

import re

_WHITESPACE_RUN_RE = re.compile(r"\s+")


def normalize_text(raw: str | None) -> str:
    """Return *raw* with each line whitespace-collapsed and blank lines dropped.

    Every run of whitespace inside a line becomes a single space, lines are
    trimmed, empty lines are removed and the survivors are joined with
    ``"\\n"`` in their original order.  Only ``"\\n"`` separates lines; form
    feeds and other breaks count as inline whitespace.  The function is total and
    idempotent::

        >>> normalize_text("a   b\\n\\n c \\n")
        'a b\\nc'
    """
    if not raw:
        return ""
    lines = (_WHITESPACE_RUN_RE.sub(" ", line).strip() for line in raw.split("\n"))
    return "\n".join(line for line in lines if line)
