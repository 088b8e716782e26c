"""
Inline Renderer - Turn a run of markdown text into ADF inline nodes.

Handles: **bold**, *italic*, _italic_, `code`, [text](url), @accountId:XXX

Patterns are tried in a fixed order at every position and the first one
that matches wins, so ``**x**`` is always bold and never two italics.
Unterminated delimiters never match and stay literal text.
"""

import re
from typing import Callable, Optional

from ...core.domain.nodes import (
    Code,
    Emphasis,
    Inline,
    Link,
    Mention,
    Strong,
    Text,
)


InlineBuilder = Callable[[re.Match], Inline]


def _bold(match: re.Match) -> Inline:
    return Text(match.group(1), marks=(Strong(),))


def _italic(match: re.Match) -> Inline:
    return Text(match.group(1), marks=(Emphasis(),))


def _code(match: re.Match) -> Inline:
    return Text(match.group(1), marks=(Code(),))


def _link(match: re.Match) -> Inline:
    return Text(match.group(1), marks=(Link(href=match.group(2)),))


def _mention(match: re.Match) -> Inline:
    account_id = match.group(1)
    return Mention(id=account_id, text=f"@{account_id}", access_level="")


# Order matters: bold before italic.
INLINE_PATTERNS: tuple[tuple[re.Pattern, InlineBuilder], ...] = (
    (re.compile(r"\*\*(.+?)\*\*"), _bold),
    (re.compile(r"\*(.+?)\*"), _italic),
    (re.compile(r"_(.+?)_"), _italic),
    (re.compile(r"`([^`]+)`"), _code),
    (re.compile(r"\[([^\]]+)\]\(([^)]+)\)"), _link),
    (re.compile(r"@accountId:([a-zA-Z0-9:_-]+)"), _mention),
)

# Characters that can start one of the patterns above.
_TRIGGERS = frozenset("*_`[@")


def _match_at(text: str, pos: int) -> Optional[tuple[re.Match, InlineBuilder]]:
    """Return the first pattern matching exactly at ``pos``."""
    for pattern, build in INLINE_PATTERNS:
        match = pattern.match(text, pos)
        if match:
            return match, build
    return None


def render_inline(text: str) -> list[Inline]:
    """
    Parse inline markdown into ADF inline nodes.

    Never fails and never returns an empty list: if nothing is produced a
    single empty text node is returned, since ADF does not allow empty
    inline containers.
    """
    nodes: list[Inline] = []
    last_end = 0
    pos = 0

    while pos < len(text):
        if text[pos] not in _TRIGGERS:
            pos += 1
            continue

        found = _match_at(text, pos)
        if found is None:
            pos += 1
            continue

        match, build = found

        # Plain text before this match
        if match.start() > last_end:
            nodes.append(Text(text[last_end:match.start()]))

        nodes.append(build(match))
        last_end = pos = match.end()

    # Trailing text
    if last_end < len(text):
        nodes.append(Text(text[last_end:]))

    if not nodes:
        nodes.append(Text(""))

    return nodes
