"""Locate base64 thumbnail blocks embedded in G-code comments."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

__all__ = [
    "THUMBNAIL_BEGIN_MARKER",
    "THUMBNAIL_END_MARKER",
    "ThumbnailBlock",
    "extract_candidates",
    "iter_thumbnail_blocks",
    "select_best",
]

logger = logging.getLogger(__name__)

THUMBNAIL_BEGIN_MARKER = "; thumbnail begin"
"""Prefix of the comment line opening an embedded thumbnail."""

THUMBNAIL_END_MARKER = "; thumbnail end"
"""Exact comment line closing an embedded thumbnail."""

_PAYLOAD_PREFIX_LENGTH = 2

# Slicers append ``WIDTHxHEIGHT LENGTH`` to the begin marker.
_BEGIN_HINT_PATTERN = re.compile(r"^\s*(\d+)x(\d+)(?:\s+(\d+))?")


@dataclass(frozen=True, slots=True)
class ThumbnailBlock:
    """A terminated thumbnail block found in a G-code program."""

    payload: str
    line: int
    width: int | None = None
    height: int | None = None
    declared_length: int | None = None

    @property
    def length(self) -> int:
        return len(self.payload)


def iter_thumbnail_blocks(lines: Iterable[str]) -> Iterator[ThumbnailBlock]:
    """Yield every terminated thumbnail block in *lines* in document order.

    *lines* is typically an open text stream. Blocks missing their end marker
    are dropped, either when a new begin marker restarts the capture or when
    the input ends.
    """

    fragments: list[str] | None = None
    begin_line = 0
    hint: tuple[int | None, int | None, int | None] = (None, None, None)

    for number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")

        if line.startswith(THUMBNAIL_BEGIN_MARKER):
            if fragments is not None:
                logger.debug("Dropping unterminated thumbnail block started on line %d", begin_line)
            fragments = []
            begin_line = number
            hint = _parse_begin_hint(line[len(THUMBNAIL_BEGIN_MARKER) :])
        elif line == THUMBNAIL_END_MARKER:
            if fragments is not None:
                width, height, declared_length = hint
                yield ThumbnailBlock(
                    payload="".join(fragments),
                    line=begin_line,
                    width=width,
                    height=height,
                    declared_length=declared_length,
                )
                fragments = None
        elif fragments is not None:
            fragments.append(line[_PAYLOAD_PREFIX_LENGTH:])

    if fragments is not None:
        logger.debug("Dropping unterminated thumbnail block started on line %d", begin_line)


def extract_candidates(lines: Iterable[str]) -> Iterator[str]:
    """Yield the base64 text of every terminated thumbnail block in *lines*."""

    for block in iter_thumbnail_blocks(lines):
        yield block.payload


def select_best(candidates: Iterable[str]) -> str | None:
    """Return the longest candidate, preferring the earliest on ties."""

    best: str | None = None
    for candidate in candidates:
        if best is None or len(candidate) > len(best):
            best = candidate
    return best


def _parse_begin_hint(text: str) -> tuple[int | None, int | None, int | None]:
    match = _BEGIN_HINT_PATTERN.match(text)
    if match is None:
        return None, None, None
    width, height, length = match.groups()
    return int(width), int(height), int(length) if length is not None else None
