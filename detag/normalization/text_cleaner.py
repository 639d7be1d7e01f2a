"""Text cleaning utilities for stripping markup."""

from __future__ import annotations

import enum
import logging
import re

logger = logging.getLogger(__name__)

# [^>] also matches newlines, so a tag may span several lines.
TAG_PATTERN = re.compile(r"<[^>]+?>")


class TagMode(enum.Enum):
    """What a matched tag is replaced with."""

    DROP = ""
    SPACE = " "


def replace_tags(text: str | None, mode: TagMode = TagMode.DROP) -> str:
    """Remove every tag, or replace each one with a single space.

    Text outside the angle brackets is kept verbatim, including a trailing
    ``<`` fragment that is never closed.
    """
    if not text:
        return ""
    return TAG_PATTERN.sub(mode.value, text)


def remove_tags(text: str | None) -> str:
    """Remove HTML/XML tags but keep their inner text."""
    return replace_tags(text, TagMode.DROP)


def _fold(text: str) -> str:
    """Lowercase character by character without changing the length."""
    chars = []
    for ch in text:
        lowered = ch.lower()
        chars.append(lowered if len(lowered) == 1 else ch)
    return "".join(chars)


def remove_block(text: str | None, start_marker: str, end_marker: str) -> str:
    """Remove every ``start_marker ... end_marker`` block, markers included.

    Markers are matched case-insensitively. The end marker is searched from
    one character past the start of the start marker. Blocks are removed one
    at a time from the top of the string until no start marker is left, or
    until a start marker has no end marker after it, in which case the rest
    of the text is returned untouched. Nested blocks of the same kind are
    only removed up to the nearest end marker.

    Args:
        text: Text to clean.
        start_marker: Literal opening delimiter, e.g. ``<script``.
        end_marker: Literal closing delimiter, e.g. ``</script>``.

    Returns:
        The text without the delimited blocks.
    """
    if not text:
        return ""
    if not start_marker or not end_marker:
        return text

    start_folded = _fold(start_marker)
    end_folded = _fold(end_marker)
    folded = _fold(text)
    removed = 0

    while True:
        start = folded.find(start_folded)
        if start < 0:
            break
        end = folded.find(end_folded, start + 1)
        if end <= start:
            logger.debug("Unterminated %r at offset %d", start_marker, start)
            break
        stop = end + len(end_marker)
        text = text[:start] + text[stop:]
        folded = folded[:start] + folded[stop:]
        removed += 1

    if removed:
        logger.debug("Removed %d %r blocks", removed, start_marker)
    return text


def collapse_whitespace(text: str | None) -> str:
    """Collapse every whitespace run to one space and trim the ends."""
    if not text:
        return ""

    chars = []
    in_blanks = False
    for ch in text:
        if ch.isspace():
            if not in_blanks:
                in_blanks = True
                chars.append(" ")
        else:
            in_blanks = False
            chars.append(ch)
    return "".join(chars).strip(" ")
