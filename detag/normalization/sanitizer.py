"""Full markup-to-text sanitization pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..decoding.base import Decoder, HtmlEntityDecoder, UrlDecoder
from .text_cleaner import TagMode, collapse_whitespace, remove_block, replace_tags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockMarkers:
    """A delimited block removed together with its content."""

    name: str
    start: str
    end: str


DEFAULT_BLOCKS: tuple[BlockMarkers, ...] = (
    BlockMarkers("comment", "<!--", "-->"),
    BlockMarkers("script", "<script", "</script>"),
    BlockMarkers("style", "<style", "</style>"),
)


class HtmlSanitizer:
    """Reduce markup to whitespace-normalized plain text.

    Args:
        url_decoder: Applied first. Defaults to ``UrlDecoder``.
        entity_decoder: Applied after URL decoding. Defaults to
            ``HtmlEntityDecoder``.
        blocks: Blocks removed with their content, in order.
    """

    def __init__(
        self,
        url_decoder: Decoder | None = None,
        entity_decoder: Decoder | None = None,
        blocks: tuple[BlockMarkers, ...] = DEFAULT_BLOCKS,
    ):
        self.url_decoder = url_decoder if url_decoder is not None else UrlDecoder()
        self.entity_decoder = entity_decoder if entity_decoder is not None else HtmlEntityDecoder()
        self.blocks = tuple(blocks)

    def strip_html(self, text: str | None) -> str:
        """Drop tags, comments, scripts and styles and keep only running text.

        Each remaining tag becomes a space so words on either side of it
        stay apart, then whitespace is collapsed.
        """
        if not text:
            return ""

        text = self.url_decoder.decode(text)
        text = self.entity_decoder.decode(text)

        for block in self.blocks:
            text = remove_block(text, block.start, block.end)

        text = replace_tags(text, TagMode.SPACE)
        return collapse_whitespace(text)

    def remove_tags(self, text: str | None) -> str:
        """Remove tags only; no decoding and block contents are kept."""
        return replace_tags(text, TagMode.DROP)


_default = HtmlSanitizer()


def strip_html(text: str | None) -> str:
    """``HtmlSanitizer.strip_html`` with the default decoders and blocks."""
    return _default.strip_html(text)
