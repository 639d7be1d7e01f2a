"""Decoders applied to markup before it is stripped."""

from __future__ import annotations

import abc
import html
from urllib.parse import unquote_plus


class Decoder(abc.ABC):
    """Turns encoded text back into plain characters.

    Implementations must never raise on malformed input; they return a
    best-effort result instead.
    """

    @abc.abstractmethod
    def decode(self, text: str) -> str:
        """Return the decoded text."""


class UrlDecoder(Decoder):
    """Percent-decoding with ``+`` read as a space."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def decode(self, text: str) -> str:
        return unquote_plus(text, encoding=self.encoding, errors="replace")


class HtmlEntityDecoder(Decoder):
    """Resolves named, decimal and hexadecimal character references."""

    def decode(self, text: str) -> str:
        return html.unescape(text)


class IdentityDecoder(Decoder):
    """Returns the text unchanged."""

    def decode(self, text: str) -> str:
        return text
