"""Base source and the document record passed through the pipeline."""

from __future__ import annotations

import abc
import logging
import re
from dataclasses import dataclass
from typing import Iterator

from ..utils.checksum import content_hash

logger = logging.getLogger(__name__)


def _slugify(text: str) -> str:
    """Create a filesystem-safe id from a path or URL."""
    slug = text.lower().strip()
    slug = re.sub(r"^[a-z][a-z0-9+.-]*://", "", slug)
    slug = re.sub(r"[^\w.-]+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-.") or "document"


@dataclass
class Document:
    """One piece of markup and, once sanitized, its plain text."""

    id: str
    source: str
    markup: str
    text: str = ""
    checksum: str = ""

    def __post_init__(self):
        if not self.checksum:
            self.checksum = content_hash(self.markup)


class BaseSource(abc.ABC):
    """Abstract base class for anything that yields markup documents.

    Subclasses list their entries and read each one. An entry that cannot be
    read is logged, recorded in ``failures`` and skipped. Ids are made unique
    within one pass: a slug already taken gets a short hash of its key
    appended.
    """

    #: Errors that mark a single entry as failed instead of aborting the pass.
    read_errors: tuple[type[Exception], ...] = (OSError,)

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.failures: list[tuple[str, str]] = []

    @abc.abstractmethod
    def entries(self) -> Iterator[tuple[str, str]]:
        """Yield ``(key, source)`` pairs; the key is slugified into the id."""

    @abc.abstractmethod
    def read(self, source: str) -> str:
        """Return the markup of one entry."""

    def documents(self) -> Iterator[Document]:
        """Yield documents one at a time."""
        self.failures = []
        seen: set[str] = set()
        for key, source in self.entries():
            try:
                markup = self.read(source)
            except self.read_errors as e:
                self.logger.warning("Failed to read %s: %s", source, e)
                self.failures.append((source, str(e)))
                continue

            doc_id = _slugify(key)
            if doc_id in seen:
                doc_id = f"{doc_id}-{content_hash(key)[:8]}"
                self.logger.debug("Id collision for %s, using %s", key, doc_id)
            seen.add(doc_id)
            yield Document(id=doc_id, source=source, markup=markup)

    def load(self) -> list[Document]:
        """Collect every document from the source."""
        docs = list(self.documents())
        self.logger.info("Loaded %d documents (%d failed)", len(docs), len(self.failures))
        return docs
