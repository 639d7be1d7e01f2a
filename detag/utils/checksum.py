"""Checksums used to skip documents that have not changed since the last run."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def content_hash(text: str) -> str:
    """SHA-256 hex digest of a string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class ChangeDetector:
    """Remembers the markup checksum of every document written.

    Checksums live in a JSON object keyed by document id.
    """

    def __init__(self, checksum_file: Path):
        self.checksum_file = checksum_file
        self._checksums: dict[str, str] = {}
        if checksum_file.exists():
            try:
                data = json.loads(checksum_file.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ValueError(f"Corrupt checksum file {checksum_file}: {e}") from e
            if not isinstance(data, dict):
                raise ValueError(f"Corrupt checksum file {checksum_file}: expected a JSON object")
            self._checksums = data
            logger.debug("Loaded %d checksums from %s", len(self._checksums), checksum_file)

    def has_changed(self, doc_id: str, checksum: str) -> bool:
        return self._checksums.get(doc_id) != checksum

    def update(self, doc_id: str, checksum: str) -> None:
        self._checksums[doc_id] = checksum

    def save(self) -> None:
        """Write the checksums back to disk."""
        self.checksum_file.parent.mkdir(parents=True, exist_ok=True)
        self.checksum_file.write_text(
            json.dumps(self._checksums, indent=2, sort_keys=True),
            encoding="utf-8",
        )
        logger.debug("Saved checksums to %s", self.checksum_file)
