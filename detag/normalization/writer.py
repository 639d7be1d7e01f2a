"""Sanitize documents and write them out as plain-text files plus manifest.json."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..ingestion.base import Document
from ..utils.checksum import ChangeDetector
from .sanitizer import HtmlSanitizer

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)


def manifest_entry(doc: Document) -> dict:
    return {
        "id": doc.id,
        "source": doc.source,
        "checksum": doc.checksum,
        "chars_in": len(doc.markup),
        "chars_out": len(doc.text),
    }


def build_manifest(entries: list[dict]) -> dict:
    """Build manifest.json content from per-document entries."""
    entries = sorted(entries, key=lambda e: e["id"])
    return {
        "documents": entries,
        "stats": {
            "documents": len(entries),
            "chars_in": sum(e["chars_in"] for e in entries),
            "chars_out": sum(e["chars_out"] for e in entries),
        },
    }


def read_manifest(path: Path) -> dict[str, dict]:
    """Return the entries of an existing manifest keyed by id.

    Raises:
        ValueError: If the file is not a manifest written by ``write_documents``.
    """
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return {e["id"]: e for e in data["documents"]}
    except (ValueError, KeyError, TypeError) as e:
        raise ValueError(f"Corrupt manifest {path}: {e}") from e


def _write_one(doc: Document, out_dir: Path, sanitizer: HtmlSanitizer) -> None:
    doc.text = sanitizer.strip_html(doc.markup)
    text_path = out_dir / f"{doc.id}.txt"
    text_path.write_text(doc.text + "\n" if doc.text else "", encoding="utf-8")
    logger.debug("Wrote %s", text_path)


def write_documents(
    documents: Iterable[Document],
    out_dir: Path,
    sanitizer: HtmlSanitizer | None = None,
    detector: ChangeDetector | None = None,
) -> WriteResult:
    """Strip every document and write ``<id>.txt`` files into ``out_dir``.

    A document that fails to sanitize or write is logged and recorded in
    ``WriteResult.failed``; the others are still written. A document whose
    id was already seen in this run fails instead of overwriting it.

    Args:
        documents: Documents to sanitize.
        out_dir: Output directory, created if missing.
        sanitizer: Sanitizer to use; the default pipeline if None.
        detector: If given, documents whose markup checksum is unchanged
            since the last run are skipped and keep their previous manifest
            entry. Checksums are saved at the end.

    Returns:
        Ids of the documents written, skipped and failed.

    Raises:
        ValueError: If an existing manifest.json cannot be read.
    """
    if sanitizer is None:
        sanitizer = HtmlSanitizer()
    out_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = out_dir / "manifest.json"
    previous = read_manifest(manifest_path)
    result = WriteResult()
    entries: dict[str, dict] = {}
    seen: set[str] = set()

    for doc in documents:
        if doc.id in seen:
            logger.error("Duplicate document id %s from %s", doc.id, doc.source)
            result.failed.append((doc.id, f"duplicate id (source {doc.source})"))
            continue
        seen.add(doc.id)

        if detector is not None and not detector.has_changed(doc.id, doc.checksum):
            logger.debug("Unchanged, skipping %s", doc.id)
            result.skipped.append(doc.id)
            if doc.id in previous:
                entries[doc.id] = previous[doc.id]
            continue

        try:
            _write_one(doc, out_dir, sanitizer)
        except Exception as e:
            logger.exception("Failed to write %s", doc.id)
            result.failed.append((doc.id, str(e)))
            continue

        if detector is not None:
            detector.update(doc.id, doc.checksum)
        result.written.append(doc.id)
        entries[doc.id] = manifest_entry(doc)

    manifest_path.write_text(
        json.dumps(build_manifest(list(entries.values())), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("Wrote %s", manifest_path)

    if detector is not None:
        detector.save()

    logger.info(
        "Wrote %d text files to %s (%d unchanged, %d failed)",
        len(result.written),
        out_dir,
        len(result.skipped),
        len(result.failed),
    )
    return result
