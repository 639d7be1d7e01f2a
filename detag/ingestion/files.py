"""Read markup files from a directory tree."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from .base import BaseSource

DEFAULT_PATTERNS = ("*.html", "*.htm", "*.xml")


class FileSource(BaseSource):
    """Every file under ``root`` matching one of ``patterns``.

    Files are read as UTF-8; undecodable bytes are replaced.
    """

    def __init__(self, root: Path, patterns: list[str] | tuple[str, ...] = DEFAULT_PATTERNS):
        super().__init__()
        self.root = root
        self.patterns = tuple(patterns)

    def _paths(self) -> list[Path]:
        found = set()
        for pattern in self.patterns:
            found.update(p for p in self.root.rglob(pattern) if p.is_file())
        return sorted(found)

    def entries(self) -> Iterator[tuple[str, str]]:
        for path in self._paths():
            yield path.relative_to(self.root).as_posix(), str(path)

    def read(self, source: str) -> str:
        return Path(source).read_text(encoding="utf-8", errors="replace")
