"""Settings for the command line, loaded from YAML."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .normalization.sanitizer import DEFAULT_BLOCKS, BlockMarkers

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = Path(__file__).resolve().parent / "config" / "settings.yaml"


class FetchSettings(BaseModel):
    """How pages are downloaded."""

    model_config = ConfigDict(extra="forbid")

    requests_per_second: float = Field(1.0, gt=0)
    burst: int = Field(2, ge=1)
    ttl: int = Field(7 * 24 * 3600, ge=0)
    max_retries: int = Field(3, ge=1)
    retry_delay: float = Field(5, ge=0)
    timeout: float = Field(60, gt=0)
    user_agent: str = "detag/1.0"


class FileSettings(BaseModel):
    """Which files a directory scan picks up."""

    model_config = ConfigDict(extra="forbid")

    patterns: list[str] = Field(default_factory=lambda: ["*.html", "*.htm", "*.xml"], min_length=1)


class BlockSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    start: str = Field(min_length=1)
    end: str = Field(min_length=1)

    def markers(self) -> BlockMarkers:
        return BlockMarkers(self.name, self.start, self.end)


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    fetch: FetchSettings = Field(default_factory=FetchSettings)
    files: FileSettings = Field(default_factory=FileSettings)
    blocks: list[BlockSettings] = Field(
        default_factory=lambda: [BlockSettings(name=b.name, start=b.start, end=b.end) for b in DEFAULT_BLOCKS]
    )

    @property
    def block_markers(self) -> tuple[BlockMarkers, ...]:
        """Blocks in the form ``HtmlSanitizer`` takes them."""
        return tuple(b.markers() for b in self.blocks)


def load_settings(path: Path | None = None) -> Settings:
    """Read settings from ``path`` (the packaged defaults if None).

    Missing keys fall back to the built-in defaults.

    Raises:
        pydantic.ValidationError: On unknown sections or keys, or values of
            the wrong type.
        ValueError: If the file is not valid YAML.
    """
    path = path or DEFAULT_SETTINGS_FILE
    with open(path, encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    settings = Settings.model_validate(raw or {})
    logger.debug("Loaded settings from %s", path)
    return settings
