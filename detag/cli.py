"""CLI entry point for detag."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from detag.ingestion.base import BaseSource
from detag.ingestion.files import FileSource
from detag.ingestion.web import WebSource
from detag.normalization.sanitizer import HtmlSanitizer
from detag.normalization.text_cleaner import collapse_whitespace, remove_block, remove_tags
from detag.normalization.writer import WriteResult, write_documents
from detag.settings import load_settings
from detag.utils.checksum import ChangeDetector

logger = logging.getLogger(__name__)

CHECKSUM_FILE = ".checksums.json"


def _read_input(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _report(source: BaseSource, result: WriteResult) -> None:
    failures = source.failures + result.failed
    click.echo(
        f"Done: {len(result.written)} written, {len(result.skipped)} unchanged, "
        f"{len(failures)} failed"
    )
    for item, err in failures:
        click.echo(f"  FAIL: {item}: {err}", err=True)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Settings YAML file (defaults to the packaged settings)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None):
    """Strip HTML/XML markup down to plain text."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except (ValidationError, ValueError) as e:
        _fail(f"Invalid settings: {e}")
    ctx.obj = {
        "settings": settings,
        "sanitizer": HtmlSanitizer(blocks=settings.block_markers),
    }


@cli.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.pass_obj
def strip(obj: dict, file: str | None):
    """Decode, drop comments/scripts/styles and tags, collapse whitespace."""
    click.echo(obj["sanitizer"].strip_html(_read_input(file)))


@cli.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
def tags(file: str | None):
    """Remove tags only, keeping all text between them."""
    click.echo(remove_tags(_read_input(file)), nl=False)


@cli.command()
@click.argument("start_marker")
@click.argument("end_marker")
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
def block(start_marker: str, end_marker: str, file: str | None):
    """Remove every START_MARKER ... END_MARKER block (case-insensitive)."""
    click.echo(remove_block(_read_input(file), start_marker, end_marker), nl=False)


@cli.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
def collapse(file: str | None):
    """Collapse whitespace runs to single spaces."""
    click.echo(collapse_whitespace(_read_input(file)))


@cli.command()
@click.argument("src_dir", type=click.Path(exists=True, file_okay=False))
@click.argument("out_dir", type=click.Path(file_okay=False))
@click.option("--force", is_flag=True, help="Rewrite documents even if unchanged")
@click.pass_obj
def batch(obj: dict, src_dir: str, out_dir: str, force: bool):
    """Strip every markup file under SRC_DIR into OUT_DIR."""
    settings = obj["settings"]
    out_path = Path(out_dir)
    source = FileSource(Path(src_dir), settings.files.patterns)

    try:
        detector = None if force else ChangeDetector(out_path / CHECKSUM_FILE)
        result = write_documents(source.documents(), out_path, obj["sanitizer"], detector)
    except ValueError as e:
        logger.debug("Batch aborted", exc_info=True)
        _fail(str(e))

    _report(source, result)


@cli.command()
@click.argument("urls", nargs=-1, required=True)
@click.option("--out-dir", "-o", type=click.Path(file_okay=False), required=True, help="Output directory")
@click.option("--cache-dir", type=click.Path(file_okay=False), default="cache", help="HTTP cache directory")
@click.pass_obj
def fetch(obj: dict, urls: tuple[str, ...], out_dir: str, cache_dir: str):
    """Download URLS and write their plain text into OUT_DIR."""
    source = WebSource(list(urls), cache_dir=Path(cache_dir), settings=obj["settings"].fetch)

    try:
        result = write_documents(source.documents(), Path(out_dir), obj["sanitizer"])
    except ValueError as e:
        logger.debug("Fetch aborted", exc_info=True)
        _fail(str(e))

    _report(source, result)


if __name__ == "__main__":
    cli()
