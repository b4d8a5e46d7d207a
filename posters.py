"""Poster selection and download for concert records."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import requests

from models import PosterFile

POSTERS_DIR = os.getenv("POSTERS_DIR", "posters")
REQUEST_TIMEOUT_SECONDS = 60
IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp", ".gif")
DEFAULT_EXTENSION = ".png"

LOGGER = logging.getLogger(__name__)


def select_poster(properties: dict[str, Any]) -> PosterFile | None:
    """Pick the first image attachment from the "Posters" files property.

    Non-image attachments such as PDFs are skipped. Returns None when the
    record has no usable image.
    """
    posters = properties.get("Posters")
    files = posters.get("files") if isinstance(posters, dict) else None
    if not isinstance(files, list):
        return None

    for item in files:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        if not isinstance(name, str) or not name.lower().endswith(IMAGE_EXTENSIONS):
            continue
        url = _attachment_url(item)
        if url:
            return PosterFile(url=url, filename=name)
    return None


def poster_filename(record_id: str, poster: PosterFile) -> str:
    """Destination filename: record id without hyphens plus the image extension."""
    extension = Path(poster.filename).suffix.lower() or DEFAULT_EXTENSION
    return f"{record_id.replace('-', '')}{extension}"


def ensure_poster_dir(poster_dir: Path) -> None:
    poster_dir.mkdir(parents=True, exist_ok=True)


def download_poster(poster: PosterFile, record_id: str, poster_dir: Path) -> str | None:
    """Download a poster into poster_dir and return its relative URL.

    Existing files are overwritten. A failed download is logged and yields
    None so the concert is still published without a poster.
    """
    filename = poster_filename(record_id, poster)
    destination = poster_dir / filename

    try:
        response = requests.get(poster.url, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        destination.write_bytes(response.content)
    except (requests.RequestException, OSError) as exc:
        LOGGER.warning("Poster download failed for record_id=%s: %s", record_id, exc)
        return None

    LOGGER.info("Downloaded poster %s -> %s", poster.filename, destination)
    return f"{poster_dir.name}/{filename}"


def _attachment_url(item: dict[str, Any]) -> str | None:
    # Notion-hosted uploads live under "file", linked ones under "external".
    for key in ("file", "external"):
        block = item.get(key)
        if isinstance(block, dict) and isinstance(block.get("url"), str) and block["url"]:
            return block["url"]
    return None
