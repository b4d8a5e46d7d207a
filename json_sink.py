"""JSON file sink: the concerts.json artifact read by the website build."""

from __future__ import annotations

import json
import logging
import os
from datetime import date
from pathlib import Path

from filters import has_date
from models import Concert

CONCERTS_JSON_PATH = os.getenv("CONCERTS_JSON_PATH", "concerts.json")

LOGGER = logging.getLogger(__name__)


def prepare_concerts(concerts: list[Concert]) -> list[Concert]:
    """Drop undated concerts and order the rest by date ascending."""
    dated = [c for c in concerts if has_date(c)]
    dropped = len(concerts) - len(dated)
    if dropped:
        LOGGER.info("Dropped %s concerts without a date", dropped)
    return sorted(dated, key=_date_sort_key)


def write_concerts(concerts: list[Concert], output_path: str | Path | None = None) -> int:
    """Write the published concerts as indented JSON, replacing the file.

    Returns the number of concerts written.
    """
    path = Path(output_path or CONCERTS_JSON_PATH)
    published = prepare_concerts(concerts)

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps([c.to_dict() for c in published], indent=2, ensure_ascii=False)
    path.write_text(payload + "\n", encoding="utf-8")

    LOGGER.info("Generated %s with %s concerts", path, len(published))
    return len(published)


def _date_sort_key(concert: Concert) -> tuple[date, str]:
    # Same-day events keep their time-of-day order via the full ISO string.
    return date.fromisoformat(concert.date[:10]), concert.date
