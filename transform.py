"""Map raw Notion pages onto the public Concert schema."""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Any
from urllib.parse import quote

from models import Concert, Venue
from posters import download_poster, ensure_poster_dir, select_poster

MAP_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="
DEFAULT_TITLE = "Untitled Event"
DEFAULT_VENUE = "TBA"
# Placeholder the Location formula renders when both of its inputs are empty.
EMPTY_LOCATION_PLACEHOLDER = "- :"
# Characters encodeURIComponent leaves unescaped, besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"

_EMPTY_SEPARATOR_RE = re.compile(r":\s*,\s*")
_TRAILING_PLACEHOLDER_RE = re.compile(r"\s*-\s*:\s*$")
_TRAILING_COLON_RE = re.compile(r":\s*$")

LOGGER = logging.getLogger(__name__)


def resolve_title(properties: dict[str, Any]) -> str:
    return (
        _first_text(properties, "Program Name", "rich_text")
        or _first_text(properties, "Name", "title")
        or DEFAULT_TITLE
    )


def resolve_program_name(properties: dict[str, Any]) -> str:
    return _first_text(properties, "Name", "title")


def resolve_date(properties: dict[str, Any]) -> str:
    value = _typed_value(properties, "Date", "date")
    start = value.get("start") if isinstance(value, dict) else None
    return start if isinstance(start, str) else ""


def resolve_location(properties: dict[str, Any]) -> str:
    formula = _typed_value(properties, "Location", "formula")
    text = formula.get("string") if isinstance(formula, dict) else None
    return text if isinstance(text, str) else ""


def parse_venue(raw: str) -> Venue:
    """Clean the Location formula output into a venue name and map link.

    Empty values and the bare formula placeholder become "TBA" with no link.
    """
    if not raw or raw == DEFAULT_VENUE or raw == EMPTY_LOCATION_PLACEHOLDER:
        return Venue(name=DEFAULT_VENUE)

    cleaned = raw.replace("@", "")
    cleaned = _EMPTY_SEPARATOR_RE.sub(", ", cleaned)
    cleaned = _TRAILING_PLACEHOLDER_RE.sub("", cleaned)
    cleaned = _TRAILING_COLON_RE.sub("", cleaned)
    cleaned = cleaned.strip()

    if not cleaned or cleaned == "-":
        return Venue(name=DEFAULT_VENUE)

    return Venue(name=cleaned, map_url=MAP_SEARCH_URL + quote(cleaned, safe=_URI_COMPONENT_SAFE))


def get_season(date_str: str) -> str:
    """Return the August-to-July season label for an ISO date or date-time.

    Seasons start in August: 2025-09-15 and 2026-03-01 are both "2025-2026".
    """
    parsed = date.fromisoformat(date_str[:10])
    if parsed.month >= 8:
        return f"{parsed.year}-{parsed.year + 1}"
    return f"{parsed.year - 1}-{parsed.year}"


def build_concert(record: dict[str, Any], poster_dir: Path | None) -> Concert:
    """Transform one Notion page into a Concert.

    When poster_dir is None the poster is not downloaded and posterUrl stays
    empty (used for dry runs).
    """
    record_id = record["id"]
    properties = record.get("properties") or {}

    concert_date = resolve_date(properties)
    venue = parse_venue(resolve_location(properties))

    poster_url: str | None = None
    poster = select_poster(properties)
    if poster is not None and poster_dir is not None:
        poster_url = download_poster(poster, record_id, poster_dir)

    ticket_link = _typed_value(properties, "Link to Purchase Tickets", "url")

    return Concert(
        id=record_id,
        title=resolve_title(properties),
        program_name=resolve_program_name(properties),
        date=concert_date,
        venue=venue.name,
        venue_map_url=venue.map_url,
        ticket_link=ticket_link if isinstance(ticket_link, str) and ticket_link else None,
        description=_first_text(properties, "Promotional Blurb", "rich_text"),
        poster_url=poster_url,
        season=get_season(concert_date) if concert_date else "",
    )


def transform_records(
    records: list[dict[str, Any]],
    poster_dir: Path | None,
    skip_undated: bool = False,
) -> list[Concert]:
    """Transform records one at a time, downloading posters along the way.

    Args:
        records: Raw Notion pages in query order.
        poster_dir: Where posters are written; None disables downloads.
        skip_undated: Drop records without a date before any poster work.
    """
    if poster_dir is not None:
        ensure_poster_dir(poster_dir)

    concerts: list[Concert] = []
    skipped = 0
    for record in records:
        if skip_undated and not resolve_date(record.get("properties") or {}):
            skipped += 1
            LOGGER.info("Skipping record_id=%s: no date", record.get("id"))
            continue
        concerts.append(build_concert(record, poster_dir))

    LOGGER.info("Transformed %s records (skipped_undated=%s)", len(concerts), skipped)
    return concerts


def _typed_value(properties: dict[str, Any], name: str, kind: str) -> Any:
    prop = properties.get(name)
    return prop.get(kind) if isinstance(prop, dict) else None


def _first_text(properties: dict[str, Any], name: str, kind: str) -> str:
    runs = _typed_value(properties, name, kind)
    if not isinstance(runs, list) or not runs or not isinstance(runs[0], dict):
        return ""
    text = runs[0].get("plain_text")
    return text if isinstance(text, str) else ""
