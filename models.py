"""Shared typed models for the sync pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Venue:
    """Normalized venue name plus an optional map-search link."""

    name: str
    map_url: str | None = None


@dataclass(frozen=True, slots=True)
class PosterFile:
    """Image attachment picked from a record's "Posters" property."""

    url: str
    filename: str


@dataclass(frozen=True, slots=True)
class Concert:
    """Public concert record written to concerts.json."""

    id: str
    title: str
    program_name: str
    date: str
    venue: str
    venue_map_url: str | None
    ticket_link: str | None
    description: str
    poster_url: str | None
    season: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase keys the website reads."""
        return {
            "id": self.id,
            "title": self.title,
            "programName": self.program_name,
            "date": self.date,
            "venue": self.venue,
            "venueMapUrl": self.venue_map_url,
            "ticketLink": self.ticket_link,
            "description": self.description,
            "posterUrl": self.poster_url,
            "season": self.season,
        }
