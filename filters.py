"""Record filters: the upcoming-status query filter and the dated-concert check."""

from __future__ import annotations

from typing import Any

from models import Concert

# Status labels that count as "upcoming" in the concerts database.
UPCOMING_STATUSES: tuple[str, ...] = ("Future", "Next", "Current")


def build_status_filter() -> dict[str, Any]:
    """Return the Notion filter matching any of UPCOMING_STATUSES."""
    return {
        "or": [
            {"property": "Status", "status": {"equals": status}}
            for status in UPCOMING_STATUSES
        ]
    }


def has_date(concert: Concert) -> bool:
    """Return True if the concert carries a date and can be published."""
    return concert.date != ""
