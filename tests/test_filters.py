from filters import UPCOMING_STATUSES, build_status_filter, has_date
from models import Concert


def _concert(date: str) -> Concert:
    return Concert(
        id="abc",
        title="Test",
        program_name="",
        date=date,
        venue="TBA",
        venue_map_url=None,
        ticket_link=None,
        description="",
        poster_url=None,
        season="",
    )


def test_status_filter_is_or_of_upcoming_statuses() -> None:
    status_filter = build_status_filter()
    assert list(status_filter) == ["or"]
    assert status_filter["or"] == [
        {"property": "Status", "status": {"equals": status}} for status in UPCOMING_STATUSES
    ]


def test_upcoming_statuses() -> None:
    assert UPCOMING_STATUSES == ("Future", "Next", "Current")


def test_has_date() -> None:
    assert has_date(_concert("2025-10-01")) is True
    assert has_date(_concert("")) is False
