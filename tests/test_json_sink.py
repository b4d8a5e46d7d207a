from __future__ import annotations

import json
from pathlib import Path

import pytest

import json_sink
from models import Concert


def _concert(concert_id: str, date: str, **overrides: object) -> Concert:
    fields = {
        "id": concert_id,
        "title": f"Concert {concert_id}",
        "program_name": "",
        "date": date,
        "venue": "TBA",
        "venue_map_url": None,
        "ticket_link": None,
        "description": "",
        "poster_url": None,
        "season": "",
    }
    fields.update(overrides)
    return Concert(**fields)


@pytest.fixture(autouse=True)
def patch_json_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point CONCERTS_JSON_PATH at a temp file for every test."""
    monkeypatch.setattr(json_sink, "CONCERTS_JSON_PATH", str(tmp_path / "concerts.json"))


def _read_output() -> list[dict]:
    return json.loads(Path(json_sink.CONCERTS_JSON_PATH).read_text(encoding="utf-8"))


def test_write_concerts_drops_undated_and_sorts() -> None:
    concerts = [
        _concert("c", "2026-02-01"),
        _concert("x", ""),
        _concert("a", "2025-09-10"),
        _concert("b", "2025-11-20"),
    ]

    count = json_sink.write_concerts(concerts)

    assert count == 3
    assert [c["id"] for c in _read_output()] == ["a", "b", "c"]


def test_write_concerts_orders_same_day_by_time() -> None:
    concerts = [
        _concert("evening", "2025-10-01T19:30:00.000-04:00"),
        _concert("matinee", "2025-10-01T14:00:00.000-04:00"),
        _concert("day-before", "2025-09-30"),
    ]

    json_sink.write_concerts(concerts)

    assert [c["id"] for c in _read_output()] == ["day-before", "matinee", "evening"]


def test_write_concerts_uses_public_keys() -> None:
    concert = _concert(
        "a",
        "2025-10-01",
        program_name="Fall Gala",
        venue="Symphony Hall, Boston",
        venue_map_url="https://maps.example.com/?q=Symphony",
        ticket_link="https://tickets.example.com",
        poster_url="posters/a.png",
        season="2025-2026",
    )

    json_sink.write_concerts([concert])

    row = _read_output()[0]
    assert set(row) == {
        "id", "title", "programName", "date", "venue", "venueMapUrl",
        "ticketLink", "description", "posterUrl", "season",
    }
    assert row["programName"] == "Fall Gala"
    assert row["venueMapUrl"] == "https://maps.example.com/?q=Symphony"
    assert row["posterUrl"] == "posters/a.png"


def test_write_concerts_absent_optionals_are_null() -> None:
    json_sink.write_concerts([_concert("a", "2025-10-01")])

    row = _read_output()[0]
    assert row["ticketLink"] is None
    assert row["venueMapUrl"] is None
    assert row["posterUrl"] is None


def test_write_concerts_overwrites_previous_output() -> None:
    json_sink.write_concerts([_concert("a", "2025-10-01"), _concert("b", "2025-10-02")])
    json_sink.write_concerts([_concert("c", "2025-10-03")])

    assert [c["id"] for c in _read_output()] == ["c"]


def test_write_concerts_is_indented_utf8(tmp_path: Path) -> None:
    target = tmp_path / "site" / "data" / "concerts.json"

    json_sink.write_concerts([_concert("a", "2025-10-01", title="Dvořák Nights")], target)

    text = target.read_text(encoding="utf-8")
    assert text.startswith("[\n  {")
    assert "Dvořák Nights" in text


def test_write_concerts_empty_list_writes_empty_array() -> None:
    assert json_sink.write_concerts([]) == 0
    assert _read_output() == []
