"""CLI entrypoint for the Notion -> concerts.json sync."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

import json_sink
import posters
from json_sink import prepare_concerts, write_concerts
from notion_client import query_database
from transform import transform_records

SYNC_MODES = ("all", "upcoming")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Sync concerts from Notion into concerts.json")
    parser.add_argument(
        "--mode",
        choices=SYNC_MODES,
        default=os.getenv("SYNC_MODE", "all"),
        help=(
            "'all' (default): fetch every record and drop the ones without a date. "
            "'upcoming': only records with Status Future, Next or Current."
        ),
    )
    parser.add_argument("--output", default=None, help="Output JSON path (default: CONCERTS_JSON_PATH or concerts.json)")
    parser.add_argument("--posters-dir", default=None, help="Poster directory (default: POSTERS_DIR or posters)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and transform only; no poster downloads and no file writes",
    )
    args = parser.parse_args(argv)
    if args.mode not in SYNC_MODES:
        parser.error(f"invalid SYNC_MODE {args.mode!r}; expected one of: {', '.join(SYNC_MODES)}")
    return args


def run(mode: str, output_path: Path, poster_dir: Path, dry_run: bool) -> int:
    """Run one sync and return the number of concerts published."""
    upcoming_only = mode == "upcoming"
    records = query_database(upcoming_only=upcoming_only)
    logging.info("Fetched %s records from Notion (mode=%s)", len(records), mode)

    # In "all" mode undated records are dropped up front so their posters are never fetched.
    concerts = transform_records(
        records,
        poster_dir=None if dry_run else poster_dir,
        skip_undated=not upcoming_only,
    )

    if dry_run:
        published = prepare_concerts(concerts)
        for concert in published:
            logging.info("[dry-run] Would publish: %s %s", concert.date, concert.title)
        logging.info("[dry-run] Would write %s concerts to %s", len(published), output_path)
        return len(published)

    count = write_concerts(concerts, output_path)
    logging.info("Success! Generated %s with %s events.", output_path, count)
    return count


def main(argv: list[str] | None = None) -> int:
    """Initialize config, execute the sync and return the process exit code."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)

    output_path = Path(args.output or os.getenv("CONCERTS_JSON_PATH", json_sink.CONCERTS_JSON_PATH))
    poster_dir = Path(args.posters_dir or os.getenv("POSTERS_DIR", posters.POSTERS_DIR))

    try:
        run(mode=args.mode, output_path=output_path, poster_dir=poster_dir, dry_run=args.dry_run)
    except Exception as exc:
        logging.exception("Sync failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
