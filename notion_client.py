"""Notion API integration for the concerts database."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

import requests

from filters import build_status_filter

NOTION_API_BASE_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
REQUEST_TIMEOUT_SECONDS = 30
PAGE_SIZE = 100

LOGGER = logging.getLogger(__name__)


class NotionAPIError(RuntimeError):
    """Raised when a Notion request fails or returns an unusable payload."""


def query_database(database_id: str | None = None, upcoming_only: bool = False) -> list[dict[str, Any]]:
    """Fetch every page of the concerts database, sorted by date ascending.

    Follows ``next_cursor`` until Notion reports ``has_more`` is false and
    returns all pages as one list.

    Args:
        database_id: Notion database to query. Reads NOTION_DATABASE_ID if not
            supplied.
        upcoming_only: Restrict to records whose Status is Future, Next or
            Current. When False every record is returned.
    """
    database_id, headers = _notion_context(database_id)
    url = f"{NOTION_API_BASE_URL}/databases/{database_id}/query"

    base_payload: dict[str, Any] = {
        "sorts": [{"property": "Date", "direction": "ascending"}],
        "page_size": PAGE_SIZE,
    }
    if upcoming_only:
        base_payload["filter"] = build_status_filter()

    records: list[dict[str, Any]] = []
    cursor: str | None = None
    page = 0

    while True:
        payload = dict(base_payload)
        if cursor:
            payload["start_cursor"] = cursor

        body = _post_json(url=url, headers=headers, json_payload=payload)
        batch = body["results"]
        records.extend(batch)
        page += 1
        LOGGER.info("Notion query: page=%s batch=%s total=%s", page, len(batch), len(records))

        cursor = body.get("next_cursor")
        if not body.get("has_more") or not cursor:
            break

    return records


def _notion_context(database_id: str | None = None) -> tuple[str, dict[str, str]]:
    api_key = os.getenv("NOTION_KEY") or os.getenv("NOTION_API_KEY")
    database_id = database_id or os.getenv("NOTION_DATABASE_ID")
    if not database_id:
        raise RuntimeError("NOTION_DATABASE_ID environment variable is required")
    if not api_key:
        raise RuntimeError("NOTION_KEY environment variable is required")

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Notion-Version": NOTION_VERSION,
        "Content-Type": "application/json",
    }
    return database_id, headers


def _post_json(
    *,
    url: str,
    headers: dict[str, str],
    json_payload: dict[str, Any],
) -> dict[str, Any]:
    """Send one Notion query request. Any failure is fatal; there are no retries."""
    try:
        response = requests.post(
            url,
            headers=headers,
            json=json_payload,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        raise NotionAPIError(f"Notion API request failed: {exc} {_error_body(exc)}") from exc

    try:
        body = response.json()
    except ValueError as exc:
        raise NotionAPIError("Notion API returned a non-JSON response") from exc

    if not isinstance(body, dict) or not isinstance(body.get("results"), list):
        raise NotionAPIError("Unexpected Notion query payload shape: expected a results list")
    return body


def _error_body(exc: requests.RequestException) -> str:
    if not isinstance(exc, requests.HTTPError) or exc.response is None:
        return ""
    try:
        return json.dumps(exc.response.json())
    except ValueError:
        return exc.response.text
