"""Helpers shared by the Supabase repositories."""

import logging
from datetime import date, datetime
from typing import Any

import httpx
from postgrest.exceptions import APIError

from travel_buddy.domain.errors import ConflictError, StoreError

logger = logging.getLogger(__name__)

_UNIQUE_VIOLATION = "23505"


def execute(query: Any, conflict_message: str = "Duplicate record") -> Any:
    """Run a PostgREST query, translating failures into domain errors."""
    try:
        return query.execute()
    except APIError as exc:
        if exc.code == _UNIQUE_VIOLATION:
            raise ConflictError(conflict_message) from exc
        logger.exception("Supabase request failed", extra={"code": exc.code})
        raise StoreError("Database request failed") from exc
    except httpx.HTTPError as exc:
        logger.exception("Supabase unreachable")
        raise StoreError("Database unavailable") from exc


def parse_timestamp(value: object) -> datetime:
    """Parse a timestamp column returned by PostgREST."""
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def parse_date(value: object) -> date:
    """Parse a date column returned by PostgREST."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
