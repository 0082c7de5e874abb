from __future__ import annotations

from typing import Any, Iterable

from dashfilters.core.dates import format_date, parse_date
from dashfilters.services.filter_definitions import ALL_YEARS


def matches_period(value, year: str | None = None, month: str | None = None) -> bool:
    """
    True when a record date falls inside the selected year/month.

    ``year`` None or 'all' and ``month`` None select everything. A record whose
    date cannot be parsed never matches a concrete year or month.
    """
    wants_year = year not in (None, '', ALL_YEARS)
    wants_month = month not in (None, '')
    if not wants_year and not wants_month:
        return True
    parsed = parse_date(value)
    if parsed is None:
        return False
    if wants_year and str(parsed.year) != str(year).strip():
        return False
    if wants_month and parsed.month != _to_int(month):
        return False
    return True


def _to_int(value, default=0):
    try:
        return int(str(value).strip())
    except Exception:
        return default


def filter_records(
    rows: Iterable[dict[str, Any]],
    date_field: str,
    year: str | None = None,
    month: str | None = None,
) -> list[dict[str, Any]]:
    return [row for row in rows if matches_period(row.get(date_field), year, month)]


def format_record_dates(row: dict[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    out = dict(row)
    for field in fields:
        if field in out:
            out[field] = format_date(out[field])
    return out
