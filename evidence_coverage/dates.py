"""Calendar date parsing and claim/evidence interval normalization."""
from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from evidence_coverage.models import Interval

logger = logging.getLogger(__name__)

RANGE_START_FIELD = "date_range_start"
RANGE_END_FIELD = "date_range_end"
SINGLE_DATE_FIELDS = ("date_represented", "date_captured")

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_calendar_date(value: Any, allow_time: bool = True) -> Optional[date]:
    """Parse a value into the calendar day it names.

    Strings are read as ``YYYY-MM-DD``; anything after a ``T`` or space
    (time of day, offset) is dropped without converting through an instant,
    so "2024-03-05T00:00:00Z" is March 5 in every process timezone. With
    ``allow_time=False`` such strings, and ``datetime`` values, are rejected.

    Returns:
        The date, or None for empty and unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date() if allow_time else None
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    for sep in ("T", "t", " "):
        if sep in text:
            if not allow_time:
                return None
            text = text.split(sep, 1)[0]
            break
    if not _DATE_RE.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def day_key(day: date) -> str:
    return day.isoformat()


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def normalize(
    record: Any,
    allow_swap: bool = False,
    single_date_fields: Sequence[str] = SINGLE_DATE_FIELDS,
    allow_time: bool = True,
) -> Optional[Interval]:
    """Resolve a claim or evidence record to an inclusive day interval.

    An explicit range wins when both endpoints are present. Otherwise the
    first present single-date field gives a one-day interval.

    Args:
        record: Mapping with range and/or single-date fields
        allow_swap: Swap inverted range endpoints instead of rejecting them
        single_date_fields: Single-date field names, in lookup order
        allow_time: Accept values carrying a time of day (date part is kept)

    Returns:
        Interval, or None when no usable date is present or the range is inverted
    """
    if not isinstance(record, Mapping):
        return None

    range_start = record.get(RANGE_START_FIELD)
    range_end = record.get(RANGE_END_FIELD)
    if _present(range_start) and _present(range_end):
        start = parse_calendar_date(range_start, allow_time)
        end = parse_calendar_date(range_end, allow_time)
        if start is None or end is None:
            logger.debug("Unparseable date range %r..%r", range_start, range_end)
            return None
        if end < start:
            if not allow_swap:
                logger.debug("Inverted date range %s..%s rejected", start, end)
                return None
            start, end = end, start
        return Interval(start, end)

    for name in single_date_fields:
        raw = record.get(name)
        if not _present(raw):
            continue
        day = parse_calendar_date(raw, allow_time)
        if day is None:
            logger.debug("Unparseable %s value %r", name, raw)
            return None
        return Interval(day, day)

    return None
