"""Metric and initiative level coverage rollups."""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

from evidence_coverage.calculator import round_ratio
from evidence_coverage.config import CoverageSettings
from evidence_coverage.dates import normalize
from evidence_coverage.engine import DEFAULT_SETTINGS, compute_evidence_coverage
from evidence_coverage.mappers import FieldMapper

logger = logging.getLogger(__name__)

CLAIM_COLUMNS = [
    "claim_id",
    "value",
    "start",
    "end",
    "total_days",
    "covered_days",
    "percentage",
    "fully_supported",
    "evidence_count",
    "group_key",
]

GROUP_COLUMNS = [
    "group_key",
    "start",
    "end",
    "claim_count",
    "total_value",
    "percentage",
    "fully_supported",
]


def _group_key(record: Mapping[str, Any], start: Optional[str], end: Optional[str]) -> str:
    if start is None:
        return ""
    if record.get("date_range_start") and record.get("date_range_end"):
        return f"{start}_{end}"
    return start


def claim_coverage_frame(
    claims: Iterable[Mapping[str, Any]],
    settings: Optional[CoverageSettings] = None,
    claim_mapper: Optional[FieldMapper] = None,
    evidence_mapper: Optional[FieldMapper] = None,
) -> pd.DataFrame:
    """Coverage for each claim of a metric as a DataFrame.

    Each claim record carries its own date fields, an optional ``id`` and
    ``value``, and an ``evidence`` list of linked evidence records.
    """
    settings = settings or DEFAULT_SETTINGS
    rows: List[dict] = []
    for index, claim in enumerate(claims):
        if not isinstance(claim, Mapping):
            continue
        mapped = claim_mapper.map_record(claim) if claim_mapper else dict(claim)
        linked = claim.get("evidence")
        if isinstance(linked, (list, tuple)):
            evidence = list(linked)
        else:
            if linked is not None:
                logger.debug("Ignoring non-list evidence on claim %r", claim.get("id", index))
            evidence = []
        result = compute_evidence_coverage(
            mapped, evidence, settings=settings, evidence_mapper=evidence_mapper
        )
        interval = normalize(
            mapped,
            allow_swap=settings.allow_inverted_ranges,
            single_date_fields=settings.single_date_fields,
            allow_time=settings.accept_timestamps,
        )
        start = interval.start.isoformat() if interval else None
        end = interval.end.isoformat() if interval else None
        value = claim.get("value")
        rows.append(
            {
                "claim_id": str(claim.get("id", index)),
                "value": value if isinstance(value, (int, float, str)) else None,
                "start": start,
                "end": end,
                "total_days": result.total_days,
                "covered_days": result.covered_days,
                "percentage": result.percentage,
                "fully_supported": result.fully_supported,
                "evidence_count": len(evidence),
                "group_key": _group_key(mapped, start, end),
            }
        )

    frame = pd.DataFrame(rows, columns=CLAIM_COLUMNS)
    # Non-numeric values count as 0; undated claims keep None, not NaN.
    frame["value"] = pd.to_numeric(frame["value"], errors="coerce").fillna(0)
    for column in ("start", "end"):
        frame[column] = pd.Series(
            [day if isinstance(day, str) else None for day in frame[column]],
            index=frame.index,
            dtype=object,
        )
    return frame


def date_groups(frame: pd.DataFrame) -> pd.DataFrame:
    """Group claims sharing the same date or date range, newest first.

    Group percentage is the rounded mean of its claims' percentages and a
    group is fully supported only when every claim in it is.
    """
    if frame.empty:
        return pd.DataFrame(columns=GROUP_COLUMNS)

    dated = frame[frame["start"].notna()]
    if dated.empty:
        return pd.DataFrame(columns=GROUP_COLUMNS)

    grouped = dated.groupby("group_key", sort=False).agg(
        start=("start", "first"),
        end=("end", "first"),
        claim_count=("claim_id", "count"),
        total_value=("value", "sum"),
        percentage_sum=("percentage", "sum"),
        fully_supported=("fully_supported", "all"),
    ).reset_index()

    grouped["percentage"] = [
        round_ratio(int(total), int(count), scale=1)
        for total, count in zip(grouped["percentage_sum"], grouped["claim_count"])
    ]
    grouped["fully_supported"] = grouped["fully_supported"].astype(bool)
    grouped = grouped.sort_values(["start", "end"], ascending=False, kind="mergesort")
    return grouped[GROUP_COLUMNS].reset_index(drop=True)


def metric_coverage_percentage(frame: pd.DataFrame) -> int:
    """Rounded mean claim percentage for one metric; 0 without claims."""
    if frame.empty:
        return 0
    return round_ratio(int(frame["percentage"].sum()), len(frame), scale=1)


def initiative_coverage_percentage(metric_percentages: Iterable[int]) -> int:
    """Share of metrics with any evidence coverage; 0 without metrics."""
    values = list(metric_percentages)
    with_coverage = sum(1 for value in values if value > 0)
    return round_ratio(with_coverage, len(values))
