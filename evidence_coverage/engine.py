"""Evidence coverage entry point used by the API, CLI and aggregation."""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from evidence_coverage.calculator import compute_coverage, compute_coverage_from_intervals
from evidence_coverage.config import CoverageSettings
from evidence_coverage.dates import normalize
from evidence_coverage.mappers import FieldMapper
from evidence_coverage.models import CoverageResult, Interval, no_coverage
from evidence_coverage.union import covered_days, covered_intervals, intersect

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = CoverageSettings()


def _to_interval(
    record: Any,
    settings: CoverageSettings,
    mapper: Optional[FieldMapper] = None,
) -> Optional[Interval]:
    if mapper is not None:
        record = mapper.map_record(record)
    return normalize(
        record,
        allow_swap=settings.allow_inverted_ranges,
        single_date_fields=settings.single_date_fields,
        allow_time=settings.accept_timestamps,
    )


def evidence_intervals(
    evidence_list: Optional[Iterable[Any]],
    settings: CoverageSettings = DEFAULT_SETTINGS,
    mapper: Optional[FieldMapper] = None,
) -> List[Interval]:
    """Normalize evidence records, dropping those without a usable date."""
    intervals: List[Interval] = []
    for index, record in enumerate(evidence_list or ()):
        interval = _to_interval(record, settings, mapper)
        if interval is None:
            logger.debug("Evidence item %d has no usable date; excluded", index)
            continue
        intervals.append(interval)
    return intervals


def compute_evidence_coverage(
    claim: Mapping[str, Any],
    evidence_list: Optional[Iterable[Any]],
    settings: Optional[CoverageSettings] = None,
    claim_mapper: Optional[FieldMapper] = None,
    evidence_mapper: Optional[FieldMapper] = None,
) -> CoverageResult:
    """Compute what share of a claim's date span is backed by evidence.

    Args:
        claim: Claim record with date_represented or date_range_start/date_range_end
        evidence_list: Evidence records with date_captured or a date range
        settings: Engine settings (defaults when omitted)
        claim_mapper: Optional mapper translating claim field names
        evidence_mapper: Optional mapper translating evidence field names

    Returns:
        CoverageResult; the no-coverage result when the claim has no usable dates
    """
    settings = settings or DEFAULT_SETTINGS

    claim_interval = _to_interval(claim, settings, claim_mapper)
    if claim_interval is None:
        logger.info("Claim has no usable date interval; returning no-coverage result")
        return no_coverage()

    intervals = evidence_intervals(evidence_list, settings, evidence_mapper)

    if claim_interval.days > settings.materialize_threshold_days:
        logger.debug(
            "Claim spans %d days (> %d); counting from merged runs",
            claim_interval.days,
            settings.materialize_threshold_days,
        )
        return compute_coverage_from_intervals(
            claim_interval, covered_intervals(claim_interval, intervals)
        )
    return compute_coverage(claim_interval, covered_days(claim_interval, intervals))


def evidence_overlap_days(
    claim: Mapping[str, Any],
    evidence: Mapping[str, Any],
    settings: Optional[CoverageSettings] = None,
    claim_mapper: Optional[FieldMapper] = None,
    evidence_mapper: Optional[FieldMapper] = None,
) -> Tuple[int, int]:
    """Days of the claim covered by one evidence item, as (covered, total).

    Backs "Evidence covers X of Y days" labels. Returns (0, 0) when the claim
    has no usable interval.
    """
    settings = settings or DEFAULT_SETTINGS
    claim_interval = _to_interval(claim, settings, claim_mapper)
    if claim_interval is None:
        return 0, 0
    evidence_interval = _to_interval(evidence, settings, evidence_mapper)
    if evidence_interval is None:
        return 0, claim_interval.days
    overlap = intersect(claim_interval, evidence_interval)
    return (overlap.days if overlap else 0), claim_interval.days
