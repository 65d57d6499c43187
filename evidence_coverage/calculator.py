"""Coverage percentage and uncovered gap calculation."""
from __future__ import annotations

import logging
from datetime import date
from typing import AbstractSet, Iterable, List, Optional

from evidence_coverage.dates import day_key
from evidence_coverage.models import CoverageResult, Interval, no_coverage
from evidence_coverage.union import merge_intervals, uncovered_intervals

logger = logging.getLogger(__name__)


def round_ratio(numerator: int, denominator: int, scale: int = 100) -> int:
    """Round ``numerator * scale / denominator`` half up to an integer.

    This is the one rounding policy for every percentage reported
    (claim, date group, metric, initiative). Integer arithmetic keeps
    .5 boundaries exact. Returns 0 when the denominator is not positive.
    """
    if denominator <= 0:
        return 0
    return (2 * numerator * scale + denominator) // (2 * denominator)


def coverage_percentage(covered: int, total: int) -> int:
    """Covered share of total as a percentage clamped to [0, 100]."""
    percentage = round_ratio(covered, total)
    if percentage > 100 or covered > total:
        logger.warning("Covered days %d exceed total days %d; clamping", covered, total)
        return 100
    return max(percentage, 0)


def _gaps_from_days(claim: Interval, covered: AbstractSet[str]) -> List[Interval]:
    gaps: List[Interval] = []
    gap_start: Optional[date] = None
    previous: Optional[date] = None
    for day in claim.iter_days():
        if day_key(day) in covered:
            if gap_start is not None:
                gaps.append(Interval(gap_start, previous))
                gap_start = None
        elif gap_start is None:
            gap_start = day
        previous = day
    if gap_start is not None:
        gaps.append(Interval(gap_start, claim.end))
    return gaps


def compute_coverage(claim: Optional[Interval], covered_days: AbstractSet[str]) -> CoverageResult:
    """Build the coverage result from a set of covered day keys.

    Keys outside the claim are ignored. A missing claim interval gives the
    no-coverage result instead of dividing by zero.
    """
    if claim is None:
        return no_coverage()

    total = claim.days
    covered = sum(1 for day in claim.iter_days() if day_key(day) in covered_days)
    return CoverageResult(
        percentage=coverage_percentage(covered, total),
        covered_days=covered,
        total_days=total,
        uncovered_ranges=_gaps_from_days(claim, covered_days),
    )


def compute_coverage_from_intervals(
    claim: Optional[Interval], covered_runs: Iterable[Interval]
) -> CoverageResult:
    """Same result as ``compute_coverage`` but from covered runs.

    Memory stays proportional to the number of runs, not the number of days.
    """
    if claim is None:
        return no_coverage()

    runs = merge_intervals(covered_runs)
    covered = 0
    for run in runs:
        overlap_start = max(claim.start, run.start)
        overlap_end = min(claim.end, run.end)
        if overlap_start <= overlap_end:
            covered += (overlap_end - overlap_start).days + 1

    total = claim.days
    return CoverageResult(
        percentage=coverage_percentage(covered, total),
        covered_days=covered,
        total_days=total,
        uncovered_ranges=uncovered_intervals(claim, runs),
    )
