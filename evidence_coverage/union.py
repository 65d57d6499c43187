"""Union of evidence intervals clipped to a claim interval."""
from __future__ import annotations

from datetime import timedelta
from typing import Iterable, List, Optional, Set

from evidence_coverage.dates import day_key
from evidence_coverage.models import Interval

ONE_DAY = timedelta(days=1)


def intersect(claim: Interval, interval: Interval) -> Optional[Interval]:
    """Overlap of two intervals, or None when they share no day."""
    overlap_start = max(claim.start, interval.start)
    overlap_end = min(claim.end, interval.end)
    if overlap_start > overlap_end:
        return None
    return Interval(overlap_start, overlap_end)


def covered_days(claim: Interval, evidence_intervals: Iterable[Interval]) -> Set[str]:
    """Day keys of the claim covered by at least one evidence interval.

    Each day is counted once no matter how many evidence items cover it.
    Cost grows with evidence count times overlap length.
    """
    covered: Set[str] = set()
    for interval in evidence_intervals:
        overlap = intersect(claim, interval)
        if overlap is None:
            continue
        for day in overlap.iter_days():
            covered.add(day_key(day))
    return covered


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """Merge overlapping or touching intervals into sorted disjoint runs."""
    merged: List[Interval] = []
    for interval in sorted(intervals):
        if merged and (interval.start - merged[-1].end).days <= 1:
            last = merged[-1]
            if interval.end > last.end:
                merged[-1] = Interval(last.start, interval.end)
        else:
            merged.append(interval)
    return merged


def covered_intervals(claim: Interval, evidence_intervals: Iterable[Interval]) -> List[Interval]:
    """Covered runs of the claim without materializing individual days."""
    clipped = []
    for interval in evidence_intervals:
        overlap = intersect(claim, interval)
        if overlap is not None:
            clipped.append(overlap)
    return merge_intervals(clipped)


def uncovered_intervals(claim: Interval, covered: Iterable[Interval]) -> List[Interval]:
    """Gaps of the claim left by the covered runs, in chronological order."""
    gaps: List[Interval] = []
    cursor = claim.start
    for run in merge_intervals(covered):
        overlap = intersect(claim, run)
        if overlap is None:
            continue
        if overlap.start > cursor:
            gaps.append(Interval(cursor, overlap.start - ONE_DAY))
        if overlap.end >= claim.end:
            return gaps
        if overlap.end >= cursor:
            cursor = overlap.end + ONE_DAY
    gaps.append(Interval(cursor, claim.end))
    return gaps
