"""Value objects for evidence coverage."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterator, List


@dataclass(frozen=True, order=True)
class Interval:
    """Inclusive span of calendar days."""
    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Interval end {self.end} is before start {self.start}")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def iter_days(self) -> Iterator[date]:
        current = self.start
        while True:
            yield current
            if current == self.end:
                return
            current += timedelta(days=1)

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass
class CoverageResult:
    """How much of a claim's date span is backed by evidence.

    Derived on every request and never stored. ``has_claim_interval`` is False
    for the no-coverage result returned when the claim has no usable dates;
    callers decide how to render that case.
    """
    percentage: int
    covered_days: int
    total_days: int
    uncovered_ranges: List[Interval] = field(default_factory=list)
    has_claim_interval: bool = True

    @property
    def fully_supported(self) -> bool:
        return self.total_days > 0 and self.covered_days == self.total_days

    def to_dict(self) -> Dict[str, Any]:
        return {
            "percentage": self.percentage,
            "coveredDays": self.covered_days,
            "totalDays": self.total_days,
            "uncoveredRanges": [r.to_dict() for r in self.uncovered_ranges],
            "fullySupported": self.fully_supported,
            "hasClaimInterval": self.has_claim_interval,
        }


def no_coverage() -> CoverageResult:
    """Result for a claim whose dates are missing, unparseable or inverted."""
    return CoverageResult(
        percentage=0,
        covered_days=0,
        total_days=0,
        uncovered_ranges=[],
        has_claim_interval=False,
    )
