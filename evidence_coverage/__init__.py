"""Evidence coverage engine for impact claims."""
from evidence_coverage.calculator import (
    compute_coverage,
    compute_coverage_from_intervals,
    coverage_percentage,
    round_ratio,
)
from evidence_coverage.config import ConfigError, CoverageSettings, load_settings
from evidence_coverage.dates import day_key, normalize, parse_calendar_date
from evidence_coverage.engine import compute_evidence_coverage, evidence_overlap_days
from evidence_coverage.models import CoverageResult, Interval, no_coverage
from evidence_coverage.union import covered_days, covered_intervals, merge_intervals

__all__ = [
    "compute_evidence_coverage",
    "evidence_overlap_days",
    "compute_coverage",
    "compute_coverage_from_intervals",
    "coverage_percentage",
    "round_ratio",
    "ConfigError",
    "CoverageSettings",
    "load_settings",
    "day_key",
    "normalize",
    "parse_calendar_date",
    "CoverageResult",
    "Interval",
    "no_coverage",
    "covered_days",
    "covered_intervals",
    "merge_intervals",
]
