from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml

from evidence_coverage.aggregate import (
    claim_coverage_frame,
    date_groups,
    metric_coverage_percentage,
)
from evidence_coverage.config import CoverageSettings, load_settings
from evidence_coverage.engine import compute_evidence_coverage
from evidence_coverage.mappers import FieldMapper, get_mapper
from evidence_coverage.models import CoverageResult

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "json")


class InputError(ValueError):
    """Raised when an input file is missing, unreadable or the wrong shape."""


@dataclass
class SummaryResult:
    """Coverage rollup for the claims of one input file."""
    percentage: int
    claims: pd.DataFrame
    groups: pd.DataFrame


def load_records(path: Path) -> Dict[str, Any]:
    """Read a JSON or YAML input file into a mapping."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as exc:
        raise InputError(f"Cannot read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InputError(f"{path} must contain a mapping at the top level")
    return data


def resolve_mapper(source: Optional[str], mappers_dir: Optional[Path]) -> Optional[FieldMapper]:
    if not source:
        return None
    mapper, mapper_type = get_mapper(source, mappers_dir)
    logger.debug("Using %s mapper %s for source %s", mapper_type, mapper.source_name, source)
    return mapper


def settings_for(config_path: Optional[Path]) -> CoverageSettings:
    return load_settings(config_path)


def compute(
    input_path: Path,
    config_path: Optional[Path] = None,
    claim_source: Optional[str] = None,
    evidence_source: Optional[str] = None,
    mappers_dir: Optional[Path] = None,
) -> CoverageResult:
    """Compute coverage for the single claim in an input file.

    Input format:
        claim:
          date_range_start: "2024-03-01"
          date_range_end: "2024-03-10"
        evidence:
          - date_range_start: "2024-03-01"
            date_range_end: "2024-03-05"
    """
    data = load_records(input_path)
    claim = data.get("claim")
    if not isinstance(claim, dict):
        raise InputError(f"{input_path} has no 'claim' mapping")
    evidence = data.get("evidence") or []
    if not isinstance(evidence, list):
        raise InputError(f"'evidence' in {input_path} must be a list")

    return compute_evidence_coverage(
        claim,
        evidence,
        settings=settings_for(config_path),
        claim_mapper=resolve_mapper(claim_source, mappers_dir),
        evidence_mapper=resolve_mapper(evidence_source, mappers_dir),
    )


def summarize(
    input_path: Path,
    config_path: Optional[Path] = None,
    claim_source: Optional[str] = None,
    evidence_source: Optional[str] = None,
    mappers_dir: Optional[Path] = None,
) -> SummaryResult:
    """Roll up coverage for every claim listed under ``claims`` in an input file."""
    data = load_records(input_path)
    claims = data.get("claims") or []
    if not isinstance(claims, list):
        raise InputError(f"'claims' in {input_path} must be a list")

    frame = claim_coverage_frame(
        claims,
        settings=settings_for(config_path),
        claim_mapper=resolve_mapper(claim_source, mappers_dir),
        evidence_mapper=resolve_mapper(evidence_source, mappers_dir),
    )
    return SummaryResult(
        percentage=metric_coverage_percentage(frame),
        claims=frame,
        groups=date_groups(frame),
    )


def export_claims(frame: pd.DataFrame, fmt: str, output_path: Path) -> Path:
    if fmt not in EXPORT_FORMATS:
        raise InputError(f"Unsupported export format '{fmt}' (use {' or '.join(EXPORT_FORMATS)})")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "json":
        frame.to_json(output_path, orient="records", indent=2)
    else:
        frame.to_csv(output_path, index=False)
    return output_path


def format_range(start: Optional[str], end: Optional[str]) -> str:
    if not start:
        return "(no date)"
    if start == end:
        return start
    return f"{start} - {end}"


def print_coverage(result: CoverageResult) -> List[str]:
    """Format a CoverageResult for CLI output."""
    if not result.has_claim_interval:
        return ["Claim has no usable date or date range; coverage unavailable"]

    label = "Fully supported" if result.fully_supported else "Supported"
    lines = [
        f"{result.percentage}% {label}",
        f"  Evidence covers {result.covered_days} of {result.total_days} days",
    ]
    if result.uncovered_ranges:
        lines.append("  Unsupported:")
        for gap in result.uncovered_ranges:
            lines.append(f"    {format_range(gap.start.isoformat(), gap.end.isoformat())} ({gap.days} days)")
    return lines


def print_summary(result: SummaryResult) -> List[str]:
    """Format a SummaryResult for CLI output."""
    lines = [f"Metric coverage: {result.percentage}% across {len(result.claims)} claims"]
    for _, group in result.groups.iterrows():
        marker = "*" if group["fully_supported"] else " "
        lines.append(
            f" {marker} {format_range(group['start'], group['end'])}: "
            f"{group['percentage']}% ({group['claim_count']} claims, total {float(group['total_value']):g})"
        )
    undated = result.claims[result.claims["start"].isna()] if not result.claims.empty else result.claims
    if len(undated):
        lines.append(f"  {len(undated)} claims without usable dates")
    return lines


def result_json(result: CoverageResult) -> str:
    return json.dumps(result.to_dict(), indent=2)
