"""Evidence coverage API endpoints."""
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd
from fastapi import APIRouter, HTTPException, Query

from evidence_coverage.aggregate import (
    claim_coverage_frame,
    date_groups,
    metric_coverage_percentage,
)
from evidence_coverage.config import CoverageSettings, load_settings
from evidence_coverage.engine import compute_evidence_coverage, evidence_overlap_days
from evidence_coverage.mappers import FieldMapper, get_mapper, known_sources

from api.schemas.coverage import (
    ClaimCoverage,
    CoverageRequest,
    CoverageResponse,
    DateGroup,
    EvidenceOverlapRequest,
    EvidenceOverlapResponse,
    MetricCoverageRequest,
    MetricCoverageResponse,
)

MAPPERS_DIR_ENV_VAR = "EVIDENCE_COVERAGE_MAPPERS_DIR"

router = APIRouter(prefix="/coverage", tags=["coverage"])


@lru_cache(maxsize=1)
def get_settings() -> CoverageSettings:
    return load_settings()


def mappers_dir() -> Optional[Path]:
    value = os.environ.get(MAPPERS_DIR_ENV_VAR)
    return Path(value) if value else None


def resolve_mapper(source: Optional[str]) -> Optional[FieldMapper]:
    """Look up a record mapper by source name; 404 for unknown sources."""
    if not source:
        return None
    config_dir = mappers_dir()
    if source.lower() not in known_sources(config_dir):
        raise HTTPException(status_code=404, detail=f"Record source '{source}' not found")
    mapper, _ = get_mapper(source, config_dir)
    return mapper


def resolve_mappers(
    claim_source: Optional[str], evidence_source: Optional[str]
) -> Tuple[Optional[FieldMapper], Optional[FieldMapper]]:
    return resolve_mapper(claim_source), resolve_mapper(evidence_source)


@router.post("", response_model=CoverageResponse)
def post_coverage(
    body: CoverageRequest,
    claim_source: Optional[str] = Query(default=None),
    evidence_source: Optional[str] = Query(default=None),
):
    """Compute how much of a claim's date span its evidence covers."""
    claim_mapper, evidence_mapper = resolve_mappers(claim_source, evidence_source)
    result = compute_evidence_coverage(
        body.claim,
        body.evidence,
        settings=get_settings(),
        claim_mapper=claim_mapper,
        evidence_mapper=evidence_mapper,
    )
    return CoverageResponse(**result.to_dict())


@router.post("/evidence-overlap", response_model=EvidenceOverlapResponse)
def post_evidence_overlap(
    body: EvidenceOverlapRequest,
    claim_source: Optional[str] = Query(default=None),
    evidence_source: Optional[str] = Query(default=None),
):
    """Count the claim days covered by a single evidence item."""
    claim_mapper, evidence_mapper = resolve_mappers(claim_source, evidence_source)
    covered, total = evidence_overlap_days(
        body.claim,
        body.evidence,
        settings=get_settings(),
        claim_mapper=claim_mapper,
        evidence_mapper=evidence_mapper,
    )
    return EvidenceOverlapResponse(covered_days=covered, total_days=total)


@router.post("/metric", response_model=MetricCoverageResponse)
def post_metric_coverage(
    body: MetricCoverageRequest,
    claim_source: Optional[str] = Query(default=None),
    evidence_source: Optional[str] = Query(default=None),
):
    """Roll up coverage for all claims of one metric."""
    claim_mapper, evidence_mapper = resolve_mappers(claim_source, evidence_source)
    frame = claim_coverage_frame(
        [claim.model_dump() for claim in body.claims],
        settings=get_settings(),
        claim_mapper=claim_mapper,
        evidence_mapper=evidence_mapper,
    )
    groups_df = date_groups(frame)

    claims = [
        ClaimCoverage(
            claim_id=row["claim_id"],
            value=float(row["value"]),
            start=row["start"] if pd.notna(row["start"]) else None,
            end=row["end"] if pd.notna(row["end"]) else None,
            total_days=int(row["total_days"]),
            covered_days=int(row["covered_days"]),
            percentage=int(row["percentage"]),
            fully_supported=bool(row["fully_supported"]),
            evidence_count=int(row["evidence_count"]),
        )
        for _, row in frame.iterrows()
    ]
    groups = [
        DateGroup(
            start=row["start"],
            end=row["end"],
            claim_count=int(row["claim_count"]),
            total_value=float(row["total_value"]),
            percentage=int(row["percentage"]),
            fully_supported=bool(row["fully_supported"]),
        )
        for _, row in groups_df.iterrows()
    ]
    return MetricCoverageResponse(
        percentage=metric_coverage_percentage(frame),
        claims=claims,
        groups=groups,
    )
