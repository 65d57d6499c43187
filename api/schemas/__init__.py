"""Pydantic schemas for API request/response models."""
from api.schemas.coverage import (
    ClaimCoverage,
    CoverageRequest,
    CoverageResponse,
    DateGroup,
    DateRange,
    EvidenceOverlapRequest,
    EvidenceOverlapResponse,
    MetricClaim,
    MetricCoverageRequest,
    MetricCoverageResponse,
)

__all__ = [
    "ClaimCoverage",
    "CoverageRequest",
    "CoverageResponse",
    "DateGroup",
    "DateRange",
    "EvidenceOverlapRequest",
    "EvidenceOverlapResponse",
    "MetricClaim",
    "MetricCoverageRequest",
    "MetricCoverageResponse",
]
