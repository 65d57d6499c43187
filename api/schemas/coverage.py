"""Evidence coverage Pydantic models."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DateRange(BaseModel):
    """An inclusive calendar date range."""

    start: str
    end: str


class CoverageRequest(BaseModel):
    """A claim and the evidence records linked to it."""

    claim: Dict[str, Any]
    evidence: List[Dict[str, Any]] = Field(default_factory=list)


class EvidenceOverlapRequest(BaseModel):
    """A claim and a single evidence record."""

    claim: Dict[str, Any]
    evidence: Dict[str, Any]


class CoverageResponse(BaseModel):
    """Coverage of a claim's date span by evidence."""

    percentage: int
    covered_days: int = Field(alias="coveredDays")
    total_days: int = Field(alias="totalDays")
    uncovered_ranges: List[DateRange] = Field(default_factory=list, alias="uncoveredRanges")
    fully_supported: bool = Field(alias="fullySupported")
    has_claim_interval: bool = Field(alias="hasClaimInterval")

    class Config:
        populate_by_name = True


class EvidenceOverlapResponse(BaseModel):
    """Days of a claim covered by one evidence item."""

    covered_days: int = Field(alias="coveredDays")
    total_days: int = Field(alias="totalDays")

    class Config:
        populate_by_name = True


class MetricClaim(BaseModel):
    """One claim of a metric; date and id fields pass through as extras."""

    value: Optional[float] = None
    evidence: List[Dict[str, Any]] = Field(default_factory=list)

    class Config:
        extra = "allow"


class MetricCoverageRequest(BaseModel):
    """All claims of one metric, each with its linked evidence."""

    claims: List[MetricClaim] = Field(default_factory=list)


class ClaimCoverage(BaseModel):
    """Coverage row for one claim."""

    claim_id: str
    value: float
    start: Optional[str] = None
    end: Optional[str] = None
    total_days: int
    covered_days: int
    percentage: int
    fully_supported: bool
    evidence_count: int


class DateGroup(BaseModel):
    """Claims sharing the same date or date range."""

    start: str
    end: str
    claim_count: int
    total_value: float
    percentage: int
    fully_supported: bool


class MetricCoverageResponse(BaseModel):
    """Coverage rollup for one metric."""

    percentage: int
    claims: List[ClaimCoverage]
    groups: List[DateGroup]
