"""Generic record mapper with common date field name variations."""
from __future__ import annotations

from typing import Dict

from evidence_coverage.mappers.base import FieldMapper


class GenericMapper(FieldMapper):
    """Fallback mapper that handles common date field name variations.

    Used when no source-specific mapper is available.
    """

    @property
    def field_map(self) -> Dict[str, str]:
        return {
            # Range start variations
            "start_date": "date_range_start",
            "date_start": "date_range_start",
            "period_start": "date_range_start",
            "range_start": "date_range_start",
            "from_date": "date_range_start",
            "startdate": "date_range_start",
            # Range end variations
            "end_date": "date_range_end",
            "date_end": "date_range_end",
            "period_end": "date_range_end",
            "range_end": "date_range_end",
            "to_date": "date_range_end",
            "enddate": "date_range_end",
            # Single date variations
            "date": "date_represented",
            "as_of": "date_represented",
            "report_date": "date_represented",
            "captured_at": "date_captured",
            "capture_date": "date_captured",
            "taken_on": "date_captured",
        }


class EvidenceRecordMapper(FieldMapper):
    """Evidence rows as stored by the reporting app.

    Stored evidence carries its single date as ``date_represented``.
    """

    @property
    def field_map(self) -> Dict[str, str]:
        return {
            "date_represented": "date_captured",
        }

    @property
    def source_name(self) -> str:
        return "evidence"
