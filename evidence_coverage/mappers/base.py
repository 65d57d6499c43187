"""Base record mapper interface."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping


class FieldMapper(ABC):
    """Abstract base class for translating caller record fields to engine fields."""

    @property
    @abstractmethod
    def field_map(self) -> Dict[str, str]:
        """Map of source field names to engine field names.

        Keys are source field names (matched case-insensitively).
        Values are engine names such as ``date_range_start`` or ``date_captured``.
        """
        pass

    @property
    def source_name(self) -> str:
        """Human-readable name for this record source."""
        return self.__class__.__name__.replace("Mapper", "")

    def pre_process(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Pre-process record before field mapping. Override for source-specific logic."""
        return record

    def post_process(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Post-process record after field mapping. Override for derived fields."""
        return record

    def map_record(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Map a source record to engine field names.

        Fields that already use engine names are kept; a mapped source value
        only fills an engine field the record does not already set.
        """
        if not isinstance(record, Mapping):
            return {}
        record = self.pre_process(dict(record))
        result: Dict[str, Any] = dict(record)
        source_keys_lower = {str(k).lower(): k for k in record.keys()}

        for source_field, engine_field in self.field_map.items():
            source_key = source_keys_lower.get(source_field.lower())
            if source_key is None or record.get(source_key) is None:
                continue
            if result.get(engine_field) in (None, ""):
                result[engine_field] = record[source_key]

        return self.post_process(result)


class IdentityMapper(FieldMapper):
    """Records that already use engine field names."""

    @property
    def field_map(self) -> Dict[str, str]:
        return {}
