"""YAML-driven record mapper."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from evidence_coverage.mappers.base import FieldMapper

logger = logging.getLogger(__name__)


class ConfigMapper(FieldMapper):
    """YAML-driven mapper that loads field mappings from config files.

    Config format:
        source: grants_export
        description: "Quarterly grant report CSV"

        field_map:
          reporting_period_start: date_range_start
          reporting_period_end: date_range_end
          photo_date: date_captured

        defaults:
          date_range_end: "2024-12-31"
    """

    def __init__(self, config_path: Path):
        self.config_path = config_path
        self.config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        if not isinstance(self.config, dict):
            raise ValueError(f"Mapper config {config_path} must contain a mapping")
        self._field_map = self.config.get("field_map", {}) or {}
        self.defaults = self.config.get("defaults", {}) or {}
        for section, value in (("field_map", self._field_map), ("defaults", self.defaults)):
            if not isinstance(value, dict):
                raise ValueError(f"Mapper config {config_path}: {section} must be a mapping")
        self._source = self.config.get("source", config_path.stem)
        self._description = self.config.get("description", "")

    @property
    def field_map(self) -> Dict[str, str]:
        return self._field_map

    @property
    def source_name(self) -> str:
        return self._source

    @property
    def description(self) -> str:
        return self._description

    def post_process(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Apply defaults for missing fields."""
        for field, value in self.defaults.items():
            if field not in record or record[field] is None:
                record[field] = value
        return record


def load_config_mapper(config_path: Path) -> Optional[ConfigMapper]:
    """Load a ConfigMapper from a YAML file, returning None if invalid."""
    try:
        return ConfigMapper(config_path)
    except (yaml.YAMLError, OSError, ValueError) as exc:
        logger.warning("Ignoring mapper config %s: %s", config_path, exc)
        return None
