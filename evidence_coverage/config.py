"""Engine settings loaded from YAML."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

CONFIG_ENV_VAR = "EVIDENCE_COVERAGE_CONFIG"
DEFAULT_MATERIALIZE_THRESHOLD_DAYS = 20000


class ConfigError(ValueError):
    """Raised when a settings file cannot be read or has invalid values."""


@dataclass(frozen=True)
class CoverageSettings:
    """Tunables for the coverage engine.

    Config format:
        materialize_threshold_days: 20000
        allow_inverted_ranges: false
        accept_timestamps: true
        single_date_fields:
          - date_represented
          - date_captured
    """
    # Claims longer than this are counted from merged runs instead of a day set
    materialize_threshold_days: int = DEFAULT_MATERIALIZE_THRESHOLD_DAYS
    # Auto-swap of inverted ranges needs explicit product sign-off
    allow_inverted_ranges: bool = False
    # Read "2024-03-05T10:00Z" as March 5; false rejects values with a time part
    accept_timestamps: bool = True
    single_date_fields: Tuple[str, ...] = ("date_represented", "date_captured")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CoverageSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        if "materialize_threshold_days" in data:
            threshold = data["materialize_threshold_days"]
            if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1:
                raise ConfigError("materialize_threshold_days must be a positive integer")
            values["materialize_threshold_days"] = threshold
        if "allow_inverted_ranges" in data:
            allow = data["allow_inverted_ranges"]
            if not isinstance(allow, bool):
                raise ConfigError("allow_inverted_ranges must be true or false")
            values["allow_inverted_ranges"] = allow
        if "accept_timestamps" in data:
            accept = data["accept_timestamps"]
            if not isinstance(accept, bool):
                raise ConfigError("accept_timestamps must be true or false")
            values["accept_timestamps"] = accept
        if "single_date_fields" in data:
            names = data["single_date_fields"]
            if not isinstance(names, list) or not names or not all(isinstance(n, str) for n in names):
                raise ConfigError("single_date_fields must be a non-empty list of field names")
            values["single_date_fields"] = tuple(names)
        return cls(**values)


def load_settings(path: Optional[Path] = None) -> CoverageSettings:
    """Load settings from ``path`` or the EVIDENCE_COVERAGE_CONFIG file.

    Defaults are returned when neither is given.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return CoverageSettings()
        path = Path(env_path)

    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as exc:
        raise ConfigError(f"Cannot read settings from {path}: {exc}") from exc

    if data is None:
        return CoverageSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return CoverageSettings.from_dict(data)
