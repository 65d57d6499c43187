"""Record mappers for normalizing caller date fields to engine field names."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

from evidence_coverage.mappers.base import FieldMapper, IdentityMapper
from evidence_coverage.mappers.generic import EvidenceRecordMapper, GenericMapper
from evidence_coverage.mappers.config_mapper import ConfigMapper, load_config_mapper

# Built-in Python mappers
BUILTIN_MAPPERS: Dict[str, type] = {
    "engine": IdentityMapper,
    "evidence": EvidenceRecordMapper,
    "generic": GenericMapper,
}

# Path to bundled YAML configs
CONFIGS_DIR = Path(__file__).parent / "configs"


def get_mapper(source: str, config_dir: Optional[Path] = None) -> Tuple[FieldMapper, str]:
    """Get the appropriate mapper for a record source.

    Lookup order:
    1. YAML config in config_dir (<config_dir>/<source>.yaml)
    2. Bundled YAML config (evidence_coverage/mappers/configs/<source>.yaml)
    3. Built-in Python mapper
    4. Generic fallback mapper

    Returns:
        Tuple of (mapper instance, mapper_type) where mapper_type is one of:
        "yaml_custom", "yaml_builtin", "builtin", "generic"
    """
    source_lower = source.lower()

    if config_dir:
        config_path = config_dir / f"{source_lower}.yaml"
        if config_path.exists():
            mapper = load_config_mapper(config_path)
            if mapper:
                return mapper, "yaml_custom"

    bundled = CONFIGS_DIR / f"{source_lower}.yaml"
    if bundled.exists():
        mapper = load_config_mapper(bundled)
        if mapper:
            return mapper, "yaml_builtin"

    if source_lower in BUILTIN_MAPPERS:
        return BUILTIN_MAPPERS[source_lower](), "builtin"

    return GenericMapper(), "generic"


def known_sources(config_dir: Optional[Path] = None) -> list:
    """Names accepted by get_mapper without falling back to the generic mapper."""
    names = set(BUILTIN_MAPPERS)
    for directory in (CONFIGS_DIR, config_dir):
        if directory and directory.exists():
            names.update(p.stem for p in directory.glob("*.yaml"))
    return sorted(names)


__all__ = [
    "FieldMapper",
    "IdentityMapper",
    "GenericMapper",
    "EvidenceRecordMapper",
    "ConfigMapper",
    "load_config_mapper",
    "get_mapper",
    "known_sources",
]
