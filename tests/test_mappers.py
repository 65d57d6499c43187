import shutil
import tempfile
import unittest
from pathlib import Path

from evidence_coverage.mappers import (
    ConfigMapper,
    EvidenceRecordMapper,
    GenericMapper,
    IdentityMapper,
    get_mapper,
    known_sources,
    load_config_mapper,
)


class FieldMapperTest(unittest.TestCase):
    def test_generic_variations_case_insensitive(self):
        mapped = GenericMapper().map_record({"Start_Date": "2024-03-01", "END_DATE": "2024-03-10"})
        self.assertEqual(mapped["date_range_start"], "2024-03-01")
        self.assertEqual(mapped["date_range_end"], "2024-03-10")

    def test_existing_engine_field_is_kept(self):
        mapped = GenericMapper().map_record({"date": "2024-01-01", "date_represented": "2024-02-02"})
        self.assertEqual(mapped["date_represented"], "2024-02-02")

    def test_evidence_mapper(self):
        mapped = EvidenceRecordMapper().map_record({"id": "ev-1", "date_represented": "2024-03-05"})
        self.assertEqual(mapped["date_captured"], "2024-03-05")
        self.assertEqual(mapped["id"], "ev-1")

    def test_non_mapping_record(self):
        self.assertEqual(IdentityMapper().map_record(None), {})

    def test_source_names(self):
        self.assertEqual(GenericMapper().source_name, "Generic")
        self.assertEqual(EvidenceRecordMapper().source_name, "evidence")


class ConfigMapperTest(unittest.TestCase):
    def setUp(self):
        self.config_dir = Path(tempfile.mkdtemp(prefix="mappers-"))

    def tearDown(self):
        shutil.rmtree(self.config_dir)

    def write(self, name: str, text: str) -> Path:
        path = self.config_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_field_map_and_defaults(self):
        path = self.write("grants.yaml", (
            "source: grants\n"
            "field_map:\n"
            "  period_from: date_range_start\n"
            "  period_to: date_range_end\n"
            "defaults:\n"
            "  date_range_end: '2024-12-31'\n"
        ))
        mapper = ConfigMapper(path)
        self.assertEqual(mapper.source_name, "grants")
        mapped = mapper.map_record({"period_from": "2024-01-01"})
        self.assertEqual(mapped["date_range_start"], "2024-01-01")
        self.assertEqual(mapped["date_range_end"], "2024-12-31")

    def test_invalid_yaml_returns_none(self):
        path = self.write("broken.yaml", "field_map: [unclosed\n")
        with self.assertLogs("evidence_coverage.mappers.config_mapper", level="WARNING"):
            self.assertIsNone(load_config_mapper(path))

    def test_non_mapping_sections_return_none(self):
        for text in ("field_map: [a, b]\n", "defaults: 2024-12-31\n"):
            with self.subTest(text=text):
                path = self.write("lists.yaml", text)
                with self.assertLogs("evidence_coverage.mappers.config_mapper", level="WARNING"):
                    self.assertIsNone(load_config_mapper(path))

    def test_lookup_order(self):
        self.write("evidence.yaml", "field_map:\n  shot_on: date_captured\n")
        mapper, mapper_type = get_mapper("Evidence", self.config_dir)
        self.assertEqual(mapper_type, "yaml_custom")
        self.assertEqual(mapper.map_record({"shot_on": "2024-03-01"})["date_captured"], "2024-03-01")

        mapper, mapper_type = get_mapper("impact_csv")
        self.assertEqual(mapper_type, "yaml_builtin")
        mapped = mapper.map_record({"Reporting Period Start": "2024-01-01"})
        self.assertEqual(mapped["date_range_start"], "2024-01-01")

        mapper, mapper_type = get_mapper("evidence")
        self.assertEqual(mapper_type, "builtin")
        self.assertIsInstance(mapper, EvidenceRecordMapper)

        mapper, mapper_type = get_mapper("somewhere_else")
        self.assertEqual(mapper_type, "generic")
        self.assertIsInstance(mapper, GenericMapper)

    def test_known_sources(self):
        self.write("grants.yaml", "field_map: {}\n")
        names = known_sources(self.config_dir)
        for name in ("engine", "evidence", "generic", "impact_csv", "grants"):
            self.assertIn(name, names)


if __name__ == "__main__":
    unittest.main()
