import shutil
import tempfile
import unittest
from pathlib import Path

from cli import commands

SAMPLE_DIR = Path(__file__).resolve().parents[1] / "sample_data"


class SmokeTest(unittest.TestCase):
    def test_compute_sample_claim(self):
        result = commands.compute(SAMPLE_DIR / "claim.yaml")
        self.assertEqual(result.total_days, 10)
        self.assertEqual(result.covered_days, 6)
        self.assertEqual(result.percentage, 60)
        self.assertEqual(
            [r.to_dict() for r in result.uncovered_ranges],
            [
                {"start": "2024-03-06", "end": "2024-03-08"},
                {"start": "2024-03-10", "end": "2024-03-10"},
            ],
        )

    def test_summarize_and_export_sample_metric(self):
        out_dir = Path(tempfile.mkdtemp(prefix="coverage-smoke-"))
        try:
            result = commands.summarize(SAMPLE_DIR / "metric.json", evidence_source="evidence")
            self.assertEqual(result.percentage, 63)
            self.assertEqual(len(result.claims), 4)
            self.assertEqual(len(result.groups), 2)
            path = commands.export_claims(result.claims, "csv", out_dir / "claims.csv")
            self.assertTrue(path.exists())
            self.assertIn("claim_id", path.read_text(encoding="utf-8").splitlines()[0])
        finally:
            shutil.rmtree(out_dir)


if __name__ == "__main__":
    unittest.main()
