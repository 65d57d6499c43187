import unittest
from datetime import date

from evidence_coverage.calculator import (
    compute_coverage,
    compute_coverage_from_intervals,
    coverage_percentage,
    round_ratio,
)
from evidence_coverage.models import Interval
from evidence_coverage.union import covered_days, covered_intervals


def iv(start: str, end: str) -> Interval:
    return Interval(date.fromisoformat(start), date.fromisoformat(end))


class RoundRatioTest(unittest.TestCase):
    def test_half_rounds_up(self):
        self.assertEqual(round_ratio(1, 8), 13)  # 12.5
        self.assertEqual(round_ratio(5, 8), 63)  # 62.5
        self.assertEqual(round_ratio(125, 2, scale=1), 63)

    def test_below_half_rounds_down(self):
        self.assertEqual(round_ratio(1, 3), 33)
        self.assertEqual(round_ratio(2, 3), 67)

    def test_zero_denominator(self):
        self.assertEqual(round_ratio(5, 0), 0)
        self.assertEqual(round_ratio(0, -1), 0)


class CoveragePercentageTest(unittest.TestCase):
    def test_bounds(self):
        self.assertEqual(coverage_percentage(0, 10), 0)
        self.assertEqual(coverage_percentage(10, 10), 100)

    def test_clamped_when_covered_exceeds_total(self):
        with self.assertLogs("evidence_coverage.calculator", level="WARNING"):
            self.assertEqual(coverage_percentage(12, 10), 100)

    def test_near_full_does_not_round_to_hundred_incorrectly(self):
        self.assertEqual(coverage_percentage(199, 200), 100)  # 99.5 rounds half up
        self.assertEqual(coverage_percentage(198, 200), 99)


class ComputeCoverageTest(unittest.TestCase):
    def test_none_claim_is_no_coverage(self):
        result = compute_coverage(None, {"2024-03-01"})
        self.assertFalse(result.has_claim_interval)
        self.assertEqual((result.percentage, result.covered_days, result.total_days), (0, 0, 0))
        self.assertEqual(result.uncovered_ranges, [])

    def test_half_covered(self):
        claim = iv("2024-03-01", "2024-03-10")
        result = compute_coverage(claim, covered_days(claim, [iv("2024-03-01", "2024-03-05")]))
        self.assertEqual(result.percentage, 50)
        self.assertEqual(result.covered_days, 5)
        self.assertEqual(result.total_days, 10)
        self.assertEqual(result.uncovered_ranges, [iv("2024-03-06", "2024-03-10")])
        self.assertFalse(result.fully_supported)

    def test_keys_outside_claim_are_ignored(self):
        claim = iv("2024-03-01", "2024-03-02")
        result = compute_coverage(claim, {"2024-03-01", "2024-02-28", "2024-04-01"})
        self.assertEqual(result.covered_days, 1)
        self.assertEqual(result.percentage, 50)

    def test_gaps_collapse_into_runs(self):
        claim = iv("2024-03-01", "2024-03-07")
        result = compute_coverage(claim, {"2024-03-02", "2024-03-03", "2024-03-06"})
        self.assertEqual(result.uncovered_ranges, [
            iv("2024-03-01", "2024-03-01"),
            iv("2024-03-04", "2024-03-05"),
            iv("2024-03-07", "2024-03-07"),
        ])

    def test_full_coverage(self):
        claim = iv("2024-03-01", "2024-03-03")
        result = compute_coverage(claim, {"2024-03-01", "2024-03-02", "2024-03-03"})
        self.assertEqual(result.percentage, 100)
        self.assertTrue(result.fully_supported)
        self.assertEqual(result.uncovered_ranges, [])


class ComputeFromIntervalsTest(unittest.TestCase):
    def test_matches_day_set_path(self):
        claim = iv("2024-01-01", "2024-03-31")
        evidence = [
            iv("2023-12-20", "2024-01-05"),
            iv("2024-01-04", "2024-01-10"),
            iv("2024-02-01", "2024-02-01"),
            iv("2024-02-28", "2024-03-02"),
            iv("2024-03-30", "2024-05-01"),
        ]
        from_days = compute_coverage(claim, covered_days(claim, evidence))
        from_runs = compute_coverage_from_intervals(claim, covered_intervals(claim, evidence))
        self.assertEqual(from_runs, from_days)

    def test_none_claim(self):
        self.assertFalse(compute_coverage_from_intervals(None, []).has_claim_interval)

    def test_runs_outside_claim_ignored(self):
        claim = iv("2024-03-01", "2024-03-10")
        result = compute_coverage_from_intervals(claim, [iv("2024-04-01", "2024-04-02")])
        self.assertEqual(result.covered_days, 0)
        self.assertEqual(result.uncovered_ranges, [claim])


if __name__ == "__main__":
    unittest.main()
