"""
Tests for report: text rendering of finder and ladder outcomes.
"""

import unittest

from calculator import find_networks, ladder_summary
from report import (
    COLOR_LEGEND,
    format_code_line,
    format_find_report,
    format_ladder_report,
    format_ohms,
    format_result_line,
)


class TestFormatOhms(unittest.TestCase):

    def test_units(self):
        self.assertEqual(format_ohms(47), "47Ω")
        self.assertEqual(format_ohms(4700), "4.7kΩ")
        self.assertEqual(format_ohms(1_000_000), "1MΩ")
        self.assertEqual(format_ohms(2_500_000_000), "2.5GΩ")

    def test_fraction_kept(self):
        self.assertEqual(format_ohms(68.75), "68.75Ω")


class TestFindReport(unittest.TestCase):

    def test_header_and_result(self):
        text = format_find_report(find_networks([100.0, 220.0], 320.0, 1.0, 2))
        self.assertIn("-- Networks within 1.00% tolerance of 320.00 Ω --", text)
        self.assertIn("Found 1 combinations, showing top 1 sorted by error", text)
        self.assertIn("#1 (100.00 + 220.00) = 320.00 Ω (2 resistors, error 0.00%)", text)
        self.assertIn("    Component resistor codes:", text)
        self.assertIn(
            "      100.00 Ω: 4-band: Brown-Black-Brown-Gold | "
            "5-band: Brown-Black-Black-Black-Brown | SMD: 101",
            text,
        )
        self.assertTrue(text.endswith(COLOR_LEGEND))

    def test_no_legend(self):
        text = format_find_report(find_networks([100.0], 100.0, 0.0, 1), legend=False)
        self.assertNotIn("Color Code Reference", text)

    def test_singular_resistor(self):
        row = {"expression": "100.00", "resistance": 100.0, "count": 1, "error_percent": 0.0}
        self.assertEqual(
            format_result_line(row), "100.00 = 100.00 Ω (1 resistor, error 0.00%)"
        )

    def test_empty_result(self):
        text = format_find_report(find_networks([1.0, 10.0, 100.0], 1e9, 1.0, 2))
        self.assertIn("No network found within the specified tolerance.", text)
        self.assertIn("Found 0 combinations", text)

    def test_more_results_line(self):
        outcome = find_networks([float(v) for v in range(1, 21)], 10.0, 100.0, 2)
        text = format_find_report(outcome)
        self.assertIn(f"... and {outcome['hidden']} more results", text)

    def test_rank_marker_only_on_top_results(self):
        outcome = find_networks([float(v) for v in range(1, 11)], 5.0, 50.0, 2)
        text = format_find_report(outcome, legend=False)
        self.assertIn("#5 ", text)
        self.assertNotIn("#6 ", text)

    def test_error(self):
        text = format_find_report(find_networks([], 100.0))
        self.assertEqual(text, "Error: Select at least one resistor value")

    def test_code_line(self):
        line = format_code_line(
            {"value": 4700.0, "four_band": "A", "five_band": "B", "smd": "472"}
        )
        self.assertEqual(line, "4700.00 Ω: 4-band: A | 5-band: B | SMD: 472")


class TestLadderReport(unittest.TestCase):

    def test_report(self):
        text = format_ladder_report(ladder_summary(10_000.0, 8, 5.0))
        self.assertIn("-- R-2R Ladder: 8 bits, R = 10kΩ, Vref = 5.000 V --", text)
        self.assertIn("7 resistors", text)
        self.assertIn("9 resistors", text)
        self.assertIn("LSB: 0.019531 V", text)
        self.assertIn("11111111", text)
        self.assertIn("4.980469", text)

    def test_error(self):
        text = format_ladder_report(ladder_summary(0.0, 8))
        self.assertTrue(text.startswith("Error: "))


if __name__ == "__main__":
    unittest.main()
