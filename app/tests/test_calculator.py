"""
Tests for calculator: input validation, result dict shape and the ladder
summary.
"""

import unittest
from unittest.mock import patch

import calculator
from calculator import (
    InvalidTargetError,
    NoAvailableValuesError,
    find_networks,
    find_networks_from_labels,
    ladder_summary,
    parse_available,
    validate_inputs,
)
from config import DEFAULT_TOLERANCE, DEFAULT_VREF, MAX_AVAILABLE, TOP_N_CODES


class TestValidation(unittest.TestCase):

    def test_target_checked_first(self):
        with self.assertRaises(InvalidTargetError):
            validate_inputs([], 0.0, -1.0, 0)

    def test_no_values(self):
        with self.assertRaises(NoAvailableValuesError):
            validate_inputs([0.0, -5.0], 100.0, 5.0, 3)

    def test_returns_positive_values(self):
        self.assertEqual(validate_inputs([0.0, 10.0, 22], 100.0, 5.0, 3), [10.0, 22.0])

    def test_parse_available_skips_bad_labels(self):
        self.assertEqual(parse_available(["1K Ω", "Ω", "47 Ω"]), [1000.0, 47.0])

    def test_parse_available_cap(self):
        labels = [f"{v} Ω" for v in range(1, MAX_AVAILABLE + 20)]
        self.assertEqual(len(parse_available(labels)), MAX_AVAILABLE)


class TestFindNetworks(unittest.TestCase):

    def test_invalid_target(self):
        out = find_networks([100.0], 0.0, 5.0)
        self.assertEqual(out["status"], "error")
        self.assertEqual(out["error"], "invalid_target")
        self.assertEqual(out["message"], "Target resistance must be greater than 0")

    def test_negative_target(self):
        self.assertEqual(find_networks([100.0], -100.0)["error"], "invalid_target")

    def test_no_values(self):
        out = find_networks([], 100.0, 5.0)
        self.assertEqual(out["error"], "no_values")
        self.assertEqual(out["message"], "Select at least one resistor value")

    def test_invalid_tolerance(self):
        self.assertEqual(find_networks([100.0], 100.0, -1.0)["error"], "invalid_tolerance")

    def test_invalid_size(self):
        self.assertEqual(find_networks([100.0], 100.0, 5.0, 0)["error"], "invalid_size")

    def test_ok_shape(self):
        out = find_networks([100.0, 220.0], 320.0, 1.0, 2)
        self.assertEqual(out["status"], "ok")
        self.assertEqual(out["target"], 320.0)
        self.assertEqual(out["tolerance"], 1.0)
        self.assertEqual(out["max_size"], 2)
        self.assertTrue(out["found"])
        row = out["results"][0]
        self.assertEqual(
            set(row),
            {"rank", "expression", "resistance", "count", "error_percent", "component_codes"},
        )
        self.assertEqual(row["rank"], 1)
        self.assertEqual(row["expression"], "(100.00 + 220.00)")
        self.assertEqual(row["error_percent"], 0.0)

    def test_default_tolerance(self):
        out = find_networks([100.0], 100.0, None, 1)
        self.assertEqual(out["tolerance"], DEFAULT_TOLERANCE)

    def test_exact_single_match(self):
        out = find_networks([100.0], 100.0, 0.0, 1)
        self.assertEqual(out["total"], 1)
        self.assertEqual(out["results"][0]["count"], 1)
        self.assertEqual(out["results"][0]["error_percent"], 0.0)

    def test_empty_result(self):
        out = find_networks([1.0, 10.0, 100.0], 1_000_000_000.0, 1.0, 2)
        self.assertEqual(out["status"], "ok")
        self.assertFalse(out["found"])
        self.assertEqual(out["results"], [])
        self.assertEqual(out["hidden"], 0)

    def test_component_codes_only_for_top_results(self):
        out = find_networks([float(v) for v in range(1, 11)], 5.0, 50.0, 2)
        self.assertGreater(len(out["results"]), TOP_N_CODES)
        for row in out["results"]:
            if row["rank"] <= TOP_N_CODES:
                self.assertTrue(row["component_codes"])
            else:
                self.assertEqual(row["component_codes"], [])

    def test_hidden_count(self):
        out = find_networks([float(v) for v in range(1, 21)], 10.0, 100.0, 2)
        self.assertEqual(out["shown"], len(out["results"]))
        self.assertEqual(out["hidden"], out["total"] - out["shown"])
        self.assertGreater(out["hidden"], 0)

    def test_from_labels(self):
        out = find_networks_from_labels(["100 Ω", "220 Ω"], 320.0, 1.0, 2)
        self.assertEqual(out["results"][0]["resistance"], 320.0)

    def test_memory_error_reported(self):
        with patch.object(calculator, "build_networks", side_effect=MemoryError):
            out = find_networks([100.0], 100.0, 5.0)
        self.assertEqual(out["status"], "error")
        self.assertEqual(out["error"], "allocation_failed")


class TestLadderSummary(unittest.TestCase):

    def test_ok(self):
        out = ladder_summary(10_000.0, 8, 5.0)
        self.assertEqual(out["status"], "ok")
        self.assertEqual(out["r_count"], 7)
        self.assertEqual(out["r2_count"], 9)
        self.assertEqual(out["r2"], 20_000.0)
        self.assertEqual(out["r_codes"]["smd"], "103")
        self.assertEqual(out["r2_codes"]["four_band"], "Red-Black-Orange-Gold")
        self.assertEqual(out["samples"][-1]["code"], "11111111")

    def test_default_vref(self):
        self.assertEqual(ladder_summary(1_000.0, 4)["vref"], DEFAULT_VREF)

    def test_invalid_bits(self):
        out = ladder_summary(1_000.0, 30)
        self.assertEqual(out["status"], "error")
        self.assertEqual(out["error"], "invalid_ladder")

    def test_invalid_r(self):
        self.assertEqual(ladder_summary(0.0, 8)["error"], "invalid_ladder")


if __name__ == "__main__":
    unittest.main()
