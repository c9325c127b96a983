"""
Tests for ladder: R-2R counts, LSB, output voltages and the sample table.
"""

import unittest

from config import DEFAULT_VREF, LADDER_SAMPLE_COUNT
from ladder import ladder_spec, output_voltage, sample_codes


class TestLadderSpec(unittest.TestCase):

    def test_8_bit_10k(self):
        spec = ladder_spec(10_000.0, 8, 5.0)
        self.assertEqual(spec.r_count, 7)
        self.assertEqual(spec.r2_count, 9)
        self.assertAlmostEqual(spec.lsb, 5.0 / 256)
        self.assertAlmostEqual(spec.lsb, 0.019531, places=6)
        self.assertAlmostEqual(spec.voltage(255), 4.980469, places=6)

    def test_r2_and_full_scale(self):
        spec = ladder_spec(10_000.0, 8, 5.0)
        self.assertEqual(spec.r2, 20_000.0)
        self.assertAlmostEqual(spec.full_scale, 5.0 * 255 / 256)
        self.assertEqual(spec.output_impedance, 10_000.0)
        self.assertEqual(spec.levels, 256)

    def test_samples_for_8_bits(self):
        spec = ladder_spec(10_000.0, 8, 5.0)
        self.assertEqual(len(spec.samples), LADDER_SAMPLE_COUNT)
        self.assertEqual(spec.samples[0].value, 0)
        self.assertEqual(spec.samples[0].code, "00000000")
        self.assertEqual(spec.samples[-1].value, 255)
        self.assertEqual(spec.samples[-1].code, "11111111")
        self.assertAlmostEqual(spec.samples[-1].voltage, 5.0 * 255 / 256)

    def test_samples_exhaustive_for_small_ladder(self):
        spec = ladder_spec(1_000.0, 3, 3.3)
        self.assertEqual([s.value for s in spec.samples], list(range(8)))
        self.assertEqual(spec.samples[5].code, "101")

    def test_samples_strictly_increasing(self):
        codes = sample_codes(12)
        self.assertEqual(codes, sorted(set(codes)))
        self.assertEqual(codes[0], 0)
        self.assertEqual(codes[-1], 4095)

    def test_non_positive_vref_uses_default(self):
        self.assertEqual(ladder_spec(1_000.0, 4, 0.0).vref, DEFAULT_VREF)
        self.assertEqual(ladder_spec(1_000.0, 4, -3.0).vref, DEFAULT_VREF)

    def test_invalid_r(self):
        with self.assertRaises(ValueError):
            ladder_spec(0.0, 8)

    def test_invalid_bits(self):
        with self.assertRaises(ValueError):
            ladder_spec(1_000.0, 1)
        with self.assertRaises(ValueError):
            ladder_spec(1_000.0, 25)

    def test_output_voltage(self):
        self.assertAlmostEqual(output_voltage(128, 8, 5.0), 2.5)
        self.assertEqual(output_voltage(0, 8, 5.0), 0.0)


if __name__ == "__main__":
    unittest.main()
