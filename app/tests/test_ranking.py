"""
Tests for ranking: tolerance filter, sort order, caps and component
de-duplication.
"""

import unittest

from network_builder import Network, build_networks
from ranking import (
    RankedResults,
    Result,
    component_codes,
    rank_networks,
    relative_error,
    unique_parts,
)


def _bucketed(*networks):
    """Group hand-made networks into the builder's size → list layout."""
    out = {}
    for net in networks:
        out.setdefault(net.count, []).append(net)
    return out


class TestRelativeError(unittest.TestCase):

    def test_exact(self):
        self.assertEqual(relative_error(100.0, 100.0), 0.0)

    def test_symmetric_distance(self):
        self.assertAlmostEqual(relative_error(95.0, 100.0), 0.05)
        self.assertAlmostEqual(relative_error(105.0, 100.0), 0.05)


class TestRankNetworks(unittest.TestCase):

    def test_sorted_by_error_then_count(self):
        nets = build_networks([100.0, 220.0, 330.0, 470.0], max_size=3)
        ranked = rank_networks(nets, 300.0, 10.0)
        self.assertTrue(ranked.found)
        for a, b in zip(ranked.results, ranked.results[1:]):
            self.assertLessEqual(a.relative_error, b.relative_error)
            if a.relative_error == b.relative_error:
                self.assertLessEqual(a.count, b.count)

    def test_tie_prefers_fewer_resistors(self):
        single = Network.single(100.0)
        pair = Network.single(200.0).parallel(Network.single(200.0))
        ranked = rank_networks(_bucketed(pair, single), 100.0, 0.0)
        self.assertEqual([r.count for r in ranked], [1, 2])

    def test_tolerance_filter(self):
        nets = build_networks([100.0, 220.0, 330.0], max_size=3)
        ranked = rank_networks(nets, 500.0, 2.0)
        for result in ranked:
            self.assertLessEqual(result.relative_error, 0.02)
            self.assertLessEqual(abs(result.resistance - 500.0) / 500.0, 0.02)

    def test_single_exact_match(self):
        nets = build_networks([100.0], max_size=1)
        ranked = rank_networks(nets, 100.0, 0.0)
        self.assertEqual(ranked.total, 1)
        self.assertEqual(ranked.results[0].relative_error, 0.0)
        self.assertEqual(ranked.results[0].count, 1)

    def test_exact_match_ranked_first_with_larger_networks(self):
        nets = build_networks([100.0], max_size=5)
        ranked = rank_networks(nets, 100.0, 0.0)
        top = ranked.results[0]
        self.assertEqual(top.relative_error, 0.0)
        self.assertEqual(top.count, 1)

    def test_empty_result(self):
        nets = build_networks([1.0, 10.0, 100.0], max_size=2)
        ranked = rank_networks(nets, 1_000_000_000.0, 1.0)
        self.assertFalse(ranked.found)
        self.assertEqual(len(ranked), 0)
        self.assertEqual(ranked.hidden, 0)

    def test_results_capped_total_kept(self):
        nets = build_networks([float(v) for v in range(1, 11)], max_size=2)
        ranked = rank_networks(nets, 5.0, 100.0, max_results=3)
        self.assertEqual(ranked.shown, 3)
        self.assertGreater(ranked.total, 3)
        self.assertEqual(ranked.hidden, ranked.total - 3)

    def test_match_cap(self):
        nets = build_networks([float(v) for v in range(1, 11)], max_size=2)
        ranked = rank_networks(nets, 5.0, 100.0, max_matches=4)
        self.assertEqual(ranked.total, 4)

    def test_non_positive_target_raises(self):
        with self.assertRaises(ValueError):
            rank_networks({1: [Network.single(1.0)]}, 0.0, 5.0)

    def test_error_percent(self):
        result = Result(network=Network.single(99.0), relative_error=0.01)
        self.assertAlmostEqual(result.error_percent, 1.0)
        self.assertEqual(result.expression, "99.00")

    def test_empty_ranked_results(self):
        empty = RankedResults()
        self.assertFalse(empty.found)
        self.assertEqual(list(empty), [])


class TestComponentCodes(unittest.TestCase):

    def test_unique_parts_keeps_order(self):
        self.assertEqual(unique_parts((220.0, 100.0, 220.0)), [220.0, 100.0])

    def test_unique_parts_epsilon(self):
        self.assertEqual(unique_parts((100.0, 100.005, 100.02)), [100.0, 100.02])

    def test_unique_parts_custom_epsilon(self):
        self.assertEqual(unique_parts((100.0, 100.5), epsilon=1.0), [100.0])

    def test_component_codes(self):
        codes = component_codes((4700.0, 4700.0, 100.0))
        self.assertEqual([c["value"] for c in codes], [4700.0, 100.0])
        self.assertEqual(codes[0]["smd"], "472")
        self.assertEqual(codes[1]["four_band"], "Brown-Black-Brown-Gold")


if __name__ == "__main__":
    unittest.main()
