"""
Tests for network_builder: series/parallel arithmetic, bucket sizes, pair
de-duplication and the per-bucket cap.
"""

import unittest

from config import MAX_PARTS
from network_builder import Network, build_networks, iter_networks


class TestNetwork(unittest.TestCase):

    def test_single(self):
        net = Network.single(4700.0)
        self.assertEqual(net.resistance, 4700.0)
        self.assertEqual(net.count, 1)
        self.assertEqual(net.expression, "4700.00")
        self.assertEqual(net.parts, (4700.0,))

    def test_series_resistance(self):
        a, b = Network.single(100.0), Network.single(220.0)
        self.assertEqual(a.series(b).resistance, 100.0 + 220.0)

    def test_parallel_resistance(self):
        a, b = Network.single(100.0), Network.single(220.0)
        self.assertEqual(a.parallel(b).resistance, 1.0 / (1.0 / 100.0 + 1.0 / 220.0))

    def test_expressions(self):
        a, b = Network.single(100.0), Network.single(220.0)
        self.assertEqual(a.series(b).expression, "(100.00 + 220.00)")
        self.assertEqual(a.parallel(b).expression, "(100.00 ∥ 220.00)")

    def test_nested_expression(self):
        a, b, c = (Network.single(v) for v in (1.0, 2.0, 3.0))
        self.assertEqual(a.series(b).parallel(c).expression, "((1.00 + 2.00) ∥ 3.00)")

    def test_counts_and_parts_add_up(self):
        a = Network.single(1.0).series(Network.single(2.0))
        b = Network.single(3.0)
        combined = a.parallel(b)
        self.assertEqual(combined.count, 3)
        self.assertEqual(combined.parts, (1.0, 2.0, 3.0))

    def test_parts_truncated(self):
        net = Network.single(1.0)
        for _ in range(MAX_PARTS + 3):
            net = net.series(Network.single(1.0))
        self.assertEqual(net.count, MAX_PARTS + 4)
        self.assertEqual(len(net.parts), MAX_PARTS)

    def test_parallel_rejects_non_positive(self):
        with self.assertRaises(ValueError):
            Network.single(0.0).parallel(Network.single(100.0))

    def test_network_is_immutable(self):
        net = Network.single(10.0)
        with self.assertRaises(AttributeError):
            net.resistance = 20.0


class TestBuildNetworks(unittest.TestCase):

    def test_single_value_buckets(self):
        nets = build_networks([100.0], max_size=2)
        self.assertEqual([n.resistance for n in nets[1]], [100.0])
        self.assertEqual(sorted(n.resistance for n in nets[2]), [50.0, 200.0])

    def test_every_size_present(self):
        nets = build_networks([10.0, 22.0], max_size=4)
        self.assertEqual(sorted(nets), [1, 2, 3, 4])

    def test_bucket_size_invariant(self):
        nets = build_networks([10.0, 22.0, 47.0], max_size=4)
        for size, bucket in nets.items():
            for net in bucket:
                self.assertEqual(net.count, size)
                self.assertLessEqual(len(net.parts), min(size, MAX_PARTS))

    def test_series_parallel_values(self):
        nets = build_networks([100.0, 300.0], max_size=2)
        found = {round(n.resistance, 6) for n in nets[2]}
        for expected in (200.0, 400.0, 600.0, 50.0, 75.0, 150.0):
            self.assertIn(expected, found)

    def test_no_duplicate_unordered_pairs(self):
        nets = build_networks([10.0, 22.0, 47.0], max_size=2)
        # 3 values → 6 unordered pairs (with repetition) × series/parallel
        self.assertEqual(len(nets[2]), 12)
        self.assertEqual(len({n.expression for n in nets[2]}), 12)

    def test_mixed_split_uses_both_orders(self):
        nets = build_networks([1.0, 2.0], max_size=3)
        # i=1, j=2 and i=2, j=1 both contribute: 2 × 6 × 2 each
        self.assertEqual(len(nets[3]), 48)

    def test_bucket_cap(self):
        nets = build_networks([float(v) for v in range(1, 21)], max_size=3, max_networks=50)
        self.assertEqual(len(nets[1]), 20)
        self.assertEqual(len(nets[2]), 50)
        self.assertEqual(len(nets[3]), 50)

    def test_cap_applies_to_first_bucket(self):
        nets = build_networks([1.0, 2.0, 3.0, 4.0], max_size=1, max_networks=2)
        self.assertEqual([n.resistance for n in nets[1]], [1.0, 2.0])

    def test_empty_available(self):
        nets = build_networks([], max_size=3)
        self.assertEqual(nets, {1: [], 2: [], 3: []})

    def test_invalid_max_size(self):
        with self.assertRaises(ValueError):
            build_networks([100.0], max_size=0)

    def test_invalid_max_networks(self):
        with self.assertRaises(ValueError):
            build_networks([100.0], max_networks=0)

    def test_iter_networks_in_size_order(self):
        nets = build_networks([10.0, 22.0], max_size=3)
        counts = [n.count for n in iter_networks(nets)]
        self.assertEqual(counts, sorted(counts))
        self.assertEqual(len(counts), sum(len(b) for b in nets.values()))

    def test_deterministic(self):
        a = build_networks([10.0, 22.0, 47.0], max_size=3)
        b = build_networks([10.0, 22.0, 47.0], max_size=3)
        self.assertEqual(a, b)


if __name__ == "__main__":
    unittest.main()
