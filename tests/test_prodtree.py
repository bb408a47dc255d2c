# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


import random
import unittest
from collections import defaultdict

from core.prodtree import ProdTree


class TestProdTree(unittest.TestCase):
    def setUp(self):
        self.tree = ProdTree()

    def collect(self):
        leaves = []
        self.tree.traverse(
            lambda running, bitmap, coefficient: leaves.append((running, bitmap, coefficient)),
            lambda running, factor: running + factor,
            unit="",
        )
        return leaves

    def test_reordered_factors_cancel(self):
        self.tree.add(1, ["a", "b"], 0)
        self.tree.add(1, ["b", "a"], 1)
        self.tree.optimize()
        self.assertEqual(self.tree.leaf_count(), 0)
        self.assertEqual(self.tree.root.children, {})

    def test_numeric_factors_fold_into_coefficient(self):
        self.tree.add(3, [2, "a", 3], 1)
        self.tree.add(3, ["a", 4], 0)
        self.tree.optimize()
        self.assertEqual(list(self.tree.buckets()), [(("a",), 3, -2)])

    def test_zero_coefficient_ignored(self):
        self.tree.add(0, ["a", 0], 0)
        self.assertEqual(self.tree.leaf_count(), 0)
        self.assertEqual(self.tree.n_added, 1)

    def test_traverse_shares_edges(self):
        self.tree.add(0, ["a", "b"])
        self.tree.add(1, ["a", "c"])
        self.tree.add(2, ["a"])
        calls = []

        def multiply(running, factor):
            calls.append(factor)
            return running + factor

        leaves = []
        self.tree.traverse(lambda *leaf: leaves.append(leaf), multiply, unit="")
        self.assertEqual(calls, ["a", "b", "c"])
        self.assertEqual(leaves, [("a", 2, 1), ("ab", 0, 1), ("ac", 1, 1)])

    def test_first_seen_rank_order(self):
        self.tree.add(0, ["c", "a"])
        self.tree.add(0, ["a", "b", "c"])
        paths = [path for path, _, _ in self.tree.buckets()]
        self.assertEqual(paths, [("c", "a"), ("c", "a", "b")])

    def test_optimize_preserves_bucket_sums(self):
        rng = random.Random(7)
        symbols = ["a", "b", "c", "d"]
        expected = defaultdict(int)
        for _ in range(400):
            factors = rng.sample(symbols, rng.randint(0, 3))
            numbers = [rng.randint(-3, 3) for _ in range(rng.randint(0, 2))]
            flips = rng.randint(0, 5)
            bitmap = rng.randint(0, 3)
            term = factors + numbers
            rng.shuffle(term)
            self.tree.add(bitmap, term, flips)

            coefficient = -1 if flips & 1 else 1
            for number in numbers:
                coefficient *= number
            expected[(tuple(sorted(factors)), bitmap)] += coefficient

        self.tree.optimize()
        actual = {
            (tuple(sorted(path)), bitmap): coefficient
            for path, bitmap, coefficient in self.tree.buckets()
        }
        self.assertEqual(actual, {key: value for key, value in expected.items() if value != 0})
        self.assertTrue(all(coefficient != 0 for _, _, coefficient in self.tree.buckets()))

    def test_one_leaf_per_bitmap_after_optimize(self):
        for _ in range(3):
            self.tree.add(5, ["x"])
        self.tree.add(6, ["x"], 1)
        self.tree.optimize()
        self.assertEqual(self.collect(), [("x", 5, 3), ("x", 6, -1)])


if __name__ == "__main__":
    unittest.main()
