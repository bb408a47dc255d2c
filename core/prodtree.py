# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Product trie for cancellation and common-subexpression sharing.

Raw contributions ``(bitmap, term, flips)`` are split into a numeric
coefficient and a sorted sequence of symbolic factors.  The symbolic
sequence is a path in the trie; the coefficient is stored as a leaf at the
end of that path.  Contributions that only differ in the order of their
(commuting) symbolic factors end up at the same node, so that
:meth:`ProdTree.optimize` can sum their coefficients and drop the ones that
cancel exactly.  :meth:`ProdTree.traverse` then multiplies along the trie
edges once per edge, sharing each partial product among all descendants.
"""

import math
from typing import Callable, Dict, Iterator, List, Tuple

from core.accumulator import is_numeric
from core.backend import Factor, Term
from log import get_logger

logger = get_logger(__name__)


class ProdTreeNode:
    """A trie node: children keyed by symbolic factor plus numeric leaves."""

    __slots__ = ("children", "leaves")

    def __init__(self):
        self.children: Dict[Factor, "ProdTreeNode"] = {}
        # (coefficient, bitmap) pairs pending cancellation
        self.leaves: List[Tuple[float, int]] = []


class ProdTree:
    """Trie of symbolic products with numeric-coefficient leaves.

    Symbolic factors are ordered by the rank they get when first seen.  Since
    callers add factors from the outside of a product inwards, factors shared
    by many terms get low ranks and therefore sit close to the root.

    Attributes:
        root (ProdTreeNode): Node for the empty symbolic product.
    """

    def __init__(self):
        self.root = ProdTreeNode()
        self._rank: Dict[Factor, int] = {}
        self.n_added = 0

    def add(self, bitmap: int, term: Term, flips: int = 0) -> None:
        """Adds a raw contribution to the output component ``bitmap``.

        Args:
            bitmap (int): Output blade.
            term (Term): Factors of the contribution.
            flips (int): Sign flips; only the parity is used.
        """
        # Float multiplication is not associative; a fixed order makes
        # cancellation detection deterministic.
        numeric = sorted(f for f in term if is_numeric(f))
        symbolic = [f for f in term if not is_numeric(f)]
        coefficient = math.prod(numeric, start=-1 if flips & 1 else 1)
        self.n_added += 1
        if coefficient == 0:
            return

        for factor in symbolic:
            if factor not in self._rank:
                self._rank[factor] = len(self._rank)
        symbolic.sort(key=self._rank.__getitem__)

        node = self.root
        for factor in symbolic:
            child = node.children.get(factor)
            if child is None:
                child = node.children[factor] = ProdTreeNode()
            node = child
        node.leaves.append((coefficient, bitmap))

    def optimize(self) -> None:
        """Sums leaves per bitmap within each node and drops exact zeros.

        Subtrees left without any leaves are removed as well.
        """
        before = self.leaf_count()
        self._optimize(self.root)
        logger.debug(
            "prodtree: %d contributions, %d leaves before, %d after optimize",
            self.n_added, before, self.leaf_count(),
        )

    def _optimize(self, node: ProdTreeNode) -> bool:
        for factor, child in list(node.children.items()):
            if not self._optimize(child):
                del node.children[factor]
        sums: Dict[int, float] = {}
        for coefficient, bitmap in node.leaves:
            sums[bitmap] = sums.get(bitmap, 0) + coefficient
        node.leaves = [(total, bitmap) for bitmap, total in sums.items() if total != 0]
        return bool(node.leaves or node.children)

    def traverse(
        self,
        on_leaf: Callable[[Factor, int, float], None],
        multiply: Callable[[Factor, Factor], Factor],
        unit: Factor = 1,
    ) -> None:
        """Pre-order walk threading the running symbolic product.

        Args:
            on_leaf (callable): Called as ``on_leaf(running_product, bitmap, coefficient)``.
            multiply (callable): Called once per trie edge as
                ``multiply(running_product, factor)``.
            unit (Factor): Running product at the root.
        """
        self._traverse(self.root, unit, on_leaf, multiply)

    def _traverse(self, node, running, on_leaf, multiply) -> None:
        for coefficient, bitmap in node.leaves:
            on_leaf(running, bitmap, coefficient)
        for factor, child in node.children.items():
            self._traverse(child, multiply(running, factor), on_leaf, multiply)

    def leaf_count(self) -> int:
        return sum(1 for _ in self.buckets())

    def buckets(self) -> Iterator[Tuple[Tuple[Factor, ...], int, float]]:
        """Yields (symbolic_path, bitmap, coefficient) for every leaf, pre-order."""
        stack = [(self.root, ())]
        while stack:
            node, path = stack.pop()
            for coefficient, bitmap in node.leaves:
                yield path, bitmap, coefficient
            for factor, child in reversed(list(node.children.items())):
                stack.append((child, path + (factor,)))
