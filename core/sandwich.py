# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Cancellation-optimizing sandwich products.

``sandwich(R)(X)`` equals ``R X ~R`` but counts the sign of every raw
contribution per (operator pair, operand component) bucket before emitting
anything.  Buckets whose contributions cancel exactly never reach the back
end.  Prefixes ``l``/``i``/``r`` refer to the left, inner and right parts of
the sandwich.
"""

from typing import Dict, List, Sequence, Tuple

from core.blades import product_flips, reverse_flips
from core.multivector import Multivector
from core.prodtree import ProdTree
from log import get_logger

logger = get_logger(__name__)

PairKey = Tuple[int, int]


class PreparedSandwich:
    """An operator prepared for repeated sandwich application.

    The per-pair products ``value(l) * value(r) * metric(l & r)`` do not
    depend on the operand, so they are memoized here and shared by every
    application.  They are computed lazily, on first use.

    Attributes:
        algebra (Algebra): The owning algebra.
        operator (Multivector): The left factor of the sandwich.
    """

    def __init__(self, algebra, operator: Multivector):
        algebra.check_mine(operator, "operator")
        self.algebra = algebra
        self.operator = operator
        self._components = list(operator)
        self._pairs: Dict[PairKey, tuple] = {}
        self._pair_values: Dict[PairKey, object] = {}

        for l_bitmap, l_value in self._components:
            for r_bitmap, r_value in self._components:
                if r_bitmap < l_bitmap:
                    continue
                factors = algebra.metric_factors(l_bitmap & r_bitmap)
                if factors is None:
                    continue
                self._pairs[(l_bitmap, r_bitmap)] = (l_value, r_value, factors)

    def pair_value(self, key: PairKey):
        """Memoized product for the unordered operator pair ``key``."""
        if key not in self._pair_values:
            l_value, r_value, factors = self._pairs[key]
            self._pair_values[key] = self.algebra.times([l_value, *factors, r_value], "lr_val")
        return self._pair_values[key]

    def counts(self, operand: Multivector) -> Dict[Tuple[PairKey, int], int]:
        """Signed contribution counts per (operator pair, operand bitmap)."""
        algebra = self.algebra
        counts: Dict[Tuple[PairKey, int], int] = {}
        for l_bitmap, _ in self._components:
            for r_bitmap, _ in self._components:
                key = (min(l_bitmap, r_bitmap), max(l_bitmap, r_bitmap))
                if key not in self._pairs:
                    continue
                lr_bitmap = l_bitmap ^ r_bitmap
                for i_bitmap, _ in operand:
                    if algebra.metric_factors(lr_bitmap & i_bitmap) is None:
                        continue
                    flips = (
                        product_flips(l_bitmap, i_bitmap)
                        + product_flips(l_bitmap ^ i_bitmap, r_bitmap)
                        + reverse_flips(r_bitmap)
                    )
                    bucket = (key, i_bitmap)
                    counts[bucket] = counts.get(bucket, 0) + (-1 if flips & 1 else 1)
        return counts

    def __call__(self, operand: Multivector, dummy: bool = False) -> Multivector:
        """Applies the sandwich to ``operand``.

        Args:
            operand (Multivector): The inner factor.
            dummy (bool): Only force the memoized pair values (e.g. to emit
                them ahead of a branch in generated code) and return an
                empty multivector.

        Returns:
            Multivector: ``operator * operand * ~operator``.
        """
        algebra = self.algebra
        algebra.check_mine(operand, "operand")
        if dummy:
            for key in self._pairs:
                self.pair_value(key)
            return algebra.zero()

        counts = self.counts(operand)
        n_cancelled = sum(1 for count in counts.values() if count == 0)
        logger.debug(
            "sandwich: %d operator pairs, %d buckets, %d cancelled",
            len(self._pairs), len(counts), n_cancelled,
        )

        def build(add):
            for (key, i_bitmap), count in counts.items():
                if count == 0:
                    continue
                l_bitmap, r_bitmap = key
                factors = algebra.metric_factors((l_bitmap ^ r_bitmap) & i_bitmap)
                term = [self.pair_value(key), operand.value(i_bitmap), *factors]
                if abs(count) != 1:
                    term.append(abs(count))
                add(l_bitmap ^ i_bitmap ^ r_bitmap, term, count < 0)

        result = Multivector(algebra, build, "sandwich")
        # The operator enters twice, so its squared-norm sign cancels.
        result.mark_as_unit(
            self.operator.known_unit and operand.known_unit,
            None if self.operator.known_sq_norm is None else operand.known_sq_norm,
        )
        return result

    apply = __call__


def sandwich_chain(algebra, operators: Sequence[Multivector], operand: Multivector) -> Multivector:
    """``O1 ... Ok X ~Ok ... ~O1`` with cancellation through a :class:`ProdTree`.

    Args:
        algebra (Algebra): The owning algebra.
        operators (Sequence[Multivector]): Operators, outermost first.
        operand (Multivector): The inner factor.

    Returns:
        Multivector: The conjugated operand.
    """
    for operator in operators:
        algebra.check_mine(operator, "operator")
    algebra.check_mine(operand, "operand")

    chain = [(operator, False) for operator in operators]
    chain.append((operand, False))
    chain.extend((operator, True) for operator in reversed(operators))

    # (bitmap, factors, flips) of the partial products, left to right
    partials: List[tuple] = [(0, [], 0)]
    for mv, reversed_ in chain:
        components = list(mv)
        extended = []
        for bitmap, factors, flips in partials:
            for c_bitmap, c_value in components:
                metric = algebra.metric_factors(bitmap & c_bitmap)
                if metric is None:
                    continue
                c_flips = product_flips(bitmap, c_bitmap)
                if reversed_:
                    c_flips += reverse_flips(c_bitmap)
                extended.append((bitmap ^ c_bitmap, factors + metric + [c_value], flips + c_flips))
        partials = extended

    tree = ProdTree()
    for bitmap, factors, flips in partials:
        tree.add(bitmap, factors, flips)
    tree.optimize()

    def build(add):
        def on_leaf(running, bitmap, coefficient):
            magnitude = abs(coefficient)
            add(bitmap, [running] if magnitude == 1 else [running, magnitude], coefficient < 0)

        tree.traverse(on_leaf, lambda running, factor: algebra.times([running, factor], "prod"))

    result = Multivector(algebra, build, "sandwich_x")
    result.mark_as_unit(
        operand.known_unit and all(op.known_unit for op in operators),
        operand.known_sq_norm if all(op.known_sq_norm is not None for op in operators) else None,
    )
    return result
