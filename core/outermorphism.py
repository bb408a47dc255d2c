# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Outermorphisms: linear maps extended to all blades.

Applying a linear map ``f`` given by a matrix ``M`` (``f(e_i) = sum_j M[j][i]
E_j``) to a multivector ``A``::

    f(A) = sum_b A_b f(e_i1 ^ ... ^ e_ik) = sum_b A_b f(e_i1) ^ ... ^ f(e_ik)

The wedge of the sums is expanded depth-first along the domain basis
vectors of ``b`` (low to high) and, at each level, over the codomain basis
vectors ``E_j``.  A branch ends without contribution if ``M[j][i]`` is
absent or 0, or if ``E_j`` is already on the path.
"""

from typing import Iterator, Mapping, Tuple

from core.accumulator import is_zero
from core.backend import Factor
from core.blades import bit_count
from core.multivector import Multivector
from log import get_logger

logger = get_logger(__name__)


def _entry(container, index):
    if container is None:
        return None
    if isinstance(container, Mapping):
        return container.get(index)
    return container[index] if 0 <= index < len(container) else None


def matrix_entry(matrix, row: int, column: int):
    """Entry of a (possibly sparse) row-major matrix, ``None`` if absent."""
    return _entry(_entry(matrix, row), column)


def outermorphism_terms(
    bitmap_in: int, matrix, n_out: int,
) -> Iterator[Tuple[int, int, Tuple[Factor, ...]]]:
    """Expands the image of one basis blade.

    Yields:
        ``(bitmap_out, flips, entries)`` per surviving branch, where
        ``entries`` are the matrix entries along the branch.
    """

    def recur(i: int, bitmap_out: int, flips: int, entries: tuple):
        i_bit = 1 << i
        if i_bit > bitmap_in:
            yield bitmap_out, flips, entries
        elif not i_bit & bitmap_in:
            yield from recur(i + 1, bitmap_out, flips, entries)
        else:
            for j in range(n_out):
                j_bit = 1 << j
                if j_bit & bitmap_out:
                    continue  # wedge with a duplicate is 0
                entry = matrix_entry(matrix, j, i)
                if entry is None or is_zero(entry):
                    continue
                # placed output vectors above j have to move past E_j
                new_flips = bit_count(bitmap_out & ~(j_bit - 1))
                yield from recur(i + 1, bitmap_out | j_bit, flips + new_flips, entries + (entry,))

    yield from recur(0, 0, 0, ())


def apply_outermorphism(codomain, mv, matrix) -> Multivector:
    """Image of ``mv`` (from any algebra) under ``matrix`` in ``codomain``."""
    n_terms = 0

    def build(add):
        nonlocal n_terms
        for bitmap_in, value in mv:
            for bitmap_out, flips, entries in outermorphism_terms(
                bitmap_in, matrix, codomain.n_dimensions,
            ):
                add(bitmap_out, [*entries, value], flips & 1)
                n_terms += 1

    result = Multivector(codomain, build, "morph")
    logger.debug("outermorphism: %d terms", n_terms)
    return result


class Outermorphism:
    """A linear map between two algebras, applicable to whole multivectors.

    Attributes:
        domain (Algebra): Algebra of the inputs.
        codomain (Algebra): Algebra of the results.
        matrix: Row-major matrix, rows indexed by codomain basis vector and
            columns by domain basis vector.  Rows and entries may be missing
            (sequences too short, mappings without the key, or ``None``).
    """

    def __init__(self, domain, codomain, matrix):
        self.domain = domain
        self.codomain = codomain
        self.matrix = matrix

    def apply(self, mv: Multivector) -> Multivector:
        self.domain.check_mine(mv)
        return apply_outermorphism(self.codomain, mv, self.matrix)

    __call__ = apply
