# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Basis-blade combinatorics.

A basis blade is represented by an integer bitmap: bit ``i`` is set iff
basis vector ``i`` participates.  The grade of a blade is the number of set
bits.  All products reduce to these helpers for their signs.
"""

from typing import Iterator, List


def bit_count(bitmap: int) -> int:
    """Population count (Kernighan's loop)."""
    count = 0
    while bitmap:
        bitmap &= bitmap - 1
        count += 1
    return count


def iter_bits(bitmap: int) -> Iterator[int]:
    """Yields the positions of the set bits in ascending order."""
    i = 0
    bit = 1
    while bit <= bitmap:
        if bitmap & bit:
            yield i
        i += 1
        bit <<= 1


def bit_list(bitmap: int) -> List[int]:
    """Positions of the set bits in ascending order."""
    return list(iter_bits(bitmap))


def product_flips(bitmap_a: int, bitmap_b: int) -> int:
    """Counts adjacent transpositions for the product of two basis blades.

    Concatenating the (sorted) basis vectors of ``bitmap_a`` and ``bitmap_b``
    and bubble-sorting the result takes exactly this many swaps.  Duplicates
    are retained, so only the parity matters for the sign of the product.

    Args:
        bitmap_a (int): Left blade.
        bitmap_b (int): Right blade.

    Returns:
        int: Number of flips.
    """
    b_count = 0
    flips = 0
    bit = 1
    while bit <= bitmap_a:
        if bit & bitmap_a:
            flips += b_count
        if bit & bitmap_b:
            b_count += 1
        bit <<= 1
    return flips


def grade_involution_flips(bitmap: int) -> int:
    """Sign parity of the grade involution for a blade."""
    return bit_count(bitmap) & 1


def reverse_flips(bitmap: int) -> int:
    """Sign parity of the reversion for a blade.

    Equals ``product_flips(bitmap, bitmap) & 1``.
    """
    return (bit_count(bitmap) >> 1) & 1
