# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Input validation for multivectors.

Ownership is always checked.  Verification of ``known_unit`` hints only runs
when :attr:`AlgebraOptions.verify_known_unit` is enabled.
"""

import math

from core.accumulator import is_numeric
from core.errors import OwnershipError, UnitHintError


def check_multivector(mv, algebra, name: str = "mv"):
    """Raise :class:`OwnershipError` unless *mv* belongs to *algebra*.

    Returns:
        The multivector, for chaining.
    """
    if getattr(mv, "algebra", None) is not algebra:
        raise OwnershipError(f"{name}: trying to use foreign multivector {mv!r}")
    return mv


def numeric_norm_squared(mv):
    """``norm_squared`` of *mv* if metric and values are numeric, else ``None``."""
    algebra = mv.algebra
    total = 0
    for bitmap, value in mv:
        factors = algebra.metric_factors(bitmap)
        if factors is None:
            continue
        if not is_numeric(value) or not all(is_numeric(f) for f in factors):
            return None
        total += math.prod(factors) * value * value
    return total


def check_known_unit(mv, tolerance: float, sq_norm=None) -> None:
    """Raise :class:`UnitHintError` if numeric data contradicts the unit hint.

    Args:
        mv (Multivector): The multivector being marked.
        tolerance (float): Allowed deviation of ``norm_squared``.
        sq_norm (int, optional): Claimed ``norm_squared`` (1 or -1). If None
            only ``|norm_squared| == 1`` is checked.
    """
    norm_sq = numeric_norm_squared(mv)
    if norm_sq is None:
        return
    if sq_norm is None:
        if abs(abs(norm_sq) - 1) > tolerance:
            raise UnitHintError(
                f"{mv.name}: marked as unit but |norm_squared| = {abs(norm_sq)}"
            )
    elif abs(norm_sq - sq_norm) > tolerance:
        raise UnitHintError(
            f"{mv.name}: marked with norm_squared {sq_norm} but it is {norm_sq}"
        )
