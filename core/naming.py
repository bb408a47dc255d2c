# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Bitmap to name tables for basis blades."""

from typing import List, Sequence

from core.blades import bit_list


def make_letter_names(coords: Sequence[str], scalar: str = "1") -> List[str]:
    """One letter per basis vector: ``["1", "x", "y", "xy", ...]``."""
    return [
        "".join(coords[i] for i in bit_list(bm)) if bm else scalar
        for bm in range(1 << len(coords))
    ]


def make_numbered_names(n_dimensions: int, start: int = 0, scalar: str = "1") -> List[str]:
    """Numbered basis vectors: ``["1", "e0", "e1", "e01", ...]``.

    Indices are joined with ``_`` once they need more than one digit
    (``e1_8_11``).
    """
    separator = "" if start + n_dimensions <= 10 else "_"
    return [
        "e" + separator.join(str(start + i) for i in bit_list(bm)) if bm else scalar
        for bm in range(1 << n_dimensions)
    ]
