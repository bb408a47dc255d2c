# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


import pytest
import torch

from backends import GLSLBackEnd, NumericBackEnd
from core.algebra import Algebra
from core.config import AlgebraOptions
from core.naming import make_letter_names

XYZ = make_letter_names(["x", "y", "z"])

METRICS = {
    "euclidean": [1, 1, 1],
    "indefinite": [3, 0.9, -0.2],
    "degenerate": [0, 4.4, 2],
}


def dense(mv):
    """Component values indexed by bitmap (0 for absent components)."""
    return [mv.value(bitmap) for bitmap in range(1 << mv.algebra.n_dimensions)]


def random_mv(algebra, grades=None, generator=None):
    """Numeric multivector with random components of the given grades."""
    n_blades = 1 << algebra.n_dimensions
    values = torch.randn(n_blades, dtype=torch.float64, generator=generator).tolist()
    components = {
        algebra.bitmap_to_string[bm]: values[bm]
        for bm in range(n_blades)
        if grades is None or bin(bm).count("1") in grades
    }
    return algebra.mv(components, "rand")


@pytest.fixture
def alg3():
    """Euclidean 3-D algebra with letter names on the numeric back end."""
    return Algebra([1, 1, 1], NumericBackEnd(), XYZ)


@pytest.fixture
def glsl3():
    """Euclidean 3-D algebra generating GLSL, without comments."""
    return Algebra([1, 1, 1], GLSLBackEnd(), XYZ, AlgebraOptions(comments=False))


@pytest.fixture(params=sorted(METRICS))
def metric_alg(request):
    """Numeric 3-D algebra for each test metric."""
    return Algebra(METRICS[request.param], NumericBackEnd(), XYZ)


@pytest.fixture
def generator():
    return torch.Generator().manual_seed(42)
