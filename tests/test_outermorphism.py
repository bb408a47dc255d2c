# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Tests for outermorphisms (linear maps applied to whole multivectors)."""

import pytest
import torch

from backends import GLSLBackEnd, NumericBackEnd
from conftest import XYZ, dense, random_mv
from core.algebra import Algebra
from core.config import AlgebraOptions
from core.errors import OwnershipError
from core.naming import make_letter_names
from core.outermorphism import Outermorphism, matrix_entry, outermorphism_terms


class TestMatrixAccess:

    def test_dense_and_sparse_entries(self):
        assert matrix_entry([[1, 2], [3, 4]], 1, 0) == 3
        assert matrix_entry({0: {1: 5}}, 0, 1) == 5
        assert matrix_entry({0: {1: 5}}, 1, 1) is None
        assert matrix_entry([[1], None], 1, 0) is None
        assert matrix_entry([[1]], 0, 3) is None

    def test_terms_of_bivector(self):
        identity = [[1, 0], [0, 1]]
        assert list(outermorphism_terms(0b11, identity, 2)) == [(0b11, 0, (1, 1))]

    def test_swap_counts_flip(self):
        swap = [[0, 1], [1, 0]]
        assert list(outermorphism_terms(0b11, swap, 2)) == [(0b11, 1, (1, 1))]


class TestOutermorphism:

    def test_vector_image_is_matrix_column(self, alg3):
        matrix = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
        image = alg3.outermorphism(alg3.vec([1, 0, 0]), matrix)
        assert image.to_dict() == {"x": 1, "y": 4, "z": 7}

    def test_scalar_is_fixed(self, alg3):
        assert alg3.outermorphism(alg3.mv({"1": 2.5}), [[0, 0, 0]] * 3).to_dict() == {"1": 2.5}

    def test_determinant_from_pseudo_scalar(self, alg3, generator):
        matrix = torch.randn(3, 3, dtype=torch.float64, generator=generator)
        image = alg3.outermorphism(alg3.pseudo_scalar(), matrix.tolist())
        assert image.bitmaps() == [7]
        assert image.value(7) == pytest.approx(torch.linalg.det(matrix).item())

    def test_swap_negates_bivector(self, alg3):
        swap = [[0, 1, 0], [1, 0, 0], [0, 0, 1]]
        assert alg3.outermorphism(alg3.mv({"xy": 1}), swap).to_dict() == {"xy": -1}

    def test_sparse_matrix(self, alg3):
        matrix = {0: {1: 2}, 2: [None, None, 3]}
        image = alg3.outermorphism(alg3.mv({"yz": 1, "x": 5}), matrix)
        assert image.to_dict() == {"xz": 6}

    def test_preserves_wedge(self, alg3, generator):
        matrix = torch.randn(3, 3, dtype=torch.float64, generator=generator).tolist()
        a = random_mv(alg3, grades={1}, generator=generator)
        b = random_mv(alg3, grades={1}, generator=generator)
        lhs = alg3.outermorphism(alg3.wedge_product(a, b), matrix)
        rhs = alg3.wedge_product(alg3.outermorphism(a, matrix), alg3.outermorphism(b, matrix))
        assert dense(lhs) == pytest.approx(dense(rhs), abs=1e-12)

    def test_composition(self, alg3, generator):
        m = torch.randn(3, 3, dtype=torch.float64, generator=generator)
        n = torch.randn(3, 3, dtype=torch.float64, generator=generator)
        mv = random_mv(alg3, generator=generator)
        twice = alg3.outermorphism(alg3.outermorphism(mv, n.tolist()), m.tolist())
        once = alg3.outermorphism(mv, (m @ n).tolist())
        assert dense(twice) == pytest.approx(dense(once), abs=1e-9)


class TestOutermorphismBetweenAlgebras:

    def test_embedding(self, alg3):
        plane = Algebra([1, 1], NumericBackEnd(), make_letter_names(["u", "v"]))
        embed = Outermorphism(plane, alg3, [[1, 0], [0, 0], [0, 1]])
        image = embed(plane.mv({"uv": 2, "u": 1}))
        assert image.algebra is alg3
        assert image.to_dict() == {"xz": 2, "x": 1}

    def test_domain_checked(self, alg3):
        plane = Algebra([1, 1], NumericBackEnd())
        embed = Outermorphism(plane, alg3, [[1, 0], [0, 1], [0, 0]])
        with pytest.raises(OwnershipError):
            embed.apply(alg3.one())


def test_symbolic_matrix_entries():
    alg = Algebra([1, 1, 1], GLSLBackEnd(), XYZ, AlgebraOptions(comments=False))
    matrix = [[f"m{j}{i}" for i in range(3)] for j in range(3)]
    image = alg.outermorphism(alg.mv({"x": "px"}, "p"), matrix)
    assert set(image.to_dict()) == {"x", "y", "z"}
    assert "m00 * p_x_0" in alg.backend.text
