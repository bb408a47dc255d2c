# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Tests for the product family over Euclidean, indefinite and degenerate metrics."""

import pytest
import torch

from backends import NumericBackEnd
from conftest import XYZ, dense, random_mv
from core.algebra import (
    Algebra,
    include_contract_left,
    include_contract_right,
    include_dot,
    include_scalar,
    include_wedge,
)


class TestInclusionPredicates:

    def test_wedge(self):
        assert include_wedge(0b001, 0b010)
        assert not include_wedge(0b011, 0b010)

    def test_contractions(self):
        assert include_contract_left(0b001, 0b011)
        assert not include_contract_left(0b011, 0b001)
        assert include_contract_right(0b011, 0b001)
        assert not include_contract_right(0b001, 0b011)

    def test_dot_is_union_of_contractions(self):
        for a in range(8):
            for b in range(8):
                assert include_dot(a, b) == (include_contract_left(a, b) or include_contract_right(a, b))

    def test_scalar(self):
        assert include_scalar(5, 5)
        assert not include_scalar(5, 4)


class TestBasisProducts:

    def test_euclidean_signs(self, alg3):
        x, y, z = alg3.basis_vectors()
        assert (x * y).to_dict() == {"xy": 1}
        assert (y * x).to_dict() == {"xy": -1}
        xy = x * y
        assert (xy * xy).to_dict() == {"1": -1}
        assert (x * y * z).to_dict() == {"xyz": 1}

    def test_metric_factors_applied(self):
        alg = Algebra([3, 0.5, -2], NumericBackEnd(), XYZ)
        x, y, z = alg.basis_vectors()
        assert (x * x).to_dict() == {"1": 3}
        assert (z * z).to_dict() == {"1": -2}
        yz = y * z
        # yz yz = -y y z z
        assert (yz * yz).value(0) == pytest.approx(1.0)

    def test_null_direction_vanishes(self):
        alg = Algebra([0, 4.4, 2], NumericBackEnd(), XYZ)
        x, y, _ = alg.basis_vectors()
        assert (x * x).to_dict() == {}
        assert (x * y).to_dict() == {"xy": 1}

    def test_empty_product_is_one(self, alg3):
        one = alg3.geometric_product()
        assert one.to_dict() == {"1": 1}
        assert one.known_unit
        assert alg3.wedge_product().known_unit


class TestProductRelations:

    def test_associativity(self, metric_alg, generator):
        a, b, c = (random_mv(metric_alg, generator=generator) for _ in range(3))
        left = metric_alg.geometric_product(metric_alg.geometric_product(a, b), c)
        right = metric_alg.geometric_product(a, metric_alg.geometric_product(b, c))
        assert dense(left) == pytest.approx(dense(right), abs=1e-9)

    def test_variadic_product_folds_left(self, metric_alg, generator):
        a, b, c = (random_mv(metric_alg, generator=generator) for _ in range(3))
        folded = metric_alg.geometric_product(metric_alg.geometric_product(a, b), c)
        assert dense(metric_alg.geometric_product(a, b, c)) == pytest.approx(dense(folded), abs=1e-12)

    def test_wedge_of_vectors_is_grade_two_part(self, metric_alg, generator):
        a = random_mv(metric_alg, grades={1}, generator=generator)
        b = random_mv(metric_alg, grades={1}, generator=generator)
        wedge = metric_alg.wedge_product(a, b)
        grade2 = metric_alg.extract_grade(2, metric_alg.geometric_product(a, b))
        assert dense(wedge) == pytest.approx(dense(grade2), abs=1e-12)

    def test_vector_contractions_equal_scalar_product(self, metric_alg, generator):
        a = random_mv(metric_alg, grades={1}, generator=generator)
        b = random_mv(metric_alg, grades={1}, generator=generator)
        expected = metric_alg.scalar_product(a, b)
        assert metric_alg.contract_left(a, b).value(0) == pytest.approx(expected)
        assert metric_alg.contract_right(a, b).value(0) == pytest.approx(expected)
        assert metric_alg.dot_product(a, b).value(0) == pytest.approx(expected)

    def test_scalar_product_is_scalar_part(self, metric_alg, generator):
        a = random_mv(metric_alg, generator=generator)
        b = random_mv(metric_alg, generator=generator)
        gp = metric_alg.geometric_product(a, b)
        assert metric_alg.scalar_product(a, b) == pytest.approx(gp.value(0))
        assert dense(metric_alg.scalar_product_mv(a, b)) == pytest.approx(
            [gp.value(0)] + [0] * 7, abs=1e-12,
        )

    def test_contraction_reverse_identity(self, metric_alg, generator):
        # (A _| B)~ = ~B |_ ~A
        a = random_mv(metric_alg, generator=generator)
        b = random_mv(metric_alg, generator=generator)
        alg = metric_alg
        lhs = alg.reverse(alg.contract_left(a, b))
        rhs = alg.contract_right(alg.reverse(b), alg.reverse(a))
        assert dense(lhs) == pytest.approx(dense(rhs), abs=1e-12)

    def test_dot_of_vector_and_bivector(self, metric_alg, generator):
        a = random_mv(metric_alg, grades={1}, generator=generator)
        B = random_mv(metric_alg, grades={2}, generator=generator)
        assert dense(metric_alg.dot_product(a, B)) == pytest.approx(
            dense(metric_alg.contract_left(a, B)), abs=1e-12,
        )


class TestUnitPropagation:

    def test_geometric_product_of_units(self, alg3):
        x, y, _ = alg3.basis_vectors()
        assert alg3.geometric_product(x, y).known_unit
        assert alg3.wedge_product(x, y).known_unit

    def test_excluded_pair_drops_unit(self, alg3):
        x, _, _ = alg3.basis_vectors()
        assert not alg3.wedge_product(x, x).known_unit
        assert not alg3.contract_left(x, x * x).known_unit

    def test_non_unit_factor(self, alg3):
        x, _, _ = alg3.basis_vectors()
        assert not alg3.geometric_product(x, alg3.mv({"y": 2})).known_unit


class TestRegressiveProduct:

    def test_empty_is_pseudo_scalar(self, alg3):
        assert alg3.regressive_product().to_dict() == {"xyz": 1}

    def test_pseudo_scalar_is_identity(self, alg3, generator):
        mv = random_mv(alg3, generator=generator)
        result = alg3.regressive_product(alg3.pseudo_scalar(), mv)
        assert dense(result) == pytest.approx(dense(mv))

    def test_meet_of_planes(self, alg3):
        xy = alg3.mv({"xy": 1})
        yz = alg3.mv({"yz": 1})
        meet = alg3.regressive_product(xy, yz).to_dict()
        assert list(meet) == ["y"]
        assert abs(meet["y"]) == 1

    def test_works_with_null_metric(self):
        alg = Algebra([0, 1, 1], NumericBackEnd(), XYZ)
        meet = alg.regressive_product(alg.mv({"xy": 2}), alg.mv({"xz": 3})).to_dict()
        assert list(meet) == ["x"]
        assert abs(meet["x"]) == 6

    def test_disjoint_complements_only(self, alg3):
        # two vectors do not meet in 3-D
        assert alg3.regressive_product(alg3.mv({"x": 1}), alg3.mv({"y": 1})).to_dict() == {}


def test_random_mv_uses_torch_generator(alg3):
    first = random_mv(alg3, generator=torch.Generator().manual_seed(0))
    second = random_mv(alg3, generator=torch.Generator().manual_seed(0))
    assert dense(first) == dense(second)
