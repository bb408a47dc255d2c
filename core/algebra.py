# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


import math
from functools import reduce
from typing import Callable, Mapping, Optional, Sequence

from core.accumulator import Accumulator, is_numeric, is_zero
from core.backend import BackEnd, Factor
from core.blades import (
    bit_count,
    grade_involution_flips,
    iter_bits,
    product_flips,
    reverse_flips,
)
from core.config import AlgebraOptions
from core.errors import ConfigurationError, NullVectorError, UnexpectedComponentKeyError
from core.multivector import Multivector
from core.naming import make_numbered_names
from core.outermorphism import apply_outermorphism
from core.sandwich import PreparedSandwich, sandwich_chain
from core.scalar_ops import check_binop, check_scalar_func, evaluate, evaluate_binop
from core.validation import check_multivector
from log import get_logger

logger = get_logger(__name__)

Include = Callable[[int, int], bool]


# Inclusion predicates for product2: which pairs of blades contribute.
def include_geometric(a: int, b: int) -> bool:
    return True


def include_wedge(a: int, b: int) -> bool:
    return not a & b


def include_contract_left(a: int, b: int) -> bool:
    return not a & ~b


def include_contract_right(a: int, b: int) -> bool:
    return not ~a & b


def include_scalar(a: int, b: int) -> bool:
    return a == b


def include_dot(a: int, b: int) -> bool:
    return include_contract_left(a, b) or include_contract_right(a, b)


class Algebra:
    """Geometric algebra over a given metric, emitting code through a back end.

    Every operation builds a fresh :class:`Multivector`.  Scalar work that
    cannot be folded numerically is delegated to the back end, in the order
    in which the operation visits the components.

    Attributes:
        metric (list): Per-basis-vector square, numeric or symbolic.  A
            numeric 0 marks a null direction.
        n_dimensions (int): Number of basis vectors.
        full_bitmap (int): Bitmap of the pseudoscalar.
        bitmap_to_string (list): Blade names indexed by bitmap.
        string_to_bitmap (dict): Inverse of ``bitmap_to_string``.
        backend (BackEnd): Code emitter.
        options (AlgebraOptions): Tunables.
    """

    def __init__(
        self,
        metric: Sequence[Factor],
        backend: BackEnd,
        bitmap_to_string: Optional[Sequence[str]] = None,
        options: Optional[AlgebraOptions] = None,
    ):
        """Initializes the algebra.

        Args:
            metric (Sequence[Factor]): Squares of the basis vectors.
            backend (BackEnd): Back end receiving all symbolic operations.
            bitmap_to_string (Sequence[str], optional): Blade names indexed by
                bitmap. Defaults to numbered names (``e0``, ``e01``, ...).
            options (AlgebraOptions, optional): Defaults to ``AlgebraOptions()``.

        Raises:
            ConfigurationError: If the name table does not have ``2**n``
                distinct entries.
        """
        self.metric = list(metric)
        self.n_dimensions = len(self.metric)
        self.full_bitmap = (1 << self.n_dimensions) - 1
        self.backend = backend
        self.options = options if options is not None else AlgebraOptions()

        if bitmap_to_string is None:
            bitmap_to_string = make_numbered_names(self.n_dimensions)
        self.bitmap_to_string = list(bitmap_to_string)
        if len(self.bitmap_to_string) != 1 << self.n_dimensions:
            raise ConfigurationError(
                f"bitmap_to_string has {len(self.bitmap_to_string)} entries, "
                f"expected {1 << self.n_dimensions} for {self.n_dimensions} dimensions"
            )
        self.string_to_bitmap = {name: bm for bm, name in enumerate(self.bitmap_to_string)}
        if len(self.string_to_bitmap) != len(self.bitmap_to_string):
            raise ConfigurationError("bitmap_to_string contains duplicate blade names")

        logger.debug("Algebra: %d dimensions, metric %s", self.n_dimensions, self.metric)

    def __repr__(self):
        return f"Algebra(metric={self.metric}, backend={type(self.backend).__name__})"

    # ------------------------------------------------------------------
    # Scalar plumbing

    def make_accumulator(self, name_hint: str) -> Accumulator:
        return Accumulator(self.backend.make_var(name_hint))

    def check_mine(self, mv: Multivector, name: str = "mv") -> Multivector:
        """Raises OwnershipError if ``mv`` belongs to another algebra."""
        return check_multivector(mv, self, name)

    def metric_factors(self, bitmap: int):
        """Non-unit metric factors of the basis vectors in ``bitmap``.

        Returns:
            list or None: ``None`` if any of the basis vectors is null.
        """
        factors = []
        for i in iter_bits(bitmap):
            factor = self.metric[i]
            if is_numeric(factor):
                if factor == 0:
                    return None
                if factor == 1:
                    continue
            factors.append(factor)
        return factors

    def scalar_func(self, name: str, *args: Factor) -> Factor:
        check_scalar_func(name, len(args))
        if all(is_numeric(arg) for arg in args):
            return evaluate(name, *args)
        return self.backend.scalar_func(name, *args)

    def binop(self, op: str, a: Factor, b: Factor) -> Factor:
        check_binop(op)
        if is_numeric(a) and is_numeric(b):
            return evaluate_binop(op, a, b)
        return self.backend.binop(op, a, b)

    def times(self, factors: Sequence[Factor], name_hint: str = "times") -> Factor:
        """Product of ``factors`` as a single factor.

        Numeric factors are folded; a fresh back-end variable is only created
        if more than one non-unit factor remains.
        """
        factors = [f for f in factors if not (is_numeric(f) and f == 1)]
        if any(is_zero(f) for f in factors):
            return 0
        if all(is_numeric(f) for f in factors):
            return math.prod(factors)
        if len(factors) == 1:
            return factors[0]
        acc = self.make_accumulator(name_hint)
        acc.add(factors)
        return acc.value()

    # ------------------------------------------------------------------
    # Constructors

    def mv(self, components: Mapping[str, Factor], name: str = "mv") -> Multivector:
        """Multivector from a mapping of blade names to values.

        Raises:
            UnexpectedComponentKeyError: For a name not in ``bitmap_to_string``.
        """
        for key in components:
            if key not in self.string_to_bitmap:
                raise UnexpectedComponentKeyError(f"unexpected key in mv data: {key!r}")

        def build(add):
            for key, value in components.items():
                add(self.string_to_bitmap[key], [value])

        return Multivector(self, build, name)

    def vec(self, coords: Sequence[Factor], name: str = "vec") -> Multivector:
        """1-vector from one coordinate per basis vector."""
        if len(coords) != self.n_dimensions:
            raise ConfigurationError(
                f"vec expects {self.n_dimensions} coordinates, got {len(coords)}"
            )

        def build(add):
            for i, value in enumerate(coords):
                add(1 << i, [value])

        return Multivector(self, build, name)

    def zero(self) -> Multivector:
        return Multivector(self, lambda add: None, "zero")

    def one(self) -> Multivector:
        return Multivector(self, lambda add: add(0, [1]), "one").mark_as_unit()

    def pseudo_scalar(self) -> Multivector:
        ps = Multivector(self, lambda add: add(self.full_bitmap, [1]), "ps")
        ps.known_unit = all(is_numeric(f) and f == 1 for f in self.metric)
        return ps

    def pseudo_scalar_inv(self) -> Multivector:
        return self.inverse(self.pseudo_scalar())

    def basis_vectors(self):
        """One unit blade per dimension, in dimension order."""
        vectors = []
        for i, factor in enumerate(self.metric):
            bitmap = 1 << i
            basis = Multivector(
                self, lambda add, bitmap=bitmap: add(bitmap, [1]),
                "basis_" + self.bitmap_to_string[bitmap],
            )
            basis.known_unit = is_numeric(factor) and factor == 1
            vectors.append(basis)
        return vectors

    # ------------------------------------------------------------------
    # Unary operations

    def _flipped(self, mv: Multivector, flips: Callable[[int], int], name: str) -> Multivector:
        self.check_mine(mv)

        def build(add):
            for bitmap, value in mv:
                add(bitmap, [value], flips(bitmap) & 1)

        return Multivector(self, build, name).mark_as_unit(mv.known_unit, mv.known_sq_norm)

    def negate(self, mv: Multivector) -> Multivector:
        return self._flipped(mv, lambda bitmap: 1, "negate")

    def grade_involution(self, mv: Multivector) -> Multivector:
        return self._flipped(mv, grade_involution_flips, "grade_involution")

    def reverse(self, mv: Multivector) -> Multivector:
        return self._flipped(mv, reverse_flips, "reverse")

    def scale(self, factor: Factor, mv: Multivector) -> Multivector:
        """Multiplies every component by ``factor``.

        A literal 0 gives a multivector without components.
        """
        self.check_mine(mv)

        def build(add):
            if is_zero(factor):
                return
            for bitmap, value in mv:
                add(bitmap, [factor, value])

        return Multivector(self, build, "scale")

    def extract(self, predicate: Callable[[int, Factor], bool], mv: Multivector) -> Multivector:
        """Keeps the components for which ``predicate(bitmap, value)`` holds."""
        self.check_mine(mv)

        def build(add):
            for bitmap, value in mv:
                if predicate(bitmap, value):
                    add(bitmap, [value])

        return Multivector(self, build, "extract")

    def extract_grade(self, grade: int, mv: Multivector) -> Multivector:
        return self.extract(lambda bitmap, _: bit_count(bitmap) == grade, mv)

    # ------------------------------------------------------------------
    # Sums

    def plus(self, *mvs: Multivector) -> Multivector:
        """Component-wise sum; a single argument is returned unchanged."""
        for mv in mvs:
            self.check_mine(mv)
        if len(mvs) == 1:
            return mvs[0]

        def build(add):
            for mv in mvs:
                for bitmap, value in mv:
                    add(bitmap, [value])

        return Multivector(self, build, "plus")

    def minus(self, a: Multivector, b: Multivector) -> Multivector:
        self.check_mine(a)
        self.check_mine(b)

        def build(add):
            for bitmap, value in a:
                add(bitmap, [value])
            for bitmap, value in b:
                add(bitmap, [value], True)

        return Multivector(self, build, "minus")

    # ------------------------------------------------------------------
    # Products

    def product2(self, include: Include, a: Multivector, b: Multivector, name: str = "prod") -> Multivector:
        """Binary product restricted to blade pairs accepted by ``include``.

        Args:
            include (callable): ``include(bitmap_a, bitmap_b)`` selects the
                contributing pairs (see the ``include_*`` predicates).
            a (Multivector): Left factor.
            b (Multivector): Right factor.
            name (str, optional): Name hint for the result.

        Returns:
            Multivector: The product; ``known_unit`` only if no pair was
            excluded and both factors are ``known_unit``, with the product
            of their ``known_sq_norm`` signs.
        """
        self.check_mine(a, "a")
        self.check_mine(b, "b")
        skipped = False

        def build(add):
            nonlocal skipped
            for bm_a, val_a in a:
                for bm_b, val_b in b:
                    if not include(bm_a, bm_b):
                        skipped = True
                        continue
                    factors = self.metric_factors(bm_a & bm_b)
                    if factors is None:
                        continue
                    add(bm_a ^ bm_b, [*factors, val_a, val_b], product_flips(bm_a, bm_b) & 1)

        result = Multivector(self, build, name)
        sq_norm = None
        if a.known_sq_norm is not None and b.known_sq_norm is not None:
            sq_norm = a.known_sq_norm * b.known_sq_norm
        return result.mark_as_unit(not skipped and a.known_unit and b.known_unit, sq_norm)

    def product(self, include: Include, mvs: Sequence[Multivector], name: str = "prod") -> Multivector:
        """Left fold of :meth:`product2`; an empty list gives :meth:`one`."""
        if not mvs:
            return self.one()
        for mv in mvs:
            self.check_mine(mv)
        return reduce(lambda acc, mv: self.product2(include, acc, mv, name), mvs)

    def geometric_product(self, *mvs: Multivector) -> Multivector:
        return self.product(include_geometric, mvs, "gp")

    def wedge_product(self, *mvs: Multivector) -> Multivector:
        return self.product(include_wedge, mvs, "wedge")

    def contract_left(self, a: Multivector, b: Multivector) -> Multivector:
        return self.product2(include_contract_left, a, b, "contract_left")

    def contract_right(self, a: Multivector, b: Multivector) -> Multivector:
        return self.product2(include_contract_right, a, b, "contract_right")

    def dot_product(self, a: Multivector, b: Multivector) -> Multivector:
        return self.product2(include_dot, a, b, "dot")

    def scalar_product_mv(self, a: Multivector, b: Multivector) -> Multivector:
        return self.product2(include_scalar, a, b, "scalar_prod")

    def scalar_product(self, a: Multivector, b: Multivector) -> Factor:
        """Scalar part of ``a * b`` as a bare scalar."""
        self.check_mine(a, "a")
        self.check_mine(b, "b")
        acc = self.make_accumulator("scalar_prod")
        for bm_a, val_a in a:
            for bm_b, val_b in b:
                if bm_a != bm_b:
                    continue
                factors = self.metric_factors(bm_a)
                if factors is None:
                    continue
                acc.add([*factors, val_a, val_b], reverse_flips(bm_a) & 1)
        return acc.value()

    def regressive_product(self, *mvs: Multivector) -> Multivector:
        """Regressive (meet-like) product; an empty list gives the pseudoscalar.

        The product is non-metric and therefore also works for degenerate
        metrics.
        """
        if not mvs:
            return self.pseudo_scalar()
        for mv in mvs:
            self.check_mine(mv)
        return reduce(self._regressive_product2, mvs)

    def _regressive_product2(self, a: Multivector, b: Multivector) -> Multivector:
        full = self.full_bitmap

        def build(add):
            for bm_a, val_a in a:
                compl_a = full ^ bm_a
                for bm_b, val_b in b:
                    compl_b = full ^ bm_b
                    if compl_a & compl_b:
                        continue
                    add(bm_a & bm_b, [val_a, val_b], product_flips(compl_a, compl_b) & 1)

        return Multivector(self, build, "regressive")

    # ------------------------------------------------------------------
    # Norms and inverses

    def norm_squared(self, mv: Multivector) -> Factor:
        self.check_mine(mv)
        if mv.known_sq_norm is not None:
            return mv.known_sq_norm
        acc = self.make_accumulator("norm2")
        for bitmap, value in mv:
            factors = self.metric_factors(bitmap)
            if factors is None:
                continue
            acc.add([*factors, value, value])
        return acc.value()

    def _single_euclidean(self, mv: Multivector) -> Optional[int]:
        """Bitmap of the only component if it exists and its metric is all 1."""
        bitmaps = mv.bitmaps()
        if len(bitmaps) != 1:
            return None
        bitmap = bitmaps[0]
        return bitmap if self.metric_factors(bitmap) == [] else None

    def norm(self, mv: Multivector) -> Factor:
        """Magnitude of ``mv``.

        Negative squared norms (indefinite metrics) are clamped to 0.
        """
        self.check_mine(mv)
        if mv.known_sq_norm is not None:
            return 1 if mv.known_sq_norm > 0 else 0
        bitmap = self._single_euclidean(mv)
        if bitmap is not None:
            return self.scalar_func("abs", mv.value(bitmap))
        return self.scalar_func("sqrt", self.scalar_func("max", 0, self.norm_squared(mv)))

    def inverse(self, mv: Multivector) -> Multivector:
        """Inverse of a versor.

        Raises:
            NullVectorError: If ``mv`` squares to zero.
        """
        self.check_mine(mv)
        if mv.known_sq_norm == 1:
            return self.reverse(mv)
        if mv.known_sq_norm == -1:
            return self._flipped(mv, lambda bitmap: reverse_flips(bitmap) + 1, "inverse")

        components = list(mv)
        if len(components) == 1:
            [(bitmap, value)] = components
            factors = self.metric_factors(bitmap)
            if factors is None:
                raise NullVectorError(f"{mv.name}: inverse of a null blade")
            sign = -1 if reverse_flips(bitmap) & 1 else 1
            inv = self.binop("/", sign, self.times([value, *factors], "blade_norm2"))
            return Multivector(self, lambda add: add(bitmap, [inv]), "inverse")

        norm_sq = self.norm_squared(mv)
        if is_zero(norm_sq):
            raise NullVectorError(f"{mv.name}: inverse with norm_squared 0")
        inv_norm_sq = self.binop("/", 1, norm_sq)

        def build(add):
            for bitmap, value in mv:
                add(bitmap, [inv_norm_sq, value], reverse_flips(bitmap) & 1)

        return Multivector(self, build, "inverse")

    def normalize(self, mv: Multivector) -> Multivector:
        """Scales a versor to norm 1 and marks the result as ``known_unit``.

        The result records the sign of ``norm_squared`` when it is known, so
        a versor squaring to a negative number gets ``known_sq_norm == -1``.

        Raises:
            NullVectorError: If ``mv`` squares to zero.
        """
        self.check_mine(mv)
        if mv.known_unit:
            return mv

        bitmap = self._single_euclidean(mv)
        if bitmap is not None:
            sign = self.scalar_func("sign", mv.value(bitmap))
            return Multivector(self, lambda add: add(bitmap, [sign]), "normalize").mark_as_unit()

        norm_sq = self.norm_squared(mv)
        if is_zero(norm_sq):
            raise NullVectorError(f"{mv.name}: normalize with norm_squared 0")
        factor = self.scalar_func("inversesqrt", self.scalar_func("abs", norm_sq))

        def build(add):
            for bm, value in mv:
                add(bm, [factor, value])

        if is_numeric(norm_sq):
            sq_norm = 1 if norm_sq > 0 else -1
        elif all(is_numeric(f) and f >= 0 for f in self.metric):
            sq_norm = 1
        else:
            sq_norm = None
        return Multivector(self, build, "normalize").mark_as_unit(True, sq_norm)

    def dist(self, a: Multivector, b: Multivector) -> Factor:
        return self.norm(self.minus(a, b))

    # ------------------------------------------------------------------
    # Duality

    def dual(self, mv: Multivector) -> Multivector:
        """``mv`` contracted onto the inverse pseudoscalar.

        Raises:
            NullVectorError: If the metric is degenerate.
        """
        return self.contract_left(mv, self.pseudo_scalar_inv())

    def undual(self, mv: Multivector) -> Multivector:
        return self.contract_left(mv, self.pseudo_scalar())

    def euclidean_dual(self, mv: Multivector) -> Multivector:
        """Like :meth:`dual`, but pretending a Euclidean metric."""
        self.check_mine(mv)
        full = self.full_bitmap
        flips_ps = reverse_flips(full)

        def build(add):
            for bitmap, value in mv:
                add(bitmap ^ full, [value], (product_flips(bitmap, full) + flips_ps) & 1)

        return Multivector(self, build, "euclidean_dual")

    def euclidean_undual(self, mv: Multivector) -> Multivector:
        """Like :meth:`undual`, but pretending a Euclidean metric."""
        self.check_mine(mv)
        full = self.full_bitmap

        def build(add):
            for bitmap, value in mv:
                add(bitmap ^ full, [value], product_flips(bitmap, full) & 1)

        return Multivector(self, build, "euclidean_undual")

    # ------------------------------------------------------------------
    # Exponential and logarithm

    def exp(self, blade: Multivector) -> Multivector:
        """Exponential of a 2-blade (positive-semidefinite metric).

        The argument is not checked to be a 2-blade.
        """
        alpha = self.norm(blade)
        if is_zero(alpha):
            def build_null(add):
                add(0, [1])
                for bitmap, value in blade:
                    add(bitmap, [value])

            result = Multivector(self, build_null, "exp_null")
            result.known_unit = len(blade) == 0
            return result

        cos = self.scalar_func("cos", alpha)
        sin_by_alpha = self.binop("/", self.scalar_func("sin", alpha), alpha)

        def build(add):
            add(0, [cos])
            for bitmap, value in blade:
                add(bitmap, [sin_by_alpha, value])

        return Multivector(self, build, "exp").mark_as_unit()

    def log(self, rotor: Multivector) -> Multivector:
        """Logarithm of a 3-D rotor.

        Raises:
            NullVectorError: If the bivector part of ``rotor`` is zero.
        """
        self.check_mine(rotor)
        r0 = rotor.value(0)
        r2 = self.extract_grade(2, rotor)
        r2_norm = self.norm(r2)
        if is_zero(r2_norm):
            raise NullVectorError(f"{rotor.name}: log of a rotor without bivector part")
        angle = self.scalar_func("atan2", r2_norm, r0)
        return self.scale(self.binop("/", angle, r2_norm), r2)

    # ------------------------------------------------------------------
    # Utilities for 1-vectors

    def get_angle(self, a: Multivector, b: Multivector) -> Factor:
        """Angle between two 1-vectors."""
        return self.scalar_func(
            "atan2", self.norm(self.wedge_product(a, b)), self.scalar_product(a, b),
        )

    def slerp(self, a: Multivector, b: Multivector) -> Callable[[Factor], Multivector]:
        """Spherical linear interpolation between linearly independent 1-vectors.

        Returns:
            callable: Maps a parameter ``t`` in ``[0, 1]`` to the blend.
        """
        omega = self.get_angle(a, b)
        inv_sin = self.binop("/", 1, self.scalar_func("sin", omega))

        def at(t: Factor) -> Multivector:
            weight_a = self.times(
                [inv_sin, self.scalar_func("sin", self.times([self.binop("-", 1, t), omega]))],
                "weight",
            )
            weight_b = self.times(
                [inv_sin, self.scalar_func("sin", self.times([t, omega]))], "weight",
            )
            result = self.plus(self.scale(weight_a, a), self.scale(weight_b, b))
            sq_norm = a.known_sq_norm if a.known_sq_norm == b.known_sq_norm else None
            return result.mark_as_unit(a.known_unit and b.known_unit, sq_norm)

        return at

    # ------------------------------------------------------------------
    # Linear maps and sandwiches

    def outermorphism(self, mv: Multivector, matrix) -> Multivector:
        """Applies a linear map given by a row-major ``matrix`` to ``mv``.

        ``mv`` may come from another algebra of a compatible dimension.
        """
        return apply_outermorphism(self, mv, matrix)

    def sandwich(self, operator: Multivector) -> PreparedSandwich:
        """Prepares ``operand -> operator * operand * ~operator``."""
        return PreparedSandwich(self, operator)

    def sandwich1(self, operator: Multivector, operand: Multivector) -> Multivector:
        """Unoptimized sandwich, for cross-checking :meth:`sandwich`."""
        return self.geometric_product(operator, operand, self.reverse(operator))

    def sandwich_x(self, operators: Sequence[Multivector], operand: Multivector) -> Multivector:
        """Conjugates ``operand`` by a chain of operators (outermost first)."""
        return sandwich_chain(self, operators, operand)
