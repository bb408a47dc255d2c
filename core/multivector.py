# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Multivector Container Class.

A multivector is a sparse collection of :class:`Accumulator` objects indexed
by blade bitmap.  It is populated exactly once, by a builder callback passed
to the constructor, and read-only afterwards.  Operator overloading forwards
to the owning :class:`~core.algebra.Algebra` (e.g. ``A * B`` for the
geometric product).
"""

from typing import Callable, Dict, Iterator, Optional, Tuple, Union

from core.accumulator import Accumulator, is_numeric, is_zero
from core.backend import Factor, Term
from core.errors import FrozenMutationError, UnexpectedComponentKeyError

AddFn = Callable[..., None]


class Multivector:
    """Sparse multivector built through a builder callback.

    The builder receives ``add(bitmap, term, negate=False)``.  The first
    ``add`` for a bitmap lazily creates that component's accumulator.  When
    the builder returns, every accumulator is frozen in first-touch order.

    Attributes:
        algebra (Algebra): The owning algebra.
        name (str): Name hint, also used for back-end variable names.
    """

    def __init__(self, algebra, builder: Callable[[AddFn], None], name: str = "mv"):
        """Initializes and populates a Multivector.

        Args:
            algebra (Algebra): The algebra instance.
            builder (callable): Called once with the ``add`` callback.
            name (str, optional): Name hint. Defaults to "mv".
        """
        self.algebra = algebra
        self.name = name
        self._known_unit = False
        self._known_sq_norm = None
        self._components: Dict[int, Accumulator] = {}
        self._values: Dict[int, Factor] = {}

        if algebra.options.comments:
            algebra.backend.comment(name)

        building = True

        def add(bitmap: int, term: Term, negate: bool = False) -> None:
            if not building:
                raise FrozenMutationError(f"{name}: multivector is already built")
            acc = self._components.get(bitmap)
            if acc is None:
                if not 0 <= bitmap <= algebra.full_bitmap:
                    raise UnexpectedComponentKeyError(
                        f"{name}: bitmap {bitmap} out of range"
                    )
                acc = algebra.make_accumulator(f"{name}_{algebra.bitmap_to_string[bitmap]}")
                self._components[bitmap] = acc
            acc.add(term, negate)

        builder(add)
        building = False

        for bitmap, acc in self._components.items():
            self._values[bitmap] = acc.value()

    def _bitmap(self, key: Union[int, str]) -> int:
        if isinstance(key, str):
            try:
                return self.algebra.string_to_bitmap[key]
            except KeyError:
                raise UnexpectedComponentKeyError(f"unknown basis blade: {key!r}") from None
        return key

    def value(self, key: Union[int, str]) -> Factor:
        """Value of a component (by bitmap or name), literal 0 if untouched."""
        return self._values.get(self._bitmap(key), 0)

    def __iter__(self) -> Iterator[Tuple[int, Factor]]:
        """Yields ``(bitmap, value)`` for touched components in first-touch order.

        Components whose value folded to a literal 0 are skipped.
        """
        for bitmap, value in self._values.items():
            if is_zero(value):
                continue
            yield bitmap, value

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def bitmaps(self):
        return [bitmap for bitmap, _ in self]

    def to_dict(self) -> Dict[str, Factor]:
        """Maps blade names to values of the non-zero components."""
        names = self.algebra.bitmap_to_string
        return {names[bitmap]: value for bitmap, value in self}

    @property
    def known_unit(self) -> bool:
        """Trusted construction-time hint that ``|norm_squared|`` is 1."""
        return self._known_unit

    @known_unit.setter
    def known_unit(self, value: bool) -> None:
        self.mark_as_unit(value)

    @property
    def known_sq_norm(self) -> Optional[int]:
        """Sign of ``norm_squared`` (1 or -1) for ``known_unit`` data, else None.

        None on a ``known_unit`` multivector means the sign is not known at
        generation time.
        """
        return self._known_sq_norm

    def mark_as_unit(self, value: bool = True, sq_norm: Optional[int] = 1) -> "Multivector":
        """Sets the ``known_unit`` hint.

        Args:
            value (bool, optional): The hint. Defaults to True.
            sq_norm (int, optional): Known ``norm_squared`` (1, -1 or None
                when unknown). Ignored when ``value`` is false. Defaults to 1.

        Returns:
            Multivector: ``self``, for chaining.
        """
        value = bool(value)
        if sq_norm not in (1, -1, None):
            raise ValueError(f"{self.name}: squared norm hint must be 1, -1 or None, got {sq_norm}")
        sq_norm = sq_norm if value else None
        if value and self.algebra.options.verify_known_unit:
            from core.validation import check_known_unit
            check_known_unit(self, self.algebra.options.unit_tolerance, sq_norm)
        self._known_unit = value
        self._known_sq_norm = sq_norm
        return self

    def is_numeric(self) -> bool:
        return all(is_numeric(value) for _, value in self)

    def __repr__(self):
        unit = ""
        if self._known_unit:
            unit = " [unit]" if self._known_sq_norm != -1 else " [unit, sq -1]"
        body = ", ".join(f"{key}: {value}" for key, value in self.to_dict().items())
        return f"{self.name}{unit} {{{body}}}"

    def __add__(self, other):
        """Component-wise sum."""
        if isinstance(other, Multivector):
            return self.algebra.plus(self, other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Multivector):
            return self.algebra.minus(self, other)
        return NotImplemented

    def __neg__(self):
        return self.algebra.negate(self)

    def __mul__(self, other):
        """Geometric Product (A * B), or scaling by a scalar factor."""
        if isinstance(other, Multivector):
            return self.algebra.geometric_product(self, other)
        return self.algebra.scale(other, self)

    def __rmul__(self, other):
        return self.algebra.scale(other, self)

    def __xor__(self, other):
        """Wedge product (A ^ B)."""
        if isinstance(other, Multivector):
            return self.algebra.wedge_product(self, other)
        return NotImplemented

    def __invert__(self):
        """Reversion (~A)."""
        return self.algebra.reverse(self)

    def norm(self):
        return self.algebra.norm(self)

    def grade(self, k: int):
        """Projects to grade k."""
        return self.algebra.extract_grade(k, self)
