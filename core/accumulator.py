# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Deferred scalar accumulator.

Each multivector component is built by one :class:`Accumulator`.  Purely
numeric terms are folded into a running number; only terms with a symbolic
factor reach the back end.  The accumulator is *building* until its value is
read for the first time and *frozen* afterwards.
"""

import math
from enum import Enum

from core.backend import BackEndVar, Factor, Term
from core.errors import FrozenMutationError


def is_numeric(factor: Factor) -> bool:
    """Numeric factors are plain Python numbers; everything else is symbolic."""
    return isinstance(factor, (int, float))


def is_zero(factor: Factor) -> bool:
    """True for a literal numeric 0."""
    return is_numeric(factor) and factor == 0


class AccumulatorState(Enum):
    BUILDING = "building"
    FROZEN = "frozen"


class Accumulator:
    """Per-component scalar builder with a two-phase lifecycle.

    Attributes:
        var (BackEndVar): Back-end storage, touched only for symbolic terms.
        state (AccumulatorState): ``BUILDING`` or ``FROZEN``.
    """

    def __init__(self, var: BackEndVar):
        self.var = var
        self.state = AccumulatorState.BUILDING
        self._numeric = 0
        self._created = False

    @property
    def frozen(self) -> bool:
        return self.state is AccumulatorState.FROZEN

    def add(self, term: Term, negate: bool = False) -> None:
        """Adds the product of ``term`` (negated if ``negate``).

        Raises:
            FrozenMutationError: If the value has already been read.
        """
        if self.frozen:
            raise FrozenMutationError("cannot add a term to a frozen accumulator")
        if any(is_zero(f) for f in term):
            return
        if all(is_numeric(f) for f in term):
            self._numeric += math.prod(term, start=-1 if negate else 1)
            return
        self.var.add_term(term, bool(negate), not self._created)
        self._created = True

    def value(self) -> Factor:
        """Freezes the accumulator (once) and returns its value.

        On the first call a non-zero numeric remainder is flushed to the back
        end if any symbolic term has been emitted.
        """
        if not self.frozen:
            if self._created and self._numeric != 0:
                self.var.add_term([self._numeric], False, False)
            self.state = AccumulatorState.FROZEN
        return self.var.get_value() if self._created else self._numeric
