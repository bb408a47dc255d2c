# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Back-end interface.

A back end decides how scalar operations are realized: evaluated on numbers,
written out as shader source, or evaluated on tensors.  The algebra only
talks to it through this interface and only for terms that survive numeric
folding and cancellation.

Symbolic handles returned by a back end must be hashable and must not be
Python numbers (numbers are the numeric factors of a term).
"""

from abc import ABC, abstractmethod
from typing import Any, List, Union

Factor = Union[int, float, Any]
Term = List[Factor]


class BackEndVar(ABC):
    """Storage for one output component inside a back end."""

    @abstractmethod
    def add_term(self, term: Term, negate: bool, create: bool) -> None:
        """Emits ``var = term`` (``create``) or ``var += term``.

        Args:
            term (Term): Factors to multiply.  Contains at least one symbolic factor,
                except for the final numeric remainder flushed on freeze.
            negate (bool): Negate the product.
            create (bool): First contribution to this variable.
        """

    @abstractmethod
    def get_value(self) -> Factor:
        """Returns the handle under which the variable can be referenced."""


class BackEnd(ABC):
    """Abstract back end.

    Subclasses implement variable creation and scalar operations; the
    diagnostic hooks default to no-ops.
    """

    @abstractmethod
    def make_var(self, name_hint: str) -> BackEndVar:
        pass

    @abstractmethod
    def scalar_func(self, name: str, *args: Factor) -> Factor:
        pass

    @abstractmethod
    def binop(self, op: str, a: Factor, b: Factor) -> Factor:
        pass

    def space(self) -> None:
        pass

    def comment(self, text: str) -> None:
        pass
