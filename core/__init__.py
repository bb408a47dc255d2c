# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Core engine of the geometric algebra code generator.

Provides blade combinatorics, the deferred accumulator, multivectors, the
algebra with its products and norms, sandwich products and outermorphisms.
"""

from .algebra import Algebra
from .accumulator import Accumulator, AccumulatorState, is_numeric, is_zero
from .backend import BackEnd, BackEndVar
from .config import AlgebraOptions
from .multivector import Multivector
from .naming import make_letter_names, make_numbered_names
from .outermorphism import Outermorphism
from .prodtree import ProdTree
from .sandwich import PreparedSandwich
from .validation import check_multivector, check_known_unit

from .blades import (
    bit_count,
    bit_list,
    iter_bits,
    product_flips,
    reverse_flips,
    grade_involution_flips,
)

from .errors import (
    AlgebraError,
    ConfigurationError,
    OwnershipError,
    FrozenMutationError,
    UnexpectedComponentKeyError,
    NullVectorError,
    DivisionByZero,
    UnitHintError,
    ScalarOpError,
)

__all__ = [
    # algebra
    "Algebra",
    "AlgebraOptions",
    "Multivector",
    "Accumulator",
    "AccumulatorState",
    "is_numeric",
    "is_zero",
    # back-end interface
    "BackEnd",
    "BackEndVar",
    # naming
    "make_letter_names",
    "make_numbered_names",
    # transforms
    "Outermorphism",
    "PreparedSandwich",
    "ProdTree",
    # validation
    "check_multivector",
    "check_known_unit",
    # blades
    "bit_count",
    "bit_list",
    "iter_bits",
    "product_flips",
    "reverse_flips",
    "grade_involution_flips",
    # errors
    "AlgebraError",
    "ConfigurationError",
    "OwnershipError",
    "FrozenMutationError",
    "UnexpectedComponentKeyError",
    "NullVectorError",
    "DivisionByZero",
    "UnitHintError",
    "ScalarOpError",
]
