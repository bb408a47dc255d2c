# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Exception taxonomy of the algebra engine.

Every error derives from :class:`AlgebraError` and from the closest builtin,
so callers may catch either.  Errors are raised eagerly during multivector
construction; no partially built multivector is ever returned.
"""


class AlgebraError(Exception):
    """Base class for all cliffgen errors."""


class ConfigurationError(AlgebraError, ValueError):
    """Metric, name table or coordinate list do not fit together."""


class OwnershipError(AlgebraError, ValueError):
    """A multivector was passed to an algebra it does not belong to."""


class FrozenMutationError(AlgebraError, RuntimeError):
    """A term was added to an accumulator after its value was read."""


class UnexpectedComponentKeyError(AlgebraError, KeyError):
    """A component name is not part of the algebra's name table."""

    def __str__(self):
        return str(self.args[0]) if self.args else ""


class NullVectorError(AlgebraError, ZeroDivisionError):
    """Inverse, normalize, log or dual of a metrically null object."""


DivisionByZero = NullVectorError


class UnitHintError(AlgebraError, ValueError):
    """A ``known_unit`` hint failed runtime verification."""


class ScalarOpError(AlgebraError, ValueError):
    """Unknown scalar operation, wrong number of arguments, or a number with no literal form."""
