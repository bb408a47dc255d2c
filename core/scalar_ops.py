# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Scalar operations shared by the algebra and the back ends.

Defines which scalar functions and binary operators a back end must support
and evaluates them on plain numbers.  The algebra calls :func:`evaluate`
instead of the back end whenever every argument is numeric.
"""

import math

from core.errors import ScalarOpError

# Arity per scalar function; ``None`` means "one or more".
SCALAR_FUNCS = {
    "abs": 1,
    "cos": 1,
    "sin": 1,
    "sqrt": 1,
    "inversesqrt": 1,
    "sign": 1,
    "exp": 1,
    "log": 1,
    "atan2": 2,
    "max": None,
}

BINOPS = ("+", "-", "*", "/")


def _sign(x):
    return (x > 0) - (x < 0)


_NUMERIC_FUNCS = {
    "abs": abs,
    "cos": math.cos,
    "sin": math.sin,
    "sqrt": math.sqrt,
    "inversesqrt": lambda x: 1 / math.sqrt(x),
    "sign": _sign,
    "exp": math.exp,
    "log": math.log,
    "atan2": math.atan2,
    "max": max,
}


def check_scalar_func(name: str, n_args: int) -> None:
    """Raises :class:`ScalarOpError` for an unknown function or bad arity."""
    if name not in SCALAR_FUNCS:
        raise ScalarOpError(f'unexpected scalar function "{name}"')
    arity = SCALAR_FUNCS[name]
    if (n_args < 1) if arity is None else (n_args != arity):
        raise ScalarOpError(
            f'unexpected number of arguments for scalar function "{name}": {n_args}'
        )


def check_binop(op: str) -> None:
    if op not in BINOPS:
        raise ScalarOpError(f'unexpected binary operator "{op}"')


def evaluate(name: str, *args):
    """Evaluates a scalar function on numbers."""
    check_scalar_func(name, len(args))
    return _NUMERIC_FUNCS[name](*args)


def evaluate_binop(op: str, a, b):
    """Evaluates a binary operator on numbers."""
    check_binop(op)
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    return a / b
