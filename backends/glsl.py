# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""GLSL shader-text back end.

Symbolic values are GLSL expressions (plain strings, usually variable
names).  Every variable and scalar operation becomes one statement appended
to :attr:`GLSLBackEnd.lines`, e.g.::

    // gp
    float gp_x_3  = ax * by;
          gp_x_3 += -(ay * bx);
    float sqrt_4 = sqrt(norm2_2);
"""

import math
import re
from typing import List

from core.accumulator import is_numeric
from core.backend import BackEnd, BackEndVar
from core.errors import ScalarOpError

BINOP_LONG_NAMES = {
    "+": "plus",
    "-": "minus",
    "*": "times",
    "/": "div",
}

# Scalar functions spelled differently in GLSL
GLSL_FUNC_NAMES = {
    "atan2": "atan",
}


def format_scalar(factor) -> str:
    """GLSL literal for a number (always with a decimal point) or the expression itself."""
    if is_numeric(factor):
        if not math.isfinite(factor):
            raise ScalarOpError(f"no GLSL literal for non-finite number {factor}")
        text = str(factor)
        return text if re.search(r"\.|e", text, re.IGNORECASE) else text + ".0"
    return str(factor)


def format_term(term: List) -> str:
    return " * ".join(format_scalar(factor) for factor in term)


class GLSLVar(BackEndVar):
    def __init__(self, backend: "GLSLBackEnd", name: str):
        self.backend = backend
        self.name = name

    def add_term(self, term, negate, create):
        expr = format_term(term)
        if negate:
            expr = f"-({expr})"
        if create:
            self.backend.emit(f"float {self.name}  = {expr};")
        else:
            self.backend.emit(f"      {self.name} += {expr};")

    def get_value(self):
        return self.name


class GLSLBackEnd(BackEnd):
    """Accumulates GLSL statements.

    Attributes:
        lines (list): Generated statements, in emission order.
    """

    def __init__(self):
        self.lines: List[str] = []
        self.count = 0

    @property
    def text(self) -> str:
        """Generated code, one statement per line."""
        return "".join(f"{line}\n" for line in self.lines)

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def _fresh(self, stem: str) -> str:
        name = f"{stem}_{self.count}"
        self.count += 1
        return name

    def make_var(self, name_hint):
        return GLSLVar(self, self._fresh(name_hint))

    def scalar_func(self, name, *args):
        var_name = self._fresh(name)
        glsl_name = GLSL_FUNC_NAMES.get(name, name)
        self.emit(f"float {var_name} = {glsl_name}({', '.join(format_scalar(a) for a in args)});")
        return var_name

    def binop(self, op, a, b):
        var_name = self._fresh(BINOP_LONG_NAMES[op])
        self.emit(f"float {var_name} = {format_scalar(a)} {op} {format_scalar(b)};")
        return var_name

    def comment(self, text):
        self.emit("// " + text)

    def space(self):
        self.emit("")
