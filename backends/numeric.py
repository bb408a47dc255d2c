# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Back end for purely numeric input.

The algebra already folds numeric terms, so vars of this back end usually
receive nothing; it exists to run the algebra without generating code.
"""

import math

from core.backend import BackEnd, BackEndVar
from core.scalar_ops import evaluate, evaluate_binop


class NumericVar(BackEndVar):
    def __init__(self):
        self.total = 0.0

    def add_term(self, term, negate, create):
        product = math.prod(term)
        if create:
            self.total = 0.0
        self.total += -product if negate else product

    def get_value(self):
        return self.total


class NumericBackEnd(BackEnd):

    def make_var(self, name_hint):
        return NumericVar()

    def scalar_func(self, name, *args):
        return evaluate(name, *args)

    def binop(self, op, a, b):
        return evaluate_binop(op, a, b)
