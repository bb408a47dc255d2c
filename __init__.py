# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Cliffgen: geometric algebra code generator."""

__version__ = "0.1.0"

from core.algebra import Algebra
from core.multivector import Multivector
from backends import GLSLBackEnd, NumericBackEnd

__all__ = [
    "__version__",
    "Algebra",
    "Multivector",
    "GLSLBackEnd",
    "NumericBackEnd",
]
