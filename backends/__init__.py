# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Pluggable back ends: numeric evaluation, GLSL text, PyTorch tensors."""

from .numeric import NumericBackEnd
from .glsl import GLSLBackEnd
from .tensor import TensorBackEnd

BACKENDS = {
    "numeric": NumericBackEnd,
    "glsl": GLSLBackEnd,
    "tensor": TensorBackEnd,
}


def make_backend(kind: str, **kwargs):
    """Instantiates a back end by its config name.

    Raises:
        ValueError: For an unknown kind.
    """
    if kind not in BACKENDS:
        raise ValueError(f"Unknown backend: {kind!r} (expected one of {sorted(BACKENDS)})")
    return BACKENDS[kind](**kwargs)


__all__ = [
    "NumericBackEnd",
    "GLSLBackEnd",
    "TensorBackEnd",
    "BACKENDS",
    "make_backend",
]
