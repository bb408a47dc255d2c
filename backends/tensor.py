# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Batched numeric back end on PyTorch tensors.

Symbolic values are names into an environment of tensors.  Inputs are
registered with :meth:`TensorBackEnd.input`; every statement the algebra
emits is evaluated immediately, so after an operation the environment holds
the result components.  All tensors broadcast against each other, which
makes one pass of the algebra evaluate a whole batch.
"""

from functools import reduce
from typing import Dict

import torch

from core.accumulator import is_numeric
from core.backend import BackEnd, BackEndVar
from core.errors import ScalarOpError


def resolve_device(device: str = "auto") -> str:
    """Resolve ``'auto'`` to the best available accelerator.

    Priority: cuda > mps > cpu.
    """
    if device != "auto":
        return device
    if torch.cuda.is_available():
        return "cuda"
    if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
        return "mps"
    return "cpu"


_TORCH_FUNCS = {
    "abs": torch.abs,
    "cos": torch.cos,
    "sin": torch.sin,
    "sqrt": torch.sqrt,
    "inversesqrt": torch.rsqrt,
    "sign": torch.sign,
    "exp": torch.exp,
    "log": torch.log,
    "atan2": torch.atan2,
    "max": lambda *args: reduce(torch.maximum, args),
}

_TORCH_BINOPS = {
    "+": torch.add,
    "-": torch.sub,
    "*": torch.mul,
    "/": torch.div,
}


class TensorVar(BackEndVar):
    def __init__(self, backend: "TensorBackEnd", name: str):
        self.backend = backend
        self.name = name

    def add_term(self, term, negate, create):
        backend = self.backend
        product = reduce(torch.mul, [backend.tensor(factor) for factor in term])
        if negate:
            product = -product
        if create:
            backend.env[self.name] = product
        else:
            backend.env[self.name] = backend.env[self.name] + product

    def get_value(self):
        return self.name


class TensorBackEnd(BackEnd):
    """Evaluates the algebra's scalar program eagerly on tensors.

    Attributes:
        env (dict): Variable name -> tensor.
        device (str): Resolved device of created tensors.
        dtype (torch.dtype): Floating point type of created tensors.
    """

    def __init__(self, device: str = "auto", dtype: torch.dtype = torch.float64):
        self.device = resolve_device(device)
        self.dtype = dtype
        self.env: Dict[str, torch.Tensor] = {}
        self.count = 0

    def _fresh(self, stem: str) -> str:
        name = f"{stem}_{self.count}"
        self.count += 1
        return name

    def input(self, name: str, value) -> str:
        """Registers an input tensor; the returned name is its symbolic handle."""
        if name in self.env:
            raise ValueError(f"Input {name!r} is already defined")
        self.env[name] = torch.as_tensor(value, dtype=self.dtype, device=self.device)
        return name

    def tensor(self, factor) -> torch.Tensor:
        """Tensor for a numeric factor or a symbolic handle."""
        if is_numeric(factor):
            return torch.tensor(float(factor), dtype=self.dtype, device=self.device)
        return self.env[factor]

    def make_var(self, name_hint):
        return TensorVar(self, self._fresh(name_hint))

    def scalar_func(self, name, *args):
        if name not in _TORCH_FUNCS:
            raise ScalarOpError(f'unexpected scalar function "{name}"')
        var_name = self._fresh(name)
        self.env[var_name] = _TORCH_FUNCS[name](*[self.tensor(arg) for arg in args])
        return var_name

    def binop(self, op, a, b):
        if op not in _TORCH_BINOPS:
            raise ScalarOpError(f'unexpected binary operator "{op}"')
        var_name = self._fresh("binop")
        self.env[var_name] = _TORCH_BINOPS[op](self.tensor(a), self.tensor(b))
        return var_name

    def to_dense(self, mv) -> torch.Tensor:
        """Dense coefficients ``[..., 2**n]`` of ``mv``, indexed by blade bitmap."""
        values = {bitmap: self.tensor(value) for bitmap, value in mv}
        batch_shape = torch.broadcast_shapes(*(v.shape for v in values.values())) if values else ()
        dense = torch.zeros(
            *batch_shape, 1 << mv.algebra.n_dimensions, dtype=self.dtype, device=self.device,
        )
        for bitmap, value in values.items():
            dense[..., bitmap] = value
        return dense
