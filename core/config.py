# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Algebra options.

Centralises the engine's tunables into a single :class:`AlgebraOptions`
dataclass that can be built from a Hydra/OmegaConf config section.
"""

from __future__ import annotations

from dataclasses import dataclass

from omegaconf import DictConfig


@dataclass
class AlgebraOptions:
    """Bag of algebra settings.

    Attributes:
        verify_known_unit: Check ``known_unit`` hints at construction time
            when all involved values are numeric.  Off by default: the hint is
            trusted.
        unit_tolerance: Allowed deviation of ``|norm_squared|`` from 1 when
            verifying.
        comments: Emit a back-end comment naming each new multivector.
    """

    verify_known_unit: bool = False
    unit_tolerance: float = 1e-10
    comments: bool = True

    def __post_init__(self) -> None:
        if self.unit_tolerance < 0:
            raise ValueError(f"unit_tolerance must be non-negative, got {self.unit_tolerance}")

    @classmethod
    def from_config(cls, cfg: DictConfig | None) -> "AlgebraOptions":
        """Reads the options from an ``algebra`` config section."""
        if cfg is None:
            return cls()
        return cls(
            verify_known_unit=bool(cfg.get("verify_known_unit", False)),
            unit_tolerance=float(cfg.get("unit_tolerance", 1e-10)),
            comments=bool(cfg.get("comments", True)),
        )
