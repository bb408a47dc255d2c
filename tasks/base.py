# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


from abc import ABC, abstractmethod
from typing import Dict, Mapping

from omegaconf import DictConfig, OmegaConf

from backends import TensorBackEnd, make_backend
from core.accumulator import is_numeric
from core.algebra import Algebra
from core.config import AlgebraOptions
from core.multivector import Multivector
from core.naming import make_letter_names, make_numbered_names
from log import get_logger

logger = get_logger(__name__)


class BaseTask(ABC):
    """Abstract base class for all code-generation tasks.

    Lifecycle: setup_backend -> setup_algebra -> build -> emit.

    Attributes:
        cfg (DictConfig): Hydra configuration.
        options (AlgebraOptions): Algebra tunables from ``cfg.algebra``.
        backend (BackEnd): Back end selected by ``cfg.backend.kind``.
        algebra (Algebra): The algebra all inputs and results belong to.
    """

    def __init__(self, cfg: DictConfig):
        """Sets up the task.

        Args:
            cfg (DictConfig): Hydra config.
        """
        self.cfg = cfg
        self.options = AlgebraOptions.from_config(cfg.algebra)
        self.backend = self.setup_backend()
        self.algebra = self.setup_algebra()

    def setup_backend(self):
        """Instantiates the configured back end."""
        backend_cfg = self.cfg.get("backend") or {}
        kind = backend_cfg.get("kind", "glsl")
        if kind == "tensor":
            return make_backend(kind, device=backend_cfg.get("device", "auto"))
        return make_backend(kind)

    def setup_algebra(self) -> Algebra:
        """Builds the algebra from ``cfg.algebra`` (metric and blade naming)."""
        algebra_cfg = self.cfg.algebra
        metric = OmegaConf.to_container(algebra_cfg.metric)
        naming = algebra_cfg.get("naming", "numbered")
        if naming == "letters":
            coords = list(algebra_cfg.coords)
            names = make_letter_names(coords)
        elif naming == "numbered":
            names = make_numbered_names(len(metric), start=algebra_cfg.get("start", 0))
        else:
            raise ValueError(f"Unknown naming: {naming!r} (expected 'letters' or 'numbered')")
        return Algebra(metric, self.backend, names, self.options)

    def input_mv(self, name: str) -> Multivector:
        """Multivector from ``cfg.inputs[name]`` (blade name -> value).

        With the tensor back end non-scalar values become registered tensor
        inputs; otherwise strings are symbolic expressions.
        """
        data = self.cfg.inputs[name]
        if isinstance(data, DictConfig):
            data = OmegaConf.to_container(data)
        components = {}
        for blade, value in data.items():
            if isinstance(self.backend, TensorBackEnd) and not is_numeric(value):
                value = self.backend.input(f"{name}_{blade}", value)
            components[blade] = value
        return self.algebra.mv(components, name)

    def section(self, title: str) -> None:
        """Starts the generated code of the next result."""
        self.backend.space()
        if self.options.comments:
            self.backend.comment(f"---- {title}")

    @abstractmethod
    def build(self) -> Dict[str, object]:
        """Runs the algebra; returns named results (multivectors or scalars)."""
        pass

    def emit(self, results: Mapping[str, object]) -> str:
        """Renders the generated code (GLSL) or the evaluated results."""
        lines = []
        for name, result in results.items():
            if isinstance(result, Multivector):
                if isinstance(self.backend, TensorBackEnd):
                    value = self.backend.to_dense(result).tolist()
                else:
                    value = result.to_dict()
            elif isinstance(self.backend, TensorBackEnd) and not is_numeric(result):
                value = self.backend.tensor(result).tolist()
            else:
                value = result
            lines.append(f"{name} = {value}")

        if hasattr(self.backend, "text"):
            return self.backend.text + "".join(f"// {line}\n" for line in lines)
        return "".join(f"{line}\n" for line in lines)

    def run(self) -> str:
        """Execute the task and write its output."""
        logger.info("Starting Task: %s", self.cfg.name)
        results = self.build()
        text = self.emit(results)

        output = self.cfg.get("output")
        if output:
            with open(output, "w") as f:
                f.write(text)
            logger.info("Output written to %s", output)
        else:
            print(text, end="")

        logger.info("Task Complete: %d results", len(results))
        return text
