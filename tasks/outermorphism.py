# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


from omegaconf import OmegaConf

from core.outermorphism import Outermorphism
from tasks.base import BaseTask


class OutermorphismTask(BaseTask):
    """Applies ``outermorphism.matrix`` to the configured input."""

    def build(self):
        om_cfg = self.cfg.outermorphism
        matrix = OmegaConf.to_container(om_cfg.matrix)
        mv = self.input_mv(om_cfg.get("input", "a"))
        morph = Outermorphism(self.algebra, self.algebra, matrix)
        self.section("image")
        return {"input": mv, "image": morph(mv)}
