# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


from tasks.base import BaseTask


class SandwichTask(BaseTask):
    """Rotates ``operand`` in the plane of ``a`` and ``b``.

    The rotor ``normalize(b * a)`` turns by twice the angle between the
    inputs and is applied with the cancelling sandwich.
    With ``sandwich.compare`` the plain triple product is emitted as well.
    """

    def build(self):
        alg = self.algebra
        a = alg.normalize(self.input_mv("a"))
        b = alg.normalize(self.input_mv("b"))
        operand = self.input_mv("operand")
        self.section("rotor")
        rotor = alg.normalize(alg.geometric_product(b, a))

        self.section("sandwich")
        results = {"rotor": rotor, "sandwich": alg.sandwich(rotor)(operand)}
        sandwich_cfg = self.cfg.get("sandwich") or {}
        if sandwich_cfg.get("compare", False):
            self.section("sandwich1")
            results["sandwich1"] = alg.sandwich1(rotor, operand)
        return results
