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


class ProductsTask(BaseTask):
    """Every product kind of the inputs ``a`` and ``b``."""

    def build(self):
        alg = self.algebra
        a = self.input_mv("a")
        b = self.input_mv("b")
        products = {
            "geometric_product": alg.geometric_product,
            "wedge_product": alg.wedge_product,
            "contract_left": alg.contract_left,
            "contract_right": alg.contract_right,
            "dot_product": alg.dot_product,
            "scalar_product": alg.scalar_product,
            "regressive_product": alg.regressive_product,
        }
        results = {}
        for name, product in products.items():
            self.section(name)
            results[name] = product(a, b)
        return results
