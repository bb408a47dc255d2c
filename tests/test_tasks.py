# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Tests for the CLI tasks, driven by OmegaConf/Hydra configs."""

import os

import pytest
from hydra import compose, initialize
from omegaconf import OmegaConf

from tasks import TASKS, OutermorphismTask, ProductsTask, SandwichTask

CONF_DIR = os.path.join("..", "conf")


def make_cfg(inputs=None, **overrides):
    base = {
        "name": "products",
        "algebra": {
            "metric": [1, 1, 1],
            "naming": "letters",
            "coords": ["x", "y", "z"],
            "verify_known_unit": False,
            "comments": True,
        },
        "backend": {"kind": "glsl", "device": "cpu"},
        "inputs": {
            "a": {"x": "ax", "y": "ay", "z": "az"},
            "b": {"x": "bx", "y": "by", "z": "bz"},
            "operand": {"x": "px", "y": "py", "z": "pz"},
        },
        "sandwich": {"compare": False},
        "outermorphism": {"input": "a", "matrix": [[1, 0, 0], [0, 1, 0], [0, 0, 1]]},
        "output": None,
    }
    if inputs is not None:
        base["inputs"] = inputs
    return OmegaConf.merge(OmegaConf.create(base), OmegaConf.create(overrides))


class TestProductsTask:

    def test_glsl_output(self, capsys):
        text = ProductsTask(make_cfg()).run()
        assert "// gp" in text
        assert "// geometric_product = {" in text
        assert "float scalar_prod_" in text
        assert capsys.readouterr().out == text

    def test_results_separated(self):
        text = ProductsTask(make_cfg()).run()
        assert "\n\n// ---- geometric_product\n" in text
        assert "\n\n// ---- regressive_product\n" in text
        assert text.index("// ---- wedge_product") < text.index("// wedge")

    def test_numeric_results(self):
        cfg = make_cfg(
            backend={"kind": "numeric"},
            inputs={"a": {"x": 1, "y": 2}, "b": {"x": 3}},
        )
        lines = ProductsTask(cfg).run().splitlines()
        assert "scalar_product = 3" in lines
        assert "geometric_product = {'1': 3, 'xy': -6}" in lines
        assert "wedge_product = {'xy': -6}" in lines

    def test_output_file(self, tmp_path, capsys):
        path = tmp_path / "products.glsl"
        text = ProductsTask(make_cfg(output=str(path))).run()
        assert path.read_text() == text
        assert capsys.readouterr().out == ""

    def test_numbered_naming(self):
        cfg = make_cfg(
            algebra={"naming": "numbered", "start": 1},
            backend={"kind": "numeric"},
            inputs={"a": {"e1": 1}, "b": {"e2": 1}},
        )
        assert "wedge_product = {'e12': 1}" in ProductsTask(cfg).run()

    def test_unknown_naming(self):
        with pytest.raises(ValueError):
            ProductsTask(make_cfg(algebra={"naming": "greek"}))


class TestSandwichTask:

    def test_tensor_backend(self):
        cfg = make_cfg(
            name="sandwich",
            backend={"kind": "tensor"},
            inputs={
                "a": {"x": [1.0, 1.0], "y": [0.0, 1.0]},
                "b": {"y": [1.0, 2.0]},
                "operand": {"x": [1.0, 0.0], "z": [0.0, 1.0]},
            },
            sandwich={"compare": True},
        )
        task = SandwichTask(cfg)
        results = task.build()
        fast = task.backend.to_dense(results["sandwich"])
        slow = task.backend.to_dense(results["sandwich1"])
        assert fast.shape == (2, 8)
        # b * a turns by twice the angle from a to b
        assert fast[0, 1].item() == pytest.approx(-1.0)
        assert (fast - slow).abs().max().item() < 1e-12

    def test_glsl(self):
        text = SandwichTask(make_cfg(name="sandwich")).run()
        assert "lr_val_" in text
        assert "// sandwich = {" in text
        assert "sandwich1" not in text


class TestOutermorphismTask:

    def test_diagonal_matrix(self):
        cfg = make_cfg(
            name="outermorphism",
            backend={"kind": "numeric"},
            inputs={"a": {"x": 1, "y": 1}},
            outermorphism={"matrix": [[2, 0, 0], [0, 3, 0], [0, 0, 4]]},
        )
        assert "image = {'x': 2, 'y': 3}" in OutermorphismTask(cfg).run()

    def test_sparse_symbolic_matrix(self):
        cfg = make_cfg(
            name="outermorphism",
            outermorphism={"input": "operand", "matrix": [["m00"], [None, "m11"]]},
        )
        text = OutermorphismTask(cfg).run()
        assert "m00 * operand_x_" in text
        assert "m11 * operand_y_" in text


class TestHydraConfig:

    def test_compose_default_config(self):
        with initialize(version_base=None, config_path=CONF_DIR):
            cfg = compose(config_name="config")
        assert cfg.name in TASKS
        assert cfg.backend.kind == "glsl"
        assert list(cfg.algebra.metric) == [1, 1, 1]

    @pytest.mark.parametrize("name", sorted(TASKS))
    def test_every_task_runs_with_defaults(self, name):
        with initialize(version_base=None, config_path=CONF_DIR):
            cfg = compose(config_name="config", overrides=[f"name={name}"])
        text = TASKS[name](cfg).run()
        assert text.startswith("// ")
