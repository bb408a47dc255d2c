# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Cliffgen CLI Entry Point.

Dispatches code-generation tasks.
"""

import hydra
from omegaconf import DictConfig

from log import set_level
from tasks import TASKS


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig):
    """Runs the task named by ``cfg.name``.

    Args:
        cfg (DictConfig): The plan.
    """
    set_level(cfg.get("log_level"))
    task_name = cfg.name

    if task_name not in TASKS:
        raise ValueError(f"Unknown task: {task_name}. Available: {list(TASKS.keys())}")

    TaskClass = TASKS[task_name]
    task = TaskClass(cfg)
    task.run()


if __name__ == "__main__":
    main()
