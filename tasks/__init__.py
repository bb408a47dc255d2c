# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Code-generation tasks for the Cliffgen CLI.

Each task inherits from :class:`BaseTask` and implements ``build``; the base
class handles back-end and algebra setup and output.
"""

from .base import BaseTask
from .products import ProductsTask
from .sandwich import SandwichTask
from .outermorphism import OutermorphismTask

TASKS = {
    "products": ProductsTask,
    "sandwich": SandwichTask,
    "outermorphism": OutermorphismTask,
}

__all__ = [
    "BaseTask",
    "ProductsTask",
    "SandwichTask",
    "OutermorphismTask",
    "TASKS",
]
