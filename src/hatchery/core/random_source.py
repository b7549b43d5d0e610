"""
Uniform random source used throughout the simulator.

Every draw goes through a single ``random()`` call returning a float in
[0, 1). ``numpy.random.Generator`` satisfies this directly; tests inject a
scripted sequence instead.
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np

from hatchery.core.individual import LOCUS_MIN, LOCUS_VALUES, Sex


class UniformSource(Protocol):
    def random(self) -> float: ...


def make_rng(seed: int | np.random.SeedSequence | None = None) -> np.random.Generator:
    """Production generator. ``seed=None`` gives an unseeded, non-reproducible run."""
    return np.random.default_rng(seed)


def roll_locus(rng: UniformSource) -> int:
    """Uniform integer locus value in [0, 31]."""
    return LOCUS_MIN + math.floor(rng.random() * LOCUS_VALUES)


def coin_flip(rng: UniformSource) -> bool:
    return rng.random() < 0.5


def assign_sex(male_probability: float, rng: UniformSource) -> Sex:
    """Male when the draw falls below ``male_probability``."""
    return Sex.MALE if rng.random() < male_probability else Sex.FEMALE
