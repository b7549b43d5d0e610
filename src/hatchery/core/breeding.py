"""
Breeding operators.

Every operator takes the current best male and female plus the male
probability and produces one new egg:

  partial_inheritance_3        : 3 loci inherited, the rest re-rolled
  partial_inheritance_5        : 5 loci inherited, the rest re-rolled
  adaptive_partial_inheritance : 5 loci once the pair holds enough maxed
                                 loci, otherwise 3
  independent_locus_mutation   : every locus inherited, then nudged by a
                                 geometric number of unit mutations

Constants come from ``ExperimentConfig.breeding_config``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable

import numpy as np

from hatchery.core.individual import LOCI, LOCUS_MAX, LOCUS_MIN, Individual
from hatchery.core.random_source import (
    UniformSource,
    assign_sex,
    coin_flip,
    roll_locus,
)

if TYPE_CHECKING:
    from hatchery.core.config import ExperimentConfig

BreedingOperator = Callable[[Individual, Individual, float, UniformSource], Individual]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _pick_loci(count: int, rng: UniformSource) -> list[int]:
    """
    Choose ``count`` distinct locus indices uniformly without replacement.

    Each draw removes one index from a private list of those still
    available, so draw ``i`` selects among ``len(LOCI) - i`` candidates.
    """
    if not 0 <= count <= len(LOCI):
        raise ValueError(f"Cannot pick {count} of {len(LOCI)} loci")
    remaining = list(range(len(LOCI)))
    picked: list[int] = []
    for _ in range(count):
        picked.append(remaining.pop(math.floor(rng.random() * len(remaining))))
    return picked


def _count_maxed_loci(individual: Individual) -> int:
    return individual.maxed_locus_count()


def _mutation_direction(rng: UniformSource, downward_probability: float) -> int:
    """+1 above the threshold, -1 below, 0 on an exact hit."""
    return int(np.sign(rng.random() - downward_probability))


def _clamp(value: int) -> int:
    return int(np.clip(value, LOCUS_MIN, LOCUS_MAX))


def _inherit(male: Individual, female: Individual, name: str, rng: UniformSource) -> int:
    """Take the locus from either parent with equal probability."""
    return male.locus(name) if coin_flip(rng) else female.locus(name)


class BreedingEngine:
    """Produces eggs from a breeding pair using a named operator."""

    OPERATORS = (
        "partial_inheritance_3",
        "partial_inheritance_5",
        "adaptive_partial_inheritance",
        "independent_locus_mutation",
    )

    def __init__(self, config: ExperimentConfig):
        self.config = config
        self._bc = config.breeding_config

    @property
    def base_inherit_count(self) -> int:
        return self._bc.get("base_inherit_count", 3)

    @property
    def boosted_inherit_count(self) -> int:
        return self._bc.get("boosted_inherit_count", 5)

    @property
    def adaptive_maxed_threshold(self) -> int:
        return self._bc.get("adaptive_maxed_threshold", 3)

    @property
    def preserve_zero_overwrite(self) -> bool:
        return self._bc.get("preserve_zero_overwrite", True)

    @property
    def mutation_rate(self) -> float:
        return self._bc.get("mutation_rate", 0.05)

    @property
    def mutation_downward_probability(self) -> float:
        return self._bc.get("mutation_downward_probability", 0.25)

    def get_operator(self, name: str) -> BreedingOperator:
        """Look up a named operator as a plain callable."""
        if name not in self.OPERATORS:
            raise ValueError(f"Unknown breeding operator: '{name}'")
        return getattr(self, f"_breed_{name}")

    def breed(
        self,
        name: str,
        male: Individual,
        female: Individual,
        male_probability: float,
        rng: UniformSource | None = None,
    ) -> Individual:
        rng = rng or np.random.default_rng()
        return self.get_operator(name)(male, female, male_probability, rng)

    # ------------------------------------------------------------------
    # Partial inheritance
    # ------------------------------------------------------------------
    def partial_inheritance(
        self,
        male: Individual,
        female: Individual,
        male_probability: float,
        rng: UniformSource,
        inherit_count: int,
    ) -> Individual:
        """
        Inherit ``inherit_count`` random loci, re-roll the rest.

        1. Pick the loci to inherit
        2. Flip a fair coin per picked locus for the contributing parent
        3. Draw the egg's sex
        4. Fill every unassigned locus with a fresh uniform roll

        With ``preserve_zero_overwrite`` an inherited 0 counts as unassigned
        and is re-rolled too.
        """
        inherited: dict[str, int | None] = dict.fromkeys(LOCI)
        for idx in _pick_loci(inherit_count, rng):
            name = LOCI[idx]
            inherited[name] = _inherit(male, female, name, rng)

        sex = assign_sex(male_probability, rng)

        values: dict[str, int] = {}
        for name in LOCI:
            value = inherited[name]
            if value is None or (value == 0 and self.preserve_zero_overwrite):
                value = roll_locus(rng)
            values[name] = value
        return Individual.from_loci(sex, values)

    def _breed_partial_inheritance_3(self, male, female, male_probability, rng):
        return self.partial_inheritance(
            male, female, male_probability, rng, self.base_inherit_count,
        )

    def _breed_partial_inheritance_5(self, male, female, male_probability, rng):
        return self.partial_inheritance(
            male, female, male_probability, rng, self.boosted_inherit_count,
        )

    def _breed_adaptive_partial_inheritance(self, male, female, male_probability, rng):
        """Boosted inheritance only once the pair holds enough maxed loci."""
        maxed = _count_maxed_loci(male) + _count_maxed_loci(female)
        if maxed > self.adaptive_maxed_threshold:
            count = self.boosted_inherit_count
        else:
            count = self.base_inherit_count
        return self.partial_inheritance(male, female, male_probability, rng, count)

    # ------------------------------------------------------------------
    # Independent-locus mutation
    # ------------------------------------------------------------------
    def _breed_independent_locus_mutation(
        self,
        male: Individual,
        female: Individual,
        male_probability: float,
        rng: UniformSource,
    ) -> Individual:
        """
        Inherit every locus, then drift it.

        Each locus gets its own direction (up roughly three times in four),
        then keeps stepping while a fresh draw stays below ``mutation_rate``.
        Clamping happens after the last step.
        """
        sex = assign_sex(male_probability, rng)

        values: dict[str, int] = {}
        for name in LOCI:
            value = _inherit(male, female, name, rng)
            direction = _mutation_direction(rng, self.mutation_downward_probability)
            while rng.random() < self.mutation_rate:
                value += direction
            values[name] = _clamp(value)
        return Individual.from_loci(sex, values)
