"""
Founding population: random seeding and selection of the breeding pair.
"""

from __future__ import annotations

from typing import Sequence

from hatchery.core.errors import DidNotConverge
from hatchery.core.fitness import FitnessFunction
from hatchery.core.individual import LOCI, Individual, Sex
from hatchery.core.random_source import UniformSource, assign_sex, roll_locus


def generate_individual(male_probability: float, rng: UniformSource) -> Individual:
    """Random sex first, then one uniform roll per locus in ``LOCI`` order."""
    sex = assign_sex(male_probability, rng)
    return Individual.from_loci(sex, {name: roll_locus(rng) for name in LOCI})


def seed_population(
    male_probability: float,
    rng: UniformSource,
    max_attempts: int | None = None,
) -> tuple[list[Individual], list[Individual]]:
    """
    Generate individuals until both sexes are present.

    Every individual generated along the way is kept, so one batch can
    hold many entries before the other receives its first. A male
    probability of 1.0 never produces a female, so ``max_attempts`` bounds
    the search and raises ``DidNotConverge`` with zero eggs when exceeded.
    """
    males: list[Individual] = []
    females: list[Individual] = []
    while not males or not females:
        if max_attempts is not None and len(males) + len(females) >= max_attempts:
            raise DidNotConverge(0)
        individual = generate_individual(male_probability, rng)
        if individual.sex is Sex.MALE:
            males.append(individual)
        else:
            females.append(individual)
    return males, females


def select_fittest(batch: Sequence[Individual], fitness: FitnessFunction) -> Individual:
    """Highest-scoring individual; the earliest one wins a tie."""
    if not batch:
        raise ValueError("Cannot select from an empty batch")
    return max(batch, key=fitness)
