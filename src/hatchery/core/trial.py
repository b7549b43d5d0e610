"""
Single simulation trial.

Seeds a founding population, keeps the fittest male and female, and then
breeds greedily: an egg replaces the parent of its sex only when it scores
strictly higher. The trial ends when the finish condition holds and
reports how many eggs it took.
"""

from __future__ import annotations

import logging

import numpy as np

from hatchery.core.breeding import BreedingOperator
from hatchery.core.errors import DidNotConverge
from hatchery.core.fitness import FitnessFunction
from hatchery.core.population import seed_population, select_fittest
from hatchery.core.random_source import UniformSource
from hatchery.core.termination import FinishCondition

logger = logging.getLogger(__name__)


def run_trial(
    male_probability: float,
    finish_condition: FinishCondition,
    fitness: FitnessFunction,
    breed: BreedingOperator,
    rng: UniformSource | None = None,
    max_eggs: int | None = None,
    configuration: str | None = None,
) -> int:
    """
    Run one trial and return the number of eggs bred.

    ``max_eggs`` caps the number of eggs bred; reaching it raises
    ``DidNotConverge`` carrying the eggs bred so far. ``None`` leaves the
    loop unbounded. Founders do not count against the cap, except that a
    male probability of 1.0 (which never seeds a female) stops seeding
    after ``max_eggs`` founders.
    """
    if not 0.0 < male_probability <= 1.0:
        raise ValueError(f"Male probability must be in (0, 1], got {male_probability}")
    rng = rng or np.random.default_rng()

    # Only an all-male probability can keep seeding forever
    seed_limit = max_eggs if male_probability >= 1.0 else None
    try:
        males, females = seed_population(male_probability, rng, max_attempts=seed_limit)
    except DidNotConverge:
        raise DidNotConverge(0, configuration) from None
    best_male = select_fittest(males, fitness)
    best_female = select_fittest(females, fitness)
    best_male_score = fitness(best_male)
    best_female_score = fitness(best_female)

    eggs = 0
    while not finish_condition(best_male, best_female):
        if max_eggs is not None and eggs >= max_eggs:
            raise DidNotConverge(eggs, configuration)

        egg = breed(best_male, best_female, male_probability, rng)
        eggs += 1

        score = fitness(egg)
        if egg.is_male:
            if score > best_male_score:
                best_male, best_male_score = egg, score
        elif score > best_female_score:
            best_female, best_female_score = egg, score

    logger.debug("Trial finished after %d eggs (%s)", eggs, configuration or "unlabelled")
    return eggs
