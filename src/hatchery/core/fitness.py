"""
Fitness evaluators.

Each evaluator maps an ``Individual`` to a real score. ``maxed_locus_score``
doubles as the primitive behind the finish conditions.
"""

from __future__ import annotations

from typing import Callable

from hatchery.core.individual import LOCI, LOCUS_MAX, Individual

FitnessFunction = Callable[[Individual], float]

# Per-locus consolation divisor for loci that are not maxed
MAXED_CONSOLATION_DIVISOR = 200


def average_quality(individual: Individual) -> float:
    """Sum of all loci over the maximum possible sum; linear in [0, 1]."""
    return sum(individual.values()) / (LOCUS_MAX * len(LOCI))


def maxed_locus_score(individual: Individual) -> float:
    """
    Reward loci that are exactly maxed.

    A maxed locus contributes a full point; any other locus contributes
    ``value / 200``. The total is divided by the locus count, so the score
    reaches exactly 1.0 only when every locus is at 31.
    """
    fitness = 0.0
    for value in individual.values():
        if value == LOCUS_MAX:
            fitness += 1
        else:
            fitness += value / MAXED_CONSOLATION_DIVISOR
    return fitness / len(LOCI)


def linear_weighted(individual: Individual) -> float:
    """Experimental weighting that penalises speed. Not part of any default sweep."""
    weights = {
        "hp": 0.2,
        "attack": 0.2,
        "defense": 0.2,
        "special_attack": 0.2,
        "special_defense": 0.2,
        "speed": -1.0,
    }
    return sum(weights[name] * value for name, value in individual.loci()) / LOCUS_MAX


FITNESS_FUNCTIONS: dict[str, FitnessFunction] = {
    "average_quality": average_quality,
    "maxed_locus": maxed_locus_score,
    "linear_weighted": linear_weighted,
}


def get_fitness_function(name: str) -> FitnessFunction:
    if name not in FITNESS_FUNCTIONS:
        raise ValueError(f"Unknown fitness function: '{name}'")
    return FITNESS_FUNCTIONS[name]
