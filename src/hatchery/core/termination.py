"""
Finish conditions for a trial.

Each condition inspects the current best male and best female and decides
whether the breeding run is done. All of them are expressed in terms of
``maxed_locus_score``.
"""

from __future__ import annotations

from typing import Callable

from hatchery.core.fitness import maxed_locus_score
from hatchery.core.individual import LOCI, Individual

FinishCondition = Callable[[Individual, Individual], bool]

NEAR_MAXED_SCORE = (len(LOCI) - 1) / len(LOCI)


def both_maxed(male: Individual, female: Individual) -> bool:
    """Both parents have every locus maxed."""
    return maxed_locus_score(male) == 1 and maxed_locus_score(female) == 1


def either_maxed(male: Individual, female: Individual) -> bool:
    """At least one parent has every locus maxed."""
    return maxed_locus_score(male) == 1 or maxed_locus_score(female) == 1


def either_near_maxed(male: Individual, female: Individual) -> bool:
    """At least one parent has five or more loci maxed."""
    return (
        maxed_locus_score(male) >= NEAR_MAXED_SCORE
        or maxed_locus_score(female) >= NEAR_MAXED_SCORE
    )


FINISH_CONDITIONS: dict[str, FinishCondition] = {
    "both_maxed": both_maxed,
    "either_maxed": either_maxed,
    "either_near_maxed": either_near_maxed,
}


def get_finish_condition(name: str) -> FinishCondition:
    if name not in FINISH_CONDITIONS:
        raise ValueError(f"Unknown finish condition: '{name}'")
    return FINISH_CONDITIONS[name]
