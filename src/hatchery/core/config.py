"""
Master configuration for the breeding simulator.

Every swept dimension and every breeding constant lives here. Use
``replace()`` to derive a variant without sharing mutable fields.
"""

from __future__ import annotations

import itertools
from dataclasses import asdict, dataclass, field
from typing import Any, Iterator


@dataclass
class ExperimentConfig:
    """
    Configuration for one sweep over the parameter grid.

    The grid is the Cartesian product of ``male_probabilities``,
    ``fitness_functions``, ``finish_conditions`` and ``breeding_operators``;
    each combination runs ``trial_count`` independent trials.
    """

    # === Experiment identity ===
    experiment_name: str = "default"
    random_seed: int | None = None

    # === Sampling ===
    trial_count: int = 10_000
    # Safety cap per trial; None restores the unbounded loop
    max_eggs_per_trial: int | None = 1_000_000
    workers: int = 1

    # === Parameter grid ===
    male_probabilities: list[float] = field(default_factory=lambda: [0.249, 0.502, 0.8814])
    fitness_functions: list[str] = field(default_factory=lambda: [
        "average_quality",
        "maxed_locus",
    ])
    finish_conditions: list[str] = field(default_factory=lambda: [
        "both_maxed",
        "either_maxed",
        "either_near_maxed",
    ])
    breeding_operators: list[str] = field(default_factory=lambda: [
        "partial_inheritance_5",
        "adaptive_partial_inheritance",
        "independent_locus_mutation",
    ])

    # === Breeding constants ===
    breeding_config: dict[str, Any] = field(default_factory=lambda: {
        "base_inherit_count": 3,
        "boosted_inherit_count": 5,
        # Adaptive operator switches to the boosted count above this many maxed loci
        "adaptive_maxed_threshold": 3,
        # Treat an inherited 0 as unassigned and re-roll it
        "preserve_zero_overwrite": True,
        "mutation_rate": 0.05,
        "mutation_downward_probability": 0.25,
    })

    # ------------------------------------------------------------------
    # Grid helpers
    # ------------------------------------------------------------------
    def configurations(self) -> Iterator[tuple[float, str, str, str]]:
        """Yield (male_probability, fitness, finish, operator) in sweep order."""
        return itertools.product(
            self.male_probabilities,
            self.fitness_functions,
            self.finish_conditions,
            self.breeding_operators,
        )

    @property
    def configuration_count(self) -> int:
        return (
            len(self.male_probabilities)
            * len(self.fitness_functions)
            * len(self.finish_conditions)
            * len(self.breeding_operators)
        )

    def validate(self) -> None:
        """Raise ``ValueError`` if any swept name or bound is invalid."""
        from hatchery.core.breeding import BreedingEngine
        from hatchery.core.fitness import FITNESS_FUNCTIONS
        from hatchery.core.termination import FINISH_CONDITIONS

        for p in self.male_probabilities:
            if not 0.0 < p <= 1.0:
                raise ValueError(f"Male probability must be in (0, 1], got {p}")
        for name in self.fitness_functions:
            if name not in FITNESS_FUNCTIONS:
                raise ValueError(f"Unknown fitness function: '{name}'")
        for name in self.finish_conditions:
            if name not in FINISH_CONDITIONS:
                raise ValueError(f"Unknown finish condition: '{name}'")
        for name in self.breeding_operators:
            if name not in BreedingEngine.OPERATORS:
                raise ValueError(f"Unknown breeding operator: '{name}'")
        if self.trial_count < 2:
            raise ValueError(f"trial_count must be at least 2, got {self.trial_count}")
        if self.max_eggs_per_trial is not None and self.max_eggs_per_trial < 1:
            raise ValueError(
                f"max_eggs_per_trial must be positive or None, got {self.max_eggs_per_trial}"
            )
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Plain dict of every field; nested lists and dicts are copies."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ExperimentConfig:
        return cls(**d)

    def replace(self, **changes: Any) -> ExperimentConfig:
        """
        Independent copy with some fields changed.

        Used by the runner to derive per-value and per-seed sweeps; the copy
        never shares ``breeding_config`` or grid lists with this config.
        """
        d = self.to_dict()
        for name in changes:
            if name not in d:
                raise ValueError(f"Unknown config parameter: '{name}'")
        d.update(changes)
        return ExperimentConfig.from_dict(d)
