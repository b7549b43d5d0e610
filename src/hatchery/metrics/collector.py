"""
Sampling statistics and sweep result collection.

Reduces the egg counts of many independent trials to a mean and a
Bessel-corrected sample standard deviation, and gathers per-configuration
results into the nested report emitted at the end of a sweep.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, NamedTuple, Sequence

import numpy as np

from hatchery.core.errors import InsufficientSamples


class SampleStatistics(NamedTuple):
    mean: float
    std_dev: float


def aggregate(egg_counts: Sequence[int]) -> SampleStatistics:
    """
    Mean and sample standard deviation (``n - 1`` divisor).

    At least two samples are required for the sample deviation to exist.
    """
    if len(egg_counts) < 2:
        raise InsufficientSamples(
            f"Need at least 2 egg counts for a sample standard deviation, got {len(egg_counts)}"
        )
    counts = np.asarray(egg_counts, dtype=float)
    return SampleStatistics(
        mean=float(np.mean(counts)),
        std_dev=float(np.std(counts, ddof=1)),
    )


@dataclass
class ConfigurationResult:
    """Outcome of all trials for one point of the parameter grid."""
    male_probability: float
    fitness_function: str
    finish_condition: str
    breeding_operator: str
    trial_count: int
    statistics: SampleStatistics | None = None
    error: str | None = None

    @property
    def converged(self) -> bool:
        return self.statistics is not None

    @property
    def label(self) -> str:
        return (
            f"{self.male_probability}, {self.fitness_function}, "
            f"{self.finish_condition}, {self.breeding_operator}"
        )

    def summary(self) -> str:
        """Human-readable cell for the sweep report."""
        if self.statistics is None:
            return self.error or "did not converge"
        return f"{self.statistics.mean} std dev {self.statistics.std_dev}"


class SweepCollector:
    """
    Collects configuration results across a sweep.

    Results can arrive in any order; the report is keyed, not positional.
    """

    def __init__(self) -> None:
        self.results: list[ConfigurationResult] = []

    def record(self, result: ConfigurationResult) -> None:
        self.results.append(result)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> list[ConfigurationResult]:
        return [r for r in self.results if not r.converged]

    def get(
        self,
        male_probability: float,
        fitness_function: str,
        finish_condition: str,
        breeding_operator: str,
    ) -> ConfigurationResult:
        for r in self.results:
            if (
                r.male_probability == male_probability
                and r.fitness_function == fitness_function
                and r.finish_condition == finish_condition
                and r.breeding_operator == breeding_operator
            ):
                return r
        raise KeyError(
            f"No result for {male_probability}, {fitness_function}, "
            f"{finish_condition}, {breeding_operator}"
        )

    def to_report(self) -> dict[str, dict[str, dict[str, dict[str, str]]]]:
        """
        Four-level mapping: male probability -> fitness -> finish -> operator.

        Leaves are ``"<mean> std dev <std>"`` strings.
        """
        report: dict[str, Any] = {}
        for r in self.results:
            (
                report.setdefault(str(r.male_probability), {})
                .setdefault(r.fitness_function, {})
                .setdefault(r.finish_condition, {})
            )[r.breeding_operator] = r.summary()
        return report

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_report(), indent=indent)
