"""
Experiment Runner: parameter sweeps and batch trial execution.

Runs many independent trials for every point of the configured parameter
grid and reduces them to sample statistics. A configuration that hits the
per-trial safety cap is recorded as non-converged and the sweep moves on.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

import numpy as np

from hatchery.core.breeding import BreedingEngine
from hatchery.core.config import ExperimentConfig
from hatchery.core.errors import DidNotConverge
from hatchery.core.fitness import get_fitness_function
from hatchery.core.random_source import UniformSource, make_rng
from hatchery.core.termination import get_finish_condition
from hatchery.core.trial import run_trial
from hatchery.metrics.collector import ConfigurationResult, SweepCollector, aggregate

logger = logging.getLogger(__name__)


def _run_configuration_job(
    config: ExperimentConfig,
    index: int,
    point: tuple[float, str, str, str],
    seed: np.random.SeedSequence,
) -> tuple[int, ConfigurationResult]:
    """Worker-process entry point; returns the grid index with the result."""
    result = ExperimentRunner().run_configuration(config, *point, rng=make_rng(seed))
    return index, result


class ExperimentRunner:
    """
    Run single configurations, full sweeps, and sweeps over a config field.
    """

    def run_configuration(
        self,
        config: ExperimentConfig,
        male_probability: float,
        fitness_function: str,
        finish_condition: str,
        breeding_operator: str,
        rng: UniformSource | None = None,
    ) -> ConfigurationResult:
        """Run ``config.trial_count`` trials for one grid point."""
        rng = rng or make_rng(config.random_seed)
        fitness = get_fitness_function(fitness_function)
        finish = get_finish_condition(finish_condition)
        breed = BreedingEngine(config).get_operator(breeding_operator)

        result = ConfigurationResult(
            male_probability=male_probability,
            fitness_function=fitness_function,
            finish_condition=finish_condition,
            breeding_operator=breeding_operator,
            trial_count=config.trial_count,
        )
        logger.info("Generating samples for %s", result.label)

        egg_counts: list[int] = []
        try:
            for _ in range(config.trial_count):
                egg_counts.append(run_trial(
                    male_probability,
                    finish,
                    fitness,
                    breed,
                    rng=rng,
                    max_eggs=config.max_eggs_per_trial,
                    configuration=result.label,
                ))
        except DidNotConverge as exc:
            logger.warning(
                "%s did not converge after %d eggs (trial %d of %d)",
                result.label, exc.egg_count, len(egg_counts) + 1, config.trial_count,
            )
            result.error = f"did not converge after {exc.egg_count} eggs"
            return result

        result.statistics = aggregate(egg_counts)
        return result

    def run_sweep(self, config: ExperimentConfig) -> SweepCollector:
        """
        Run every configuration in the grid.

        Each grid point gets its own generator spawned from
        ``config.random_seed``, so results do not depend on execution order
        and ``workers > 1`` can spread points across processes.
        """
        config.validate()
        grid = list(config.configurations())
        seeds = np.random.SeedSequence(config.random_seed).spawn(len(grid))
        logger.info(
            "Sweep '%s': %d configurations x %d trials",
            config.experiment_name, len(grid), config.trial_count,
        )

        results: list[ConfigurationResult | None] = [None] * len(grid)
        if config.workers > 1:
            with ProcessPoolExecutor(max_workers=config.workers) as executor:
                futures = [
                    executor.submit(_run_configuration_job, config, i, point, seed)
                    for i, (point, seed) in enumerate(zip(grid, seeds))
                ]
                for future in as_completed(futures):
                    index, result = future.result()
                    results[index] = result
        else:
            for i, (point, seed) in enumerate(zip(grid, seeds)):
                results[i] = self.run_configuration(config, *point, rng=make_rng(seed))

        collector = SweepCollector()
        for result in results:
            collector.record(result)

        if collector.failures:
            logger.warning(
                "Sweep '%s': %d of %d configurations did not converge",
                config.experiment_name, len(collector.failures), len(collector),
            )
        return collector

    def run_parameter_sweep(
        self,
        base_config: ExperimentConfig,
        param_name: str,
        values: list[Any],
    ) -> dict[str, SweepCollector]:
        """
        Sweep a single config attribute across multiple values.

        Args:
            base_config: Base configuration to modify
            param_name: Name of the attribute on ExperimentConfig
            values: List of values to test

        Returns:
            Dict mapping value label -> SweepCollector
        """
        results: dict[str, SweepCollector] = {}

        for val in values:
            changes = {"experiment_name": f"sweep_{param_name}={val}", param_name: val}
            config = base_config.replace(**changes)

            label = f"{param_name}={val}"
            results[label] = self.run_sweep(config)

        return results

    def run_multi_seed(
        self,
        config: ExperimentConfig,
        seeds: list[int],
    ) -> list[SweepCollector]:
        """Run the same sweep under several seeds to gauge run-to-run variance."""
        results: list[SweepCollector] = []
        for seed in seeds:
            seeded = config.replace(
                random_seed=seed,
                experiment_name=f"{config.experiment_name}_seed{seed}",
            )
            results.append(self.run_sweep(seeded))
        return results
