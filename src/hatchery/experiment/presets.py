"""
Experiment presets: pre-configured sweep templates.

Each preset returns an ExperimentConfig ready for ``ExperimentRunner.run_sweep``.
"""

from __future__ import annotations

from typing import Callable

from hatchery.core.config import ExperimentConfig


def reference_sweep() -> ExperimentConfig:
    """Full 54-configuration grid at 10,000 trials each, unseeded."""
    return ExperimentConfig(experiment_name="reference")


def quick_sweep() -> ExperimentConfig:
    """Same grid with few trials and a fixed seed, for smoke runs."""
    return ExperimentConfig(
        experiment_name="quick",
        random_seed=42,
        trial_count=200,
    )


def inheritance_comparison() -> ExperimentConfig:
    """Every breeding operator, including the 3-locus baseline, at an even sex ratio."""
    return ExperimentConfig(
        experiment_name="inheritance_comparison",
        random_seed=42,
        trial_count=2_000,
        male_probabilities=[0.502],
        breeding_operators=[
            "partial_inheritance_3",
            "partial_inheritance_5",
            "adaptive_partial_inheritance",
            "independent_locus_mutation",
        ],
    )


def zero_preserving() -> ExperimentConfig:
    """Inherited zeros are kept instead of being re-rolled."""
    config = ExperimentConfig(
        experiment_name="zero_preserving",
        random_seed=42,
        trial_count=2_000,
        breeding_operators=[
            "partial_inheritance_5",
            "adaptive_partial_inheritance",
        ],
    )
    config.breeding_config["preserve_zero_overwrite"] = False
    return config


PRESETS: dict[str, Callable[[], ExperimentConfig]] = {
    "reference": reference_sweep,
    "quick": quick_sweep,
    "inheritance_comparison": inheritance_comparison,
    "zero_preserving": zero_preserving,
}


def get_preset(name: str) -> ExperimentConfig:
    if name not in PRESETS:
        raise ValueError(f"Unknown preset: '{name}'. Available: {', '.join(PRESETS)}")
    return PRESETS[name]()
