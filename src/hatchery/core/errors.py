"""
Error conditions raised by the breeding simulator.

Every failure is local to one sweep configuration; the experiment runner
catches ``DidNotConverge`` and keeps going with the remaining grid.
"""

from __future__ import annotations


class HatcheryError(Exception):
    """Base class for simulator errors."""


class InvalidTraitValue(HatcheryError, ValueError):
    """A locus value fell outside the allowed [0, 31] range."""

    def __init__(self, locus: str, value: object):
        self.locus = locus
        self.value = value
        super().__init__(f"Locus '{locus}' must be an integer in [0, 31], got {value!r}")


class InsufficientSamples(HatcheryError, ValueError):
    """Too few egg counts to compute a sample standard deviation."""


class DidNotConverge(HatcheryError):
    """A trial hit its safety cap before the finish condition held."""

    def __init__(self, egg_count: int, configuration: str | None = None):
        self.egg_count = egg_count
        self.configuration = configuration
        where = f" for {configuration}" if configuration else ""
        super().__init__(f"Trial did not converge after {egg_count} eggs{where}")
