"""
Shared test configuration.

``ScriptedSource`` stands in for the numpy generator wherever a test needs
an exact sequence of uniform draws.
"""

import numpy as np
import pytest


class ScriptedSource:
    """Returns the given draws in order, then ``then`` forever (if set)."""

    def __init__(self, draws, then=None):
        self._draws = list(draws)
        self._then = then
        self.calls = 0

    def random(self):
        self.calls += 1
        if self._draws:
            return self._draws.pop(0)
        if self._then is None:
            raise AssertionError("scripted source exhausted")
        return self._then

    @property
    def remaining(self):
        return len(self._draws)


@pytest.fixture
def scripted():
    """Factory fixture: ``scripted([0.1, 0.9], then=0.5)``."""
    return ScriptedSource


@pytest.fixture
def rng():
    return np.random.default_rng(42)
