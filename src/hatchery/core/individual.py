"""
Genotype model for the breeding simulator.

An individual carries a fixed sex and six independent integer loci, each
bounded to [0, 31]. Individuals are immutable: breeding always produces a
new one. Locus names are listed once in ``LOCI`` so scoring and breeding
code iterate over them instead of naming fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

import numpy as np

from hatchery.core.errors import InvalidTraitValue


class Sex(Enum):
    MALE = "male"
    FEMALE = "female"


# ---------------------------------------------------------------------------
# Locus definitions
# ---------------------------------------------------------------------------
LOCI: tuple[str, ...] = (
    "hp",
    "attack",
    "defense",
    "special_attack",
    "special_defense",
    "speed",
)

LOCUS_MIN = 0
LOCUS_MAX = 31
LOCUS_VALUES = LOCUS_MAX - LOCUS_MIN + 1


@dataclass(frozen=True)
class Individual:
    """A single egg or parent: sex plus six bounded loci."""

    sex: Sex
    hp: int
    attack: int
    defense: int
    special_attack: int
    special_defense: int
    speed: int

    def __post_init__(self) -> None:
        if not isinstance(self.sex, Sex):
            raise ValueError(f"Unknown sex: {self.sex!r}")
        for name in LOCI:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidTraitValue(name, value)
            if not LOCUS_MIN <= value <= LOCUS_MAX:
                raise InvalidTraitValue(name, value)
            # numpy integers are normalised so equality and hashing stay plain
            object.__setattr__(self, name, int(value))

    @classmethod
    def from_loci(cls, sex: Sex, values: Mapping[str, int]) -> Individual:
        """Build an individual from a locus-name -> value mapping."""
        missing = [name for name in LOCI if name not in values]
        if missing:
            raise KeyError(f"Missing loci: {', '.join(missing)}")
        return cls(sex, **{name: values[name] for name in LOCI})

    def loci(self) -> tuple[tuple[str, int], ...]:
        """All six (name, value) pairs in ``LOCI`` order."""
        return tuple((name, getattr(self, name)) for name in LOCI)

    def locus(self, name: str) -> int:
        if name not in LOCI:
            raise KeyError(f"Unknown locus: '{name}'")
        return getattr(self, name)

    def values(self) -> tuple[int, ...]:
        return tuple(getattr(self, name) for name in LOCI)

    @property
    def is_male(self) -> bool:
        return self.sex is Sex.MALE

    def maxed_locus_count(self) -> int:
        """Number of loci sitting at ``LOCUS_MAX``."""
        return sum(1 for value in self.values() if value == LOCUS_MAX)

    def __repr__(self) -> str:
        loci = "/".join(str(v) for v in self.values())
        return f"Individual({self.sex.value}, {loci})"
