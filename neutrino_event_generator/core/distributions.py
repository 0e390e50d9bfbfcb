"""
Scalar distributions for energies, particle types, lengths and times.

Injectors accept any of the following as a distribution handle:

- an object with a ``sample(rng)`` method (the classes in this module),
- a frozen ``scipy.stats`` distribution, drawn with ``rvs(random_state=rng)``,
- a plain number, used as a fixed value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random generator passed to every sampling call."""
    return np.random.default_rng(seed)


@dataclass(frozen=True)
class FixedValue:
    """Delta distribution at ``value``."""

    value: float

    def sample(self, rng: np.random.Generator) -> float:
        return self.value


@dataclass(frozen=True)
class PowerLawDistribution:
    """Power-law spectrum ``E^-index`` between ``e_min`` and ``e_max``.

    Sampled by inverting the CDF, including the logarithmic case
    ``index == 1``.
    """

    index: float
    e_min: float
    e_max: float

    def __post_init__(self):
        if not 0.0 < self.e_min < self.e_max:
            raise ValueError(f"Need 0 < e_min < e_max, got ({self.e_min}, {self.e_max})")

    def sample(self, rng: np.random.Generator) -> float:
        u = rng.random()
        if self.index == 1.0:
            return self.e_min * math.exp(u * math.log(self.e_max / self.e_min))
        g = 1.0 - self.index
        lo, hi = self.e_min ** g, self.e_max ** g
        return (lo + u * (hi - lo)) ** (1.0 / g)


@dataclass(frozen=True)
class CategoricalDistribution:
    """Categorical distribution over a finite set of values (e.g. PDG codes)."""

    values: tuple
    probabilities: Optional[tuple] = None

    def __post_init__(self):
        object.__setattr__(self, 'values', tuple(self.values))
        if not self.values:
            raise ValueError("CategoricalDistribution needs at least one value")
        if self.probabilities is None:
            probs = np.full(len(self.values), 1.0 / len(self.values))
        else:
            probs = np.asarray(self.probabilities, dtype=float)
            if probs.shape != (len(self.values),):
                raise ValueError("probabilities must match values in length")
            if np.any(probs < 0.0) or probs.sum() <= 0.0:
                raise ValueError("probabilities must be non-negative with a positive sum")
            probs = probs / probs.sum()
        object.__setattr__(self, 'probabilities', tuple(float(p) for p in probs))

    def sample(self, rng: np.random.Generator):
        index = rng.choice(len(self.values), p=self.probabilities)
        return self.values[index]


def check_distribution(dist, name: str):
    """Raise TypeError unless ``dist`` is a usable distribution handle."""
    if hasattr(dist, 'sample') or hasattr(dist, 'rvs'):
        return dist
    if isinstance(dist, (int, float, np.number)):
        return dist
    raise TypeError(
        f"{name} must provide sample(rng) or rvs(random_state=...), or be a number; "
        f"got {type(dist).__name__}"
    )


def draw(dist, rng: np.random.Generator):
    """Draw one value from a distribution handle."""
    if hasattr(dist, 'sample'):
        return dist.sample(rng)
    if hasattr(dist, 'rvs'):
        value = dist.rvs(random_state=rng)
        return np.asarray(value).item() if np.ndim(value) == 0 else value
    return dist
