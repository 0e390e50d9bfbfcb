"""
Data classes for generated particles, events and ray intersections.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np


@dataclass(frozen=True)
class Intersection:
    """Signed distances along a ray where it enters and leaves a shape.

    Both values are ``None`` when the ray misses. The constructor orders the
    pair so that ``entry <= exit``.
    """

    entry: Optional[float] = None
    exit: Optional[float] = None

    def __post_init__(self):
        if (self.entry is None) != (self.exit is None):
            raise ValueError("Intersection needs both endpoints or neither")
        if self.entry is not None:
            first, second = float(self.entry), float(self.exit)
            if first > second:
                first, second = second, first
            object.__setattr__(self, 'entry', first)
            object.__setattr__(self, 'exit', second)

    @classmethod
    def miss(cls) -> "Intersection":
        return cls(None, None)

    @property
    def is_hit(self) -> bool:
        return self.entry is not None


@dataclass(eq=False)
class Particle:
    """A single generated particle.

    Attributes
    ----------
    position : np.ndarray
        Vertex position (m).
    direction : np.ndarray
        Unit direction vector.
    time : float
        Vertex time (ns).
    energy : float
        Energy (GeV).
    length : float
        Track length (m); -1 when undefined.
    particle_type : int
        PDG-style particle code.
    """

    position: np.ndarray
    direction: np.ndarray
    time: float
    energy: float
    length: float
    particle_type: int

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float)
        self.direction = np.asarray(self.direction, dtype=float)

    def __eq__(self, other):
        if not isinstance(other, Particle):
            return NotImplemented
        return (
            np.array_equal(self.position, other.position)
            and np.array_equal(self.direction, other.direction)
            and self.time == other.time
            and self.energy == other.energy
            and self.length == other.length
            and self.particle_type == other.particle_type
        )


@dataclass
class Event:
    """Ordered particle list plus the optional replay annotations.

    The annotations are only filled in by events replayed from a
    precomputed interaction table.
    """

    particles: List[Particle] = field(default_factory=list)
    flux_weight: Optional[float] = None  # from the replay table
    one_weight: Optional[float] = None  # from the replay table
    initial_energy: Optional[float] = None  # GeV, incoming neutrino
    source_row_index: Optional[int] = None  # 1-based row in the replay table
