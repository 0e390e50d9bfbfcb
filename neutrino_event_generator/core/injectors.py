"""
Event injectors.

An injector turns geometry and distribution objects into events:

- ``VolumeInjector`` places vertices uniformly inside a volume with
  independently drawn directions.
- ``SurfaceInjector`` places vertices on a surface with positions and
  directions of a uniform ambient flux.
- ``LIInjector`` replays rows of a precomputed interaction table, drawing
  them at random without replacement.

All ``draw`` methods take the random generator explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from .. import config
from .acceptance import validate_cos_range
from .data_classes import Event, Particle
from .distributions import check_distribution, draw
from .geometry import Surface, Volume, sph_to_cart
from .particle_types import ParticleShape, ParticleType, is_neutrino, particle_shape
from .replay import LEG_COLUMNS, build_replay_table, filter_starting_events, load_replay_table
from .sampling import AngularDistribution, HalfSphereAngularDistribution, LowerHalfSphere, sample_uniform_ray


class InjectorExhaustedError(RuntimeError):
    """Every row of a replay injector has already been drawn."""


class Injector:
    """Base class for event injectors."""

    def draw(self, rng: np.random.Generator) -> Event:
        raise NotImplementedError(f"draw is not implemented for {type(self).__name__}")


def _single_particle_event(position, direction, time, energy, length, ptype) -> Event:
    particle = Particle(position, direction, float(time), float(energy), float(length), int(ptype))
    return Event(particles=[particle])


@dataclass
class VolumeInjector(Injector):
    """Vertices uniform in ``volume``, direction from ``angular_dist``."""

    volume: Volume
    energy_dist: Any
    type_dist: Any
    angular_dist: AngularDistribution
    length_dist: Any = config.DEFAULT_LENGTH_M
    time_dist: Any = config.DEFAULT_TIME_NS

    def __post_init__(self):
        if not isinstance(self.volume, Volume):
            raise TypeError(f"volume must be a Volume, got {type(self.volume).__name__}")
        if not isinstance(self.angular_dist, AngularDistribution):
            raise TypeError(f"angular_dist must be an AngularDistribution, got {type(self.angular_dist).__name__}")
        for name in ('energy_dist', 'type_dist', 'length_dist', 'time_dist'):
            check_distribution(getattr(self, name), name)

    def draw(self, rng: np.random.Generator) -> Event:
        energy = draw(self.energy_dist, rng)
        ptype = draw(self.type_dist, rng)
        length = draw(self.length_dist, rng)
        time = draw(self.time_dist, rng)
        position = self.volume.sample(rng)
        direction = self.angular_dist.sample(rng)
        return _single_particle_event(position, direction, time, energy, length, ptype)


@dataclass
class SurfaceInjector(Injector):
    """Vertices on ``surface`` distributed like a uniform flux crossing it.

    Position and direction come jointly from ``sample_uniform_ray`` over
    ``cos_range``. ``angular_dist`` records the injection hemisphere; it
    does not enter the draw.
    """

    surface: Surface
    energy_dist: Any
    type_dist: Any
    angular_dist: HalfSphereAngularDistribution = field(default_factory=LowerHalfSphere)
    length_dist: Any = config.DEFAULT_LENGTH_M
    time_dist: Any = config.DEFAULT_TIME_NS
    cos_range: Tuple[float, float] = config.SURFACE_COS_RANGE

    def __post_init__(self):
        if not isinstance(self.surface, Surface):
            raise TypeError(f"surface must be a Surface, got {type(self.surface).__name__}")
        if not isinstance(self.angular_dist, HalfSphereAngularDistribution):
            raise TypeError(
                f"angular_dist must be a HalfSphereAngularDistribution, got {type(self.angular_dist).__name__}"
            )
        for name in ('energy_dist', 'type_dist', 'length_dist', 'time_dist'):
            check_distribution(getattr(self, name), name)
        self.cos_range = validate_cos_range(*self.cos_range)

    def draw(self, rng: np.random.Generator) -> Event:
        energy = draw(self.energy_dist, rng)
        ptype = draw(self.type_dist, rng)
        length = draw(self.length_dist, rng)
        time = draw(self.time_dist, rng)
        position, direction = sample_uniform_ray(self.surface, rng, self.cos_range)
        return _single_particle_event(position, direction, time, energy, length, ptype)


class LIInjector(Injector):
    """Replay injector over a precomputed interaction table.

    ``draw`` picks uniformly among rows not drawn before and marks the row
    as consumed; once every row is consumed it raises
    ``InjectorExhaustedError``. There is no reset. Iteration walks the rows
    in table order and neither reads nor changes the consumed set.

    The injector owns its consumed set; concurrent draws on one instance
    need external locking.

    Parameters
    ----------
    table : pd.DataFrame
        Joined replay table as produced by ``build_replay_table``.
    neutrino_test : callable, optional
        ``code -> bool`` deciding whether a final-state particle is a
        neutrino. Defaults to ``particle_types.is_neutrino``.
    shape_lookup : callable, optional
        ``code -> ParticleShape``. Defaults to ``particle_types.particle_shape``.
    """

    def __init__(
        self,
        table: pd.DataFrame,
        neutrino_test: Callable[[int], bool] = is_neutrino,
        shape_lookup: Callable[[int], ParticleShape] = particle_shape,
    ):
        required = [f"{prefix}{col}" for prefix in ("initial_", "final1_", "final2_") for col in LEG_COLUMNS]
        required += ["one_weight", "flux_weight"]
        missing = [c for c in required if c not in table.columns]
        if missing:
            raise ValueError(f"Replay table lacks columns {missing}")

        self.states = table
        self._neutrino_test = neutrino_test
        self._shape_lookup = shape_lookup
        self._not_sampled = np.ones(len(table), dtype=bool)

    @classmethod
    def from_groups(
        cls,
        groups: Iterable[Mapping],
        drop_starting: bool = False,
        volume: Optional[Volume] = None,
        **kwargs,
    ) -> "LIInjector":
        """Build from in-memory replay groups.

        With ``drop_starting`` rows whose initial vertex lies inside
        ``volume`` are removed.
        """
        if drop_starting and volume is None:
            raise ValueError("Provide volume to filter out starting events")
        table = build_replay_table(groups)
        if drop_starting:
            table = filter_starting_events(table, volume)
        return cls(table, **kwargs)

    @classmethod
    def from_directory(
        cls,
        path,
        drop_starting: bool = False,
        volume: Optional[Volume] = None,
        **kwargs,
    ) -> "LIInjector":
        """Build from a replay directory written by ``write_replay_groups``."""
        if drop_starting and volume is None:
            raise ValueError("Provide volume to filter out starting events")
        table = load_replay_table(path, exclusion_volume=volume if drop_starting else None)
        return cls(table, **kwargs)

    def __len__(self) -> int:
        return len(self.states)

    @property
    def size(self) -> Tuple[int]:
        return (len(self.states),)

    @property
    def remaining(self) -> int:
        """Number of rows not yet drawn."""
        return int(np.count_nonzero(self._not_sampled))

    def _event_from_row(self, row_id: int) -> Event:
        row = self.states.iloc[row_id - 1]
        f1_type = int(row["final1_particle_type"])

        if self._neutrino_test(f1_type):
            # NC interaction, return the cascade
            prefix = "final2_"
            energy = row["final2_energy"]
            ptype = ParticleType.HADRON_SHOWER
        else:
            prefix = "final1_"
            if self._shape_lookup(f1_type) == ParticleShape.TRACK:
                energy = row["final1_energy"]
                ptype = f1_type
            else:
                # Sum energy of the hadronic cascade + lepton energy
                energy = row["final1_energy"] + row["final2_energy"]
                ptype = ParticleType.HADRON_SHOWER

        position = np.array([row[f"{prefix}x"], row[f"{prefix}y"], row[f"{prefix}z"]], dtype=float)
        direction = sph_to_cart(row[f"{prefix}zenith"], row[f"{prefix}azimuth"])

        event = _single_particle_event(position, direction, 0.0, energy, -1.0, ptype)
        event.flux_weight = float(row["flux_weight"])
        event.one_weight = float(row["one_weight"])
        event.initial_energy = float(row["initial_energy"])
        event.source_row_index = row_id
        return event

    def draw(self, rng: np.random.Generator) -> Event:
        if not self._not_sampled.any():
            raise InjectorExhaustedError("Injector ran out of events")
        valid_indices = np.flatnonzero(self._not_sampled)
        ix = int(rng.choice(valid_indices))
        self._not_sampled[ix] = False
        return self._event_from_row(ix + 1)

    def __iter__(self) -> Iterator[Event]:
        for row_id in range(1, len(self) + 1):
            yield self._event_from_row(row_id)
