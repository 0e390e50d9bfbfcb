"""
Neutrino Event Generator Package
================================

This package generates synthetic particle events (vertex position,
direction, energy, time and type) for neutrino-detector simulation
pipelines, either by sampling parametric geometric regions or by replaying
precomputed interaction tables.

Modules:
--------
- config: Configurable generation parameters
- core.geometry: Volumes, surfaces and ray intersection
- core.acceptance: Projected area and flux acceptance
- core.sampling: Angular distributions and flux-weighted ray sampling
- core.distributions: Energy, particle-type, length and time distributions
- core.particle_types: Particle codes and track/cascade classification
- core.replay: Replay-table ingestion
- core.injectors: Volume, surface and replay injectors
- core.simulation: Batch event generation
- core.io_utils: Data export utilities
- plotting: Event visualization
- runner: Command-line runner
"""

from . import config
from .core.constants import DEBUG, reset_rejection_stats, print_rejection_stats
from .core.data_classes import Intersection, Particle, Event
from .core.geometry import (
    Volume,
    Cylinder,
    Cuboid,
    Sphere,
    FixedPoint,
    Surface,
    CylinderSurface,
    SphereSurface,
    point_in_volume,
    get_volume,
    sample_volume,
    sample_surface,
    get_intersection,
    chord_length,
    surface_normal,
    is_volume,
    is_surface,
    sph_to_cart,
    cart_to_sph,
)
from .core.acceptance import (
    projected_area,
    maximum_proj_area,
    acceptance,
)
from .core.sampling import (
    RejectionSamplingError,
    AngularDistribution,
    HalfSphereAngularDistribution,
    UniformAngularDistribution,
    LowerHalfSphere,
    ConeAngularDistribution,
    sample_uniform_ray,
)
from .core.distributions import (
    make_rng,
    FixedValue,
    PowerLawDistribution,
    CategoricalDistribution,
)
from .core.particle_types import (
    ParticleType,
    ParticleShape,
    is_neutrino,
    particle_shape,
)
from .core.replay import (
    build_replay_table,
    filter_starting_events,
    read_replay_groups,
    write_replay_groups,
    load_replay_table,
)
from .core.injectors import (
    Injector,
    InjectorExhaustedError,
    VolumeInjector,
    SurfaceInjector,
    LIInjector,
)
from .core.simulation import generate_events
from .core.io_utils import (
    export_events_to_csv,
    events_to_dataframe,
)

__version__ = "1.0.0"
__all__ = [
    # Config module
    "config",
    # Diagnostics
    "DEBUG",
    "reset_rejection_stats",
    "print_rejection_stats",
    # Data classes
    "Intersection",
    "Particle",
    "Event",
    # Geometry
    "Volume",
    "Cylinder",
    "Cuboid",
    "Sphere",
    "FixedPoint",
    "Surface",
    "CylinderSurface",
    "SphereSurface",
    "point_in_volume",
    "get_volume",
    "sample_volume",
    "sample_surface",
    "get_intersection",
    "chord_length",
    "surface_normal",
    "is_volume",
    "is_surface",
    "sph_to_cart",
    "cart_to_sph",
    # Acceptance
    "projected_area",
    "maximum_proj_area",
    "acceptance",
    # Sampling
    "RejectionSamplingError",
    "AngularDistribution",
    "HalfSphereAngularDistribution",
    "UniformAngularDistribution",
    "LowerHalfSphere",
    "ConeAngularDistribution",
    "sample_uniform_ray",
    # Distributions
    "make_rng",
    "FixedValue",
    "PowerLawDistribution",
    "CategoricalDistribution",
    # Particle types
    "ParticleType",
    "ParticleShape",
    "is_neutrino",
    "particle_shape",
    # Replay tables
    "build_replay_table",
    "filter_starting_events",
    "read_replay_groups",
    "write_replay_groups",
    "load_replay_table",
    # Injectors
    "Injector",
    "InjectorExhaustedError",
    "VolumeInjector",
    "SurfaceInjector",
    "LIInjector",
    # Generation and IO
    "generate_events",
    "export_events_to_csv",
    "events_to_dataframe",
]
