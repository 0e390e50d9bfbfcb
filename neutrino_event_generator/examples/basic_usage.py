"""
Basic usage example for the neutrino_event_generator package.

Shows volume injection, flux-weighted surface injection and replay
injection from a synthetic table.
"""

import numpy as np
from scipy import stats

from neutrino_event_generator import (
    Cylinder,
    CylinderSurface,
    CategoricalDistribution,
    LIInjector,
    LowerHalfSphere,
    ParticleType,
    PowerLawDistribution,
    SurfaceInjector,
    UniformAngularDistribution,
    VolumeInjector,
    acceptance,
    make_rng,
)
from neutrino_event_generator.testing import create_synthetic_replay_groups, run_quick_test


def example_volume_injection(rng):
    """Vertices uniform in a cylinder, isotropic directions"""
    print("=" * 60)
    print("Volume injection")
    print("=" * 60)

    cylinder = Cylinder((0.0, 0.0, 0.0), 1000.0, 500.0)
    injector = VolumeInjector(
        cylinder,
        PowerLawDistribution(2.0, 1e2, 1e6),
        CategoricalDistribution((ParticleType.E_MINUS, ParticleType.E_PLUS)),
        UniformAngularDistribution(),
        0.0,
        stats.uniform(loc=0.0, scale=1000.0),
    )
    for i in range(3):
        p = injector.draw(rng).particles[0]
        print(f"  event {i+1}: E={p.energy:.3e} GeV, pos={np.round(p.position, 1)}, type={p.particle_type}")


def example_surface_injection(rng):
    """Flux-weighted rays crossing a cylinder surface"""
    print("\n" + "=" * 60)
    print("Surface injection")
    print("=" * 60)

    surface = CylinderSurface((0.0, 0.0, 0.0), 1000.0, 500.0)
    print(f"  Acceptance: {acceptance(surface.to_volume()):.4e} m^2 sr")
    injector = SurfaceInjector(
        surface,
        PowerLawDistribution(1.0, 1e3, 1e5),
        ParticleType.MU_MINUS,
        LowerHalfSphere(),
    )
    for i in range(3):
        p = injector.draw(rng).particles[0]
        print(f"  event {i+1}: pos={np.round(p.position, 1)}, cos(zenith)={p.direction[2]:.3f}")


def example_replay_injection(rng):
    """Without-replacement replay of a synthetic interaction table"""
    print("\n" + "=" * 60)
    print("Replay injection")
    print("=" * 60)

    injector = LIInjector.from_groups(create_synthetic_replay_groups(rows_per_group=(4, 3)))
    while injector.remaining:
        event = injector.draw(rng)
        print(f"  row {event.source_row_index}: type={event.particles[0].particle_type}, "
              f"one_weight={event.one_weight:.2f}")


def main():
    rng = make_rng(42)
    run_quick_test()
    example_volume_injection(rng)
    example_surface_injection(rng)
    example_replay_injection(rng)


if __name__ == "__main__":
    main()
