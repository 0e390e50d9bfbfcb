"""
Testing subpackage for neutrino event generation.

This subpackage provides tools for testing and debugging the generators:
- Synthetic replay tables in the precomputed-interaction layout
- Monte-Carlo cross-checks of the analytic geometry formulas

Example usage:
    from neutrino_event_generator.testing import create_synthetic_replay_groups, run_quick_test

    groups = create_synthetic_replay_groups(rows_per_group=(5, 3))
    success, results = run_quick_test()
"""

from .synthetic import create_synthetic_replay_groups

from .validation import (
    estimate_volume_monte_carlo,
    estimate_acceptance_monte_carlo,
    flux_cos_theta_cdf,
    rays_on_surface,
    run_quick_test,
)

__all__ = [
    # Synthetic data
    "create_synthetic_replay_groups",
    # Validation
    "estimate_volume_monte_carlo",
    "estimate_acceptance_monte_carlo",
    "flux_cos_theta_cdf",
    "rays_on_surface",
    "run_quick_test",
]
