"""
Validation utilities for geometry and sampling components.

Monte-Carlo cross-checks of the closed-form formulas, used by the test
suite and by ``run_quick_test`` before long generation runs.
"""

from __future__ import annotations

from typing import Callable, Tuple

import numpy as np

from ..core.acceptance import acceptance, projected_area, validate_cos_range
from ..core.geometry import Cuboid, Cylinder, Sphere, Volume, get_intersection
from ..core.sampling import UniformAngularDistribution, sample_uniform_ray


def estimate_volume_monte_carlo(
    volume: Volume,
    bounding_box: Cuboid,
    n_samples: int,
    rng: np.random.Generator,
) -> Tuple[float, float]:
    """Estimate a volume by sampling a bounding box and counting hits.

    Returns
    -------
    estimate : float
        Hit fraction times the box volume.
    std_error : float
        Binomial standard error of the estimate.
    """
    hits = sum(volume.contains(bounding_box.sample(rng)) for _ in range(n_samples))
    fraction = hits / n_samples
    box_volume = bounding_box.volume()
    std_error = box_volume * np.sqrt(fraction * (1.0 - fraction) / n_samples)
    return fraction * box_volume, std_error


def estimate_acceptance_monte_carlo(shape, n_samples: int, rng: np.random.Generator) -> Tuple[float, float]:
    """Estimate the full-sphere acceptance as 4 pi x mean projected area."""
    angular = UniformAngularDistribution()
    areas = np.array([projected_area(shape, angular.sample(rng)) for _ in range(n_samples)])
    return 4 * np.pi * areas.mean(), 4 * np.pi * areas.std(ddof=1) / np.sqrt(n_samples)


def flux_cos_theta_cdf(shape, cos_range: Tuple[float, float] = (-1.0, 1.0)) -> Callable:
    """CDF of the zenith cosine of flux-weighted rays, from the acceptance."""
    cos_min, cos_max = validate_cos_range(*cos_range)
    total = acceptance(shape, cos_min, cos_max)

    def cdf(values):
        clipped = np.clip(np.asarray(values, dtype=float), cos_min, cos_max)
        return np.vectorize(lambda c: acceptance(shape, cos_min, c) / total)(clipped)

    return cdf


def rays_on_surface(surface, positions: np.ndarray, directions: np.ndarray, atol: float = 1e-6) -> np.ndarray:
    """For each ray, True if its entry point into ``surface`` is the ray origin."""
    flags = []
    for position, direction in zip(positions, directions):
        isec = get_intersection(surface, position, direction)
        flags.append(isec.is_hit and abs(isec.entry) <= atol)
    return np.array(flags, dtype=bool)


def run_quick_test(seed: int = 1234, n_samples: int = 2000) -> Tuple[bool, list]:
    """Run fast consistency checks on the analytic geometry formulas.

    Returns
    -------
    success : bool
        True if all checks pass.
    results : list
        ``(name, passed, message)`` for each check.
    """
    rng = np.random.default_rng(seed)
    results = []
    all_passed = True

    checks = {
        "Cylinder volume": (Cylinder((0, 0, 0), 10.0, 5.0), Cuboid((0, 0, 0), 10.0, 10.0, 10.0)),
        "Sphere volume": (Sphere((1, 2, 3), 4.0), Cuboid((1, 2, 3), 8.0, 8.0, 8.0)),
    }
    for name, (volume, box) in checks.items():
        try:
            estimate, err = estimate_volume_monte_carlo(volume, box, n_samples, rng)
            passed = abs(estimate - volume.volume()) < 5 * err
            results.append((name, passed, f"analytic={volume.volume():.3f}, MC={estimate:.3f}+-{err:.3f}"))
            all_passed &= passed
        except Exception as e:
            results.append((name, False, str(e)))
            all_passed = False

    try:
        cylinder = Cylinder((0, 0, 0), 10.0, 5.0)
        estimate, err = estimate_acceptance_monte_carlo(cylinder, n_samples, rng)
        expected = acceptance(cylinder)
        passed = abs(estimate - expected) < 5 * err
        results.append(("Cylinder acceptance", passed, f"analytic={expected:.3f}, MC={estimate:.3f}+-{err:.3f}"))
        all_passed &= passed
    except Exception as e:
        results.append(("Cylinder acceptance", False, str(e)))
        all_passed = False

    try:
        cylinder = Cylinder((0, 0, 0), 10.0, 5.0)
        rays = [sample_uniform_ray(cylinder, rng) for _ in range(200)]
        on_surface = rays_on_surface(cylinder, np.array([r[0] for r in rays]), np.array([r[1] for r in rays]))
        passed = bool(on_surface.all())
        results.append(("Flux rays on surface", passed, f"{on_surface.sum()}/{len(rays)} on surface"))
        all_passed &= passed
    except Exception as e:
        results.append(("Flux rays on surface", False, str(e)))
        all_passed = False

    for name, passed, message in results:
        status = "PASS" if passed else "FAIL"
        print(f"[{status}] {name}: {message}")

    return bool(all_passed), results
