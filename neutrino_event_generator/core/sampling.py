"""
Random sampling of directions and of flux-weighted rays through surfaces.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .. import config
from .acceptance import maximum_proj_area, projected_area, validate_cos_range
from .constants import DEBUG, REJECTION_STATS, TWO_PI
from .geometry import (
    CylinderSurface,
    SphereSurface,
    Surface,
    as_surface,
    build_orthonormal_frame,
    sph_to_cart,
)


class RejectionSamplingError(RuntimeError):
    """A rejection loop did not accept a candidate within its iteration cap."""


def _iteration_cap(max_iterations: Optional[int]) -> int:
    if max_iterations is None:
        return config.MAX_REJECTION_ITERATIONS
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
    return int(max_iterations)


# =============================================================================
# Angular distributions
# =============================================================================

class AngularDistribution:
    """Base class for direction distributions."""

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        raise NotImplementedError(f"sampling is not implemented for {type(self).__name__}")


class HalfSphereAngularDistribution(AngularDistribution):
    """Base class for distributions restricted to a hemisphere."""


@dataclass(frozen=True)
class UniformAngularDistribution(AngularDistribution):
    """Isotropic directions over the full sphere."""

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        phi = rng.random() * TWO_PI
        theta = math.acos(2.0 * rng.random() - 1.0)
        return sph_to_cart(theta, phi)


@dataclass(frozen=True)
class LowerHalfSphere(HalfSphereAngularDistribution):
    """Isotropic directions pointing downwards (cos_theta in [-1, 0])."""

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        phi = rng.random() * TWO_PI
        theta = math.acos(rng.random() - 1.0)
        return sph_to_cart(theta, phi)


@dataclass(frozen=True)
class ConeAngularDistribution(AngularDistribution):
    """Directions uniform in solid angle within a cone of half-angle ``half_angle_deg``."""

    axis: Tuple[float, float, float] = (0.0, 0.0, 1.0)
    half_angle_deg: float = 10.0

    def __post_init__(self):
        object.__setattr__(self, 'axis', tuple(float(a) for a in self.axis))
        if not 0.0 < self.half_angle_deg <= 180.0:
            raise ValueError(f"Cone half-angle must be in (0, 180] degrees, got {self.half_angle_deg}")

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        axis, u, v = build_orthonormal_frame(np.array(self.axis))
        cos_min = math.cos(math.radians(self.half_angle_deg))
        cos_theta = (1.0 - cos_min) * rng.random() + cos_min
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
        phi = TWO_PI * rng.random()
        return sin_theta * math.cos(phi) * u + sin_theta * math.sin(phi) * v + cos_theta * axis


# =============================================================================
# Flux-weighted rays
# =============================================================================

def sample_flux_cos_theta(
    shape,
    rng: np.random.Generator,
    cos_range: Tuple[float, float] = (-1.0, 1.0),
    max_iterations: Optional[int] = None,
) -> float:
    """Draw a zenith cosine with density proportional to the projected area.

    Candidates are uniform in ``cos_range`` and accepted under the
    envelope ``[0, maximum_proj_area]``. A degenerate range returns its
    single value once it is accepted.
    """
    cos_min, cos_max = validate_cos_range(*cos_range)
    max_iterations = _iteration_cap(max_iterations)
    max_area = maximum_proj_area(shape)

    for _ in range(max_iterations):
        REJECTION_STATS['direction_proposals'] += 1
        cos_theta = cos_min if cos_min == cos_max else rng.uniform(cos_min, cos_max)
        if rng.uniform(0.0, max_area) <= projected_area(shape, cos_theta):
            REJECTION_STATS['direction_accepted'] += 1
            return float(cos_theta)

    raise RejectionSamplingError(
        f"No zenith cosine accepted in {max_iterations} proposals for cos_range=({cos_min}, {cos_max})"
    )


def _propose_footprint(surface: Surface, theta: float, rng: np.random.Generator) -> Optional[Tuple[float, float]]:
    """One proposal for a point inside the silhouette, or None on rejection.

    The first coordinate runs along the projection of the z-axis onto the
    silhouette plane, the second along the horizontal perpendicular.
    """
    if isinstance(surface, CylinderSurface):
        r = surface.radius
        a = math.sin(theta) * surface.height / 2.0
        b = abs(math.cos(theta)) * r
        x = rng.uniform(-r, r)
        y = rng.uniform(-(a + b), a + b)
        if abs(y) <= a + b * math.sqrt(max(0.0, 1.0 - x * x / (r * r))):
            return y, x
        return None
    if isinstance(surface, SphereSurface):
        r = surface.radius
        x = rng.uniform(-r, r)
        y = rng.uniform(-r, r)
        if x * x + y * y <= r * r:
            return y, x
        return None
    raise NotImplementedError(f"sample_uniform_ray is not implemented for {type(surface).__name__}")


def _rotate_into_frame(u: float, v: float, theta: float, phi: float) -> np.ndarray:
    """Rotate (u, v, 0) about y by ``theta`` and then about z by ``phi``."""
    cos_th, sin_th = math.cos(theta), math.sin(theta)
    cos_ph, sin_ph = math.cos(phi), math.sin(phi)
    x1, y1, z1 = cos_th * u, v, -sin_th * u
    return np.array([cos_ph * x1 - sin_ph * y1, sin_ph * x1 + cos_ph * y1, z1])


def sample_uniform_ray(
    surface,
    rng: np.random.Generator,
    cos_range: Tuple[float, float] = (-1.0, 1.0),
    max_iterations: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Sample impact point and direction of a ray from a uniform flux.

    The returned pairs are distributed like the rays of an isotropic
    ambient flux (restricted to ``cos_range``) that cross ``surface``:
    the zenith cosine follows the projected area, the azimuth is uniform
    and the impact point is uniform over the silhouette seen from that
    direction. Note that this differs from ``surface.sample``, which is
    uniform in surface area.

    Parameters
    ----------
    surface : CylinderSurface, SphereSurface, Cylinder or Sphere
        Target surface; volumes are replaced by their boundary.
    rng : np.random.Generator
        Random generator.
    cos_range : tuple of float, optional
        Zenith-cosine band of the flux, by default the full sphere.
    max_iterations : int, optional
        Proposal cap for each rejection stage; defaults to
        ``config.MAX_REJECTION_ITERATIONS``.
        Values below 1 raise ``ValueError``.

    Returns
    -------
    position : np.ndarray
        Impact point on the surface.
    direction : np.ndarray
        Unit direction of the ray.

    Raises
    ------
    RejectionSamplingError
        If either rejection stage exhausts ``max_iterations``.
    """
    surface = as_surface(surface)
    max_iterations = _iteration_cap(max_iterations)

    cos_theta = sample_flux_cos_theta(surface, rng, cos_range, max_iterations)
    phi = rng.random() * TWO_PI
    theta = math.acos(cos_theta)
    direction = sph_to_cart(theta, phi)

    for _ in range(max_iterations):
        REJECTION_STATS['footprint_proposals'] += 1
        footprint = _propose_footprint(surface, theta, rng)
        if footprint is None:
            continue
        REJECTION_STATS['footprint_accepted'] += 1

        position = _rotate_into_frame(footprint[0], footprint[1], theta, phi) + surface.center

        isec = surface.intersect(position, direction)
        if not isec.is_hit:
            # Round-off at the silhouette edge; draw a new footprint point
            REJECTION_STATS['grazing_retries'] += 1
            if DEBUG:
                print(f"[debug] Grazing ray missed the surface at {position}, retrying")
            continue
        return position + direction * isec.entry, direction

    raise RejectionSamplingError(
        f"No footprint point accepted in {max_iterations} proposals for theta={theta:.6f}"
    )
