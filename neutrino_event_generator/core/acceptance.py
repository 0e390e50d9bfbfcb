"""
Projected area and flux acceptance of detector shapes.

The projected area of a shape seen from zenith angle theta is the area of its
silhouette on a plane perpendicular to the viewing direction. For an upright
cylinder this is

    A(cos_theta) = pi r^2 |cos_theta| + 2 r h sqrt(1 - cos_theta^2)

The acceptance is the integral of A over solid angle,
``2 pi * integral A(c) dc`` over a cosine band. Both are closed form, so
flux normalisations never need numerical integration.
"""

from __future__ import annotations

import math
from typing import Tuple, Union

import numpy as np

from .geometry import Cylinder, CylinderSurface, Sphere, SphereSurface


def _cap_and_sides(shape) -> Tuple[float, float]:
    cap = math.pi * shape.radius ** 2
    sides = 2.0 * shape.radius * shape.height
    return cap, sides


def _cosine_of(direction_or_cos) -> float:
    if np.ndim(direction_or_cos) == 0:
        return float(direction_or_cos)
    direction = np.asarray(direction_or_cos, dtype=float)
    return float(direction[2] / np.linalg.norm(direction))


def validate_cos_range(cos_min: float, cos_max: float) -> Tuple[float, float]:
    """Check that ``cos_min <= cos_max`` and both lie in [-1, 1]."""
    cos_min, cos_max = float(cos_min), float(cos_max)
    if not (-1.0 <= cos_min <= 1.0 and -1.0 <= cos_max <= 1.0):
        raise ValueError(f"Cosine range ({cos_min}, {cos_max}) must lie within [-1, 1]")
    if cos_min > cos_max:
        raise ValueError(f"Cosine range ({cos_min}, {cos_max}) has min > max")
    return cos_min, cos_max


def projected_area(shape, direction_or_cos: Union[float, np.ndarray]) -> float:
    """Silhouette area of ``shape`` seen along a direction.

    Parameters
    ----------
    shape : Cylinder, CylinderSurface, Sphere or SphereSurface
    direction_or_cos : float or np.ndarray
        Cosine of the zenith angle, or a direction vector whose z component
        gives it.
    """
    cos_theta = _cosine_of(direction_or_cos)
    if isinstance(shape, (Cylinder, CylinderSurface)):
        cap, sides = _cap_and_sides(shape)
        return cap * abs(cos_theta) + sides * math.sqrt(max(0.0, 1.0 - cos_theta ** 2))
    if isinstance(shape, (Sphere, SphereSurface)):
        return math.pi * shape.radius ** 2
    raise NotImplementedError(f"projected_area is not implemented for {type(shape).__name__}")


def maximum_proj_area(shape) -> float:
    """Largest projected area over all viewing directions."""
    if isinstance(shape, (Cylinder, CylinderSurface)):
        # d/dtheta [cap cos + sides sin] = 0  =>  tan(theta*) = sides / cap
        theta_max = math.atan(2.0 * shape.height / (math.pi * shape.radius))
        return projected_area(shape, math.cos(theta_max))
    if isinstance(shape, (Sphere, SphereSurface)):
        return math.pi * shape.radius ** 2
    raise NotImplementedError(f"maximum_proj_area is not implemented for {type(shape).__name__}")


def acceptance(shape, cos_min: float = -1.0, cos_max: float = 1.0) -> float:
    """Integrate the projected area over solid angle within a cosine band.

    Parameters
    ----------
    shape : Cylinder, CylinderSurface, Sphere or SphereSurface
    cos_min, cos_max : float
        Zenith-cosine band, ``-1 <= cos_min <= cos_max <= 1``.

    Returns
    -------
    float
        Acceptance in area x steradian units.
    """
    cos_min, cos_max = validate_cos_range(cos_min, cos_max)
    if isinstance(shape, (Cylinder, CylinderSurface)):
        cap, sides = _cap_and_sides(shape)
        return math.pi * (
            cap * (cos_max * abs(cos_max) - cos_min * abs(cos_min))
            + sides * (
                math.acos(cos_min) - math.acos(cos_max)
                - math.sqrt(1.0 - cos_min ** 2) * cos_min
                + math.sqrt(1.0 - cos_max ** 2) * cos_max
            )
        )
    if isinstance(shape, (Sphere, SphereSurface)):
        return 2.0 * math.pi * math.pi * shape.radius ** 2 * (cos_max - cos_min)
    raise NotImplementedError(f"acceptance is not implemented for {type(shape).__name__}")
