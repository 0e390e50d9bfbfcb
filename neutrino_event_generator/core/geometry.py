"""
Geometric volumes and surfaces, containment, sampling and ray intersection.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Optional, Tuple

import numpy as np

from .constants import TWO_PI
from .data_classes import Intersection, Particle


def sph_to_cart(theta: float, phi: float) -> np.ndarray:
    """Convert zenith ``theta`` and azimuth ``phi`` (radians) to a unit vector."""
    sin_theta = math.sin(theta)
    return np.array(
        [sin_theta * math.cos(phi), sin_theta * math.sin(phi), math.cos(theta)],
        dtype=float,
    )


def cart_to_sph(vector: np.ndarray) -> Tuple[float, float]:
    """Return (zenith, azimuth) of a non-zero vector, azimuth in [0, 2*pi)."""
    x, y, z = np.asarray(vector, dtype=float)
    norm = math.sqrt(x * x + y * y + z * z)
    if norm == 0.0:
        raise ValueError("Cannot take angles of a zero vector")
    theta = math.acos(max(-1.0, min(1.0, z / norm)))
    phi = math.atan2(y, x) % TWO_PI
    return theta, phi


def build_orthonormal_frame(axis: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Build an orthonormal coordinate frame from a given axis."""
    axis = np.array(axis, dtype=float)
    norm = np.linalg.norm(axis)
    if norm == 0.0:
        raise ValueError("Axis vector must be non-zero")
    axis /= norm
    up = np.array([0.0, 0.0, 1.0])
    if abs(np.dot(axis, up)) > 0.99:
        up = np.array([1.0, 0.0, 0.0])
    u = np.cross(up, axis)
    u /= np.linalg.norm(u)
    v = np.cross(axis, u)
    return axis, u, v


def _as_vec3(value) -> np.ndarray:
    vec = np.array(value, dtype=float).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {np.shape(value)}")
    return vec


def _require_positive(shape_name: str, **dims: float):
    for name, value in dims.items():
        if not value > 0.0:
            raise ValueError(f"{shape_name} {name} must be positive, got {value}")


class _Shape:
    """Structural equality for the frozen geometry dataclasses."""

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        for f in fields(self):
            a, b = getattr(self, f.name), getattr(other, f.name)
            if isinstance(a, np.ndarray):
                if not np.array_equal(a, b):
                    return False
            elif a != b:
                return False
        return True

    __hash__ = None


# =============================================================================
# Volumes
# =============================================================================

@dataclass(frozen=True, eq=False)
class Volume(_Shape):
    """Base class for solid regions."""

    def contains(self, point: np.ndarray) -> bool:
        raise NotImplementedError(f"point_in_volume is not implemented for {type(self).__name__}")

    def volume(self) -> float:
        raise NotImplementedError(f"get_volume is not implemented for {type(self).__name__}")

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        raise NotImplementedError(f"sampling is not implemented for {type(self).__name__}")


@dataclass(frozen=True, eq=False)
class Cylinder(Volume):
    """Upright cylinder with its axis along z."""

    center: np.ndarray
    height: float
    radius: float

    def __post_init__(self):
        object.__setattr__(self, 'center', _as_vec3(self.center))
        _require_positive("Cylinder", height=self.height, radius=self.radius)
        object.__setattr__(self, 'height', float(self.height))
        object.__setattr__(self, 'radius', float(self.radius))

    def contains(self, point: np.ndarray) -> bool:
        rel = np.asarray(point, dtype=float) - self.center
        height_check = -self.height / 2 < rel[2] < self.height / 2
        circle_check = rel[0] ** 2 + rel[1] ** 2 < self.radius ** 2
        return bool(height_check and circle_check)

    def volume(self) -> float:
        return math.pi * self.radius ** 2 * self.height

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        z = rng.uniform(-self.height / 2, self.height / 2)
        # sqrt gives uniform areal density in the disk
        r = math.sqrt(rng.random()) * self.radius
        phi = rng.uniform(0.0, TWO_PI)
        return np.array([r * math.cos(phi), r * math.sin(phi), z]) + self.center


@dataclass(frozen=True, eq=False)
class Cuboid(Volume):
    """Axis-aligned box with edge lengths ``lx``, ``ly``, ``lz``."""

    center: np.ndarray
    lx: float
    ly: float
    lz: float

    def __post_init__(self):
        object.__setattr__(self, 'center', _as_vec3(self.center))
        _require_positive("Cuboid", lx=self.lx, ly=self.ly, lz=self.lz)
        for name in ('lx', 'ly', 'lz'):
            object.__setattr__(self, name, float(getattr(self, name)))

    @property
    def half_extents(self) -> np.ndarray:
        return np.array([self.lx, self.ly, self.lz]) / 2

    def contains(self, point: np.ndarray) -> bool:
        rel = np.abs(np.asarray(point, dtype=float) - self.center)
        return bool(np.all(rel < self.half_extents))

    def volume(self) -> float:
        return self.lx * self.ly * self.lz

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        half = self.half_extents
        return rng.uniform(-half, half) + self.center


@dataclass(frozen=True, eq=False)
class Sphere(Volume):
    center: np.ndarray
    radius: float

    def __post_init__(self):
        object.__setattr__(self, 'center', _as_vec3(self.center))
        _require_positive("Sphere", radius=self.radius)
        object.__setattr__(self, 'radius', float(self.radius))

    def contains(self, point: np.ndarray) -> bool:
        return bool(np.linalg.norm(np.asarray(point, dtype=float) - self.center) < self.radius)

    def volume(self) -> float:
        return 4.0 / 3.0 * math.pi * self.radius ** 3

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        r = self.radius * np.cbrt(rng.random())
        theta = math.acos(2.0 * rng.random() - 1.0)
        phi = rng.uniform(0.0, TWO_PI)
        return r * sph_to_cart(theta, phi) + self.center


@dataclass(frozen=True, eq=False)
class FixedPoint(Volume):
    """Degenerate volume used to sample a 3D delta distribution."""

    position: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'position', _as_vec3(self.position))

    def contains(self, point: np.ndarray) -> bool:
        return bool(np.array_equal(np.asarray(point, dtype=float), self.position))

    def volume(self) -> float:
        return 0.0

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        return self.position.copy()


# =============================================================================
# Surfaces
# =============================================================================

@dataclass(frozen=True, eq=False)
class Surface(_Shape):
    """Base class for closed boundary surfaces."""

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        raise NotImplementedError(f"sampling is not implemented for {type(self).__name__}")

    def intersect(self, position: np.ndarray, direction: np.ndarray) -> Intersection:
        raise NotImplementedError(f"get_intersection is not implemented for {type(self).__name__}")

    def normal(self, point: np.ndarray) -> np.ndarray:
        raise NotImplementedError(f"surface_normal is not implemented for {type(self).__name__}")

    def to_volume(self) -> Volume:
        raise NotImplementedError(f"{type(self).__name__} has no matching volume")


@dataclass(frozen=True, eq=False)
class CylinderSurface(Surface):
    center: np.ndarray
    height: float
    radius: float

    def __post_init__(self):
        object.__setattr__(self, 'center', _as_vec3(self.center))
        _require_positive("CylinderSurface", height=self.height, radius=self.radius)
        object.__setattr__(self, 'height', float(self.height))
        object.__setattr__(self, 'radius', float(self.radius))

    @classmethod
    def from_volume(cls, cylinder: Cylinder) -> "CylinderSurface":
        return cls(cylinder.center, cylinder.height, cylinder.radius)

    def to_volume(self) -> Cylinder:
        return Cylinder(self.center, self.height, self.radius)

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        """Uniformly sample a point on the surface.

        This is *not* the impact-point distribution of a uniform flux; see
        ``sample_uniform_ray`` for that.
        """
        cap_area = math.pi * self.radius ** 2
        mantle_area = TWO_PI * self.radius * self.height
        cap_prob = cap_area / (cap_area + mantle_area)

        if rng.random() < cap_prob:
            # Uniform in one of the caps
            z = rng.choice([-1.0, 1.0]) * self.height / 2
            r = math.sqrt(rng.random()) * self.radius
            phi = rng.uniform(0.0, TWO_PI)
            return np.array([r * math.cos(phi), r * math.sin(phi), z]) + self.center

        # Mantle
        z = rng.uniform(-self.height / 2, self.height / 2)
        phi = rng.uniform(0.0, TWO_PI)
        return np.array([self.radius * math.cos(phi), self.radius * math.sin(phi), z]) + self.center

    def intersect(self, position: np.ndarray, direction: np.ndarray) -> Intersection:
        """Intersect the line ``position + t * direction`` with the cylinder.

        The negated direction is decomposed into zenith and azimuth; the
        down-track distances to the endcap planes and to the mantle are
        computed separately and the last entrance / first exit is kept.
        Distances are signed and may be negative.
        """
        x, y, z = np.asarray(position, dtype=float) - self.center
        dx, dy, dz = -np.asarray(direction, dtype=float)
        norm = math.sqrt(dx * dx + dy * dy + dz * dz)
        if norm == 0.0:
            raise ValueError("Direction vector must be non-zero")

        cos_th = dz / norm
        sin_th = math.hypot(dx, dy) / norm
        phi = math.atan2(dy, dx)
        cos_ph = math.cos(phi)
        sin_ph = math.sin(phi)

        b = x * cos_ph + y * sin_ph
        d2 = b * b + self.radius ** 2 - x * x - y * y
        if d2 <= 0.0:
            return Intersection.miss()
        d = math.sqrt(d2)
        half = self.height / 2

        caps = Intersection((z - half) / cos_th, (z + half) / cos_th) if cos_th != 0.0 else None
        sides = Intersection((b - d) / sin_th, (b + d) / sin_th) if sin_th != 0.0 else None

        # Perfectly horizontal tracks never intersect the endcaps
        if cos_th == 0.0:
            return sides if -half < z < half else Intersection.miss()
        # Perfectly vertical tracks never intersect the mantle
        if sin_th == 0.0:
            return caps if math.hypot(x, y) < self.radius else Intersection.miss()

        entry = max(caps.entry, sides.entry)
        exit_ = min(caps.exit, sides.exit)
        if entry >= exit_:
            return Intersection.miss()
        return Intersection(entry, exit_)

    def normal(self, point: np.ndarray) -> np.ndarray:
        rel = np.asarray(point, dtype=float) - self.center
        tol = 1e-9 * max(self.height, self.radius)
        if abs(abs(rel[2]) - self.height / 2) <= tol and math.hypot(rel[0], rel[1]) <= self.radius + tol:
            return np.array([0.0, 0.0, math.copysign(1.0, rel[2])])
        phi = math.atan2(rel[1], rel[0])
        return np.array([math.cos(phi), math.sin(phi), 0.0])


@dataclass(frozen=True, eq=False)
class SphereSurface(Surface):
    center: np.ndarray
    radius: float

    def __post_init__(self):
        object.__setattr__(self, 'center', _as_vec3(self.center))
        _require_positive("SphereSurface", radius=self.radius)
        object.__setattr__(self, 'radius', float(self.radius))

    @classmethod
    def from_volume(cls, sphere: Sphere) -> "SphereSurface":
        return cls(sphere.center, sphere.radius)

    def to_volume(self) -> Sphere:
        return Sphere(self.center, self.radius)

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        theta = math.acos(2.0 * rng.random() - 1.0)
        phi = rng.uniform(0.0, TWO_PI)
        return self.radius * sph_to_cart(theta, phi) + self.center

    def intersect(self, position: np.ndarray, direction: np.ndarray) -> Intersection:
        oc = np.asarray(position, dtype=float) - self.center
        direction = np.asarray(direction, dtype=float)
        a = float(np.dot(direction, direction))
        if a == 0.0:
            raise ValueError("Direction vector must be non-zero")
        # half-b form of the quadratic
        h = float(np.dot(direction, oc))
        c = float(np.dot(oc, oc)) - self.radius ** 2
        discriminant = h * h - a * c
        if discriminant <= 0.0:
            return Intersection.miss()
        sqrt_d = math.sqrt(discriminant)
        return Intersection((-h - sqrt_d) / a, (-h + sqrt_d) / a)

    def normal(self, point: np.ndarray) -> np.ndarray:
        rel = np.asarray(point, dtype=float) - self.center
        return rel / np.linalg.norm(rel)


# =============================================================================
# Functional interface
# =============================================================================

def point_in_volume(volume: Volume, point: np.ndarray) -> bool:
    """Return True if ``point`` lies strictly inside ``volume``."""
    return volume.contains(point)


def get_volume(volume: Volume) -> float:
    return volume.volume()


def sample_volume(volume: Volume, rng: np.random.Generator) -> np.ndarray:
    """Sample a point uniformly distributed inside ``volume``."""
    return volume.sample(rng)


def sample_surface(surface: Surface, rng: np.random.Generator) -> np.ndarray:
    """Sample a point uniformly distributed on ``surface``."""
    return surface.sample(rng)


def as_surface(shape) -> Surface:
    """Return the boundary surface of a volume, or the surface itself."""
    if isinstance(shape, Surface):
        return shape
    if isinstance(shape, Cylinder):
        return CylinderSurface.from_volume(shape)
    if isinstance(shape, Sphere):
        return SphereSurface.from_volume(shape)
    raise NotImplementedError(f"No boundary surface defined for {type(shape).__name__}")


def get_intersection(shape, position, direction: Optional[np.ndarray] = None) -> Intersection:
    """Intersect a line with the boundary of ``shape``.

    Parameters
    ----------
    shape : Surface or Volume
        Volumes are replaced by their boundary surface.
    position : np.ndarray or Particle
        Point on the line, or a particle providing position and direction.
    direction : np.ndarray, optional
        Line direction; required unless ``position`` is a Particle.
    """
    if isinstance(position, Particle):
        position, direction = position.position, position.direction
    if direction is None:
        raise ValueError("A direction is required unless a Particle is given")
    return as_surface(shape).intersect(position, direction)


def chord_length(shape, position: np.ndarray, direction: np.ndarray) -> float:
    """Path length of the line inside ``shape``; 0 when it misses."""
    isec = get_intersection(shape, position, direction)
    if not isec.is_hit:
        return 0.0
    return isec.exit - isec.entry


def surface_normal(surface: Surface, point: np.ndarray) -> np.ndarray:
    """Outward unit normal of ``surface`` at ``point``."""
    return surface.normal(point)


def is_volume(obj) -> bool:
    """True for volumes and for injectors that place vertices in a volume."""
    return isinstance(obj, Volume) or isinstance(getattr(obj, 'volume', None), Volume)


def is_surface(obj) -> bool:
    """True for surfaces and for injectors that place vertices on a surface."""
    return isinstance(obj, Surface) or isinstance(getattr(obj, 'surface', None), Surface)
