"""
Geometry Kernel
===============

Pure affine math: points, transforms, oriented boxes.

Design:
- Immutable value types (frozen dataclasses, read-only numpy arrays)
- Double precision throughout (numpy float64)
- Containment is a closed-interval test in the box's local space, so
  rotated and scaled boxes are handled by the same code path
- No tolerance at the boundary test; callers that need slack must
  expand the box before testing
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Tuple

from scopemap_zone.errors import DegenerateTransformError


# Relative singularity threshold: |det| compared to the product of column norms
SINGULAR_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Point3:
    """
    Immutable 3D point (also used for vectors).

    Value object: two points with the same coordinates are equal.
    """

    x: float
    y: float
    z: float

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def origin(cls) -> "Point3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values) -> "Point3":
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: "Point3") -> "Point3":
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point3") -> "Point3":
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Point3":
        return Point3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data) -> "Point3":
        """
        Deserialize from a mapping {x, y, z} or a 3-item sequence.

        Raises:
            ValueError: If the data does not describe three numbers
        """
        try:
            if isinstance(data, dict):
                return cls(data["x"], data["y"], data["z"])
            if len(data) != 3:
                raise ValueError(f"expected 3 coordinates, got {len(data)}")
            return cls(data[0], data[1], data[2])
        except KeyError as e:
            raise ValueError(f"Missing required point coordinate: {e}")
        except TypeError as e:
            raise ValueError(f"Invalid point data {data!r}: {e}")


@dataclass(frozen=True, eq=False)
class Transform:
    """
    Affine map from local to world coordinates.

    world = linear @ local + translation

    Attributes:
        linear: 3x3 matrix whose columns are the local X, Y, Z axes
                expressed in world space (may include scale)
        translation: Local origin expressed in world space

    Invertibility is not checked here; invert() is where a singular
    linear part is reported.
    """

    linear: np.ndarray
    translation: np.ndarray

    def __post_init__(self):
        linear = np.array(self.linear, dtype=np.float64)
        translation = np.array(self.translation, dtype=np.float64)

        if linear.shape != (3, 3):
            raise ValueError(f"linear must be 3x3, got shape {linear.shape}")
        if translation.shape != (3,):
            raise ValueError(f"translation must have shape (3,), got {translation.shape}")

        linear.flags.writeable = False
        translation.flags.writeable = False
        object.__setattr__(self, "linear", linear)
        object.__setattr__(self, "translation", translation)

    @classmethod
    def identity(cls) -> "Transform":
        return cls(np.eye(3), np.zeros(3))

    @classmethod
    def from_basis(
        cls,
        origin: Point3,
        basis_x: Point3,
        basis_y: Point3,
        basis_z: Point3,
    ) -> "Transform":
        """Build from an origin and three basis vectors (all in world space)."""
        linear = np.column_stack([
            basis_x.as_array(),
            basis_y.as_array(),
            basis_z.as_array(),
        ])
        return cls(linear, origin.as_array())

    @classmethod
    def translation_by(cls, offset: Point3) -> "Transform":
        return cls(np.eye(3), offset.as_array())

    @classmethod
    def rotation_z(cls, angle_rad: float, origin: Point3 = None) -> "Transform":
        """Rotation about the world Z axis, with the local origin at `origin`."""
        c, s = math.cos(angle_rad), math.sin(angle_rad)
        linear = np.array([
            [c, -s, 0.0],
            [s, c, 0.0],
            [0.0, 0.0, 1.0],
        ])
        offset = origin.as_array() if origin is not None else np.zeros(3)
        return cls(linear, offset)

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float) -> "Transform":
        return cls(np.diag([sx, sy, sz]), np.zeros(3))

    @property
    def determinant(self) -> float:
        return float(np.linalg.det(self.linear))

    @property
    def origin(self) -> Point3:
        return Point3.from_array(self.translation)

    def to_dict(self) -> Dict[str, List]:
        return {
            "origin": self.translation.tolist(),
            "basis_x": self.linear[:, 0].tolist(),
            "basis_y": self.linear[:, 1].tolist(),
            "basis_z": self.linear[:, 2].tolist(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Transform":
        """
        Deserialize from {origin, basis_x, basis_y, basis_z}.

        Any missing key falls back to the identity value, so `{}` and
        `{"origin": [..]}` are valid shorthands.
        """
        if data is None:
            return cls.identity()
        return cls.from_basis(
            Point3.from_dict(data.get("origin", (0.0, 0.0, 0.0))),
            Point3.from_dict(data.get("basis_x", (1.0, 0.0, 0.0))),
            Point3.from_dict(data.get("basis_y", (0.0, 1.0, 0.0))),
            Point3.from_dict(data.get("basis_z", (0.0, 0.0, 1.0))),
        )

    def __repr__(self) -> str:
        return (
            f"Transform(origin={self.translation.tolist()}, "
            f"linear={self.linear.tolist()})"
        )


def invert(transform: Transform) -> Transform:
    """
    Invert an affine transform.

    The singularity test is relative: |det| is compared against the
    product of the column norms, so uniformly scaled transforms are
    judged the same as unit ones.

    Raises:
        DegenerateTransformError: If the linear part is singular
    """
    det = transform.determinant
    scale = float(np.prod(np.linalg.norm(transform.linear, axis=0)))

    if scale == 0.0 or abs(det) <= SINGULAR_TOLERANCE * scale:
        raise DegenerateTransformError(det)

    inverse_linear = np.linalg.inv(transform.linear)
    return Transform(inverse_linear, -(inverse_linear @ transform.translation))


def apply(transform: Transform, point: Point3) -> Point3:
    """Apply an affine transform to a point."""
    return Point3.from_array(transform.linear @ point.as_array() + transform.translation)


@dataclass(frozen=True, eq=False)
class OrientedBox:
    """
    Axis-aligned box in local space, placed in the world by a transform.

    Attributes:
        transform: Local-to-world transform
        min: Local-space minimum corner
        max: Local-space maximum corner

    Invariant: min <= max component-wise.
    """

    transform: Transform
    min: Point3
    max: Point3

    def __post_init__(self):
        if not isinstance(self.transform, Transform):
            raise TypeError(f"transform must be Transform, got {type(self.transform)}")
        for axis in ("x", "y", "z"):
            lo, hi = getattr(self.min, axis), getattr(self.max, axis)
            if lo > hi:
                raise ValueError(
                    f"Box min.{axis}={lo} exceeds max.{axis}={hi}"
                )

    def contains_local(self, local_point: Point3) -> bool:
        """Closed-interval test against (min, max) in local space."""
        lo, hi, p = self.min, self.max, local_point
        return (
            lo.x <= p.x <= hi.x
            and lo.y <= p.y <= hi.y
            and lo.z <= p.z <= hi.z
        )

    def local_corners(self) -> List[Point3]:
        """
        The 8 local corners, ordered:
            0: (minX, minY, minZ)   4: (maxX, minY, minZ)
            1: (minX, minY, maxZ)   5: (maxX, minY, maxZ)
            2: (minX, maxY, minZ)   6: (maxX, maxY, minZ)
            3: (minX, maxY, maxZ)   7: (maxX, maxY, maxZ)
        """
        lo, hi = self.min, self.max
        return [
            Point3(x, y, z)
            for x in (lo.x, hi.x)
            for y in (lo.y, hi.y)
            for z in (lo.z, hi.z)
        ]

    def world_corners(self) -> List[Point3]:
        return [apply(self.transform, c) for c in self.local_corners()]

    def world_bounds(self) -> Tuple[Point3, Point3]:
        """Axis-aligned world extent of the 8 transformed corners."""
        corners = np.array([c.as_array() for c in self.world_corners()])
        return Point3.from_array(corners.min(axis=0)), Point3.from_array(corners.max(axis=0))

    def to_dict(self) -> Dict:
        return {
            "min": self.min.to_dict(),
            "max": self.max.to_dict(),
            "transform": self.transform.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "OrientedBox":
        if not isinstance(data, dict):
            raise ValueError(f"Invalid box: expected a mapping, got {data!r}")
        try:
            return cls(
                transform=Transform.from_dict(data.get("transform")),
                min=Point3.from_dict(data["min"]),
                max=Point3.from_dict(data["max"]),
            )
        except KeyError as e:
            raise ValueError(f"Missing required box field: {e}")


def contains(volume: OrientedBox, world_point: Point3) -> bool:
    """
    Check whether a world-space point lies inside an oriented box.

    Boundary points count as inside.

    Raises:
        DegenerateTransformError: If the box transform is singular
    """
    local = apply(invert(volume.transform), world_point)
    return volume.contains_local(local)
