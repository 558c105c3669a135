"""
Representative-Point Resolver
=============================

Maps an element's geometry descriptor to one world-space point.

Priority (first available wins):
    1. Direct point location
    2. Curve location, evaluated at normalized parameter 0.5
    3. Bounding box, midpoint of the two world-space corners
    4. World origin (no geometry at all)

The origin fallback can match a zone that covers (0, 0, 0). It is kept
as the documented result for elements without geometry.

A bounding-box transform is only applied forward, never inverted, so a
singular element transform still resolves to a point and never raises
DegenerateTransformError. Only zone transforms are inverted.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from scopemap_zone.geometry.curves import Curve, curve_from_dict
from scopemap_zone.geometry.kernel import Point3, Transform, apply


@dataclass(frozen=True)
class PointAt:
    """Element located by a single point."""

    point: Point3


@dataclass(frozen=True)
class CurveMidpoint:
    """Element located by a curve. `curve` may be None when the host has none."""

    curve: Optional[Curve]


@dataclass(frozen=True, eq=False)
class BoundingBox:
    """Element bounding box: local corners plus a local-to-world transform."""

    min: Point3
    max: Point3
    transform: Transform = field(default_factory=Transform.identity)


@dataclass(frozen=True, eq=False)
class GeometryDescriptor:
    """
    Everything the host knows about an element's geometry.

    Any combination of slots may be filled; resolve() applies the
    priority order.
    """

    point: Optional[Point3] = None
    curve: Optional[Curve] = None
    bounding_box: Optional[BoundingBox] = None

    @classmethod
    def of(cls, descriptor) -> "GeometryDescriptor":
        """Normalize a single-kind descriptor (or None) to a GeometryDescriptor."""
        if descriptor is None:
            return cls()
        if isinstance(descriptor, GeometryDescriptor):
            return descriptor
        if isinstance(descriptor, PointAt):
            return cls(point=descriptor.point)
        if isinstance(descriptor, CurveMidpoint):
            return cls(curve=descriptor.curve)
        if isinstance(descriptor, BoundingBox):
            return cls(bounding_box=descriptor)
        raise TypeError(f"Unsupported geometry descriptor: {type(descriptor)}")

    @property
    def is_empty(self) -> bool:
        return self.point is None and self.curve is None and self.bounding_box is None

    def to_dict(self) -> Dict:
        data = {}
        if self.point is not None:
            data["point"] = self.point.to_dict()
        if self.curve is not None:
            data["curve"] = self.curve.to_dict()
        if self.bounding_box is not None:
            data["bounding_box"] = {
                "min": self.bounding_box.min.to_dict(),
                "max": self.bounding_box.max.to_dict(),
                "transform": self.bounding_box.transform.to_dict(),
            }
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "GeometryDescriptor":
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Invalid geometry: expected a mapping, got {data!r}")

        point = Point3.from_dict(data["point"]) if data.get("point") is not None else None
        curve = curve_from_dict(data["curve"]) if data.get("curve") is not None else None

        bounding_box = None
        bb_data = data.get("bounding_box")
        if bb_data is not None:
            if not isinstance(bb_data, dict):
                raise ValueError(f"Invalid bounding box: expected a mapping, got {bb_data!r}")
            try:
                bounding_box = BoundingBox(
                    min=Point3.from_dict(bb_data["min"]),
                    max=Point3.from_dict(bb_data["max"]),
                    transform=Transform.from_dict(bb_data.get("transform")),
                )
            except KeyError as e:
                raise ValueError(f"Missing required bounding box field: {e}")

        return cls(point=point, curve=curve, bounding_box=bounding_box)


Descriptor = Union[GeometryDescriptor, PointAt, CurveMidpoint, BoundingBox, None]


def bounding_box_midpoint(box: BoundingBox) -> Point3:
    """Midpoint of the two corners after transforming them to world space."""
    world_min = apply(box.transform, box.min)
    world_max = apply(box.transform, box.max)
    return (world_min + world_max) * 0.5


def resolve(descriptor: Descriptor) -> Point3:
    """
    Resolve the representative point of an element.

    Total: never raises for a well-formed descriptor; an element with no
    geometry resolves to the world origin.
    """
    geometry = GeometryDescriptor.of(descriptor)

    if geometry.point is not None:
        return geometry.point

    if geometry.curve is not None:
        return geometry.curve.evaluate(0.5)

    if geometry.bounding_box is not None:
        return bounding_box_midpoint(geometry.bounding_box)

    return Point3.origin()
