"""
Geometry Layer
==============

Bounded Context: Pure affine geometry and representative points.

Responsibilities:
- Point / transform math
- Oriented box containment
- Representative point resolution for element geometry
- NO state, NO counting, NO writes

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
"""

from scopemap_zone.geometry.kernel import (
    Point3,
    Transform,
    OrientedBox,
    invert,
    apply,
    contains,
)
from scopemap_zone.geometry.curves import Curve, LineCurve, ArcCurve
from scopemap_zone.geometry.resolver import (
    PointAt,
    CurveMidpoint,
    BoundingBox,
    GeometryDescriptor,
    resolve,
)

__all__ = [
    "Point3",
    "Transform",
    "OrientedBox",
    "invert",
    "apply",
    "contains",
    "Curve",
    "LineCurve",
    "ArcCurve",
    "PointAt",
    "CurveMidpoint",
    "BoundingBox",
    "GeometryDescriptor",
    "resolve",
]
