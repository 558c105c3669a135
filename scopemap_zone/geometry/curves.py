"""
Curve Types
===========

Parametric curves used by curve-located elements.

Each curve is evaluated over its own normalized parameter t in [0, 1].
The midpoint used for classification is evaluate(0.5): midpoint by
parameter, which is not the arc-length midpoint in general.
"""

import math
from dataclasses import dataclass
from typing import Dict, Protocol

from scopemap_zone.geometry.kernel import Point3


class Curve(Protocol):
    """Protocol for curves (interface)."""

    def evaluate(self, t: float) -> Point3:
        """Point at normalized parameter t."""
        ...


@dataclass(frozen=True)
class LineCurve:
    """Straight segment from start (t=0) to end (t=1)."""

    start: Point3
    end: Point3

    def evaluate(self, t: float) -> Point3:
        return self.start + (self.end - self.start) * t

    def to_dict(self) -> Dict:
        return {"type": "line", "start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True)
class ArcCurve:
    """
    Circular arc in the plane spanned by x_axis and y_axis.

    Attributes:
        center: Arc center
        radius: Arc radius (> 0)
        x_axis, y_axis: Orthonormal in-plane directions
        start_angle, end_angle: Angles in radians, measured from x_axis

    The normalized parameter is linear in angle, so for a circular arc
    evaluate(0.5) is also the arc-length midpoint.
    """

    center: Point3
    radius: float
    x_axis: Point3
    y_axis: Point3
    start_angle: float
    end_angle: float

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"Arc radius must be > 0, got {self.radius}")

    def evaluate(self, t: float) -> Point3:
        angle = self.start_angle + (self.end_angle - self.start_angle) * t
        return (
            self.center
            + self.x_axis * (self.radius * math.cos(angle))
            + self.y_axis * (self.radius * math.sin(angle))
        )

    def to_dict(self) -> Dict:
        return {
            "type": "arc",
            "center": self.center.to_dict(),
            "radius": self.radius,
            "x_axis": self.x_axis.to_dict(),
            "y_axis": self.y_axis.to_dict(),
            "start_angle": self.start_angle,
            "end_angle": self.end_angle,
        }


def curve_from_dict(data: Dict):
    """
    Deserialize a curve from its dict form.

    Raises:
        ValueError: If the curve type is unknown or fields are missing
    """
    curve_type = data.get("type", "line")
    try:
        if curve_type == "line":
            return LineCurve(
                start=Point3.from_dict(data["start"]),
                end=Point3.from_dict(data["end"]),
            )
        if curve_type == "arc":
            return ArcCurve(
                center=Point3.from_dict(data["center"]),
                radius=float(data["radius"]),
                x_axis=Point3.from_dict(data.get("x_axis", (1.0, 0.0, 0.0))),
                y_axis=Point3.from_dict(data.get("y_axis", (0.0, 1.0, 0.0))),
                start_angle=float(data["start_angle"]),
                end_angle=float(data["end_angle"]),
            )
    except KeyError as e:
        raise ValueError(f"Missing required {curve_type} curve field: {e}")

    raise ValueError(f"Invalid curve type: {curve_type}. Must be 'line' or 'arc'")
