"""
Zone Index Module
=================

Bounded Context: Labeled volumes and point-to-label lookup.

Design:
- Zone is an immutable (label, oriented box) pair
- ZoneIndex preserves insertion order: the FIRST zone that contains a
  point wins when zones overlap
- Transforms are inverted once at build time; a singular transform
  fails the build before any point is classified
- A world-space prune box per zone skips zones that cannot match; it is
  a necessary condition only, so results equal a plain ordered scan
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from scopemap_zone.errors import DegenerateTransformError
from scopemap_zone.geometry.kernel import OrientedBox, Point3, Transform, apply, invert


# Relative slack added to prune boxes so rounding never rejects a boundary point
PRUNE_PADDING = 1e-9


@dataclass(frozen=True, eq=False)
class Zone:
    """
    Labeled oriented volume.

    Attributes:
        label: Non-empty label written to elements inside the volume
        volume: Oriented box in world space
    """

    label: str
    volume: OrientedBox

    def __post_init__(self):
        if not isinstance(self.label, str) or not self.label:
            raise ValueError(f"Zone label must be a non-empty string, got {self.label!r}")
        if not isinstance(self.volume, OrientedBox):
            raise TypeError(f"volume must be OrientedBox, got {type(self.volume)}")

    def to_dict(self) -> Dict:
        return {"label": self.label, "volume": self.volume.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict) -> "Zone":
        try:
            return cls(label=data["label"], volume=OrientedBox.from_dict(data["volume"]))
        except KeyError as e:
            raise ValueError(f"Missing required zone field: {e}")


@dataclass(frozen=True, eq=False)
class _IndexedZone:
    zone: Zone
    inverse: Transform
    prune_min: Point3
    prune_max: Point3

    def may_contain(self, p: Point3) -> bool:
        lo, hi = self.prune_min, self.prune_max
        return (
            lo.x <= p.x <= hi.x
            and lo.y <= p.y <= hi.y
            and lo.z <= p.z <= hi.z
        )

    def contains(self, p: Point3) -> bool:
        return self.zone.volume.contains_local(apply(self.inverse, p))


def _padded_bounds(volume: OrientedBox) -> Tuple[Point3, Point3]:
    lo, hi = volume.world_bounds()
    extent = hi - lo
    magnitude = max(
        abs(lo.x), abs(lo.y), abs(lo.z),
        abs(hi.x), abs(hi.y), abs(hi.z),
        extent.x, extent.y, extent.z,
        1.0,
    )
    pad = magnitude * PRUNE_PADDING
    slack = Point3(pad, pad, pad)
    return lo - slack, hi + slack


class ZoneIndex:
    """
    Ordered collection of zones with first-match point lookup.

    Usage:
        index = ZoneIndex(zones)      # may raise DegenerateTransformError
        label = index.classify(point) # None when no zone contains point

    Read-only after construction, so one index can be shared by
    concurrent readers.
    """

    def __init__(self, zones: Sequence[Zone], prune: bool = True):
        """
        Args:
            zones: Zones in priority order (earlier wins on overlap)
            prune: Skip zones whose world bounds exclude the point

        Raises:
            DegenerateTransformError: If any zone transform is singular
        """
        self._prune = prune
        self._entries: List[_IndexedZone] = []

        for zone in zones:
            try:
                inverse = invert(zone.volume.transform)
            except DegenerateTransformError as e:
                raise e.with_zone(zone.label) from e

            prune_min, prune_max = _padded_bounds(zone.volume)
            self._entries.append(_IndexedZone(zone, inverse, prune_min, prune_max))

    def classify(self, point: Point3) -> Optional[str]:
        """
        Return the label of the first zone containing `point`, or None.
        """
        for entry in self._entries:
            if self._prune and not entry.may_contain(point):
                continue
            if entry.contains(point):
                return entry.zone.label
        return None

    @property
    def zones(self) -> Tuple[Zone, ...]:
        return tuple(entry.zone for entry in self._entries)

    def labels(self) -> List[str]:
        return [entry.zone.label for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Zone]:
        return iter(self.zones)

    def __repr__(self) -> str:
        return f"ZoneIndex({len(self)} zones, prune={self._prune})"
