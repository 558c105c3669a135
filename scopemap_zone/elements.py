"""
Element Model
=============

Immutable inputs handed to the classifier by the host.

Host-specific category ids are mapped to Category by the host layer; the
core only sees this closed enum.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable

from scopemap_zone.geometry.resolver import GeometryDescriptor


class Category(str, Enum):
    """Element category enumeration."""
    LINEAR_CONDUIT = "linear_conduit"
    CONDUIT_FITTING = "conduit_fitting"
    POINT_FIXTURE = "point_fixture"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Category.LINEAR_CONDUIT: "Conduits",
    Category.CONDUIT_FITTING: "Conduit Fittings",
    Category.POINT_FIXTURE: "Electrical Fixtures",
    Category.OTHER: "Other",
}

# Categories that appear in the report; OTHER is labeled but never counted
TRACKED_CATEGORIES = (
    Category.LINEAR_CONDUIT,
    Category.CONDUIT_FITTING,
    Category.POINT_FIXTURE,
)


@dataclass(frozen=True, eq=False)
class Element:
    """
    An element to classify.

    Attributes:
        element_id: Opaque host identity
        category: Element category
        geometry: Whatever location/box data the host could provide
    """

    element_id: Hashable
    category: Category
    geometry: GeometryDescriptor = field(default_factory=GeometryDescriptor)

    def __post_init__(self):
        if not isinstance(self.category, Category):
            object.__setattr__(self, "category", Category(self.category))
        object.__setattr__(self, "geometry", GeometryDescriptor.of(self.geometry))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "element_id": self.element_id,
            "category": self.category.value,
            "geometry": self.geometry.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Element":
        try:
            return cls(
                element_id=data["element_id"],
                category=Category(data.get("category", Category.OTHER.value)),
                geometry=GeometryDescriptor.from_dict(data.get("geometry")),
            )
        except KeyError as e:
            raise ValueError(f"Missing required element field: {e}")
