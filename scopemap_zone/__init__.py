"""
scopemap zone classifier
========================

Bounded Context: Labeling elements by the oriented volume that contains them.

Each element is reduced to one representative point, the point is looked
up in an ordered list of labeled oriented boxes (first match wins), the
label is handed to the host for writing, and per-category counts are
returned.

Architecture:

    scopemap_zone/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── kernel.py      # Point3, Transform, OrientedBox, invert/apply/contains
    │   ├── curves.py      # LineCurve, ArcCurve
    │   └── resolver.py    # Representative point of an element
    │
    ├── zone.py            # Zone, ZoneIndex (first-match lookup)
    ├── elements.py        # Element, Category
    ├── analytics/         # Per-category tallies (stateful counter, immutable report)
    ├── host.py            # Collaborator protocols (sources, writer)
    ├── logging/           # Structured JSON logging
    └── pipeline.py        # Orchestration (ZoneClassifier, ClassifierBuilder)

Usage:

    from scopemap_zone import (
        Element, Category, PointAt, Point3, Transform, OrientedBox, Zone,
        ClassifierBuilder,
    )

    zones = [
        Zone("Bay-1", OrientedBox(Transform.identity(), Point3(0, 0, 0), Point3(10, 10, 10))),
    ]
    elements = [
        Element("c1", Category.LINEAR_CONDUIT, PointAt(Point3(5, 5, 5))),
    ]

    classifier = ClassifierBuilder().with_writer(document).build()
    report = classifier.run(elements, zones)
    report.tally(Category.LINEAR_CONDUIT).written  # 1
"""

from scopemap_zone.errors import (
    ScopemapError,
    DegenerateTransformError,
    WriteError,
    ReadOnlyError,
    MissingFieldError,
)

# Geometry Layer (immutable, stateless)
from scopemap_zone.geometry import (
    Point3,
    Transform,
    OrientedBox,
    invert,
    apply,
    contains,
    LineCurve,
    ArcCurve,
    PointAt,
    CurveMidpoint,
    BoundingBox,
    GeometryDescriptor,
    resolve,
)

from scopemap_zone.elements import Category, Element, TRACKED_CATEGORIES
from scopemap_zone.zone import Zone, ZoneIndex

# Analytics Layer (stateful)
from scopemap_zone.analytics import CategoryCounter, CategoryTally, Report

# Pipeline (orchestration)
from scopemap_zone.pipeline import (
    ClassificationResult,
    ClassifierBuilder,
    Outcome,
    ZoneClassifier,
    classify,
)

__all__ = [
    # Errors
    "ScopemapError",
    "DegenerateTransformError",
    "WriteError",
    "ReadOnlyError",
    "MissingFieldError",
    # Geometry
    "Point3",
    "Transform",
    "OrientedBox",
    "invert",
    "apply",
    "contains",
    "LineCurve",
    "ArcCurve",
    "PointAt",
    "CurveMidpoint",
    "BoundingBox",
    "GeometryDescriptor",
    "resolve",
    # Model
    "Category",
    "Element",
    "TRACKED_CATEGORIES",
    "Zone",
    "ZoneIndex",
    # Analytics
    "CategoryCounter",
    "CategoryTally",
    "Report",
    # Pipeline
    "ClassificationResult",
    "ClassifierBuilder",
    "Outcome",
    "ZoneClassifier",
    "classify",
]

__version__ = "1.0.0"
