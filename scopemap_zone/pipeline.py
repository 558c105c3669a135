"""
Zone Classification Pipeline Module
===================================

Bounded Context: Orchestration of one classification pass.

Design:
- Orchestrator: resolver + zone index + writer + counter
- Builder pattern: fluent configuration, validated at build time
- Two phases: plan every element first (pure), then apply labels
  through the host writer. Fatal errors can only happen while planning,
  so a failed pass never leaves partial writes behind.
- Elements and zones are never mutated

Dependencies:
- scopemap_zone.geometry (representative points)
- scopemap_zone.zone (first-match lookup)
- scopemap_zone.analytics (counters)
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from scopemap_zone.analytics.counter import CategoryCounter, Report
from scopemap_zone.elements import Category, Element, TRACKED_CATEGORIES
from scopemap_zone.errors import DegenerateTransformError, WriteError
from scopemap_zone.geometry.kernel import Point3
from scopemap_zone.geometry.resolver import resolve
from scopemap_zone.host import ElementSource, LabelWriter, ZoneSource
from scopemap_zone.logging import LogEvent, StructuredLogger, create_logger
from scopemap_zone.zone import Zone, ZoneIndex


class Outcome(str, Enum):
    """What happened to one element."""
    PENDING = "pending"        # Labeled, not yet written
    WRITTEN = "written"        # Label written
    UNWRITTEN = "unwritten"    # Outside every zone
    SKIPPED = "skipped"        # Labeled but target field missing/read-only


@dataclass(frozen=True)
class ClassificationResult:
    """
    Per-element classification outcome.

    `label` is None when the element lies outside every zone.
    """

    element_id: Hashable
    category: Category
    point: Point3
    label: Optional[str]
    outcome: Outcome

    @property
    def is_labeled(self) -> bool:
        return self.label is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "element_id": self.element_id,
            "category": self.category.value,
            "point": self.point.to_dict(),
            "label": self.label,
            "outcome": self.outcome.value,
        }


def classify_element(element: Element, index: ZoneIndex) -> ClassificationResult:
    """Resolve an element's point and look it up in the index (pure)."""
    point = resolve(element.geometry)
    label = index.classify(point)
    return ClassificationResult(
        element_id=element.element_id,
        category=element.category,
        point=point,
        label=label,
        outcome=Outcome.PENDING if label is not None else Outcome.UNWRITTEN,
    )


@dataclass
class ClassifierConfig:
    """
    Classifier configuration.

    Design:
    - All collaborators injected
    - Validated at construction
    """

    writer: LabelWriter
    logger: StructuredLogger
    tracked_categories: Tuple[Category, ...] = TRACKED_CATEGORIES
    prune: bool = True


class ZoneClassifier:
    """
    Runs one classification pass over elements and zones.

    Usage:
        classifier = (
            ClassifierBuilder()
            .with_writer(document)
            .build()
        )
        report = classifier.run(elements, zones)

    Stateless between passes: every run() builds its own index and
    counter, so a classifier can be reused or discarded after a failure.
    """

    def __init__(self, config: ClassifierConfig):
        self.config = config
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate configuration (fail fast)."""
        if self.config.writer is None:
            raise ValueError("A label writer is required")
        for method in ("is_writable", "write_label"):
            if not callable(getattr(self.config.writer, method, None)):
                raise TypeError(f"Label writer must implement {method}()")
        for category in self.config.tracked_categories:
            if not isinstance(category, Category):
                raise TypeError(f"Tracked categories must be Category, got {category!r}")

    def build_index(self, zones: Sequence[Zone]) -> ZoneIndex:
        """
        Build the zone index for a pass.

        Raises:
            DegenerateTransformError: If a zone transform is singular
        """
        logger = self.config.logger
        try:
            index = ZoneIndex(zones, prune=self.config.prune)
        except DegenerateTransformError as e:
            logger.error(
                event=LogEvent.ZONE_DEGENERATE,
                message=str(e),
                metadata={'zone': e.zone_label, 'determinant': e.determinant},
                exc_info=e,
            )
            raise

        logger.info(
            event=LogEvent.ZONE_INDEX_BUILT,
            message=f"Indexed {len(index)} zones",
            metadata={'zone_count': len(index)},
        )
        return index

    def plan(self, elements: Sequence[Element], index: ZoneIndex) -> List[ClassificationResult]:
        """Classify every element without writing anything."""
        logger = self.config.logger
        planned = []
        for element in elements:
            if element.geometry.is_empty:
                logger.debug(
                    event=LogEvent.ELEMENT_NO_GEOMETRY,
                    message="Element has no geometry, using world origin",
                    metadata={'element_id': element.element_id},
                )
            planned.append(classify_element(element, index))
        return planned

    def run(self, elements: Iterable[Element], zones: Iterable[Zone]) -> Report:
        """
        Classify elements, write labels, and tally the outcome.

        Returns:
            Report with per-category tallies and per-element results

        Raises:
            DegenerateTransformError: If a zone transform is singular
                (raised before any label is written)
        """
        elements = list(elements)
        zones = list(zones)
        logger = self.config.logger

        logger.info(
            event=LogEvent.CLASSIFICATION_STARTED,
            message=f"Classifying {len(elements)} elements against {len(zones)} zones",
            metadata={'element_count': len(elements), 'zone_count': len(zones)},
        )

        try:
            index = self.build_index(zones)
        except DegenerateTransformError as e:
            logger.error(
                event=LogEvent.CLASSIFICATION_FAILED,
                message="Classification aborted before any write",
                exc_info=e,
            )
            raise

        planned = self.plan(elements, index)

        counter = CategoryCounter(self.config.tracked_categories)
        results = [
            self._apply(element, result, counter)
            for element, result in zip(elements, planned)
        ]

        report = counter.get_report(total=len(elements), results=results)
        logger.info(
            event=LogEvent.CLASSIFICATION_COMPLETED,
            message=f"Classified {report.total} elements",
            metadata={
                'total': report.total,
                'written': report.written_total,
                'unwritten': report.unwritten_total,
            },
        )
        return report

    def run_from_sources(self, element_source: ElementSource, zone_source: ZoneSource) -> Report:
        """Pull elements and zones from host sources, then run()."""
        return self.run(element_source.provide_elements(), zone_source.provide_zones())

    def _apply(
        self,
        element: Element,
        result: ClassificationResult,
        counter: CategoryCounter,
    ) -> ClassificationResult:
        logger = self.config.logger
        writer = self.config.writer

        if result.label is None:
            counter.record_unwritten(element.category)
            logger.debug(
                event=LogEvent.ELEMENT_UNLABELED,
                message="Element outside every zone",
                metadata={'element_id': element.element_id, 'point': result.point.as_tuple()},
            )
            return result

        if not writer.is_writable(element):
            return self._skip(element, result, counter, reason="not writable")

        try:
            writer.write_label(element, result.label)
        except WriteError as e:
            return self._skip(element, result, counter, reason=str(e))

        counter.record_written(element.category)
        logger.debug(
            event=LogEvent.ELEMENT_LABELED,
            message=f"Labeled element '{result.label}'",
            metadata={'element_id': element.element_id, 'label': result.label},
        )
        return replace(result, outcome=Outcome.WRITTEN)

    def _skip(
        self,
        element: Element,
        result: ClassificationResult,
        counter: CategoryCounter,
        reason: str,
    ) -> ClassificationResult:
        counter.record_skipped(element.category)
        self.config.logger.debug(
            event=LogEvent.ELEMENT_SKIPPED,
            message=f"Skipped element: {reason}",
            metadata={'element_id': element.element_id, 'label': result.label},
        )
        return replace(result, outcome=Outcome.SKIPPED)


class ClassifierBuilder:
    """
    Builder for ZoneClassifier.

    Usage:
        classifier = (
            ClassifierBuilder()
            .with_writer(document)
            .with_logger(create_logger("classifier"))
            .build()
        )
    """

    def __init__(self):
        self._writer: LabelWriter | None = None
        self._logger: StructuredLogger | None = None
        self._tracked: Tuple[Category, ...] = TRACKED_CATEGORIES
        self._prune: bool = True

    def with_writer(self, writer: LabelWriter) -> "ClassifierBuilder":
        """Set the host label writer."""
        self._writer = writer
        return self

    def with_logger(self, logger: StructuredLogger) -> "ClassifierBuilder":
        """Set structured logger."""
        self._logger = logger
        return self

    def with_tracked_categories(self, categories: Iterable[Category]) -> "ClassifierBuilder":
        """Set the categories that appear in the report."""
        self._tracked = tuple(categories)
        return self

    def with_pruning(self, enabled: bool) -> "ClassifierBuilder":
        """Enable/disable world-bounds pruning in the zone index."""
        self._prune = enabled
        return self

    def build(self) -> ZoneClassifier:
        """
        Build the classifier.

        Raises:
            ValueError: If the label writer is missing
        """
        if self._writer is None:
            raise ValueError("Label writer is required (use .with_writer())")

        if self._logger is None:
            self._logger = create_logger("classifier")

        config = ClassifierConfig(
            writer=self._writer,
            logger=self._logger,
            tracked_categories=self._tracked,
            prune=self._prune,
        )
        return ZoneClassifier(config)


def classify(
    elements: Iterable[Element],
    zones: Iterable[Zone],
    writer: LabelWriter,
    logger: Optional[StructuredLogger] = None,
) -> Report:
    """One-shot convenience wrapper around ClassifierBuilder + run()."""
    builder = ClassifierBuilder().with_writer(writer)
    if logger is not None:
        builder = builder.with_logger(logger)
    return builder.build().run(elements, zones)
