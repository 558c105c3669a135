"""
Category Counter Module
=======================

Stateful accumulator for per-category classification tallies.

Design:
- Mutable counters (CategoryCounter)
- Immutable snapshots (CategoryTally, Report)
- Only tracked categories are counted; others are ignored silently
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Tuple

from scopemap_zone.elements import Category, TRACKED_CATEGORIES


@dataclass(frozen=True)
class CategoryTally:
    """
    Immutable counts for one category.

    written: labeled and successfully written
    unwritten: outside every zone
    skipped: inside a zone but the target field was missing or read-only
    """

    written: int = 0
    unwritten: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.written + self.unwritten + self.skipped

    def to_dict(self) -> Dict[str, int]:
        return {"written": self.written, "unwritten": self.unwritten, "skipped": self.skipped}

    def __str__(self) -> str:
        return f"written={self.written}, unwritten={self.unwritten}"


@dataclass(frozen=True)
class Report:
    """
    Immutable result of one classification pass.

    Attributes:
        tallies: Per tracked category counts
        total: Number of elements processed (all categories)
        results: Per-element outcomes, in input order
    """

    tallies: Dict[Category, CategoryTally] = field(default_factory=dict)
    total: int = 0
    results: Tuple[Any, ...] = ()

    def tally(self, category: Category) -> CategoryTally:
        """Counts for a category (zeroes for untracked or unseen categories)."""
        return self.tallies.get(category, CategoryTally())

    @property
    def written_total(self) -> int:
        return sum(t.written for t in self.tallies.values())

    @property
    def unwritten_total(self) -> int:
        return sum(t.unwritten for t in self.tallies.values())

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "categories": {
                category.value: tally.to_dict()
                for category, tally in self.tallies.items()
            },
            "results": [r.to_dict() for r in self.results],
        }

    def __str__(self) -> str:
        parts = [f"{c.display_name}: {t}" for c, t in self.tallies.items()]
        return f"Report(total={self.total}; " + "; ".join(parts) + ")"


class CategoryCounter:
    """
    Stateful tally of written / unwritten / skipped elements per category.

    Usage:
        counter = CategoryCounter()
        counter.record_written(Category.LINEAR_CONDUIT)
        counter.record_unwritten(Category.CONDUIT_FITTING)
        report = counter.get_report(total=2)
    """

    def __init__(self, tracked: Iterable[Category] = TRACKED_CATEGORIES):
        self._tracked = tuple(tracked)
        self._written: Dict[Category, int] = {c: 0 for c in self._tracked}
        self._unwritten: Dict[Category, int] = {c: 0 for c in self._tracked}
        self._skipped: Dict[Category, int] = {c: 0 for c in self._tracked}

    @property
    def tracked(self) -> Tuple[Category, ...]:
        return self._tracked

    def is_tracked(self, category: Category) -> bool:
        return category in self._written

    def record_written(self, category: Category) -> None:
        if self.is_tracked(category):
            self._written[category] += 1

    def record_unwritten(self, category: Category) -> None:
        if self.is_tracked(category):
            self._unwritten[category] += 1

    def record_skipped(self, category: Category) -> None:
        if self.is_tracked(category):
            self._skipped[category] += 1

    def get_report(self, total: int, results: Iterable[Any] = ()) -> Report:
        """Immutable snapshot of the current tallies."""
        tallies = {
            c: CategoryTally(
                written=self._written[c],
                unwritten=self._unwritten[c],
                skipped=self._skipped[c],
            )
            for c in self._tracked
        }
        return Report(tallies=tallies, total=total, results=tuple(results))

    def reset(self) -> None:
        for c in self._tracked:
            self._written[c] = 0
            self._unwritten[c] = 0
            self._skipped[c] = 0
