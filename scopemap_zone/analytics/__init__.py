"""
Analytics Layer
===============

Bounded Context: Per-category counting of classification outcomes.

Responsibilities:
- Accumulate written / unwritten / skipped counts (mutable state)
- Produce immutable report snapshots

Design Philosophy:
- Mutable accumulator (CategoryCounter)
- Immutable outputs (CategoryTally, Report)
"""

from scopemap_zone.analytics.counter import CategoryCounter, CategoryTally, Report

__all__ = [
    "CategoryCounter",
    "CategoryTally",
    "Report",
]
