"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Event Naming Convention:
    <component>.<action>

    component: classification, element, zone, document, config
    action: started, labeled, committed, ...

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, metadata.element_id
    | filter event = "element.skipped"
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - classification.*: Pass lifecycle
    - element.*: Per-element outcomes
    - zone.*: Zone index construction
    - document.*: Host document transactions
    - config.*: Configuration loading
    """

    # ========== Classification Events ==========
    CLASSIFICATION_STARTED = "classification.started"
    """Classification pass started."""

    CLASSIFICATION_COMPLETED = "classification.completed"
    """Classification pass finished, report produced."""

    CLASSIFICATION_FAILED = "classification.failed"
    """Classification pass aborted by a fatal error."""

    # ========== Element Events ==========
    ELEMENT_LABELED = "element.labeled"
    """Label written to an element."""

    ELEMENT_UNLABELED = "element.unlabeled"
    """Element lies outside every zone."""

    ELEMENT_SKIPPED = "element.skipped"
    """Element inside a zone but its target field is missing or read-only."""

    ELEMENT_NO_GEOMETRY = "element.no_geometry"
    """Element has no geometry; resolved to the world origin."""

    # ========== Zone Events ==========
    ZONE_INDEX_BUILT = "zone.index_built"
    """Zone index built from the zone sequence."""

    ZONE_DEGENERATE = "zone.degenerate"
    """Zone transform is not invertible."""

    # ========== Document Events ==========
    DOCUMENT_COMMITTED = "document.committed"
    """Staged label writes committed."""

    DOCUMENT_ROLLED_BACK = "document.rolled_back"
    """Staged label writes discarded."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Configuration loaded from YAML."""

