"""
Error Taxonomy
==============

Bounded Context: Failure modes of a classification pass.

Design:
- Fatal errors abort the whole pass (DegenerateTransformError)
- Recoverable errors are local to one element (WriteError family)
- Everything derives from ScopemapError so callers can catch one type
"""

from typing import Optional


class ScopemapError(Exception):
    """Base class for all scopemap errors."""


class DegenerateTransformError(ScopemapError):
    """
    Raised when a transform's linear part cannot be inverted.

    Fatal: containment cannot be evaluated for the offending volume, so the
    pass is aborted before any label is written.

    Attributes:
        determinant: Determinant of the singular linear part
        zone_label: Label of the zone that owns the transform (if known)
    """

    def __init__(self, determinant: float, zone_label: Optional[str] = None):
        self.determinant = determinant
        self.zone_label = zone_label
        where = f" in zone '{zone_label}'" if zone_label else ""
        super().__init__(
            f"Transform{where} is not invertible (determinant={determinant:.3e})"
        )

    def with_zone(self, zone_label: str) -> "DegenerateTransformError":
        """Return a copy of this error that names the owning zone."""
        return DegenerateTransformError(self.determinant, zone_label=zone_label)


class WriteError(ScopemapError):
    """
    Raised by a label writer when an element cannot take a label.

    Recoverable: the classifier skips the element and keeps going.
    """

    def __init__(self, element_id, field_name: str, reason: str):
        self.element_id = element_id
        self.field_name = field_name
        super().__init__(f"Element {element_id!r}: field '{field_name}' {reason}")


class ReadOnlyError(WriteError):
    """Target field exists but is read-only."""

    def __init__(self, element_id, field_name: str):
        super().__init__(element_id, field_name, "is read-only")


class MissingFieldError(WriteError):
    """Element does not expose the target field at all."""

    def __init__(self, element_id, field_name: str):
        super().__init__(element_id, field_name, "does not exist")
