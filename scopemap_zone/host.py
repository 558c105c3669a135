"""
Host Collaborator Protocols
===========================

Seams between the pure classifier and the host document.

The host supplies elements and zones, and decides whether (and how) a
label is persisted. The core never talks to a document directly.
"""

from typing import Protocol, Sequence

from scopemap_zone.elements import Element
from scopemap_zone.zone import Zone


class ElementSource(Protocol):
    """Supplies the elements to classify, in a stable order."""

    def provide_elements(self) -> Sequence[Element]:
        ...


class ZoneSource(Protocol):
    """Supplies labeled zones in priority order."""

    def provide_zones(self) -> Sequence[Zone]:
        ...


class LabelWriter(Protocol):
    """
    Persists labels onto elements.

    write_label() raises ReadOnlyError or MissingFieldError when the
    element cannot take the label; the classifier skips such elements.
    """

    def is_writable(self, element: Element) -> bool:
        ...

    def write_label(self, element: Element, label: str) -> None:
        ...
