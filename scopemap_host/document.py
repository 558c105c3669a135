"""
In-Memory Host Document
=======================

Bounded Context: Host document stand-in for the classifier.

Plays every collaborator role the core expects:
- ElementSource: elements created in the configured phase, filtered by category
- ZoneSource: volumes of the configured zone category that have a box
- LabelWriter: parameter lookup + staged writes inside a transaction

Design:
- Writes are staged and only become visible on commit
- A transaction rolls back on any exception raised inside it
- Loaded from YAML/dict so the CLI and tests share one format
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Hashable, Iterator, List, Optional

import yaml

from scopemap_host.config import HostConfig
from scopemap_zone.elements import Element
from scopemap_zone.errors import MissingFieldError, ReadOnlyError
from scopemap_zone.geometry.kernel import OrientedBox
from scopemap_zone.logging import LogEvent, StructuredLogger, create_logger
from scopemap_zone.zone import Zone


@dataclass
class Parameter:
    """A named element parameter."""

    value: Any = None
    read_only: bool = False

    @classmethod
    def from_data(cls, data) -> "Parameter":
        # Plain values are shorthand for a writable parameter
        if isinstance(data, dict):
            return cls(value=data.get("value"), read_only=bool(data.get("read_only", False)))
        return cls(value=data)


@dataclass
class HostElement:
    """An element as stored in the document."""

    element: Element
    phase: Optional[str] = None
    parameters: Dict[str, Parameter] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HostElement":
        if not isinstance(data, dict):
            raise ValueError(f"Invalid element entry: expected a mapping, got {data!r}")
        raw_parameters = data.get("parameters") or {}
        if not isinstance(raw_parameters, dict):
            raise ValueError(f"Invalid parameters for element {data.get('element_id')!r}: expected a mapping")
        parameters = {
            name: Parameter.from_data(value)
            for name, value in raw_parameters.items()
        }
        return cls(
            element=Element.from_dict(data),
            phase=data.get("phase"),
            parameters=parameters,
        )


@dataclass(frozen=True, eq=False)
class HostVolume:
    """A named volumetric object; only some of them are zones."""

    name: str
    category_name: str
    box: Optional[OrientedBox] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HostVolume":
        if not isinstance(data, dict):
            raise ValueError(f"Invalid volume entry: expected a mapping, got {data!r}")
        try:
            box_data = data.get("box")
            return cls(
                name=data["name"],
                category_name=data.get("category", "Scope Boxes"),
                box=OrientedBox.from_dict(box_data) if box_data is not None else None,
            )
        except KeyError as e:
            raise ValueError(f"Missing required volume field: {e}")


class InMemoryDocument:
    """
    Document holding elements, volumes and element parameters.

    Usage:
        document = InMemoryDocument.from_yaml("document.yaml", config)

        with document.transaction():
            report = (
                ClassifierBuilder()
                .with_writer(document)
                .build()
                .run_from_sources(document, document)
            )
    """

    def __init__(
        self,
        elements: List[HostElement],
        volumes: List[HostVolume],
        config: Optional[HostConfig] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.config = config or HostConfig()
        self.logger = logger or create_logger("document")
        self._elements = list(elements)
        self._volumes = list(volumes)
        self._by_id: Dict[Hashable, HostElement] = {
            host.element.element_id: host for host in self._elements
        }
        if len(self._by_id) != len(self._elements):
            raise ValueError("Element ids must be unique within a document")

        self._staged: Optional[Dict[Hashable, Any]] = None

    # ------------------------------------------------------------------
    # ElementSource / ZoneSource
    # ------------------------------------------------------------------

    def provide_elements(self) -> List[Element]:
        """Elements created in the configured phase, in document order."""
        phase = self.config.phase_name.casefold()
        categories = set(self.config.categories)
        return [
            host.element
            for host in self._elements
            if host.phase is not None
            and host.phase.casefold() == phase
            and host.element.category in categories
        ]

    def provide_zones(self) -> List[Zone]:
        """Boxed, named volumes of the zone category, in document order."""
        zone_category = self.config.zone_category.casefold()
        return [
            Zone(label=volume.name, volume=volume.box)
            for volume in self._volumes
            if volume.category_name.casefold() == zone_category
            and volume.box is not None
            and volume.name
        ]

    # ------------------------------------------------------------------
    # LabelWriter
    # ------------------------------------------------------------------

    def lookup_parameter(self, element_id: Hashable, name: str) -> Optional[Parameter]:
        host = self._by_id.get(element_id)
        if host is None:
            return None
        return host.parameters.get(name)

    def is_writable(self, element: Element) -> bool:
        parameter = self.lookup_parameter(element.element_id, self.config.target_parameter)
        return parameter is not None and not parameter.read_only

    def write_label(self, element: Element, label: str) -> None:
        """
        Stage `label` into the element's target parameter.

        Raises:
            RuntimeError: If no transaction is open
            MissingFieldError: If the element has no target parameter
            ReadOnlyError: If the target parameter is read-only
        """
        if self._staged is None:
            raise RuntimeError("write_label() requires an open transaction")

        name = self.config.target_parameter
        parameter = self.lookup_parameter(element.element_id, name)
        if parameter is None:
            raise MissingFieldError(element.element_id, name)
        if parameter.read_only:
            raise ReadOnlyError(element.element_id, name)

        self._staged[element.element_id] = label

    def parameter_value(self, element_id: Hashable, name: Optional[str] = None) -> Any:
        """Committed value of a parameter (defaults to the target parameter)."""
        parameter = self.lookup_parameter(element_id, name or self.config.target_parameter)
        return parameter.value if parameter is not None else None

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._staged is not None

    @contextmanager
    def transaction(self, name: Optional[str] = None) -> Iterator["InMemoryDocument"]:
        """
        Stage writes and commit them on normal exit.

        Any exception raised inside the block discards every staged write
        and is re-raised.
        """
        if self._staged is not None:
            raise RuntimeError("A transaction is already open")

        name = name or self.config.transaction_name
        self._staged = {}
        try:
            yield self
        except BaseException as e:
            discarded = len(self._staged)
            self._staged = None
            self.logger.warning(
                event=LogEvent.DOCUMENT_ROLLED_BACK,
                message=f"Transaction '{name}' rolled back",
                metadata={'discarded_writes': discarded, 'error': type(e).__name__},
            )
            raise

        staged, self._staged = self._staged, None
        for element_id, value in staged.items():
            self.lookup_parameter(element_id, self.config.target_parameter).value = value

        self.logger.info(
            event=LogEvent.DOCUMENT_COMMITTED,
            message=f"Transaction '{name}' committed",
            metadata={'writes': len(staged)},
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        config: Optional[HostConfig] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> "InMemoryDocument":
        """
        Build a document from its dict form.

        Example:
            elements:
              - element_id: c1
                category: linear_conduit
                phase: Electrical
                parameters: {SKU: null}
                geometry: {point: [5, 5, 5]}
            volumes:
              - name: Bay-1
                category: Scope Boxes
                box: {min: [0, 0, 0], max: [10, 10, 10]}
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("Invalid document: expected a mapping")
        for key in ("elements", "volumes"):
            if not isinstance(data.get(key) or [], list):
                raise ValueError(f"Invalid document: '{key}' must be a list")
        elements = [HostElement.from_dict(e) for e in data.get("elements") or []]
        volumes = [HostVolume.from_dict(v) for v in data.get("volumes") or []]
        return cls(elements, volumes, config=config, logger=logger)

    @classmethod
    def from_yaml(
        cls,
        yaml_path: Path,
        config: Optional[HostConfig] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> "InMemoryDocument":
        """
        Load a document from YAML.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML or any value is invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Document not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        try:
            return cls.from_dict(data, config=config, logger=logger)
        except ValueError as e:
            raise ValueError(f"Invalid document in {yaml_path}: {e}") from e
