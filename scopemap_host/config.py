"""
Configuration schema for the scopemap host shell.

Defines the host-side settings (phase name, target parameter, zone category)
plus logging settings.
Everything is loaded from YAML and validated at construction.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

import yaml

from scopemap_zone.elements import Category, TRACKED_CATEGORIES


@dataclass(frozen=True)
class HostConfig:
    """Host document query and write settings."""

    phase_name: str = "Electrical"
    target_parameter: str = "SKU"
    zone_category: str = "Scope Boxes"
    categories: Tuple[Category, ...] = TRACKED_CATEGORIES
    transaction_name: str = "SKU Autofill from Scope Boxes"

    def __post_init__(self):
        """Validate host configuration."""
        if not self.phase_name:
            raise ValueError("phase_name cannot be empty")
        if not self.target_parameter:
            raise ValueError("target_parameter cannot be empty")
        if not self.zone_category:
            raise ValueError("zone_category cannot be empty")
        if not self.categories:
            raise ValueError("categories cannot be empty")

        try:
            categories = tuple(Category(c) for c in self.categories)
        except ValueError as e:
            raise ValueError(
                f"Invalid category in {list(self.categories)}. "
                f"Must be one of {[c.value for c in Category]}"
            ) from e
        object.__setattr__(self, "categories", categories)


@dataclass(frozen=True)
class LoggingConfig:
    """Structured logging settings."""

    level: str = "INFO"
    component: str = "scopemap"

    def __post_init__(self):
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR"}
        level = str(self.level).upper()
        if level not in valid_levels:
            raise ValueError(
                f"Invalid logging level: {self.level}. "
                f"Must be one of {sorted(valid_levels)}"
            )
        object.__setattr__(self, "level", level)

    @property
    def level_value(self) -> int:
        return getattr(logging, self.level)


@dataclass(frozen=True)
class ScopemapConfig:
    """
    Main configuration for the scopemap shell.

    Immutable after construction (frozen dataclass).
    """

    host: HostConfig = field(default_factory=HostConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data) -> "ScopemapConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("Invalid configuration: expected a mapping")
        for section in ("host", "logging"):
            if not isinstance(data.get(section) or {}, dict):
                raise ValueError(f"Invalid configuration: '{section}' must be a mapping")

        host_data = dict(data.get("host") or {})
        if "categories" in host_data:
            if not isinstance(host_data["categories"], list):
                raise ValueError("Invalid configuration: 'categories' must be a list")
            host_data["categories"] = tuple(host_data["categories"])

        try:
            return cls(
                host=HostConfig(**host_data),
                logging=LoggingConfig(**(data.get("logging") or {})),
            )
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ScopemapConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            host:
              phase_name: "Electrical"
              target_parameter: "SKU"
              zone_category: "Scope Boxes"
              categories: [linear_conduit, conduit_fitting, point_fixture]

            logging:
              level: "INFO"

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML or any value is invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        try:
            return cls.from_dict(data)
        except ValueError as e:
            raise ValueError(f"Invalid config in {yaml_path}: {e}") from e
