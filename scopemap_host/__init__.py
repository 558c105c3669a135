"""
scopemap host shell.

In-memory host document and YAML configuration used around the
scopemap_zone classifier.
"""

from .config import HostConfig, LoggingConfig, ScopemapConfig
from .document import HostElement, HostVolume, InMemoryDocument, Parameter

__all__ = [
    "HostConfig",
    "LoggingConfig",
    "ScopemapConfig",
    "HostElement",
    "HostVolume",
    "InMemoryDocument",
    "Parameter",
]
