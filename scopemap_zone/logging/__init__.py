"""
Structured Logging for scopemap
===============================

Bounded Context: Observability

JSON-structured logging, one object per record.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from scopemap_zone.logging import create_logger, LogEvent
    >>> logger = create_logger("classifier")
    >>> logger.info(
    ...     event=LogEvent.CLASSIFICATION_COMPLETED,
    ...     message="Classified 3 elements",
    ...     metadata={'total': 3}
    ... )

Output:
    {
        "timestamp": "2025-10-24T15:30:45.123456+00:00",
        "level": "INFO",
        "component": "classifier",
        "event": "classification.completed",
        "message": "Classified 3 elements",
        "metadata": {"total": 3}
    }
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
