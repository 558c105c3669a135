"""Shared fixtures for scopemap tests."""

import logging
import math
from pathlib import Path

import numpy as np
import pytest

from scopemap_zone import (
    Element,
    MissingFieldError,
    OrientedBox,
    Point3,
    PointAt,
    ReadOnlyError,
    Transform,
    Zone,
)
from scopemap_zone.logging import create_logger


REPO_ROOT = Path(__file__).resolve().parent.parent
SAMPLE_DOCUMENT = REPO_ROOT / "config" / "sample_document.yaml"


class RecordingWriter:
    """Label writer that keeps written labels in a dict."""

    def __init__(self, read_only=(), missing=(), lie_about=()):
        self.read_only = set(read_only)
        self.missing = set(missing)
        # ids reported writable but rejected by write_label()
        self.lie_about = set(lie_about)
        self.written = {}
        self.is_writable_calls = []

    def is_writable(self, element):
        self.is_writable_calls.append(element.element_id)
        if element.element_id in self.lie_about:
            return True
        return element.element_id not in self.read_only and element.element_id not in self.missing

    def write_label(self, element, label):
        if element.element_id in self.missing:
            raise MissingFieldError(element.element_id, "SKU")
        if element.element_id in self.read_only:
            raise ReadOnlyError(element.element_id, "SKU")
        self.written[element.element_id] = label


def box(lo, hi, transform=None):
    return OrientedBox(transform or Transform.identity(), Point3(*lo), Point3(*hi))


def point_element(element_id, category, xyz):
    return Element(element_id, category, PointAt(Point3(*xyz)))


@pytest.fixture
def quiet_logger():
    return create_logger("test", level=logging.WARNING)


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
def unit_zone():
    """Axis-aligned 10x10x10 zone at the origin."""
    return Zone("Bay-1", box((0, 0, 0), (10, 10, 10)))


@pytest.fixture
def rotated_transform():
    """90 degrees about Z, local origin at (3, 4, 0)."""
    return Transform.rotation_z(math.pi / 2, origin=Point3(3, 4, 0))


@pytest.fixture
def singular_transform():
    return Transform(np.zeros((3, 3)), np.zeros(3))


@pytest.fixture
def sample_document_path():
    return SAMPLE_DOCUMENT
