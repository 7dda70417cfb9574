from __future__ import annotations

import os

import pytest

# Qt offscreen so these tests work in headless CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtCore

from label_designer.core.models import LabelSize, TextElement, create_element, find_label_size


@pytest.fixture(scope="session")
def qapp():
    """A Qt core application for QUndoStack / QSettings."""
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    yield app


@pytest.fixture()
def small_size() -> LabelSize:
    """The 2×1 inch location label."""
    return find_label_size("2×1 Small")


@pytest.fixture()
def location_context():
    return {
        "location": {"full": "WH01-A01-S01-01", "aisle": "A01"},
        "product": {"sku": "SKU-12345", "barcode": "123456789012"},
        "pallet": {"number": "PAL-20240115-001"},
    }


@pytest.fixture()
def make_text():
    """Factory for small text elements at a given position."""
    def _make(x, y, width=10, height=10, **kw) -> TextElement:
        return create_element("text", x=x, y=y, width=width, height=height, **kw)
    return _make
