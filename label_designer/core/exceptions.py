# label_designer/core/exceptions.py
"""
Error types for the label model, geometry and serialization layers.

No Qt dependencies, so these can be raised from the pure engine code and
caught by any host.
"""
from __future__ import annotations


class LabelDesignError(Exception):
    """Base exception for all label design errors."""


class InvalidGridSizeError(LabelDesignError, ValueError):
    """Grid size must be strictly positive."""


class DocumentFormatError(LabelDesignError, ValueError):
    """Serialized design data is structurally invalid."""


class BarcodeValidationError(LabelDesignError, ValueError):
    """Raised when scan-code data is invalid for the selected symbology."""
