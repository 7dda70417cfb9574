# label_designer/printing/exceptions.py
"""
Consistent error types for the print pipeline.

No Qt dependencies. This module is pure Python so it can be used
in non-GUI contexts (tests, CLI tools, dry-run pipelines).
"""
from __future__ import annotations

from ..core.exceptions import BarcodeValidationError, LabelDesignError


class PrintError(Exception):
    """Base exception for all printing errors."""


class InvalidDpiError(PrintError, ValueError):
    """Resolution must be a positive number of dots per inch."""


class PrinterConfigError(PrintError):
    """Invalid or incomplete printer configuration."""


class PrintJobError(PrintError):
    """Error while preparing a label for the renderer."""


# ---------------------------------------------------------------------------
# Error-mapping helpers
# ---------------------------------------------------------------------------

def _chain(new: PrintError, cause: BaseException) -> PrintError:
    """Attach *cause* as ``__cause__`` (mimics ``raise new from cause``)."""
    new.__cause__ = cause
    return new


def map_exception(exc: BaseException) -> PrintError:
    """
    Wrap a lower-level exception into the matching ``PrintError`` subclass
    while preserving the original as ``__cause__``.

    If *exc* is already a ``PrintError`` it is returned unchanged.
    """
    if isinstance(exc, PrintError):
        return exc

    if isinstance(exc, BarcodeValidationError):
        return _chain(PrintJobError(f"Barcode data rejected: {exc}"), exc)
    if isinstance(exc, LabelDesignError):
        return _chain(PrintJobError(str(exc)), exc)

    # Configuration errors raised as ValueError/KeyError by profile handling
    if isinstance(exc, (ValueError, KeyError)):
        return _chain(PrinterConfigError(str(exc)), exc)

    return _chain(PrintJobError(str(exc)), exc)


def friendly_message(exc: BaseException) -> str:
    """Return a short, UI-safe description for *exc*."""
    return str(map_exception(exc))
