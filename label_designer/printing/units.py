# label_designer/printing/units.py
"""
Unit conversion between design space, inches and device pixels.

Design space is percent of the label: x/width against the label width,
y/height against the label height. Inches are the authoritative physical
size. Device pixels depend on the DPI the caller asks for; the editor
canvas uses SCREEN_DPI times the zoom factor.
"""
from __future__ import annotations

import math
from typing import Tuple

from ..core.models import LabelSize
from .exceptions import InvalidDpiError

SCREEN_DPI = 96
POINTS_PER_INCH = 72.0


def check_dpi(dpi: float) -> float:
    if isinstance(dpi, bool) or not isinstance(dpi, (int, float)) or dpi <= 0:
        raise InvalidDpiError(f"dpi must be a positive number; got {dpi!r}")
    return dpi


def inches_to_pixels(inches: float, dpi: float) -> int:
    """round(inches * dpi), halves rounded up."""
    check_dpi(dpi)
    return int(math.floor(inches * dpi + 0.5))


def pixels_to_inches(pixels: float, dpi: float) -> float:
    check_dpi(dpi)
    return pixels / dpi


def points_to_pixels(points: float, dpi: float) -> float:
    check_dpi(dpi)
    return points * (dpi / POINTS_PER_INCH)


def design_to_inches(value: float, extent_inches: float) -> float:
    """Percent of a label dimension -> inches."""
    return value / 100.0 * extent_inches


def canvas_size(size: LabelSize, dpi: float) -> Tuple[int, int]:
    """Pixel size of the whole label at *dpi*."""
    return inches_to_pixels(size.width, dpi), inches_to_pixels(size.height, dpi)


def screen_delta_to_design(
    dx: float,
    dy: float,
    size: LabelSize,
    zoom: float = 1.0,
    screen_dpi: float = SCREEN_DPI,
) -> Tuple[float, float]:
    """
    Convert a finished drag delta in screen pixels to design units.

    Undoes the zoom first, then expresses the distance as percent of the
    label dimension.
    """
    check_dpi(screen_dpi)
    if zoom <= 0:
        raise ValueError(f"zoom must be > 0; got {zoom}")
    px_per_inch = screen_dpi * zoom
    return (
        dx / px_per_inch / size.width * 100.0,
        dy / px_per_inch / size.height * 100.0,
    )
