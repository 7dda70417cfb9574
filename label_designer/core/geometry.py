# label_designer/core/geometry.py
"""
Geometry operations: grid snap, bounds, hit testing, translate, align,
distribute.

Everything here is pure. Functions take elements and return new ones;
nothing is mutated. Rotation is a render-time transform and is ignored by
all of the calculations below.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence

from .exceptions import InvalidGridSizeError
from .models import Element, LineElement

ALIGN_MODES = ("left", "center", "right", "top", "middle", "bottom")
DISTRIBUTE_DIRECTIONS = ("horizontal", "vertical")


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Bounds:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom


# ---------------------------------------------------------------------------
# Grid snapping
# ---------------------------------------------------------------------------

def snap_to_grid(value: float, grid_size: float) -> float:
    """Round *value* to the nearest multiple of *grid_size* (> 0)."""
    if grid_size <= 0:
        raise InvalidGridSizeError(f"grid_size must be > 0; got {grid_size}")
    # half-up, so x.5 steps always move the same way
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_point_to_grid(point: Point, grid_size: float) -> Point:
    return Point(snap_to_grid(point.x, grid_size), snap_to_grid(point.y, grid_size))


# ---------------------------------------------------------------------------
# Bounds / hit testing
# ---------------------------------------------------------------------------

def get_element_bounds(element: Element) -> Bounds:
    """
    Axis-aligned bounds of *element*.

    Lines span both endpoints whichever one is numerically smaller.
    """
    if isinstance(element, LineElement):
        return Bounds(
            left=min(element.x, element.x2),
            top=min(element.y, element.y2),
            right=max(element.x, element.x2),
            bottom=max(element.y, element.y2),
        )
    return Bounds(
        left=element.x,
        top=element.y,
        right=element.x + element.width,
        bottom=element.y + element.height,
    )


def is_point_in_element(point: Point, element: Element) -> bool:
    """Inclusive containment test against the element bounds."""
    return get_element_bounds(element).contains(point)


def element_at_point(point: Point, elements: Sequence[Element]) -> Optional[Element]:
    """Topmost visible element under *point* (last in paint order wins)."""
    for element in reversed(elements):
        if element.visible and is_point_in_element(point, element):
            return element
    return None


def selection_bounds(elements: Iterable[Element]) -> Optional[Bounds]:
    boxes = [get_element_bounds(el) for el in elements]
    if not boxes:
        return None
    return Bounds(
        left=min(b.left for b in boxes),
        top=min(b.top for b in boxes),
        right=max(b.right for b in boxes),
        bottom=max(b.bottom for b in boxes),
    )


# ---------------------------------------------------------------------------
# Translate
# ---------------------------------------------------------------------------

def translate_element(element: Element, dx: float, dy: float) -> Element:
    """Move *element* by (dx, dy); both endpoints move for lines."""
    if dx == 0 and dy == 0:
        return element
    if isinstance(element, LineElement):
        return replace(
            element,
            x=element.x + dx,
            y=element.y + dy,
            x2=element.x2 + dx,
            y2=element.y2 + dy,
        )
    return replace(element, x=element.x + dx, y=element.y + dy)


# ---------------------------------------------------------------------------
# Align / distribute
# ---------------------------------------------------------------------------

def align_elements(elements: Sequence[Element], mode: str) -> List[Element]:
    """
    Align *elements* to each other.

    left/top use the smallest left/top edge, right/bottom the largest
    right/bottom edge. center/middle use the average of each element's own
    center, not the center of the whole selection.

    Fewer than two elements is a no-op. Order is preserved.
    """
    if mode not in ALIGN_MODES:
        raise ValueError(f"Unknown align mode {mode!r}")

    items = list(elements)
    if len(items) < 2:
        return items

    bounds = [get_element_bounds(el) for el in items]
    n = float(len(bounds))

    if mode == "left":
        target = min(b.left for b in bounds)
        return [translate_element(el, target - b.left, 0) for el, b in zip(items, bounds)]
    if mode == "right":
        target = max(b.right for b in bounds)
        return [translate_element(el, target - b.right, 0) for el, b in zip(items, bounds)]
    if mode == "center":
        target = sum(b.center_x for b in bounds) / n
        return [translate_element(el, target - b.center_x, 0) for el, b in zip(items, bounds)]
    if mode == "top":
        target = min(b.top for b in bounds)
        return [translate_element(el, 0, target - b.top) for el, b in zip(items, bounds)]
    if mode == "bottom":
        target = max(b.bottom for b in bounds)
        return [translate_element(el, 0, target - b.bottom) for el, b in zip(items, bounds)]

    # middle
    target = sum(b.center_y for b in bounds) / n
    return [translate_element(el, 0, target - b.center_y) for el, b in zip(items, bounds)]


def distribute_elements(elements: Sequence[Element], direction: str) -> List[Element]:
    """
    Space *elements* so the gaps between consecutive ones are equal.

    The first and last elements (by leading edge) keep the outer extremes;
    the others are placed in order with gap = (span - total extent) / (n - 1).
    Fewer than three elements is a no-op. The result follows the input order.
    """
    if direction not in DISTRIBUTE_DIRECTIONS:
        raise ValueError(f"Unknown distribute direction {direction!r}")

    items = list(elements)
    if len(items) < 3:
        return items

    horizontal = direction == "horizontal"
    bounds = [get_element_bounds(el) for el in items]

    if horizontal:
        leads = [b.left for b in bounds]
        extents = [b.width for b in bounds]
        end = max(b.right for b in bounds)
    else:
        leads = [b.top for b in bounds]
        extents = [b.height for b in bounds]
        end = max(b.bottom for b in bounds)

    order = sorted(range(len(items)), key=lambda i: leads[i])
    start = leads[order[0]]
    gap = (end - start - sum(extents)) / (len(items) - 1)

    result = list(items)
    current = start
    for i in order:
        delta = current - leads[i]
        if horizontal:
            result[i] = translate_element(items[i], delta, 0)
        else:
            result[i] = translate_element(items[i], 0, delta)
        current += extents[i] + gap
    return result
