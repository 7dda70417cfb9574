# label_designer/core/document.py
"""
Document transitions: add, update, delete, duplicate, move, align,
distribute, z-order, size and grid settings.

Every function takes a LabelDocument and returns a new one. An unknown
element id returns the document unchanged, since it is reachable from
normal UI states (e.g. a stale selection after delete).

Locked elements are never moved by move / align / distribute.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Optional, Sequence

from .geometry import align_elements, distribute_elements, snap_to_grid, translate_element
from .models import (
    Element,
    LabelDocument,
    LabelSize,
    Settings,
    clone_element,
    find_label_size,
    modify_element,
)

logger = logging.getLogger(__name__)

DEFAULT_LABEL_SIZE = "2×1 Small"
DUPLICATE_OFFSET = 2.5      # design units


def new_document(size: Optional[LabelSize] = None, settings: Optional[Settings] = None) -> LabelDocument:
    return LabelDocument(
        size=size or find_label_size(DEFAULT_LABEL_SIZE),
        elements=(),
        settings=settings or Settings(),
    )


def _with_elements(document: LabelDocument, elements: Iterable[Element]) -> LabelDocument:
    return replace(document, elements=tuple(elements))


# ---------------------------------------------------------------------------
# Add / update / delete / duplicate
# ---------------------------------------------------------------------------

def add_element(document: LabelDocument, element: Element) -> LabelDocument:
    """Append *element* on top of the paint order."""
    return _with_elements(document, document.elements + (element,))


def update_element(document: LabelDocument, element_id: str, **changes: Any) -> LabelDocument:
    i = document.index_of(element_id)
    if i < 0:
        logger.debug("update_element: no element %r", element_id)
        return document
    elements = list(document.elements)
    elements[i] = modify_element(elements[i], **changes)
    return _with_elements(document, elements)


def delete_element(document: LabelDocument, element_id: str) -> LabelDocument:
    if document.index_of(element_id) < 0:
        return document
    return _with_elements(document, (el for el in document.elements if el.id != element_id))


def duplicate_element(
    document: LabelDocument,
    element_id: str,
    offset: float = DUPLICATE_OFFSET,
) -> LabelDocument:
    """Append a copy of the element, shifted by *offset* on both axes."""
    source = document.get_element(element_id)
    if source is None:
        return document
    return add_element(document, clone_element(source, offset, offset))


def clear_elements(document: LabelDocument) -> LabelDocument:
    return _with_elements(document, ())


def replace_elements(document: LabelDocument, updated: Iterable[Element]) -> LabelDocument:
    """Swap in *updated* elements by id, keeping paint order."""
    by_id = {el.id: el for el in updated}
    if not by_id:
        return document
    return _with_elements(document, (by_id.get(el.id, el) for el in document.elements))


# ---------------------------------------------------------------------------
# Move / align / distribute
# ---------------------------------------------------------------------------

def apply_move(document: LabelDocument, element_id: str, dx: float, dy: float) -> LabelDocument:
    """
    Apply one finished move gesture.

    With the grid shown, the element origin lands on the grid; line
    endpoints keep their offset from the origin.
    """
    element = document.get_element(element_id)
    if element is None or element.locked:
        return document

    new_x = element.x + dx
    new_y = element.y + dy
    if document.settings.show_grid:
        grid = document.settings.grid_size
        new_x = snap_to_grid(new_x, grid)
        new_y = snap_to_grid(new_y, grid)

    moved = translate_element(element, new_x - element.x, new_y - element.y)
    return replace_elements(document, [moved])


def _movable(document: LabelDocument, element_ids: Sequence[str]) -> list:
    wanted = set(element_ids)
    return [el for el in document.elements if el.id in wanted and not el.locked]


def align_selection(document: LabelDocument, element_ids: Sequence[str], mode: str) -> LabelDocument:
    return replace_elements(document, align_elements(_movable(document, element_ids), mode))


def distribute_selection(document: LabelDocument, element_ids: Sequence[str], direction: str) -> LabelDocument:
    return replace_elements(document, distribute_elements(_movable(document, element_ids), direction))


# ---------------------------------------------------------------------------
# Z-order
# ---------------------------------------------------------------------------

def bring_to_front(document: LabelDocument, element_id: str) -> LabelDocument:
    element = document.get_element(element_id)
    if element is None:
        return document
    rest = [el for el in document.elements if el.id != element_id]
    return _with_elements(document, rest + [element])


def send_to_back(document: LabelDocument, element_id: str) -> LabelDocument:
    element = document.get_element(element_id)
    if element is None:
        return document
    rest = [el for el in document.elements if el.id != element_id]
    return _with_elements(document, [element] + rest)


# ---------------------------------------------------------------------------
# Size / settings
# ---------------------------------------------------------------------------

def set_size(document: LabelDocument, size: LabelSize) -> LabelDocument:
    # geometry is percent-of-label, so elements keep their relative layout
    return replace(document, size=size)


def toggle_grid(document: LabelDocument) -> LabelDocument:
    return replace(document, settings=replace(document.settings, show_grid=not document.settings.show_grid))


def toggle_rulers(document: LabelDocument) -> LabelDocument:
    return replace(document, settings=replace(document.settings, show_rulers=not document.settings.show_rulers))


def set_grid_size(document: LabelDocument, grid_size: float) -> LabelDocument:
    """Raises InvalidGridSizeError for grid_size <= 0."""
    return replace(document, settings=replace(document.settings, grid_size=grid_size))


def set_units(document: LabelDocument, units: str) -> LabelDocument:
    return replace(document, settings=replace(document.settings, units=units))
