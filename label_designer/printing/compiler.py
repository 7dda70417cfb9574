# label_designer/printing/compiler.py
"""
Print format compiler: project a label design into device pixels.

``compile_for_print`` is pure. Call it once per target resolution (screen
preview, 203 dpi thermal, 600 dpi laser...) against the same source
document.

Point-based sizes (font size, stroke width, corner radius, letter
spacing) become pixels via ``pt * dpi / 72``; line height is a multiplier
and is left alone.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core.barcodes import qr_module_count, validate_barcode_data
from ..core.binding import resolve_document
from ..core.exceptions import BarcodeValidationError
from ..core.geometry import get_element_bounds
from ..core.models import (
    BarcodeElement,
    Element,
    ImageElement,
    LabelDocument,
    LabelSize,
    LineElement,
    QRCodeElement,
    ShapeElement,
    TextElement,
)
from ..core.serialization import element_to_dict, size_to_dict
from .exceptions import PrinterConfigError
from .units import canvas_size, check_dpi, design_to_inches, inches_to_pixels, points_to_pixels

logger = logging.getLogger(__name__)

# Below this many device pixels per QR module most scanners give up.
MIN_QR_MODULE_PX = 2

# Print sheet limits offered by the print dialog.
MAX_COPIES = 100
MAX_LABELS_PER_ROW = 4
MAX_SHEET_MARGIN = 50


@dataclass(frozen=True)
class PrintDocument:
    """A label in device pixels, ready for the external renderer."""
    dpi: float
    width: int
    height: int
    size: LabelSize
    elements: Tuple[Element, ...]

    @property
    def printable_elements(self) -> Tuple[Element, ...]:
        return tuple(el for el in self.elements if el.visible)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dpi": self.dpi,
            "width": self.width,
            "height": self.height,
            "size": size_to_dict(self.size),
            "elements": [element_to_dict(el) for el in self.printable_elements],
        }


@dataclass(frozen=True)
class PrintWarning:
    element_id: str
    message: str


def compile_element(element: Element, size: LabelSize, dpi: float) -> Element:
    def px_x(value: float) -> int:
        return inches_to_pixels(design_to_inches(value, size.width), dpi)

    def px_y(value: float) -> int:
        return inches_to_pixels(design_to_inches(value, size.height), dpi)

    if isinstance(element, LineElement):
        # width/height follow from the compiled endpoints
        return replace(
            element,
            x=px_x(element.x),
            y=px_y(element.y),
            x2=px_x(element.x2),
            y2=px_y(element.y2),
            stroke_width=points_to_pixels(element.stroke_width, dpi),
        )

    changes: Dict[str, Any] = {
        "x": px_x(element.x),
        "y": px_y(element.y),
        "width": px_x(element.width),
        "height": px_y(element.height),
    }
    if isinstance(element, TextElement):
        changes["font_size"] = points_to_pixels(element.font_size, dpi)
        if element.letter_spacing is not None:
            changes["letter_spacing"] = points_to_pixels(element.letter_spacing, dpi)
    elif isinstance(element, ShapeElement):
        changes["stroke_width"] = points_to_pixels(element.stroke_width, dpi)
        changes["corner_radius"] = points_to_pixels(element.corner_radius, dpi)
    elif not isinstance(element, (BarcodeElement, QRCodeElement, ImageElement)):
        raise TypeError(f"Unsupported element {element!r}")
    return replace(element, **changes)


def compile_for_print(document: LabelDocument, dpi: float) -> PrintDocument:
    """Express every element of *document* in device pixels at *dpi*."""
    check_dpi(dpi)
    width, height = canvas_size(document.size, dpi)
    elements = tuple(compile_element(el, document.size, dpi) for el in document.elements)
    logger.debug("compiled %d element(s) at %s dpi -> %dx%d px", len(elements), dpi, width, height)
    return PrintDocument(dpi=dpi, width=width, height=height, size=document.size, elements=elements)


def render_for_print(
    document: LabelDocument,
    dpi: float,
    context: Optional[Mapping[str, Any]] = None,
) -> PrintDocument:
    """Resolve data bindings against *context*, then compile at *dpi*."""
    return compile_for_print(resolve_document(document, context), dpi)


def check_print_document(print_doc: PrintDocument) -> List[PrintWarning]:
    """
    Advisory checks on a compiled label: scan-code data that will not
    encode, QR modules too small to scan, elements running off the label.
    """
    warnings: List[PrintWarning] = []
    for el in print_doc.printable_elements:
        if isinstance(el, BarcodeElement):
            try:
                validate_barcode_data(el.symbology, el.value)
            except BarcodeValidationError as e:
                warnings.append(PrintWarning(el.id, str(e)))
        elif isinstance(el, QRCodeElement):
            try:
                modules = qr_module_count(el.value, el.error_correction_level)
            except BarcodeValidationError as e:
                warnings.append(PrintWarning(el.id, str(e)))
            else:
                module_px = min(el.width, el.height) / float(modules)
                if module_px < MIN_QR_MODULE_PX:
                    warnings.append(PrintWarning(
                        el.id,
                        f"QR modules are {module_px:.1f} px at {print_doc.dpi} dpi; "
                        f"at least {MIN_QR_MODULE_PX} px needed to scan reliably.",
                    ))

        b = get_element_bounds(el)
        if b.left < 0 or b.top < 0 or b.right > print_doc.width or b.bottom > print_doc.height:
            warnings.append(PrintWarning(el.id, "Element extends past the label edge."))
    return warnings


# ---------------------------------------------------------------------------
# Print sheet
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PrintSheet:
    """
    Several copies of one compiled label laid out in a grid.

    ``origins`` holds the top-left corner of each copy in sheet pixels,
    row by row. ``margin`` is both the sheet padding and the gap between
    copies.
    """
    label: PrintDocument
    copies: int
    labels_per_row: int
    margin: int
    width: int
    height: int
    origins: Tuple[Tuple[int, int], ...]

    @property
    def rows(self) -> int:
        return -(-self.copies // self.labels_per_row)


def _check_int_range(name: str, value: int, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise PrinterConfigError(f"{name} must be an integer from {low} to {high}; got {value!r}")


def layout_sheet(
    print_doc: PrintDocument,
    copies: int = 1,
    labels_per_row: int = 1,
    margin: int = 10,
) -> PrintSheet:
    """
    Arrange *copies* of *print_doc* on a sheet, *labels_per_row* across.

    One label per row suits roll-fed thermal printers; 2-4 per row suits
    letter/A4 sheets. All distances are device pixels at the label's dpi.
    """
    _check_int_range("copies", copies, 1, MAX_COPIES)
    _check_int_range("labels_per_row", labels_per_row, 1, MAX_LABELS_PER_ROW)
    _check_int_range("margin", margin, 0, MAX_SHEET_MARGIN)

    columns = min(labels_per_row, copies)
    rows = -(-copies // labels_per_row)
    step_x = print_doc.width + margin
    step_y = print_doc.height + margin

    origins = tuple(
        (margin + (i % labels_per_row) * step_x, margin + (i // labels_per_row) * step_y)
        for i in range(copies)
    )
    width = 2 * margin + columns * print_doc.width + (columns - 1) * margin
    height = 2 * margin + rows * print_doc.height + (rows - 1) * margin
    logger.debug("sheet: %d copies, %d per row -> %dx%d px", copies, labels_per_row, width, height)
    return PrintSheet(
        label=print_doc,
        copies=copies,
        labels_per_row=labels_per_row,
        margin=margin,
        width=width,
        height=height,
        origins=origins,
    )
