# label_designer/core/templates.py
"""
Template library: named, reusable element sets.

Template elements are stored without ids (keyword specs, see
``models.element_spec``). Every instantiation builds brand new elements
through ``create_element``, so two instantiations never share an id.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Tuple

from .models import (
    Element,
    LabelDocument,
    LabelSize,
    create_element,
    element_spec,
    find_label_size,
)


@dataclass(frozen=True)
class LabelTemplate:
    id: str
    name: str
    description: str
    category: str
    size: LabelSize
    elements: Tuple[Mapping[str, Any], ...] = ()


def instantiate_template(template: LabelTemplate) -> Tuple[List[Element], LabelSize]:
    """Fresh elements for *template*, plus the size it was designed for."""
    elements = []
    for spec in template.elements:
        kwargs = dict(spec)
        kind = kwargs.pop("type")
        kwargs.pop("id", None)
        elements.append(create_element(kind, **kwargs))
    return elements, template.size


def apply_template(document: LabelDocument, template: LabelTemplate, merge: bool = False) -> LabelDocument:
    """
    Replace the document content with *template* (size included), or with
    ``merge=True`` stack the template elements on top of the current ones
    and keep the current size.
    """
    elements, size = instantiate_template(template)
    if merge:
        return replace(document, elements=document.elements + tuple(elements))
    return replace(document, size=size, elements=tuple(elements))


def template_from_document(
    document: LabelDocument,
    template_id: str,
    name: str,
    description: str = "",
    category: str = "custom",
) -> LabelTemplate:
    return LabelTemplate(
        id=template_id,
        name=name,
        description=description,
        category=category,
        size=document.size,
        elements=tuple(element_spec(el) for el in document.elements),
    )


# ---------------------------------------------------------------------------
# Built-in templates (geometry in percent of the label)
# ---------------------------------------------------------------------------

def _text(x, y, w, h, content, size, weight="normal", align="left", color="#000000", field=None) -> Dict[str, Any]:
    spec: Dict[str, Any] = {
        "type": "text", "x": x, "y": y, "width": w, "height": h,
        "content": content, "font_size": size, "font_family": "Arial",
        "font_weight": weight, "color": color, "align": align,
    }
    if field:
        spec.update(is_variable=True, data_field=field)
    return spec


def _hline(x, y, x2, stroke_width=2.0) -> Dict[str, Any]:
    return {"type": "line", "x": x, "y": y, "x2": x2, "y2": y, "stroke": "#000000", "stroke_width": stroke_width}


TEMPLATES: Tuple[LabelTemplate, ...] = (
    LabelTemplate(
        id="location-basic",
        name="Basic Location Label",
        description="Simple location code with barcode",
        category="location",
        size=find_label_size("2×1 Small"),
        elements=(
            _text(5, 15, 90, 26, "Location Code", 18, weight="bold", align="center", field="location.full"),
            {
                "type": "barcode", "x": 5, "y": 47, "width": 90, "height": 42,
                "value": "WH01A01S0101", "symbology": "CODE128", "show_text": False,
                "text_position": "bottom", "is_variable": True, "data_field": "location.full",
            },
        ),
    ),
    LabelTemplate(
        id="product-standard",
        name="Product Label",
        description="Product name, SKU, and barcode",
        category="product",
        size=find_label_size("2×4 Product"),
        elements=(
            _text(5, 2.5, 90, 8, "Product Name", 16, weight="bold", field="product.name"),
            _text(5, 11.5, 90, 5, "SKU", 12, color="#666666", field="product.sku"),
            {
                "type": "barcode", "x": 5, "y": 21, "width": 90, "height": 15.5,
                "value": "123456789012", "symbology": "CODE128", "show_text": True,
                "text_position": "bottom", "is_variable": True, "data_field": "product.barcode",
            },
            _text(5, 39, 45, 5, "Qty: {{inventory.quantity}}", 11, field="inventory.quantity"),
            _text(52, 39, 45, 5, "Lot: {{inventory.lot}}", 11, align="right", field="inventory.lot"),
        ),
    ),
    LabelTemplate(
        id="pallet-comprehensive",
        name="Pallet Label",
        description="Complete pallet information with QR code",
        category="pallet",
        size=find_label_size("4×4 Pallet"),
        elements=(
            _text(5, 5, 90, 10, "Pallet Number", 24, weight="bold", align="center", field="pallet.number"),
            _hline(5, 18, 95),
            {
                "type": "qrcode", "x": 5, "y": 23, "width": 30, "height": 30,
                "value": "PAL-20240115-001", "error_correction_level": "M",
                "is_variable": True, "data_field": "pallet.number",
            },
            _text(42, 23, 25, 7, "Location:", 14, weight="bold"),
            _text(67, 23, 28, 7, "{{location.full}}", 14, field="location.full"),
            _text(42, 31, 25, 7, "Weight:", 14, weight="bold"),
            _text(67, 31, 28, 7, "{{pallet.weight}}", 14, field="pallet.weight"),
            _text(42, 39, 25, 7, "Status:", 14, weight="bold"),
            _text(67, 39, 28, 7, "{{pallet.status}}", 14, field="pallet.status"),
            _hline(5, 60, 95),
            _text(5, 62, 45, 5, "Date: {{system.date}}", 12, color="#666666", field="system.date"),
            _text(52, 62, 45, 5, "User: {{system.user}}", 12, align="right", color="#666666", field="system.user"),
        ),
    ),
    LabelTemplate(
        id="shipping-standard",
        name="Shipping Label",
        description="Standard 4x6 shipping label format",
        category="shipping",
        size=find_label_size("4×6 Shipping"),
        elements=(
            {
                "type": "shape", "x": 2.5, "y": 2, "width": 95, "height": 96,
                "shape_type": "rectangle", "stroke": "#000000", "stroke_width": 2.0,
                "fill": "transparent",
            },
            _text(5, 3.5, 90, 5, "SHIPPING LABEL", 20, weight="bold", align="center"),
            _hline(5, 10.5, 95, stroke_width=1.0),
        ),
    ),
)


def get_template(template_id: str) -> LabelTemplate:
    for t in TEMPLATES:
        if t.id == template_id:
            return t
    raise KeyError(template_id)


def templates_by_category() -> Dict[str, List[LabelTemplate]]:
    grouped: Dict[str, List[LabelTemplate]] = {}
    for t in TEMPLATES:
        grouped.setdefault(t.category, []).append(t)
    return grouped
