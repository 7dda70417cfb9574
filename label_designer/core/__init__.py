# label_designer/core/__init__.py
"""
Pure label model and editing operations.

Re-exports only; implementations live in sibling modules.
"""
from .models import (
    BarcodeElement,
    Element,
    ImageElement,
    LabelDocument,
    LabelSize,
    LineElement,
    QRCodeElement,
    STANDARD_LABEL_SIZES,
    Settings,
    ShapeElement,
    TextElement,
    clone_element,
    create_element,
    modify_element,
)
from .geometry import (
    Bounds,
    Point,
    align_elements,
    distribute_elements,
    get_element_bounds,
    is_point_in_element,
    snap_to_grid,
)
from .binding import replace_data_fields, resolve_document
from .serialization import export_label_design, import_label_design
from .templates import TEMPLATES, LabelTemplate, instantiate_template

__all__ = [
    "BarcodeElement",
    "Element",
    "ImageElement",
    "LabelDocument",
    "LabelSize",
    "LineElement",
    "QRCodeElement",
    "STANDARD_LABEL_SIZES",
    "Settings",
    "ShapeElement",
    "TextElement",
    "clone_element",
    "create_element",
    "modify_element",
    "Bounds",
    "Point",
    "align_elements",
    "distribute_elements",
    "get_element_bounds",
    "is_point_in_element",
    "snap_to_grid",
    "replace_data_fields",
    "resolve_document",
    "export_label_design",
    "import_label_design",
    "TEMPLATES",
    "LabelTemplate",
    "instantiate_template",
]
