from __future__ import annotations

import itertools
import uuid
from dataclasses import dataclass, field, fields, replace
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from .exceptions import InvalidGridSizeError


# Geometry is stored in design units: percent of the label width for x,
# width and x2; percent of the label height for y, height and y2.

LABEL_CATEGORIES = ("shipping", "product", "location", "pallet", "custom")
UNITS = ("inches", "mm")

FONT_WEIGHTS = ("normal", "medium", "semibold", "bold")
TEXT_ALIGNS = ("left", "center", "right")
SYMBOLOGIES = ("CODE128", "CODE39", "EAN13", "UPC")
TEXT_POSITIONS = ("top", "bottom")
QR_LEVELS = ("L", "M", "Q", "H")
OBJECT_FITS = ("contain", "cover", "fill")
SHAPE_TYPES = ("rectangle", "circle", "rounded-rectangle")
STROKE_STYLES = ("solid", "dashed", "dotted")


def _check_choice(name: str, value: Any, allowed: Tuple[str, ...]) -> None:
    if value not in allowed:
        raise ValueError(f"{name} must be one of {', '.join(allowed)}; got {value!r}")


def _check_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number; got {value!r}")


def _check_str(name: str, value: Any, optional: bool = False) -> None:
    if optional and value is None:
        return
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string; got {value!r}")


# ---------- Element ids ----------

_ID_SEQUENCE = itertools.count(1)


def new_element_id() -> str:
    """Process-unique element id: monotonic counter plus a random suffix."""
    return f"element-{next(_ID_SEQUENCE)}-{uuid.uuid4().hex[:9]}"


# ---------- Element variants ----------

@dataclass(frozen=True, kw_only=True)
class _ElementBase:
    id: str
    x: float = 5.0
    y: float = 5.0
    width: float = 50.0
    height: float = 25.0
    rotation: float = 0.0           # render-time only, geometry ignores it
    locked: bool = False
    visible: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"element id must be a non-empty string; got {self.id!r}")
        for name in ("x", "y", "width", "height", "rotation"):
            _check_number(name, getattr(self, name))


@dataclass(frozen=True, kw_only=True)
class TextElement(_ElementBase):
    type: ClassVar[str] = "text"

    content: str = "Label Text"
    font_size: float = 14.0         # points
    font_family: str = "Arial"
    font_weight: str = "normal"
    color: str = "#000000"
    align: str = "left"
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None
    is_variable: bool = False
    data_field: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_number("font_size", self.font_size)
        for name in ("content", "font_family", "color"):
            _check_str(name, getattr(self, name))
        _check_str("data_field", self.data_field, optional=True)
        _check_choice("font_weight", self.font_weight, FONT_WEIGHTS)
        _check_choice("align", self.align, TEXT_ALIGNS)


@dataclass(frozen=True, kw_only=True)
class BarcodeElement(_ElementBase):
    type: ClassVar[str] = "barcode"

    y: float = 35.0
    width: float = 70.0
    height: float = 40.0
    value: str = "123456789"
    symbology: str = field(default="CODE128", metadata={"json": "format"})
    show_text: bool = True
    text_position: str = "bottom"
    is_variable: bool = False
    data_field: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_str("value", self.value)
        _check_str("data_field", self.data_field, optional=True)
        _check_choice("symbology", self.symbology, SYMBOLOGIES)
        _check_choice("text_position", self.text_position, TEXT_POSITIONS)


@dataclass(frozen=True, kw_only=True)
class QRCodeElement(_ElementBase):
    type: ClassVar[str] = "qrcode"

    width: float = 25.0
    height: float = 25.0
    value: str = "https://example.com"
    error_correction_level: str = "M"
    is_variable: bool = False
    data_field: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_str("value", self.value)
        _check_str("data_field", self.data_field, optional=True)
        _check_choice("error_correction_level", self.error_correction_level, QR_LEVELS)


@dataclass(frozen=True, kw_only=True)
class ImageElement(_ElementBase):
    type: ClassVar[str] = "image"

    width: float = 25.0
    height: float = 25.0
    src: str = "/placeholder-logo.png"
    object_fit: str = "contain"

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_str("src", self.src)
        _check_choice("object_fit", self.object_fit, OBJECT_FITS)


@dataclass(frozen=True, kw_only=True)
class ShapeElement(_ElementBase):
    type: ClassVar[str] = "shape"

    height: float = 30.0
    shape_type: str = "rectangle"
    fill: str = "transparent"
    stroke: str = "#000000"
    stroke_width: float = 2.0       # points
    corner_radius: float = 0.0      # points, rounded-rectangle only

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_str("fill", self.fill)
        _check_str("stroke", self.stroke)
        _check_choice("shape_type", self.shape_type, SHAPE_TYPES)
        _check_number("stroke_width", self.stroke_width)
        _check_number("corner_radius", self.corner_radius)


@dataclass(frozen=True, kw_only=True)
class LineElement(_ElementBase):
    """
    A line from (x, y) to (x2, y2).

    width/height are always derived from the endpoints; values passed in
    are overwritten.
    """
    type: ClassVar[str] = "line"

    x2: float = 55.0
    y2: float = 5.0
    stroke: str = "#000000"
    stroke_width: float = 2.0       # points
    stroke_style: str = "solid"

    def __post_init__(self) -> None:
        _check_number("x2", self.x2)
        _check_number("y2", self.y2)
        object.__setattr__(self, "width", abs(self.x2 - self.x))
        object.__setattr__(self, "height", abs(self.y2 - self.y))
        super().__post_init__()
        _check_str("stroke", self.stroke)
        _check_number("stroke_width", self.stroke_width)
        _check_choice("stroke_style", self.stroke_style, STROKE_STYLES)


Element = Union[TextElement, BarcodeElement, QRCodeElement, ImageElement, ShapeElement, LineElement]

ELEMENT_TYPES: Dict[str, type] = {
    cls.type: cls
    for cls in (TextElement, BarcodeElement, QRCodeElement, ImageElement, ShapeElement, LineElement)
}

BOUND_ELEMENT_TYPES = (TextElement, BarcodeElement, QRCodeElement)


def json_key(f) -> str:
    """JSON key for a dataclass field: explicit override, else camelCase."""
    override = f.metadata.get("json")
    if override:
        return override
    head, *rest = f.name.split("_")
    return head + "".join(part.title() for part in rest)


# ---------- Element construction ----------

def create_element(kind: str, **fields_: Any) -> Element:
    """
    Build a complete element of *kind* with a fresh id.

    Anything not supplied falls back to the toolbar defaults of that kind.
    """
    cls = ELEMENT_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown element type {kind!r}")
    if "id" in fields_:
        raise ValueError("Element ids are assigned on creation and cannot be supplied")
    return cls(id=new_element_id(), **fields_)


def modify_element(element: Element, **changes: Any) -> Element:
    """Return a copy of *element* with *changes* applied. id and type are fixed."""
    if "id" in changes or "type" in changes:
        raise ValueError("Element id and type cannot be changed")
    return replace(element, **changes)


def clone_element(element: Element, dx: float = 0.0, dy: float = 0.0) -> Element:
    """Copy *element* under a new id, optionally offset by (dx, dy)."""
    changes: Dict[str, Any] = {"id": new_element_id(), "x": element.x + dx, "y": element.y + dy}
    if isinstance(element, LineElement):
        changes["x2"] = element.x2 + dx
        changes["y2"] = element.y2 + dy
    return replace(element, **changes)


def element_spec(element: Element) -> Dict[str, Any]:
    """Keyword form of *element* without its id, as stored by templates."""
    spec: Dict[str, Any] = {"type": element.type}
    for f in fields(element):
        if f.name != "id":
            spec[f.name] = getattr(element, f.name)
    return spec


# ---------- Label size / settings ----------

@dataclass(frozen=True)
class LabelSize:
    name: str
    width: float            # inches
    height: float           # inches
    category: str = "custom"

    def __post_init__(self) -> None:
        _check_number("width", self.width)
        _check_number("height", self.height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Label size must be positive; got {self.width}x{self.height}")
        _check_choice("category", self.category, LABEL_CATEGORIES)


STANDARD_LABEL_SIZES: Tuple[LabelSize, ...] = (
    LabelSize("4×6 Shipping", 4, 6, "shipping"),
    LabelSize("4×6¼ Shipping", 4, 6.25, "shipping"),
    LabelSize("2×4 Product", 2, 4, "product"),
    LabelSize("3×2 Product", 3, 2, "product"),
    LabelSize("2×2 Square", 2, 2, "product"),
    LabelSize("2×1 Small", 2, 1, "location"),
    LabelSize("1×3 Narrow", 1, 3, "location"),
    LabelSize("3×1 Wide", 3, 1, "location"),
    LabelSize("4×4 Pallet", 4, 4, "pallet"),
    LabelSize("4×6 Pallet", 4, 6, "pallet"),
)


def find_label_size(name: str) -> LabelSize:
    for size in STANDARD_LABEL_SIZES:
        if size.name == name:
            return size
    raise KeyError(name)


@dataclass(frozen=True)
class Settings:
    grid_size: float = 5.0
    show_grid: bool = True
    show_rulers: bool = True
    units: str = "inches"

    def __post_init__(self) -> None:
        _check_number("grid_size", self.grid_size)
        if self.grid_size <= 0:
            raise InvalidGridSizeError(f"grid_size must be > 0; got {self.grid_size}")
        _check_choice("units", self.units, UNITS)


# ---------- Document ----------

@dataclass(frozen=True)
class LabelDocument:
    size: LabelSize
    elements: Tuple[Element, ...] = ()     # paint order, last is topmost
    settings: Settings = field(default_factory=Settings)

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))
        seen = set()
        for el in self.elements:
            if el.id in seen:
                raise ValueError(f"Duplicate element id {el.id!r}")
            seen.add(el.id)

    def element_ids(self) -> Tuple[str, ...]:
        return tuple(el.id for el in self.elements)

    def index_of(self, element_id: str) -> int:
        for i, el in enumerate(self.elements):
            if el.id == element_id:
                return i
        return -1

    def get_element(self, element_id: str) -> Optional[Element]:
        i = self.index_of(element_id)
        return self.elements[i] if i >= 0 else None
