# label_designer/core/binding.py
"""
Data binding: resolve {{dotted.path}} tokens against a runtime data context.

The context is a plain nested mapping keyed by category, e.g.
``{"location": {"full": "WH01-A01-S01-01"}, "product": {...}}``.

Resolution never raises. A token whose path cannot be followed all the way
down stays in the output verbatim, braces included, so broken bindings show
up on the printed label.
"""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional, Set, Tuple

from .models import (
    BarcodeElement,
    Element,
    ImageElement,
    LabelDocument,
    LineElement,
    QRCodeElement,
    ShapeElement,
    TextElement,
)

logger = logging.getLogger(__name__)

# {{ path }}; the path itself is trimmed before lookup
TOKEN_PATTERN = re.compile(r"\{\{([^}]+)\}\}")
_SCAN_UNSAFE = re.compile(r"[^A-Za-z0-9]")

_MISSING = object()


def resolve_path(context: Optional[Mapping[str, Any]], path: str) -> Tuple[bool, Any]:
    """
    Walk *context* along the dot-separated *path*.

    Returns ``(True, value)`` when every step exists, else ``(False, None)``.
    A ``None`` value at any step counts as missing.
    """
    value: Any = context if context is not None else {}
    for key in path.strip().split("."):
        if not isinstance(value, Mapping):
            return False, None
        value = value.get(key, _MISSING)
        if value is _MISSING or value is None:
            return False, None
    return True, value


def format_value(value: Any) -> str:
    """
    Printable form of a context value.

    Booleans print lower case and whole floats drop the ".0", so
    ``True`` -> ``"true"`` and ``5.0`` -> ``"5"``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def replace_data_fields(text: str, context: Optional[Mapping[str, Any]]) -> str:
    """Substitute every resolvable {{path}} token in *text*."""
    if not text:
        return text

    def _sub(match: re.Match) -> str:
        found, value = resolve_path(context, match.group(1))
        return format_value(value) if found else match.group(0)

    return TOKEN_PATTERN.sub(_sub, text)


def sanitize_scan_value(value: Any) -> str:
    """Strip everything except ASCII letters and digits."""
    return _SCAN_UNSAFE.sub("", format_value(value))


def _binding_path(element: Element) -> Optional[str]:
    """Path of an explicit binding, or of a value that is a single {{token}}."""
    if element.is_variable and element.data_field:
        return element.data_field
    if isinstance(element, (BarcodeElement, QRCodeElement)):
        m = TOKEN_PATTERN.fullmatch(element.value.strip())
        if m:
            return m.group(1).strip()
    return None


def resolve_element(element: Element, context: Optional[Mapping[str, Any]]) -> Element:
    """
    Return *element* with its bound content filled in from *context*.

    - text: a bound element shows the value of its data field (or the
      literal token when missing); otherwise inline tokens in ``content``
      are templated.
    - barcode / qrcode: a bound value is resolved and sanitized for
      scanning; unresolved bindings keep the design-time value.
    - image / shape / line: unchanged.
    """
    if isinstance(element, TextElement):
        if element.is_variable and element.data_field:
            token = "{{" + element.data_field + "}}"
            return replace(element, content=replace_data_fields(token, context))
        if TOKEN_PATTERN.search(element.content):
            return replace(element, content=replace_data_fields(element.content, context))
        return element

    if isinstance(element, (BarcodeElement, QRCodeElement)):
        path = _binding_path(element)
        if path is None:
            return element
        found, value = resolve_path(context, path)
        if not found:
            logger.debug("Unresolved %s binding %r on %s", element.type, path, element.id)
            return element
        return replace(element, value=sanitize_scan_value(value))

    if isinstance(element, (ImageElement, ShapeElement, LineElement)):
        return element

    raise TypeError(f"Unsupported element {element!r}")


def resolve_document(document: LabelDocument, context: Optional[Mapping[str, Any]]) -> LabelDocument:
    return replace(document, elements=tuple(resolve_element(el, context) for el in document.elements))


# ---------------------------------------------------------------------------
# Field usage
# ---------------------------------------------------------------------------

def _element_paths(element: Element) -> Iterable[str]:
    if isinstance(element, TextElement):
        for m in TOKEN_PATTERN.finditer(element.content):
            yield m.group(1).strip()
    if isinstance(element, (TextElement, BarcodeElement, QRCodeElement)):
        path = _binding_path(element)
        if path:
            yield path


def used_data_fields(document: LabelDocument) -> List[str]:
    """Sorted, unique data-field paths referenced anywhere in *document*."""
    used: Set[str] = set()
    for element in document.elements:
        used.update(_element_paths(element))
    return sorted(used)


def unresolved_data_fields(document: LabelDocument, context: Optional[Mapping[str, Any]]) -> List[str]:
    """Referenced paths that *context* cannot satisfy."""
    return [path for path in used_data_fields(document) if not resolve_path(context, path)[0]]
