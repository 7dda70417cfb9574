# label_designer/core/serialization.py
"""
Label design export / import.

File format::

    {
      "size": {"name", "width", "height", "category"},
      "elements": [{"type": "...", "id": "...", ...}],
      "settings": {"gridSize", "showGrid", "showRulers", "units"}
    }

``import_label_design`` never raises on bad input; it returns ``None`` so the
caller can show one "invalid design file" message.
"""
from __future__ import annotations

import json
import logging
from dataclasses import fields
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import DocumentFormatError
from .models import (
    ELEMENT_TYPES,
    Element,
    LabelDocument,
    LabelSize,
    Settings,
    json_key,
)

logger = logging.getLogger(__name__)

_SETTINGS_KEYS = {
    "gridSize": "grid_size",
    "showGrid": "show_grid",
    "showRulers": "show_rulers",
    "units": "units",
}


# ---------- elements ----------

def element_to_dict(element: Element) -> Dict[str, Any]:
    data: Dict[str, Any] = {"type": element.type}
    for f in fields(element):
        value = getattr(element, f.name)
        if value is None:
            continue
        data[json_key(f)] = value
    return data


def element_from_dict(data: Mapping[str, Any]) -> Element:
    if not isinstance(data, Mapping):
        raise DocumentFormatError(f"Element entry must be an object; got {type(data).__name__}")

    kind = data.get("type")
    cls = ELEMENT_TYPES.get(kind)
    if cls is None:
        raise DocumentFormatError(f"Unknown element type {kind!r}")

    names = {json_key(f): f.name for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "type":
            continue
        name = names.get(key)
        if name is None:
            logger.debug("Ignoring unknown %s element key %r", kind, key)
            continue
        kwargs[name] = value

    if "id" not in kwargs:
        raise DocumentFormatError(f"{kind} element has no id")
    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise DocumentFormatError(f"Invalid {kind} element {kwargs.get('id')!r}: {e}") from e


# ---------- size / settings ----------

def size_to_dict(size: LabelSize) -> Dict[str, Any]:
    return {
        "name": size.name,
        "width": size.width,
        "height": size.height,
        "category": size.category,
    }


def size_from_dict(data: Mapping[str, Any]) -> LabelSize:
    if not isinstance(data, Mapping):
        raise DocumentFormatError("size must be an object")
    try:
        return LabelSize(
            name=str(data.get("name", "Custom")),
            width=data["width"],
            height=data["height"],
            category=data.get("category", "custom"),
        )
    except KeyError as e:
        raise DocumentFormatError(f"size is missing {e.args[0]!r}") from e
    except (TypeError, ValueError) as e:
        raise DocumentFormatError(f"Invalid size: {e}") from e


def settings_to_dict(settings: Settings) -> Dict[str, Any]:
    return {key: getattr(settings, name) for key, name in _SETTINGS_KEYS.items()}


def settings_from_dict(data: Optional[Mapping[str, Any]]) -> Settings:
    if data is None:
        return Settings()
    if not isinstance(data, Mapping):
        raise DocumentFormatError("settings must be an object")
    kwargs = {name: data[key] for key, name in _SETTINGS_KEYS.items() if key in data}
    try:
        return Settings(**kwargs)
    except (TypeError, ValueError) as e:
        raise DocumentFormatError(f"Invalid settings: {e}") from e


# ---------- document ----------

def document_to_dict(document: LabelDocument) -> Dict[str, Any]:
    return {
        "size": size_to_dict(document.size),
        "elements": [element_to_dict(el) for el in document.elements],
        "settings": settings_to_dict(document.settings),
    }


def document_from_dict(data: Mapping[str, Any]) -> LabelDocument:
    if not isinstance(data, Mapping):
        raise DocumentFormatError("Design must be a JSON object")
    if not data.get("size"):
        raise DocumentFormatError("Design has no size")
    raw_elements = data.get("elements")
    if not isinstance(raw_elements, list):
        raise DocumentFormatError("Design elements must be a list")

    size = size_from_dict(data["size"])
    elements = [element_from_dict(d) for d in raw_elements]
    settings = settings_from_dict(data.get("settings"))
    try:
        return LabelDocument(size=size, elements=tuple(elements), settings=settings)
    except ValueError as e:
        raise DocumentFormatError(str(e)) from e


def export_label_design(document: LabelDocument) -> str:
    return json.dumps(document_to_dict(document), indent=2, ensure_ascii=False)


def import_label_design(text: Union[str, bytes]) -> Optional[LabelDocument]:
    """
    Parse a design produced by ``export_label_design``.

    Returns None when the text is not JSON, has no ``size``, has no
    ``elements`` list, or describes invalid elements/settings.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        logger.warning("Rejected label design: not valid JSON (%s)", e)
        return None

    try:
        return document_from_dict(data)
    except DocumentFormatError as e:
        logger.warning("Rejected label design: %s", e)
        return None
