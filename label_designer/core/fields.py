"""
Catalogue of the data fields a label can bind to.

Used to populate pickers and to flag bindings that point at unknown keys.
The model never enforces membership.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .binding import used_data_fields
from .models import LabelDocument

DATA_FIELD_CATEGORIES = ("location", "product", "pallet", "inventory", "system")


@dataclass(frozen=True)
class DataField:
    key: str          # dotted path, e.g. "product.sku"
    label: str
    category: str
    example: str


AVAILABLE_DATA_FIELDS: Tuple[DataField, ...] = (
    # location
    DataField("location.full", "Full Location Code", "location", "WH01-A01-S01-01"),
    DataField("location.warehouse", "Warehouse Code", "location", "WH01"),
    DataField("location.aisle", "Aisle Code", "location", "A01"),
    DataField("location.shelf", "Shelf Code", "location", "S01"),
    DataField("location.slot", "Slot Code", "location", "01"),
    DataField("location.zone", "Zone", "location", "Storage"),
    # product
    DataField("product.sku", "Product SKU", "product", "SKU-12345"),
    DataField("product.name", "Product Name", "product", "Widget Pro Max"),
    DataField("product.barcode", "Product Barcode", "product", "123456789012"),
    DataField("product.category", "Product Category", "product", "Electronics"),
    # pallet
    DataField("pallet.number", "Pallet Number", "pallet", "PAL-20240115-001"),
    DataField("pallet.status", "Pallet Status", "pallet", "Stored"),
    DataField("pallet.weight", "Pallet Weight", "pallet", "500 kg"),
    # inventory
    DataField("inventory.quantity", "Quantity", "inventory", "100"),
    DataField("inventory.lot", "Lot Number", "inventory", "LOT-2024-001"),
    DataField("inventory.expiry", "Expiry Date", "inventory", "2025-12-31"),
    # system
    DataField("system.date", "Current Date", "system", "2024-01-15"),
    DataField("system.time", "Current Time", "system", "14:30"),
    DataField("system.datetime", "Date & Time", "system", "2024-01-15 14:30"),
    DataField("system.user", "Current User", "system", "John Doe"),
)


def find_data_field(key: str) -> Optional[DataField]:
    for f in AVAILABLE_DATA_FIELDS:
        if f.key == key:
            return f
    return None


def fields_by_category() -> Dict[str, List[DataField]]:
    grouped: Dict[str, List[DataField]] = {c: [] for c in DATA_FIELD_CATEGORIES}
    for f in AVAILABLE_DATA_FIELDS:
        grouped[f.category].append(f)
    return grouped


def sample_context(now: Optional[datetime.datetime] = None, user: str = "John Doe") -> Dict[str, Dict[str, Any]]:
    """
    Nested preview context built from the catalogue examples.

    System date/time fields reflect *now* (defaults to the current time).
    """
    now = now or datetime.datetime.now()
    context: Dict[str, Dict[str, Any]] = {c: {} for c in DATA_FIELD_CATEGORIES}
    for f in AVAILABLE_DATA_FIELDS:
        category, name = f.key.split(".", 1)
        context[category][name] = f.example

    context["system"].update(
        date=now.strftime("%Y-%m-%d"),
        time=now.strftime("%H:%M"),
        datetime=now.strftime("%Y-%m-%d %H:%M"),
        user=user,
    )
    return context


def unknown_bindings(document: LabelDocument) -> List[str]:
    """Paths used by *document* that are not in the catalogue."""
    known = {f.key for f in AVAILABLE_DATA_FIELDS}
    return [path for path in used_data_fields(document) if path not in known]
