from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from PySide6.QtCore import QSettings

from .exceptions import PrinterConfigError

logger = logging.getLogger(__name__)

# Common printer resolutions. The compiler never assumes one of these;
# callers pick a profile and pass its dpi.
DPI_PRESETS: Dict[str, int] = {
    "thermal-203": 203,
    "thermal-300": 300,
    "laser-600": 600,
}

SETTINGS_KEY = "printer_profiles"


@dataclass
class PrinterProfile:
    """
    A named printer target.

    - name: what shows up in the UI ("Dock 3 Zebra", "Office laser")
    - dpi: output resolution handed to compile_for_print
    - config: free-form host settings (queue name, media, darkness...)
    """
    name: str = "Default"
    dpi: int = DPI_PRESETS["thermal-203"]
    config: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.dpi, bool) or not isinstance(self.dpi, int) or self.dpi <= 0:
            raise PrinterConfigError(f"Printer {self.name!r}: dpi must be a positive integer; got {self.dpi!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrinterProfile":
        name = data.get("name", "Unnamed")
        dpi = data.get("dpi", DPI_PRESETS["thermal-203"])
        cfg = data.get("config", {}) or {}
        return cls(name=name, dpi=dpi, config=cfg)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "dpi": self.dpi,
            "config": self.config or {},
        }


def default_profiles() -> List[PrinterProfile]:
    return [
        PrinterProfile(name="Thermal 203 dpi", dpi=DPI_PRESETS["thermal-203"]),
        PrinterProfile(name="Thermal 300 dpi", dpi=DPI_PRESETS["thermal-300"]),
        PrinterProfile(name="Laser 600 dpi", dpi=DPI_PRESETS["laser-600"]),
    ]


def _settings(path: Optional[str] = None) -> QSettings:
    # An explicit path keeps profiles in an INI file (tests, portable installs).
    if path:
        return QSettings(str(path), QSettings.Format.IniFormat)
    return QSettings("LabelDesigner", "LabelDesigner")


def load_profiles(path: Optional[str] = None) -> List[PrinterProfile]:
    """
    Load printer profiles from QSettings.

    Falls back to default_profiles() when nothing is stored yet or the
    stored value cannot be read.
    """
    s = _settings(path)
    raw = s.value(SETTINGS_KEY, "", type=str)

    if raw:
        try:
            arr = json.loads(raw)
            profiles = [PrinterProfile.from_dict(d) for d in arr]
            if profiles:
                return profiles
        except (ValueError, TypeError, AttributeError, PrinterConfigError) as e:
            logger.warning("Ignoring unreadable printer profiles: %s", e)

    return default_profiles()


def save_profiles(profiles: List[PrinterProfile], path: Optional[str] = None) -> None:
    """
    Persist printer profiles to QSettings as JSON.
    """
    s = _settings(path)
    raw = json.dumps([p.to_dict() for p in profiles], indent=2)
    s.setValue(SETTINGS_KEY, raw)
    s.sync()


def find_profile(profiles: List[PrinterProfile], name: str) -> PrinterProfile:
    for p in profiles:
        if p.name == name:
            return p
    raise PrinterConfigError(f"No printer profile named {name!r}")
