from __future__ import annotations

"""
Scan-code data validation.

Drawing bars and modules is the renderer's job; this module only answers
"will this value encode?" for the symbologies a label element can carry,
and how many modules a QR code needs (via the `qrcode` package).
"""

from typing import Dict

import qrcode
from qrcode.exceptions import DataOverflowError

from .exceptions import BarcodeValidationError

QR_CORRECTION_MAPPING: Dict[str, int] = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


# --- Checksums --------------------------------------------------------------


def ean13_checksum(data: str) -> str:
    """
    Compute the EAN-13 checksum digit for the first 12 digits of `data`.
    """
    digits = [int(ch) for ch in data[:12] if ch.isdigit()]
    if len(digits) != 12:
        raise ValueError("EAN-13 requires at least 12 digits for checksum")

    s = 0
    for i, d in enumerate(digits):
        s += d * (3 if (i % 2 == 1) else 1)
    return str((10 - (s % 10)) % 10)


def upca_checksum(data: str) -> str:
    """
    Compute the UPC-A checksum digit for the first 11 digits of `data`.
    """
    digits = [int(ch) for ch in data[:11] if ch.isdigit()]
    if len(digits) != 11:
        raise ValueError("UPC-A requires at least 11 digits for checksum")

    total = sum(digits[0::2]) * 3 + sum(digits[1::2])
    return str((10 - (total % 10)) % 10)


# --- Per-symbology validators ----------------------------------------------


def _validate_code128(data: str) -> str:
    data = data or ""
    if not data:
        raise BarcodeValidationError("Code 128 data cannot be empty.")
    for ch in data:
        if ord(ch) < 32 or ord(ch) > 126:
            raise BarcodeValidationError(
                f"Code 128 only supports printable ASCII (32–126). Offending char: {ch!r}"
            )
    return data


def _validate_code39(data: str) -> str:
    data = (data or "").strip().upper()
    if not data:
        raise BarcodeValidationError("Code 39 data cannot be empty.")
    if "*" in data:
        raise BarcodeValidationError(
            "Do not include '*' in Code 39 data (it's reserved for start/stop)."
        )
    allowed = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ -.$/+%"
    for ch in data:
        if ch not in allowed:
            raise BarcodeValidationError(
                f"Code 39 does not allow {ch!r}. Allowed: A–Z, 0–9, space, - . $ / + %"
            )
    return data


def _validate_ean13(data: str) -> str:
    data = (data or "").strip()
    if not data:
        raise BarcodeValidationError("EAN-13 data cannot be empty.")
    if not data.isdigit():
        raise BarcodeValidationError("EAN-13 supports digits only.")
    if len(data) not in (12, 13):
        raise BarcodeValidationError("EAN-13 must be 12 or 13 digits long.")

    if len(data) == 12:
        return data + ean13_checksum(data)

    expected = ean13_checksum(data[:-1])
    if data[-1] != expected:
        raise BarcodeValidationError(
            f"Invalid EAN-13 check digit: got {data[-1]}, expected {expected}."
        )
    return data


def _validate_upca(data: str) -> str:
    data = (data or "").strip()
    if not data:
        raise BarcodeValidationError("UPC-A data cannot be empty.")
    if not data.isdigit():
        raise BarcodeValidationError("UPC-A supports digits only.")
    if len(data) not in (11, 12):
        raise BarcodeValidationError("UPC-A must be 11 or 12 digits long.")

    if len(data) == 11:
        return data + upca_checksum(data)

    expected = upca_checksum(data[:-1])
    if data[-1] != expected:
        raise BarcodeValidationError(
            f"Invalid UPC-A check digit: got {data[-1]}, expected {expected}."
        )
    return data


_VALIDATORS = {
    "CODE128": _validate_code128,
    "CODE39": _validate_code39,
    "EAN13": _validate_ean13,
    "UPC": _validate_upca,
}


def validate_barcode_data(symbology: str, data: str) -> str:
    """
    Main entry point for 1D data validation.

    Returns normalized data (check digit appended where it was left off),
    or raises BarcodeValidationError.
    """
    validator = _VALIDATORS.get((symbology or "").strip().upper())
    if validator is None:
        raise BarcodeValidationError(f"Unsupported barcode symbology {symbology!r}.")
    return validator(data)


# --- QR ----------------------------------------------------------------------


def qr_module_count(data: str, level: str = "M") -> int:
    """
    Side length in modules of the smallest QR symbol holding *data*,
    quiet zone excluded.
    """
    if not (data or "").strip():
        raise BarcodeValidationError("QR Code data cannot be empty.")
    correction = QR_CORRECTION_MAPPING.get(level)
    if correction is None:
        raise BarcodeValidationError(f"Unknown QR error correction level {level!r}.")

    qr = qrcode.QRCode(version=None, error_correction=correction, border=0)
    qr.add_data(data)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        # qrcode 8 reports overflow as "Invalid version (was 41 ...)"
        raise BarcodeValidationError(
            f"QR Code data too long for error correction level {level}."
        ) from exc
    return qr.modules_count
