"""
infotrace_sdk/object_ids.py - Aerospace object identifier recognition

Grammar: XX-X-XXX-XX-XXX-XXXXX, e.g. AS-M-PAX-BW-Q1H-00001
  domain (2 letters) - autonomy (M|U) - functional class (3 letters)
  - subtype (2 letters) - model (3 alphanumerics) - serial (5 digits)

extract_object_ids() scans free text for embedded ids; validate/parse only
accept a full-string match.
"""
from __future__ import annotations

import re
from typing import NamedTuple

_BODY = r"([A-Z]{2})-([MU])-([A-Z]{3})-([A-Z]{2})-([A-Z0-9]{3})-(\d{5})"
_EMBEDDED_RE = re.compile(rf"\b{_BODY}\b")
_STRICT_RE = re.compile(rf"^{_BODY}$")

DOMAIN_NAMES = {
    "AS": "Air System",
    "SP": "Space System",
}

AUTONOMY_NAMES = {
    "M": "Manned/Semi-Autonomous",
    "U": "Unmanned/Fully Autonomous",
}


class ObjectId(NamedTuple):
    domain: str
    autonomy: str
    functional_class: str
    sub_type: str
    model: str
    serial_number: str


def extract_object_ids(text: str) -> list[str]:
    """Return unique object ids found in text, in first-occurrence order."""
    seen: dict[str, None] = {}
    for match in _EMBEDDED_RE.finditer(text or ""):
        seen.setdefault(match.group(0), None)
    return list(seen)


def validate_object_id(object_id: str) -> bool:
    return bool(object_id) and _STRICT_RE.match(object_id) is not None


def parse_object_id(object_id: str) -> ObjectId | None:
    if not validate_object_id(object_id):
        return None
    return ObjectId(*object_id.split("-"))


def object_id_components(object_id: str) -> dict[str, str] | None:
    parsed = parse_object_id(object_id)
    if parsed is None:
        return None

    return {
        "domain_code": parsed.domain,
        "domain_name": DOMAIN_NAMES.get(parsed.domain, "Unknown Domain"),
        "autonomy_code": parsed.autonomy,
        "autonomy_name": AUTONOMY_NAMES.get(parsed.autonomy, "Unknown Autonomy Level"),
        "functional_class_code": parsed.functional_class,
        "sub_type_code": parsed.sub_type,
        "model_code": parsed.model,
        "serial_number": parsed.serial_number,
    }
