"""
infotrace_sdk/infocode.py - InfoCode generation and parsing

Format: {prefix}-{YYYYMMDD}-{shortId}

The prefix may itself contain hyphens (QAO-UIF-MODEL-gpt-4o), so parsing
always takes the LAST two segments as date and id. Parsing is permissive:
malformed input degrades to (prefix=input, date="", id="") instead of raising.
"""
from __future__ import annotations

import re
import uuid
from datetime import datetime
from typing import NamedTuple

_DATE_RE = re.compile(r"^\d{8}$")
_ID_RE = re.compile(r"^[a-f0-9]+$", re.IGNORECASE)


class ParsedInfoCode(NamedTuple):
    prefix: str
    date: str
    id: str


def generate_info_code(prefix: str, session_id: str, now: datetime | None = None) -> str:
    """
    Build a new InfoCode for one logical operation.

    The short id is the first block of a random UUID4: 8 lowercase hex chars.
    Not cryptographically unique, only unique enough within one session.
    session_id is accepted for call-site symmetry; it is not encoded.
    """
    date_str = (now or datetime.now()).strftime("%Y%m%d")
    short_id = str(uuid.uuid4()).split("-")[0]
    return f"{prefix}-{date_str}-{short_id}"


def parse_info_code(info_code: str) -> ParsedInfoCode:
    parts = info_code.split("-")
    if len(parts) >= 3:
        return ParsedInfoCode(
            prefix="-".join(parts[:-2]),
            date=parts[-2],
            id=parts[-1],
        )
    return ParsedInfoCode(prefix=info_code, date="", id="")


def is_valid_info_code(info_code: object) -> bool:
    if not info_code or not isinstance(info_code, str):
        return False

    parts = info_code.split("-")
    if len(parts) < 3:
        return False
    if not _DATE_RE.match(parts[-2]):
        return False
    if not _ID_RE.match(parts[-1]):
        return False
    return True


def short_id_from_info_code(info_code: str) -> str | None:
    if not is_valid_info_code(info_code):
        return None
    return parse_info_code(info_code).id
