"""
infotrace_sdk/test_infocode.py - InfoCode codec tests

Tests:
- Generated codes are valid and parse back
- Hyphenated prefixes survive parsing
- Malformed input degrades instead of raising
"""
import re
from datetime import datetime

import pytest

from .infocode import (
    generate_info_code,
    is_valid_info_code,
    parse_info_code,
    short_id_from_info_code,
)


@pytest.mark.parametrize("prefix", ["QAO-UIF-SESSION", "QAO-UIF-MODEL-gpt-4o", "X"])
def test_generated_code_is_valid(prefix):
    code = generate_info_code(prefix, "session-1")

    parsed = parse_info_code(code)
    assert re.fullmatch(r"[0-9a-f]{8}", parsed.id)
    assert parsed.prefix == prefix
    assert is_valid_info_code(code)


def test_generated_code_uses_date():
    code = generate_info_code("QAO-UIF-QUERY", "s", now=datetime(2024, 3, 7, 12, 0, 0))
    assert parse_info_code(code).date == "20240307"


def test_generated_codes_differ():
    codes = {generate_info_code("QAO-UIF-QUERY", "s") for _ in range(50)}
    assert len(codes) == 50


def test_parse_keeps_hyphenated_prefix():
    parsed = parse_info_code("QAO-UIF-MODEL-gpt-4o-20231027-a1b2c3d4")
    assert parsed.prefix == "QAO-UIF-MODEL-gpt-4o"
    assert parsed.date == "20231027"
    assert parsed.id == "a1b2c3d4"


@pytest.mark.parametrize("value", ["", "nohyphen", "one-two"])
def test_parse_malformed_degrades(value):
    parsed = parse_info_code(value)
    assert parsed.prefix == value
    assert parsed.date == ""
    assert parsed.id == ""


@pytest.mark.parametrize(
    "value,expected",
    [
        ("QAO-UIF-QUERY-20231027-a1b2c3d4", True),
        ("QAO-UIF-QUERY-20231027-A1B2C3D4", True),
        ("P-20231027-abc", True),
        ("QAO-UIF-QUERY-2023102-a1b2c3d4", False),
        ("QAO-UIF-QUERY-20231027-xyz", False),
        ("20231027-a1b2c3d4", False),
        ("", False),
        (None, False),
        (12345, False),
    ],
)
def test_is_valid_info_code(value, expected):
    assert is_valid_info_code(value) is expected


def test_short_id_from_info_code():
    assert short_id_from_info_code("QAO-UIF-QUERY-20231027-a1b2c3d4") == "a1b2c3d4"
    assert short_id_from_info_code("broken") is None
