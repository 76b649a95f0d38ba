"""
infotrace_sdk/test_object_ids.py - Object id extractor tests
"""
from .object_ids import (
    extract_object_ids,
    object_id_components,
    parse_object_id,
    validate_object_id,
)


def test_extract_single_embedded_id():
    assert extract_object_ids("Check AS-M-PAX-BW-Q1H-00001 now") == ["AS-M-PAX-BW-Q1H-00001"]


def test_extract_dedups_and_keeps_order():
    text = "SP-U-SAT-CM-X9Z-12345, AS-M-PAX-BW-Q1H-00001 and again SP-U-SAT-CM-X9Z-12345"
    assert extract_object_ids(text) == ["SP-U-SAT-CM-X9Z-12345", "AS-M-PAX-BW-Q1H-00001"]


def test_extract_ignores_near_misses():
    assert extract_object_ids("AS-X-PAX-BW-Q1H-00001 as-m-pax-bw-q1h-00001 AS-M-PAX-BW-Q1H-0001") == []
    assert extract_object_ids("") == []


def test_validate_is_strict():
    assert validate_object_id("AS-M-PAX-BW-Q1H-00001")
    assert not validate_object_id("Check AS-M-PAX-BW-Q1H-00001")
    assert not validate_object_id("AS-M-PAX-BW-Q1H-000012")
    assert not validate_object_id("")


def test_parse_recovers_fields():
    parsed = parse_object_id("AS-M-PAX-BW-Q1H-00001")
    assert parsed is not None
    assert parsed.domain == "AS"
    assert parsed.autonomy == "M"
    assert parsed.functional_class == "PAX"
    assert parsed.sub_type == "BW"
    assert parsed.model == "Q1H"
    assert parsed.serial_number == "00001"


def test_parse_rejects_partial_match():
    assert parse_object_id("id: AS-M-PAX-BW-Q1H-00001") is None


def test_components_name_known_codes():
    components = object_id_components("SP-U-SAT-CM-X9Z-12345")
    assert components["domain_name"] == "Space System"
    assert components["autonomy_name"] == "Unmanned/Fully Autonomous"
    assert components["serial_number"] == "12345"


def test_components_unknown_domain():
    components = object_id_components("ZZ-M-PAX-BW-Q1H-00001")
    assert components["domain_name"] == "Unknown Domain"
    assert object_id_components("nope") is None
