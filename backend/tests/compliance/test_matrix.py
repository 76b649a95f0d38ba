"""Tests for the compliance matrix builder."""

from app.compliance.catalog import REQUIREMENT_CATALOG
from app.compliance.matrix import build_matrix
from app.models.enums import ComplianceLevel, Priority


def _ids(matrix):
    return [r.id for r in matrix.requirements]


def test_agad_l1_filter(events):
    matrix = build_matrix(events, ComplianceLevel.AGAD_L1)

    assert _ids(matrix) == ["AGAD-LOG-001", "AGAD-LOG-002", "AGAD-LOG-003", "AGAD-LOG-004", "COAFI-001"]
    for requirement in matrix.requirements:
        if requirement.priority == Priority.HIGH:
            assert requirement.id.startswith("AGAD-LOG")


def test_agad_l2_filter(events):
    ids = _ids(build_matrix(events, ComplianceLevel.AGAD_L2))

    assert "COAFI-002" in ids  # HIGH priority
    assert "COAFI-003" not in ids  # MEDIUM, not AGAD
    assert len(ids) == 8


def test_coafi_basic_filter(events):
    assert _ids(build_matrix(events, ComplianceLevel.COAFI_BASIC)) == ["COAFI-001", "COAFI-002", "COAFI-003"]


def test_full_levels_include_whole_catalog(events):
    for level in (ComplianceLevel.AGAD_L3, ComplianceLevel.COAFI_FULL):
        assert len(build_matrix(events, level).requirements) == len(REQUIREMENT_CATALOG)


def test_summary_over_filtered_set(events):
    summary = build_matrix(events, ComplianceLevel.AGAD_L3).summary

    assert summary.total_count == 9
    assert summary.compliant_count == 5
    assert summary.partially_compliant_count == 3
    assert summary.non_compliant_count == 1
    assert summary.compliant_percent == 56
    assert summary.partially_compliant_percent == 33
    assert summary.non_compliant_percent == 11
    assert summary.category_counts == {"Logging": 4, "Security": 2, "Aerospace": 3}
    assert summary.priority_counts == {"HIGH": 5, "MEDIUM": 3, "CRITICAL": 1}


def test_l1_summary(events):
    summary = build_matrix(events, ComplianceLevel.AGAD_L1).summary

    assert summary.compliant_percent == 60
    assert summary.partially_compliant_percent == 40
    assert summary.non_compliant_percent == 0


def test_matrix_does_not_depend_on_events(events):
    assert build_matrix([], ComplianceLevel.AGAD_L2) == build_matrix(events, ComplianceLevel.AGAD_L2)
