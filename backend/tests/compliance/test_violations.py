"""Tests for the violation detector."""

from app.compliance.violations import detect_violations
from app.models.enums import ComplianceLevel, ViolationSeverity
from infotrace_sdk.events import SessionEvent


def _by_requirement(violations):
    return {v.requirement_id: v for v in violations}


class TestDetectViolations:
    def test_empty_log_has_no_violations(self, now):
        assert detect_violations([], ComplianceLevel.AGAD_L3, now=now) == []

    def test_single_missing_info_code_on_l2(self, events_one_missing, now):
        violations = detect_violations(events_one_missing, ComplianceLevel.AGAD_L2, now=now)

        missing = [v for v in violations if v.requirement_id == "AGAD-LOG-002"]
        assert len(missing) == 1
        assert missing[0].id == "V001"
        assert missing[0].severity == ViolationSeverity.MAJOR
        assert missing[0].details["affected_count"] == 1
        assert missing[0].details["examples"] == ["ANALYSIS_COMPLETED"]
        assert missing[0].related_events[0].info_code == "MISSING"

    def test_examples_capped_at_three(self, make_events, now):
        events = make_events(missing_info_code_at=(0, 1, 2, 3, 4))
        violation = _by_requirement(detect_violations(events, ComplianceLevel.AGAD_L1, now=now))["AGAD-LOG-002"]

        assert violation.details["affected_count"] == 5
        assert len(violation.details["examples"]) == 3
        assert len(violation.related_events) == 3

    def test_blank_info_code_counts_as_missing(self, make_events, now):
        events = make_events(count=3)
        events[1] = SessionEvent(session_id="s1", info_code="   ", event_type="X", timestamp=events[1].timestamp)
        violation = _by_requirement(detect_violations(events, ComplianceLevel.AGAD_L1, now=now))["AGAD-LOG-002"]
        assert violation.details["affected_count"] == 1

    def test_no_missing_info_code_violation_when_all_present(self, events, now):
        assert "AGAD-LOG-002" not in _by_requirement(detect_violations(events, ComplianceLevel.AGAD_L2, now=now))

    def test_end_event_violation_is_unconditional_by_default(self, events, now):
        violation = _by_requirement(detect_violations(events, ComplianceLevel.AGAD_L1, now=now))["AGAD-LOG-001"]

        assert violation.id == "V002"
        assert violation.severity == ViolationSeverity.CRITICAL
        assert violation.info_code == events[0].info_code
        assert violation.details == {
            "session_id": "s1",
            "start_time": events[0].timestamp,
            "last_event_time": events[-1].timestamp,
        }

    def test_strict_end_check(self, make_events, now):
        complete = make_events(count=10)
        truncated = make_events(count=5)

        strict = detect_violations(complete, ComplianceLevel.AGAD_L1, now=now, require_end_event=True)
        assert "AGAD-LOG-001" not in _by_requirement(strict)

        strict = detect_violations(truncated, ComplianceLevel.AGAD_L1, now=now, require_end_event=True)
        assert "AGAD-LOG-001" in _by_requirement(strict)

    def test_level_gating(self, events, now):
        expected = {
            ComplianceLevel.AGAD_L1: {"AGAD-LOG-001", "AGAD-LOG-003"},
            ComplianceLevel.AGAD_L2: {"AGAD-LOG-001", "AGAD-SEC-001", "AGAD-LOG-003"},
            ComplianceLevel.AGAD_L3: {"AGAD-LOG-001", "AGAD-SEC-001", "AGAD-LOG-003"},
            ComplianceLevel.COAFI_BASIC: {"AGAD-LOG-001", "COAFI-001", "AGAD-LOG-003"},
            ComplianceLevel.COAFI_FULL: {"AGAD-LOG-001", "AGAD-SEC-001", "COAFI-001", "AGAD-LOG-003"},
        }
        for level, requirements in expected.items():
            found = {v.requirement_id for v in detect_violations(events, level, now=now)}
            assert found == requirements, level

    def test_violations_are_timestamped_with_now(self, events, now):
        for violation in detect_violations(events, ComplianceLevel.COAFI_FULL, now=now):
            assert violation.timestamp == now.isoformat()

    def test_fixed_templates(self, events, now):
        violations = _by_requirement(detect_violations(events, ComplianceLevel.COAFI_FULL, now=now))

        assert violations["COAFI-001"].details["validation_status"] == "SKIPPED"
        assert violations["AGAD-LOG-003"].severity == ViolationSeverity.MINOR
        assert violations["AGAD-LOG-003"].details["recommended_format"] == "USER_QUERY"
        assert violations["AGAD-SEC-001"].details["sensitive_fields"] == ["apiKey", "password", "token"]
