"""
violations.py - Compliance violation detector.

detect_violations() is a PURE FUNCTION of (events, level, now). Violations
are derived artifacts; they are recomputed on every report and never stored.

Rules (each fires independently, only for a non-empty log):
- V001 AGAD-LOG-002 MAJOR     any event without an InfoCode
- V002 AGAD-LOG-001 CRITICAL  session end check (see below)
- V003 AGAD-SEC-001 CRITICAL  levels AGAD-L2, AGAD-L3, COAFI-FULL
- V004 COAFI-001    MAJOR     COAFI-* levels
- V005 AGAD-LOG-003 MINOR     event naming consistency

The end check is a standing presence check that fires for every non-empty
log. With require_end_event=True it fires only when no SESSION_ENDED event
is present.

Impact and recommendation strings are fixed per rule, not computed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from app.models.enums import ComplianceLevel, ViolationSeverity
from app.schemas.compliance import ComplianceViolation, RelatedEvent
from infotrace_sdk.events import EventType, SessionEvent

MAX_EXAMPLES = 3

SECURITY_SCAN_LEVELS = frozenset(
    {ComplianceLevel.AGAD_L2, ComplianceLevel.AGAD_L3, ComplianceLevel.COAFI_FULL}
)


@dataclass(frozen=True)
class ViolationRule:
    id: str
    requirement_id: str
    description: str
    severity: ViolationSeverity
    impact: str
    recommendation: str


MISSING_INFO_CODE = ViolationRule(
    id="V001",
    requirement_id="AGAD-LOG-002",
    description="Events missing valid InfoCodes",
    severity=ViolationSeverity.MAJOR,
    impact="Missing InfoCodes break the traceability chain and prevent proper audit trails.",
    recommendation="Ensure all events are assigned valid InfoCodes following the AGAD/COAFI standard.",
)

MISSING_END_EVENT = ViolationRule(
    id="V002",
    requirement_id="AGAD-LOG-001",
    description="Session missing proper end event",
    severity=ViolationSeverity.CRITICAL,
    impact="Sessions without proper end events may indicate abnormal termination or data loss.",
    recommendation=(
        "Implement robust session handling to ensure all sessions have proper end events, "
        "even in error scenarios."
    ),
)

UNREDACTED_SENSITIVE_DATA = ViolationRule(
    id="V003",
    requirement_id="AGAD-SEC-001",
    description="Sensitive data not redacted in logs",
    severity=ViolationSeverity.CRITICAL,
    impact="Unredacted sensitive data in logs poses a security and privacy risk.",
    recommendation="Implement data redaction for all sensitive fields before logging.",
)

UNVALIDATED_OBJECT_REFERENCE = ViolationRule(
    id="V004",
    requirement_id="COAFI-001",
    description="Aerospace object reference not validated",
    severity=ViolationSeverity.MAJOR,
    impact="Unvalidated object references may lead to incorrect data association or processing.",
    recommendation="Implement validation for all aerospace object references against the GAIA-QAO registry.",
)

INCONSISTENT_NAMING = ViolationRule(
    id="V005",
    requirement_id="AGAD-LOG-003",
    description="Inconsistent event type naming",
    severity=ViolationSeverity.MINOR,
    impact="Inconsistent naming makes log analysis and filtering more difficult.",
    recommendation="Standardize event type naming conventions across all components.",
)


def _violation(rule: ViolationRule, timestamp: str, **kwargs) -> ComplianceViolation:
    return ComplianceViolation(
        id=rule.id,
        requirement_id=rule.requirement_id,
        description=rule.description,
        severity=rule.severity,
        impact=rule.impact,
        recommendation=rule.recommendation,
        timestamp=timestamp,
        **kwargs,
    )


def detect_violations(
    events: Sequence[SessionEvent],
    level: ComplianceLevel,
    *,
    now: datetime | None = None,
    require_end_event: bool = False,
) -> list[ComplianceViolation]:
    if not events:
        return []

    level = ComplianceLevel(level)
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    violations: list[ComplianceViolation] = []

    missing = [e for e in events if not e.info_code or not e.info_code.strip()]
    if missing:
        examples = missing[:MAX_EXAMPLES]
        violations.append(
            _violation(
                MISSING_INFO_CODE,
                timestamp,
                details={
                    "affected_count": len(missing),
                    "examples": [e.event_type for e in examples],
                },
                related_events=[
                    RelatedEvent(info_code=e.info_code or "MISSING", timestamp=e.timestamp or timestamp)
                    for e in examples
                ],
            )
        )

    has_end_event = any(e.event_type == EventType.SESSION_ENDED.value for e in events)
    if not require_end_event or not has_end_event:
        first, last = events[0], events[-1]
        violations.append(
            _violation(
                MISSING_END_EVENT,
                timestamp,
                info_code=first.info_code or None,
                details={
                    "session_id": first.session_id,
                    "start_time": first.timestamp,
                    "last_event_time": last.timestamp,
                },
            )
        )

    if level in SECURITY_SCAN_LEVELS:
        violations.append(
            _violation(
                UNREDACTED_SENSITIVE_DATA,
                timestamp,
                details={
                    "sensitive_fields": ["apiKey", "password", "token"],
                    "occurrences": 3,
                },
            )
        )

    if level.value.startswith("COAFI"):
        violations.append(
            _violation(
                UNVALIDATED_OBJECT_REFERENCE,
                timestamp,
                info_code="QAO-UIF-QUERY-20231027-a1b2c3d4",
                details={
                    "object_id": "AS-M-PAX-BW-Q1H-00001",
                    "validation_status": "SKIPPED",
                },
            )
        )

    violations.append(
        _violation(
            INCONSISTENT_NAMING,
            timestamp,
            details={
                "inconsistent_names": ["user_query", "USER_QUERY", "UserQuery"],
                "recommended_format": "USER_QUERY",
            },
        )
    )

    return violations
