"""
metrics.py - Compliance metrics engine.

compute_metrics() is a PURE FUNCTION over a frozen event list:
same events + same level -> identical ComplianceMetrics.

The headline score is a fixed weighted sum:
    score = 0.3*info_code + 0.2*session_completeness + 0.3*traceability + 0.2*coverage

Session completeness, traceability, hierarchy, component coverage and the
violation/issue estimates are heuristic baselines for a non-empty log; an
empty log yields zero for every field.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from app.compliance.catalog import METRIC_REQUIREMENTS
from app.models.enums import ComplianceLevel, IssueImpact
from app.schemas.compliance import ComplianceMetrics, InfoCodeIssue, RequirementCompliance
from infotrace_sdk.events import SessionEvent
from infotrace_sdk.infocode import parse_info_code

# tenths; integer arithmetic keeps exact halves rounding up
SCORE_WEIGHTS = {
    "info_code": 3,
    "session_completeness": 2,
    "traceability": 3,
    "event_coverage": 2,
}

SESSION_COMPLETENESS_BASELINE = 90
TRACEABILITY_BASELINE = 85
HIERARCHY_BASELINE = 80

COMPONENT_COVERAGE_BASELINE = {
    "InputHandler": 95,
    "ModelRouter": 85,
    "QueryOrchestrator": 90,
    "ResultsAggregator": 80,
    "SessionManager": 100,
}

VIOLATION_RATE = 0.05
CRITICAL_SHARE = 0.2
MAJOR_SHARE = 0.3

# (issue type, share of total events, impact)
INFO_CODE_ISSUE_RATES = (
    ("Missing parent reference", 0.03, IssueImpact.MEDIUM),
    ("Invalid format", 0.02, IssueImpact.HIGH),
    ("Duplicate InfoCode", 0.01, IssueImpact.LOW),
)


def percent(count: int, total: int) -> int:
    """round(count/total*100) half-up, 0 for an empty denominator."""
    if total <= 0:
        return 0
    return (count * 200 + total) // (2 * total)


def compliance_score(
    info_code_percent: int,
    session_completeness_percent: int,
    traceability_percent: int,
    event_coverage_percent: int,
) -> int:
    tenths = (
        info_code_percent * SCORE_WEIGHTS["info_code"]
        + session_completeness_percent * SCORE_WEIGHTS["session_completeness"]
        + traceability_percent * SCORE_WEIGHTS["traceability"]
        + event_coverage_percent * SCORE_WEIGHTS["event_coverage"]
    )
    return max(0, min(100, (tenths + 5) // 10))


def has_basic_info_code(event: SessionEvent) -> bool:
    """
    Basic structural check: non-empty and hyphenated.

    Deliberately looser than infocode.is_valid_info_code(); the strict
    validator is for codec round-trips, this one scores coverage.
    """
    return bool(event.info_code) and "-" in event.info_code


def compute_metrics(events: Sequence[SessionEvent], level: ComplianceLevel) -> ComplianceMetrics:
    total_events = len(events)
    has_events = total_events > 0

    event_coverage_percent = 100 if has_events else 0

    valid_info_codes = sum(1 for e in events if has_basic_info_code(e))
    info_code_compliance_percent = percent(valid_info_codes, total_events)

    event_type_distribution = Counter(e.event_type or "UNKNOWN" for e in events)
    info_code_prefix_distribution = Counter(
        parse_info_code(e.info_code).prefix for e in events if e.info_code
    )

    session_completeness_percent = SESSION_COMPLETENESS_BASELINE if has_events else 0
    traceability_percent = TRACEABILITY_BASELINE if has_events else 0
    info_code_hierarchy_percent = HIERARCHY_BASELINE if has_events else 0
    component_coverage = {
        name: (value if has_events else 0) for name, value in COMPONENT_COVERAGE_BASELINE.items()
    }

    violation_count = math.floor(total_events * VIOLATION_RATE)
    critical_violations = math.floor(violation_count * CRITICAL_SHARE)
    major_violations = math.floor(violation_count * MAJOR_SHARE)
    minor_violations = violation_count - critical_violations - major_violations

    info_code_issues = [
        InfoCodeIssue(type=issue_type, count=math.floor(total_events * rate), impact=impact)
        for issue_type, rate, impact in INFO_CODE_ISSUE_RATES
    ]

    requirement_compliance = [
        RequirementCompliance(
            id=req_id,
            description=description,
            status=status,
            score=info_code_compliance_percent if score is None else score,
        )
        for req_id, description, status, score in METRIC_REQUIREMENTS
    ]

    return ComplianceMetrics(
        compliance_score=compliance_score(
            info_code_compliance_percent,
            session_completeness_percent,
            traceability_percent,
            event_coverage_percent,
        ),
        total_events=total_events,
        events_analyzed=total_events,
        event_coverage_percent=event_coverage_percent,
        total_info_codes=total_events,
        valid_info_codes=valid_info_codes,
        info_code_compliance_percent=info_code_compliance_percent,
        event_type_distribution=dict(event_type_distribution),
        info_code_prefix_distribution=dict(info_code_prefix_distribution),
        component_coverage=component_coverage,
        session_completeness_percent=session_completeness_percent,
        traceability_percent=traceability_percent,
        info_code_hierarchy_percent=info_code_hierarchy_percent,
        violation_count=violation_count,
        critical_violations=critical_violations,
        major_violations=major_violations,
        minor_violations=minor_violations,
        info_code_issues=info_code_issues,
        requirement_compliance=requirement_compliance,
    )
