"""
report.py - Compliance report assembler.

generate_compliance_report() composes metrics, matrix and violations with a
timeline, findings, recommendations and an executive summary. The report
is recomputed from the events every time; an empty event list still yields
a well-formed report with zero-valued metrics.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from app.compliance.matrix import build_matrix
from app.compliance.metrics import compute_metrics
from app.compliance.violations import detect_violations
from app.models.enums import (
    ComplianceLevel,
    ComplianceStatus,
    FindingType,
    TimelineStatus,
    ViolationSeverity,
)
from app.schemas.compliance import (
    ComplianceMetrics,
    ComplianceReport,
    ComplianceViolation,
    Finding,
    TimelineEvent,
)
from infotrace_sdk.events import EventType, SessionEvent

logger = logging.getLogger(__name__)

COMPLIANT_SCORE = 80
EXCELLENT_SCORE = 90

USER_QUERY_EVENT_TYPES = ("USER_QUERY", EventType.USER_QUERY_SUBMITTED.value)

REQUIREMENT_RECOMMENDATIONS = {
    "AGAD-LOG-001": "Ensure every session emits a SESSION_ENDED event, including on error and teardown paths.",
    "AGAD-LOG-002": "Implement consistent InfoCode generation and validation across all system components.",
    "AGAD-LOG-003": "Standardize event type naming conventions across all components.",
    "AGAD-SEC-001": "Enhance data redaction mechanisms to ensure sensitive information is not exposed in logs.",
    "COAFI-001": "Implement validation for all aerospace object references against the GAIA-QAO registry.",
}

GENERAL_RECOMMENDATIONS = (
    "Implement regular automated compliance checks to continuously monitor and improve compliance status.",
    "Review compliance history trends after each release to catch regressions early.",
)


def generate_compliance_report(
    events: Sequence[SessionEvent],
    level: ComplianceLevel,
    *,
    now: datetime | None = None,
    require_end_event: bool = False,
) -> ComplianceReport:
    level = ComplianceLevel(level)
    now = now or datetime.now(timezone.utc)
    events = list(events)

    metrics = compute_metrics(events, level)
    matrix = build_matrix(events, level)
    violations = detect_violations(events, level, now=now, require_end_event=require_end_event)

    compliance_status = (
        ComplianceStatus.COMPLIANT
        if metrics.compliance_score >= COMPLIANT_SCORE
        else ComplianceStatus.NON_COMPLIANT
    )

    logger.debug(
        "Report generated: level=%s, events=%d, score=%d, violations=%d",
        level.value,
        metrics.total_events,
        metrics.compliance_score,
        len(violations),
    )

    return ComplianceReport(
        title=f"AGAD/COAFI Compliance Report - {level.value}",
        executive_summary=build_executive_summary(metrics, violations, compliance_status, level),
        compliance_status=compliance_status,
        metrics=metrics,
        violations=violations,
        timeline_events=build_timeline(events, violations, now=now),
        compliance_matrix=matrix,
        key_findings=build_key_findings(metrics, violations),
        recommendations=build_recommendations(violations, metrics),
        generated_at=now.isoformat(),
        level=level,
    )


def _timestamp_key(timestamp: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return datetime.max.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_timeline(
    events: Sequence[SessionEvent],
    violations: Sequence[ComplianceViolation],
    *,
    now: datetime,
) -> list[TimelineEvent]:
    fallback = now.isoformat()
    timeline: list[TimelineEvent] = []

    if events:
        first = events[0]
        timeline.append(
            TimelineEvent(
                id="T001",
                title="Session Started",
                description="User session initiated",
                timestamp=first.timestamp or fallback,
                info_code=first.info_code or None,
                status=TimelineStatus.INFO,
                details=first.details or None,
            )
        )

    for index, violation in enumerate(violations):
        timeline.append(
            TimelineEvent(
                id=f"T{100 + index}",
                title=violation.description,
                description=f"{violation.severity.value} violation of requirement {violation.requirement_id}",
                timestamp=violation.timestamp,
                info_code=violation.info_code,
                status=TimelineStatus.VIOLATION,
                details=violation.details,
                related_requirements=[violation.requirement_id],
            )
        )

    if len(events) > 2:
        middle = events[len(events) // 2]
        third = events[len(events) // 3]
        timeline.append(
            TimelineEvent(
                id="T201",
                title="Proper InfoCode Usage",
                description="InfoCodes correctly implemented for user query",
                timestamp=middle.timestamp or fallback,
                info_code=middle.info_code or None,
                status=TimelineStatus.COMPLIANT,
                related_requirements=["AGAD-LOG-002"],
            )
        )
        timeline.append(
            TimelineEvent(
                id="T202",
                title="Proper Model Invocation Logging",
                description="AI model invocation correctly logged with all required fields",
                timestamp=third.timestamp or fallback,
                info_code=third.info_code or None,
                status=TimelineStatus.COMPLIANT,
                related_requirements=["AGAD-LOG-004", "COAFI-003"],
            )
        )

    if len(events) > 1:
        last = events[-1]
        timeline.append(
            TimelineEvent(
                id="T999",
                title="Session Ended",
                description="User session properly terminated",
                timestamp=last.timestamp or fallback,
                info_code=last.info_code or None,
                status=TimelineStatus.INFO,
                details=last.details or None,
            )
        )

    # sorted() is stable: equal timestamps keep construction order
    return sorted(timeline, key=lambda t: _timestamp_key(t.timestamp))


def _count_severity(violations: Sequence[ComplianceViolation], severity: ViolationSeverity) -> int:
    return sum(1 for v in violations if v.severity == severity)


def build_key_findings(metrics: ComplianceMetrics, violations: Sequence[ComplianceViolation]) -> list[Finding]:
    findings: list[Finding] = []

    if metrics.compliance_score >= EXCELLENT_SCORE:
        findings.append(Finding(
            type=FindingType.POSITIVE,
            description=f"Overall compliance score of {metrics.compliance_score}% exceeds the 90% threshold.",
        ))
    if metrics.info_code_compliance_percent >= EXCELLENT_SCORE:
        findings.append(Finding(
            type=FindingType.POSITIVE,
            description=(
                f"InfoCode compliance of {metrics.info_code_compliance_percent}% "
                "demonstrates strong traceability."
            ),
        ))
    if metrics.session_completeness_percent == 100:
        findings.append(Finding(
            type=FindingType.POSITIVE,
            description="All sessions have proper start and end events, ensuring complete audit trails.",
        ))

    critical = _count_severity(violations, ViolationSeverity.CRITICAL)
    if critical > 0:
        findings.append(Finding(
            type=FindingType.NEGATIVE,
            description=f"{critical} critical violations require immediate attention.",
        ))
    if metrics.compliance_score < COMPLIANT_SCORE:
        findings.append(Finding(
            type=FindingType.NEGATIVE,
            description=f"Overall compliance score of {metrics.compliance_score}% is below the 80% threshold.",
        ))

    user_queries = sum(metrics.event_type_distribution.get(t, 0) for t in USER_QUERY_EVENT_TYPES)
    findings.append(Finding(
        type=FindingType.NEUTRAL,
        description=f"{user_queries} user queries were processed and logged.",
    ))
    findings.append(Finding(
        type=FindingType.NEUTRAL,
        description=f"{len(metrics.component_coverage)} system components were analyzed for compliance.",
    ))

    return findings


def build_recommendations(violations: Sequence[ComplianceViolation], metrics: ComplianceMetrics) -> list[str]:
    recommendations: list[str] = []

    if _count_severity(violations, ViolationSeverity.CRITICAL) > 0:
        recommendations.append(
            "Address all critical violations immediately to ensure compliance with AGAD/COAFI standards."
        )

    seen: set[str] = set()
    for violation in violations:
        if violation.requirement_id in seen:
            continue
        seen.add(violation.requirement_id)
        text = REQUIREMENT_RECOMMENDATIONS.get(violation.requirement_id, violation.recommendation)
        recommendations.append(text)

    if metrics.info_code_hierarchy_percent < EXCELLENT_SCORE:
        recommendations.append("Improve parent-child relationships in InfoCodes to enhance traceability.")
    if metrics.traceability_percent < EXCELLENT_SCORE:
        recommendations.append("Enhance event correlation to improve traceability across the system.")

    recommendations.extend(GENERAL_RECOMMENDATIONS)
    return recommendations


def build_executive_summary(
    metrics: ComplianceMetrics,
    violations: Sequence[ComplianceViolation],
    compliance_status: ComplianceStatus,
    level: ComplianceLevel,
) -> str:
    critical = _count_severity(violations, ViolationSeverity.CRITICAL)
    major = _count_severity(violations, ViolationSeverity.MAJOR)
    minor = _count_severity(violations, ViolationSeverity.MINOR)
    name = level.value

    summary = (
        f"This report evaluates compliance with {name} standards based on the analysis "
        f"of {metrics.total_events} logged events. "
    )
    if compliance_status == ComplianceStatus.COMPLIANT:
        summary += (
            f"The system achieves an overall compliance score of {metrics.compliance_score}%, "
            f"meeting the minimum threshold for {name} compliance. "
        )
    else:
        summary += (
            f"The system achieves an overall compliance score of {metrics.compliance_score}%, "
            f"which falls below the minimum threshold for {name} compliance. "
        )

    summary += (
        f"Analysis identified {len(violations)} compliance violations "
        f"({critical} critical, {major} major, {minor} minor). "
    )
    if critical > 0:
        summary += "Critical violations require immediate attention to ensure system integrity and compliance. "

    summary += (
        f"Key areas of strength include {metrics.session_completeness_percent}% session completeness "
        f"and {metrics.traceability_percent}% traceability. "
    )
    if metrics.info_code_compliance_percent < EXCELLENT_SCORE:
        summary += (
            f"InfoCode compliance ({metrics.info_code_compliance_percent}%) requires improvement "
            "to enhance audit capabilities. "
        )

    summary += (
        "This report provides detailed findings and recommendations to address identified issues "
        f"and improve overall compliance with {name} standards."
    )
    return summary
