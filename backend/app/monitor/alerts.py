"""
alerts.py - Threshold evaluation for compliance reports.

detect_alerts() is a PURE FUNCTION of (report, thresholds, now). Alerts are
transient; the monitor accumulates them in memory.

Bounds are lower-is-worse for every percentage and higher-is-worse for
critical_violations. Each check fires independently.
"""

from __future__ import annotations

from datetime import datetime, timezone

from app.models.enums import AlertSeverity, ViolationSeverity
from app.schemas.compliance import ComplianceReport
from app.schemas.monitoring import ComplianceAlert, ComplianceThresholds

EXCELLENT_SCORE = 95


def _alert_id(now: datetime, n: int) -> str:
    return f"ALERT-{int(now.timestamp() * 1000)}-{n}"


def detect_alerts(
    report: ComplianceReport,
    thresholds: ComplianceThresholds,
    *,
    now: datetime | None = None,
) -> list[ComplianceAlert]:
    now = now or datetime.now(timezone.utc)
    timestamp = now.isoformat()
    metrics = report.metrics
    alerts: list[ComplianceAlert] = []

    if metrics.compliance_score < thresholds.overall_compliance:
        alerts.append(ComplianceAlert(
            id=_alert_id(now, 1),
            timestamp=timestamp,
            severity=AlertSeverity.CRITICAL,
            title="Overall Compliance Below Threshold",
            message=(
                f"Overall compliance score ({metrics.compliance_score}%) is below "
                f"the threshold of {thresholds.overall_compliance}%."
            ),
            details={
                "current_score": metrics.compliance_score,
                "threshold": thresholds.overall_compliance,
                "gap": thresholds.overall_compliance - metrics.compliance_score,
            },
            related_requirements=["AGAD-COMP-001"],
        ))

    if metrics.critical_violations > thresholds.critical_violations:
        alerts.append(ComplianceAlert(
            id=_alert_id(now, 2),
            timestamp=timestamp,
            severity=AlertSeverity.CRITICAL,
            title="Critical Violations Exceed Threshold",
            message=(
                f"{metrics.critical_violations} critical violations detected, "
                f"exceeding the threshold of {thresholds.critical_violations}."
            ),
            details={
                "current_violations": metrics.critical_violations,
                "threshold": thresholds.critical_violations,
                "violation_ids": [
                    v.id for v in report.violations if v.severity == ViolationSeverity.CRITICAL
                ],
            },
            related_requirements=["AGAD-COMP-002"],
        ))

    if metrics.info_code_compliance_percent < thresholds.info_code_compliance:
        alerts.append(ComplianceAlert(
            id=_alert_id(now, 3),
            timestamp=timestamp,
            severity=AlertSeverity.WARNING,
            title="InfoCode Compliance Below Threshold",
            message=(
                f"InfoCode compliance ({metrics.info_code_compliance_percent}%) is below "
                f"the threshold of {thresholds.info_code_compliance}%."
            ),
            details={
                "current_compliance": metrics.info_code_compliance_percent,
                "threshold": thresholds.info_code_compliance,
                "valid_info_codes": metrics.valid_info_codes,
                "total_info_codes": metrics.total_info_codes,
            },
            related_requirements=["AGAD-LOG-002"],
        ))

    if metrics.session_completeness_percent < thresholds.session_completeness:
        alerts.append(ComplianceAlert(
            id=_alert_id(now, 4),
            timestamp=timestamp,
            severity=AlertSeverity.WARNING,
            title="Session Completeness Below Threshold",
            message=(
                f"Session completeness ({metrics.session_completeness_percent}%) is below "
                f"the threshold of {thresholds.session_completeness}%."
            ),
            details={
                "current_completeness": metrics.session_completeness_percent,
                "threshold": thresholds.session_completeness,
            },
            related_requirements=["AGAD-LOG-001"],
        ))

    if metrics.traceability_percent < thresholds.traceability:
        alerts.append(ComplianceAlert(
            id=_alert_id(now, 5),
            timestamp=timestamp,
            severity=AlertSeverity.WARNING,
            title="Traceability Below Threshold",
            message=(
                f"Traceability ({metrics.traceability_percent}%) is below "
                f"the threshold of {thresholds.traceability}%."
            ),
            details={
                "current_traceability": metrics.traceability_percent,
                "threshold": thresholds.traceability,
            },
            related_requirements=["AGAD-LOG-003"],
        ))

    if metrics.compliance_score >= EXCELLENT_SCORE:
        alerts.append(ComplianceAlert(
            id=_alert_id(now, 6),
            timestamp=timestamp,
            severity=AlertSeverity.INFO,
            title="Excellent Compliance Score",
            message=(
                f"Overall compliance score ({metrics.compliance_score}%) exceeds 95%, "
                "indicating excellent compliance."
            ),
            details={"current_score": metrics.compliance_score},
        ))

    if metrics.critical_violations == 0 and metrics.major_violations == 0:
        alerts.append(ComplianceAlert(
            id=_alert_id(now, 7),
            timestamp=timestamp,
            severity=AlertSeverity.INFO,
            title="No Critical or Major Violations",
            message="No critical or major violations detected in this compliance check.",
            details={"minor_violations": metrics.minor_violations},
        ))

    return alerts


# Public name used by callers that mirror the monitoring operation.
monitor_compliance = detect_alerts
