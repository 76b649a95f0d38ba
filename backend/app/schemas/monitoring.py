"""
monitoring.py - Pydantic schemas for continuous compliance monitoring.
"""

from typing import Any

from pydantic import BaseModel, Field

from app.models.enums import AlertSeverity, ComplianceLevel
from app.schemas.compliance import ComplianceReport


class ComplianceThresholds(BaseModel):
    """Alert bounds. Lower-is-worse for percentages, higher-is-worse for critical_violations."""

    overall_compliance: int = Field(80, ge=0, le=100)
    critical_violations: int = Field(1, ge=0)
    info_code_compliance: int = Field(85, ge=0, le=100)
    session_completeness: int = Field(90, ge=0, le=100)
    traceability: int = Field(85, ge=0, le=100)


class ComplianceAlert(BaseModel):
    id: str
    timestamp: str
    severity: AlertSeverity
    title: str
    message: str
    details: dict[str, Any] | None = None
    related_requirements: list[str] | None = None


class ComplianceHistoryPoint(BaseModel):
    timestamp: str
    compliance_score: int
    violation_count: int
    critical_violations: int
    info_code_compliance: int
    session_completeness: int
    traceability: int


class AlertRequest(BaseModel):
    """Body of POST /compliance/alerts. Thresholds default to the active ones."""

    report: ComplianceReport
    thresholds: ComplianceThresholds | None = None


class MonitorStartRequest(BaseModel):
    interval_seconds: float = Field(60, gt=0, description="Seconds between ticks")
    level: ComplianceLevel = ComplianceLevel.AGAD_L2
    thresholds: ComplianceThresholds | None = None


class MonitorStatus(BaseModel):
    session_id: str
    active: bool
    interval_seconds: float | None = None
    level: ComplianceLevel | None = None
    last_report: ComplianceReport | None = None
    alerts: list[ComplianceAlert] = Field(default_factory=list)
    history: list[ComplianceHistoryPoint] = Field(default_factory=list)
    last_error: str | None = Field(None, description="Most recent tick failure, cleared by the next successful tick")
    last_error_at: str | None = None
