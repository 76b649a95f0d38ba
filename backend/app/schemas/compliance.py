"""
compliance.py - Pydantic schemas for compliance reports.

A ComplianceReport is a pure function of (events, level). It is recomputed
on every request, never patched.
"""

from typing import Any

from pydantic import BaseModel, Field

from app.models.enums import (
    ComplianceLevel,
    ComplianceStatus,
    FindingType,
    IssueImpact,
    Priority,
    RequirementStatus,
    TimelineStatus,
    ViolationSeverity,
)
from app.schemas.event import SessionEventIn


class InfoCodeIssue(BaseModel):
    type: str
    count: int
    impact: IssueImpact


class RequirementCompliance(BaseModel):
    id: str
    description: str
    status: RequirementStatus
    score: int


class ComplianceMetrics(BaseModel):
    """Numeric rollup of one event set. All percentages are integers 0-100."""

    compliance_score: int = Field(..., ge=0, le=100, description="Weighted headline score")
    total_events: int = 0
    events_analyzed: int = 0
    event_coverage_percent: int = 0
    total_info_codes: int = 0
    valid_info_codes: int = 0
    info_code_compliance_percent: int = 0
    event_type_distribution: dict[str, int] = Field(default_factory=dict)
    info_code_prefix_distribution: dict[str, int] = Field(default_factory=dict)
    component_coverage: dict[str, int] = Field(default_factory=dict)
    session_completeness_percent: int = 0
    traceability_percent: int = 0
    info_code_hierarchy_percent: int = 0
    violation_count: int = 0
    critical_violations: int = 0
    major_violations: int = 0
    minor_violations: int = 0
    info_code_issues: list[InfoCodeIssue] = Field(default_factory=list)
    requirement_compliance: list[RequirementCompliance] = Field(default_factory=list)


class RelatedEvent(BaseModel):
    info_code: str
    timestamp: str


class ComplianceViolation(BaseModel):
    id: str = Field(..., description="Stable rule id, V001..V005")
    requirement_id: str = Field(..., description="Catalog requirement this breaches")
    description: str
    severity: ViolationSeverity
    impact: str
    recommendation: str
    timestamp: str
    info_code: str | None = None
    details: dict[str, Any] | None = None
    related_events: list[RelatedEvent] | None = None


class TimelineEvent(BaseModel):
    id: str
    title: str
    description: str
    timestamp: str
    info_code: str | None = None
    status: TimelineStatus
    details: dict[str, Any] | None = None
    related_requirements: list[str] | None = None


class MatrixRequirement(BaseModel):
    id: str
    category: str
    description: str
    status: RequirementStatus
    score: int
    evidence_count: int
    priority: Priority


class MatrixSummary(BaseModel):
    compliant_count: int
    partially_compliant_count: int
    non_compliant_count: int
    total_count: int
    compliant_percent: int
    partially_compliant_percent: int
    non_compliant_percent: int
    category_counts: dict[str, int]
    priority_counts: dict[str, int]


class ComplianceMatrix(BaseModel):
    requirements: list[MatrixRequirement]
    summary: MatrixSummary


class Finding(BaseModel):
    type: FindingType
    description: str


class ComplianceReport(BaseModel):
    title: str
    executive_summary: str
    compliance_status: ComplianceStatus
    metrics: ComplianceMetrics
    violations: list[ComplianceViolation]
    timeline_events: list[TimelineEvent]
    compliance_matrix: ComplianceMatrix
    key_findings: list[Finding]
    recommendations: list[str]
    generated_at: str
    level: ComplianceLevel


class ReportRequest(BaseModel):
    """Body of POST /compliance/report."""

    events: list[SessionEventIn] = Field(..., description="Session events to evaluate")
    level: ComplianceLevel = Field(..., description="Compliance level to evaluate against")
