from .enums import (
    AlertSeverity,
    ComplianceLevel,
    ComplianceStatus,
    FindingType,
    IssueImpact,
    Priority,
    RequirementStatus,
    TimelineStatus,
    ViolationSeverity,
)

__all__ = [
    "AlertSeverity",
    "ComplianceLevel",
    "ComplianceStatus",
    "FindingType",
    "IssueImpact",
    "Priority",
    "RequirementStatus",
    "TimelineStatus",
    "ViolationSeverity",
]
