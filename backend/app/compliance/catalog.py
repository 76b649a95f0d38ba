"""
catalog.py - AGAD/COAFI requirement catalog.

The catalog is static configuration, not derived from events. Two reports
over the same events and level therefore always cover the same
requirements.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.models.enums import ComplianceLevel, Priority, RequirementStatus


@dataclass(frozen=True)
class Requirement:
    id: str
    category: str
    description: str
    status: RequirementStatus
    score: int
    evidence_count: int
    priority: Priority


REQUIREMENT_CATALOG: tuple[Requirement, ...] = (
    Requirement("AGAD-LOG-001", "Logging", "All sessions must have start and end events",
                RequirementStatus.COMPLIANT, 100, 5, Priority.HIGH),
    Requirement("AGAD-LOG-002", "Logging", "All events must have valid InfoCodes",
                RequirementStatus.PARTIAL, 85, 8, Priority.HIGH),
    Requirement("AGAD-LOG-003", "Logging", "All user actions must be logged",
                RequirementStatus.COMPLIANT, 95, 12, Priority.MEDIUM),
    Requirement("AGAD-LOG-004", "Logging", "All AI model invocations must be logged",
                RequirementStatus.COMPLIANT, 90, 10, Priority.MEDIUM),
    Requirement("AGAD-SEC-001", "Security", "All sensitive data must be redacted in logs",
                RequirementStatus.NON_COMPLIANT, 60, 3, Priority.HIGH),
    Requirement("AGAD-SEC-002", "Security", "All sessions must have user authentication",
                RequirementStatus.COMPLIANT, 100, 4, Priority.HIGH),
    Requirement("COAFI-001", "Aerospace", "All aerospace object references must be validated",
                RequirementStatus.PARTIAL, 75, 6, Priority.CRITICAL),
    Requirement("COAFI-002", "Aerospace", "All aerospace data must be traceable to source",
                RequirementStatus.PARTIAL, 80, 7, Priority.HIGH),
    Requirement("COAFI-003", "Aerospace", "All model outputs must be tagged with confidence scores",
                RequirementStatus.COMPLIANT, 95, 9, Priority.MEDIUM),
)

# Subset reported in ComplianceMetrics.requirement_compliance.
# AGAD-LOG-002 is scored live from the InfoCode compliance percentage.
METRIC_REQUIREMENTS: tuple[tuple[str, str, RequirementStatus, int | None], ...] = (
    ("AGAD-LOG-001", "All sessions must have start and end events", RequirementStatus.COMPLIANT, 100),
    ("AGAD-LOG-002", "All events must have valid InfoCodes", RequirementStatus.PARTIAL, None),
    ("AGAD-LOG-003", "All user actions must be logged", RequirementStatus.COMPLIANT, 95),
    ("AGAD-LOG-004", "All AI model invocations must be logged", RequirementStatus.COMPLIANT, 90),
    ("COAFI-001", "All aerospace object references must be validated", RequirementStatus.PARTIAL, 75),
)


def applies_to(requirement: Requirement, level: ComplianceLevel) -> bool:
    """Level-to-requirement filter."""
    level = ComplianceLevel(level)
    if level == ComplianceLevel.AGAD_L1:
        return requirement.priority == Priority.CRITICAL or requirement.id.startswith("AGAD-LOG")
    if level == ComplianceLevel.AGAD_L2:
        return (
            requirement.priority in (Priority.CRITICAL, Priority.HIGH)
            or requirement.id.startswith("AGAD-")
        )
    if level == ComplianceLevel.COAFI_BASIC:
        return requirement.id.startswith("COAFI-") or requirement.priority == Priority.CRITICAL
    # AGAD-L3, COAFI-FULL
    return True


def requirements_for(level: ComplianceLevel) -> list[Requirement]:
    return [r for r in REQUIREMENT_CATALOG if applies_to(r, level)]
