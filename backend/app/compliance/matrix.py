"""
matrix.py - Compliance matrix builder.

Maps the static requirement catalog onto a compliance level. Only the
filtered subset varies by level; per-requirement status and score are
fixed catalog values. Summary rollups are computed over the filtered set.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from app.compliance.catalog import requirements_for
from app.compliance.metrics import percent
from app.models.enums import ComplianceLevel, RequirementStatus
from app.schemas.compliance import ComplianceMatrix, MatrixRequirement, MatrixSummary
from infotrace_sdk.events import SessionEvent


def build_matrix(events: Sequence[SessionEvent], level: ComplianceLevel) -> ComplianceMatrix:
    requirements = [
        MatrixRequirement(
            id=r.id,
            category=r.category,
            description=r.description,
            status=r.status,
            score=r.score,
            evidence_count=r.evidence_count,
            priority=r.priority,
        )
        for r in requirements_for(level)
    ]

    status_counts = Counter(r.status for r in requirements)
    total = len(requirements)
    compliant = status_counts[RequirementStatus.COMPLIANT]
    partial = status_counts[RequirementStatus.PARTIAL]
    non_compliant = status_counts[RequirementStatus.NON_COMPLIANT]

    return ComplianceMatrix(
        requirements=requirements,
        summary=MatrixSummary(
            compliant_count=compliant,
            partially_compliant_count=partial,
            non_compliant_count=non_compliant,
            total_count=total,
            compliant_percent=percent(compliant, total),
            partially_compliant_percent=percent(partial, total),
            non_compliant_percent=percent(non_compliant, total),
            category_counts=dict(Counter(r.category for r in requirements)),
            priority_counts=dict(Counter(r.priority.value for r in requirements)),
        ),
    )
