"""
history.py - Per-session compliance history.

Each session keeps a bounded ring of history points, newest first. When
the ring is full the oldest point is dropped.
"""

from __future__ import annotations

import threading
from collections import deque
from datetime import datetime, timezone

from app.schemas.compliance import ComplianceReport
from app.schemas.monitoring import ComplianceHistoryPoint

DEFAULT_HISTORY_LIMIT = 100


def history_point_from_report(
    report: ComplianceReport, *, now: datetime | None = None
) -> ComplianceHistoryPoint:
    metrics = report.metrics
    return ComplianceHistoryPoint(
        timestamp=(now or datetime.now(timezone.utc)).isoformat(),
        compliance_score=metrics.compliance_score,
        violation_count=metrics.violation_count,
        critical_violations=metrics.critical_violations,
        info_code_compliance=metrics.info_code_compliance_percent,
        session_completeness=metrics.session_completeness_percent,
        traceability=metrics.traceability_percent,
    )


class ComplianceHistory:
    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit <= 0:
            raise ValueError("History limit must be positive")
        self.limit = limit
        self._lock = threading.Lock()
        self._points: dict[str, deque[ComplianceHistoryPoint]] = {}

    def add(self, session_id: str, point: ComplianceHistoryPoint) -> None:
        with self._lock:
            ring = self._points.setdefault(session_id, deque(maxlen=self.limit))
            # appendleft on a full deque drops from the right (oldest)
            ring.appendleft(point)

    def get(self, session_id: str) -> list[ComplianceHistoryPoint]:
        """Newest first. Unknown sessions return an empty list."""
        with self._lock:
            return list(self._points.get(session_id, ()))

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._points.pop(session_id, None)
