"""
infotrace_sdk/events.py - Session event definitions

A SessionEvent is the atomic unit of the trace log. Once appended it is
never modified; the log only ever grows (or is cleared per session).
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class EventType(str, Enum):
    SESSION_STARTED = "SESSION_STARTED"
    SESSION_ENDED = "SESSION_ENDED"
    SESSION_TERMINATED_UNEXPECTEDLY = "SESSION_TERMINATED_UNEXPECTEDLY"
    INTERACTION_COMPLETED = "INTERACTION_COMPLETED"
    USER_QUERY_SUBMITTED = "USER_QUERY_SUBMITTED"
    USER_QUERY_ERROR = "USER_QUERY_ERROR"
    ANALYSIS_STARTED = "ANALYSIS_STARTED"
    ANALYSIS_COMPLETED = "ANALYSIS_COMPLETED"
    ANALYSIS_ERROR = "ANALYSIS_ERROR"
    MODEL_EXECUTION_STARTED = "MODEL_EXECUTION_STARTED"
    MODEL_EXECUTION_COMPLETED = "MODEL_EXECUTION_COMPLETED"
    MODEL_EXECUTION_ERROR = "MODEL_EXECUTION_ERROR"
    REGISTRY_QUERY_STARTED = "REGISTRY_QUERY_STARTED"
    REGISTRY_QUERY_COMPLETED = "REGISTRY_QUERY_COMPLETED"
    REGISTRY_QUERY_ERROR = "REGISTRY_QUERY_ERROR"
    MCP_QUERY_STARTED = "MCP_QUERY_STARTED"
    MCP_QUERY_COMPLETED = "MCP_QUERY_COMPLETED"
    MCP_QUERY_ERROR = "MCP_QUERY_ERROR"
    AI_RESPONSE_GENERATED = "AI_RESPONSE_GENERATED"


class InfoCodePrefix(str, Enum):
    """Prefixes collaborators stamp on their InfoCodes."""
    SESSION = "QAO-UIF-SESSION"
    QUERY = "QAO-UIF-QUERY"
    ANALYSIS = "QAO-UIF-ANALYSIS"
    ROUTING = "QAO-UIF-ROUTING"
    MODEL = "QAO-UIF-MODEL"
    REGISTRY = "QAO-UIF-REGISTRY"
    MCP = "QAO-UIF-MCP"
    AGGREGATION = "QAO-UIF-AGGREGATION"
    RESPONSE = "QAO-UIF-RESPONSE"
    ERROR = "QAO-UIF-ERROR"

    def qualified(self, suffix: str) -> str:
        """e.g. InfoCodePrefix.MODEL.qualified("gpt-4o") -> QAO-UIF-MODEL-gpt-4o"""
        return f"{self.value}-{suffix}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class SessionEvent:
    """
    Immutable session event.

    info_code may be empty for events emitted by components that failed to
    stamp one; the compliance engine reports those rather than rejecting them.
    """
    session_id: str
    info_code: str
    event_type: str
    timestamp: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def with_timestamp(self, timestamp: str | None = None) -> SessionEvent:
        """Return this event, stamped with `timestamp` (or now) if it has none."""
        if self.timestamp:
            return self
        return replace(self, timestamp=timestamp or utc_now_iso())

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "info_code": self.info_code,
            "event_type": self.event_type,
            "timestamp": self.timestamp,
            "details": dict(self.details),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionEvent:
        return cls(
            session_id=data["session_id"],
            info_code=data.get("info_code") or "",
            event_type=data.get("event_type") or "",
            timestamp=data.get("timestamp"),
            details=dict(data.get("details") or {}),
        )
