"""
infotrace_sdk/session.py - Session value object

A Session owns one session id and its session-level InfoCode, and writes
lifecycle events to an event sink (anything with an append(SessionEvent)
method, normally infotrace_log.SessionEventLog).

Used as a context manager so the session is always closed out:
    with Session(event_log, user_id="u1") as session:
        with session.trace("MODEL_EXECUTION", InfoCodePrefix.MODEL.qualified("gpt-4o")):
            ...
        session.end()

Leaving the block without end() records SESSION_TERMINATED_UNEXPECTEDLY,
on error paths too.
"""
from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Protocol

from .events import EventType, InfoCodePrefix, SessionEvent
from .infocode import generate_info_code

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def append(self, event: SessionEvent) -> Any: ...


class Session:
    def __init__(self, event_log: EventSink, user_id: str | None = None, session_id: str | None = None):
        self.event_log = event_log
        self.user_id = user_id
        self.session_id = session_id or str(uuid.uuid4())
        self.info_code = generate_info_code(InfoCodePrefix.SESSION.value, self.session_id)
        self.start_time = datetime.now(timezone.utc)
        self._started_monotonic = time.monotonic()
        self.is_active = False
        self._started = False

    def __enter__(self) -> Session:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.is_active:
            return
        details: dict[str, Any] = {"duration_ms": self._duration_ms()}
        if exc_type is not None:
            details["error_type"] = exc_type.__name__
        self.is_active = False
        self.record(EventType.SESSION_TERMINATED_UNEXPECTEDLY, self.info_code, details)

    def start(self) -> None:
        if self._started:
            raise RuntimeError("Session already started")
        self._started = True
        self.is_active = True
        self.record(
            EventType.SESSION_STARTED,
            self.info_code,
            {
                "user_id": self.user_id,
                "start_time": self.start_time.isoformat(),
                "timezone": str(datetime.now().astimezone().tzinfo),
            },
        )

    def end(self) -> None:
        """Record SESSION_ENDED. A second call is a no-op."""
        if not self.is_active:
            return
        self.is_active = False
        self.record(
            EventType.SESSION_ENDED,
            self.info_code,
            {
                "duration_ms": self._duration_ms(),
                "end_time": datetime.now(timezone.utc).isoformat(),
            },
        )

    def record(self, event_type: EventType | str, info_code: str, details: dict[str, Any] | None = None) -> SessionEvent:
        if not self._started:
            raise RuntimeError("No active session")

        event = SessionEvent(
            session_id=self.session_id,
            info_code=info_code,
            event_type=event_type.value if isinstance(event_type, EventType) else event_type,
            details=details or {},
        )
        stored = self.event_log.append(event)
        return stored if isinstance(stored, SessionEvent) else event

    def start_interaction(self, interaction_type: str) -> str:
        info_code = generate_info_code(f"QAO-UIF-{interaction_type}", self.session_id)
        self.record(
            f"{interaction_type}_STARTED",
            info_code,
            {"timestamp": datetime.now(timezone.utc).isoformat()},
        )
        return info_code

    def end_interaction(self, info_code: str, details: dict[str, Any] | None = None) -> None:
        self.record(EventType.INTERACTION_COMPLETED, info_code, details)

    @contextmanager
    def trace(self, operation: str, prefix: str, details: dict[str, Any] | None = None) -> Iterator[str]:
        """
        Trace one collaborator call (model execution, registry or MCP query).

        Emits {operation}_STARTED, then {operation}_COMPLETED or
        {operation}_ERROR. Errors are logged and re-raised, never swallowed;
        each trace block is independent so one failing call does not abort
        its siblings.
        """
        info_code = generate_info_code(prefix, self.session_id)
        base = dict(details or {})
        self.record(f"{operation}_STARTED", info_code, base)
        try:
            yield info_code
        except Exception as e:
            logger.exception("[%s] %s failed", info_code, operation)
            self.record(f"{operation}_ERROR", info_code, {**base, "error": str(e) or type(e).__name__})
            raise
        self.record(f"{operation}_COMPLETED", info_code, base)

    def _duration_ms(self) -> int:
        return int((time.monotonic() - self._started_monotonic) * 1000)
