"""
monitor.py - Continuous compliance monitor.

One ComplianceMonitor per session. While active it repeatedly:
  fetch events -> build report -> detect alerts -> prepend alerts -> record history

GUARANTEES:
- At most one tick in flight per monitor; an overlapping tick is skipped.
- stop() is safe from any state and idempotent.
- A tick that resolves after stop() (or a restart) is discarded. Every
  start/stop bumps an epoch; a tick applies its result only if the epoch
  it started under is still current.
- A failing tick is logged, recorded as last_error and reported to on_error.
  The loop keeps running; the next successful tick clears last_error.

The event-log fetch is blocking (SQLAlchemy) and runs via asyncio.to_thread.
Everything else runs on the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from app.compliance.report import generate_compliance_report
from app.models.enums import ComplianceLevel
from app.monitor.alerts import detect_alerts
from app.monitor.history import ComplianceHistory, history_point_from_report
from app.monitor.thresholds import ThresholdStore
from app.schemas.compliance import ComplianceReport
from app.schemas.monitoring import ComplianceAlert, ComplianceThresholds, MonitorStatus
from infotrace_sdk.events import SessionEvent

logger = logging.getLogger(__name__)

EventFetcher = Callable[[str], Sequence[SessionEvent]]
ErrorCallback = Callable[[str, Exception], None]

DEFAULT_INTERVAL_SECONDS = 60.0
MAX_ALERTS = 500


class ComplianceMonitor:
    """
    Periodic compliance evaluation for a single session.

    Lifecycle: Idle -> start() -> Active -> stop() -> Idle. start() must be
    called from inside a running event loop; the polling loop is a task on
    that loop.
    """

    def __init__(
        self,
        session_id: str,
        fetch_events: EventFetcher,
        thresholds: ThresholdStore,
        history: ComplianceHistory,
        *,
        level: ComplianceLevel = ComplianceLevel.AGAD_L2,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        require_end_event: bool = False,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.session_id = session_id
        self.fetch_events = fetch_events
        self.thresholds = thresholds
        self.history = history
        self.level = ComplianceLevel(level)
        self.interval_seconds = interval_seconds
        self.require_end_event = require_end_event
        self.on_error = on_error

        self.running = False
        self.last_report: ComplianceReport | None = None
        self.last_error: str | None = None
        self.last_error_at: str | None = None

        self._lock = threading.Lock()
        self._alerts: deque[ComplianceAlert] = deque(maxlen=MAX_ALERTS)
        self._task: asyncio.Task | None = None
        self._epoch = 0
        self._tick_in_flight = False

    def start(
        self,
        interval_seconds: float,
        level: ComplianceLevel,
        thresholds: ComplianceThresholds | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        if self.running:
            self.stop()

        if thresholds is not None:
            self.thresholds.set(thresholds)

        self.level = ComplianceLevel(level)
        self.interval_seconds = interval_seconds
        self._epoch += 1
        self.running = True
        self._task = asyncio.get_running_loop().create_task(self._run(self._epoch))

        logger.info(
            "Compliance monitor started: session=%s, level=%s, interval=%ss",
            self.session_id,
            self.level.value,
            self.interval_seconds,
        )

    def stop(self) -> None:
        # Always invalidate in-flight ticks, even when idle.
        self._epoch += 1
        if not self.running and self._task is None:
            return

        self.running = False
        if self._task is not None:
            self._task.cancel()
            self._task = None

        logger.info("Compliance monitor stopped: session=%s", self.session_id)

    async def _run(self, epoch: int) -> None:
        # First evaluation happens immediately, then every interval.
        while self.running and epoch == self._epoch:
            await self.tick()
            await asyncio.sleep(self.interval_seconds)

    async def tick(self) -> list[ComplianceAlert] | None:
        """
        Run one evaluation.

        Returns the alerts raised, or None when the tick was skipped,
        discarded as stale, or failed.
        """
        if self._tick_in_flight:
            logger.debug("Tick already in flight for session %s, skipping", self.session_id)
            return None

        self._tick_in_flight = True
        epoch = self._epoch
        try:
            events = await asyncio.to_thread(self.fetch_events, self.session_id)
            report = generate_compliance_report(
                events, self.level, require_end_event=self.require_end_event
            )
            alerts = detect_alerts(report, self.thresholds.get())

            if epoch != self._epoch:
                logger.info("Discarding stale tick result for session %s", self.session_id)
                return None

            with self._lock:
                self._alerts.extendleft(reversed(alerts))
                self.last_report = report
                self.last_error = None
                self.last_error_at = None
            self.history.add(self.session_id, history_point_from_report(report))

            logger.debug(
                "Tick complete: session=%s, score=%d, alerts=%d",
                self.session_id,
                report.metrics.compliance_score,
                len(alerts),
            )
            return alerts

        except Exception as exc:
            logger.exception("Compliance tick failed for session %s", self.session_id)
            with self._lock:
                self.last_error = f"{type(exc).__name__}: {exc}"
                self.last_error_at = datetime.now(timezone.utc).isoformat()
            if self.on_error is not None:
                self.on_error(self.session_id, exc)
            return None

        finally:
            self._tick_in_flight = False

    @property
    def alerts(self) -> list[ComplianceAlert]:
        """Accumulated alerts, newest first."""
        with self._lock:
            return list(self._alerts)

    def clear_alerts(self) -> None:
        with self._lock:
            self._alerts.clear()

    def status(self) -> MonitorStatus:
        with self._lock:
            last_report = self.last_report
            alerts = list(self._alerts)
            last_error = self.last_error
            last_error_at = self.last_error_at
        return MonitorStatus(
            session_id=self.session_id,
            active=self.running,
            interval_seconds=self.interval_seconds,
            level=self.level,
            last_report=last_report,
            alerts=alerts,
            history=self.history.get(self.session_id),
            last_error=last_error,
            last_error_at=last_error_at,
        )


class MonitorRegistry:
    """Owns one monitor per session plus the shared thresholds and history."""

    def __init__(
        self,
        fetch_events: EventFetcher,
        thresholds: ThresholdStore | None = None,
        history: ComplianceHistory | None = None,
        *,
        require_end_event: bool = False,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.fetch_events = fetch_events
        self.thresholds = thresholds or ThresholdStore()
        self.history = history or ComplianceHistory()
        self.require_end_event = require_end_event
        self.on_error = on_error
        self._monitors: dict[str, ComplianceMonitor] = {}

    def get(self, session_id: str) -> ComplianceMonitor | None:
        return self._monitors.get(session_id)

    def get_or_create(self, session_id: str) -> ComplianceMonitor:
        monitor = self._monitors.get(session_id)
        if monitor is None:
            monitor = ComplianceMonitor(
                session_id,
                self.fetch_events,
                self.thresholds,
                self.history,
                require_end_event=self.require_end_event,
                on_error=self.on_error,
            )
            self._monitors[session_id] = monitor
        return monitor

    def start(
        self,
        session_id: str,
        interval_seconds: float,
        level: ComplianceLevel,
        thresholds: ComplianceThresholds | None = None,
    ) -> ComplianceMonitor:
        monitor = self.get_or_create(session_id)
        monitor.start(interval_seconds, level, thresholds)
        return monitor

    def stop(self, session_id: str) -> bool:
        """Returns False when no monitor exists for the session."""
        monitor = self._monitors.get(session_id)
        if monitor is None:
            return False
        monitor.stop()
        return True

    def remove(self, session_id: str) -> bool:
        """
        Stop and forget a session's monitor, dropping its alerts and last
        report. History is shared and kept. Returns False when none exists.
        """
        monitor = self._monitors.pop(session_id, None)
        if monitor is None:
            return False
        monitor.stop()
        logger.info("Compliance monitor removed: session=%s", session_id)
        return True

    def status(self, session_id: str) -> MonitorStatus:
        monitor = self._monitors.get(session_id)
        if monitor is None:
            return MonitorStatus(
                session_id=session_id,
                active=False,
                history=self.history.get(session_id),
            )
        return monitor.status()

    def clear_alerts(self, session_id: str) -> None:
        monitor = self._monitors.get(session_id)
        if monitor is not None:
            monitor.clear_alerts()

    def stop_all(self) -> None:
        active = [m for m in self._monitors.values() if m.running]
        for monitor in active:
            monitor.stop()
        if active:
            logger.info("Stopped %d compliance monitors", len(active))
