"""Test configuration and fixtures."""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Add paths
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from infotrace_log import SessionEventLog
from infotrace_sdk.events import EventType, InfoCodePrefix, SessionEvent

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

_FLOW = (
    (EventType.SESSION_STARTED, InfoCodePrefix.SESSION),
    (EventType.USER_QUERY_SUBMITTED, InfoCodePrefix.QUERY),
    (EventType.ANALYSIS_STARTED, InfoCodePrefix.ANALYSIS),
    (EventType.ANALYSIS_COMPLETED, InfoCodePrefix.ANALYSIS),
    (EventType.MODEL_EXECUTION_STARTED, InfoCodePrefix.MODEL),
    (EventType.MODEL_EXECUTION_COMPLETED, InfoCodePrefix.MODEL),
    (EventType.REGISTRY_QUERY_STARTED, InfoCodePrefix.REGISTRY),
    (EventType.REGISTRY_QUERY_COMPLETED, InfoCodePrefix.REGISTRY),
    (EventType.AI_RESPONSE_GENERATED, InfoCodePrefix.RESPONSE),
    (EventType.SESSION_ENDED, InfoCodePrefix.SESSION),
)


def build_events(count=10, session_id="s1", missing_info_code_at=()):
    """Deterministic event stream: one second apart, InfoCodes on every event unless listed."""
    events = []
    for i in range(count):
        event_type, prefix = _FLOW[i % len(_FLOW)]
        info_code = "" if i in missing_info_code_at else f"{prefix.value}-20240301-{i:08x}"
        events.append(
            SessionEvent(
                session_id=session_id,
                info_code=info_code,
                event_type=event_type.value,
                timestamp=(FIXED_NOW + timedelta(seconds=i)).isoformat(),
                details={"step": i},
            )
        )
    return events


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def event_log():
    """Fresh in-memory event log per test."""
    return SessionEventLog("sqlite://")


@pytest.fixture
def events():
    """Ten well-formed events for session s1."""
    return build_events()


@pytest.fixture
def events_one_missing():
    """Ten events for session s1, the fourth without an InfoCode."""
    return build_events(missing_info_code_at=(3,))


@pytest.fixture
def make_events():
    """Factory fixture wrapping build_events for tests that need custom streams."""
    return build_events
