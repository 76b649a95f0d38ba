"""Append-only session event log."""

from .errors import EventLogError
from .store import SessionEventLog

__all__ = ["EventLogError", "SessionEventLog"]
