"""
infotrace_log/errors.py - Event log error types
"""


class EventLogError(Exception):
    """Raised when the underlying store cannot read or write events."""
