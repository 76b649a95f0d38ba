"""Continuous compliance monitoring: thresholds, alerts, history."""

from .alerts import detect_alerts, monitor_compliance
from .history import ComplianceHistory, history_point_from_report
from .monitor import ComplianceMonitor, MonitorRegistry
from .thresholds import ThresholdStore, load_thresholds

__all__ = [
    "ComplianceHistory",
    "ComplianceMonitor",
    "MonitorRegistry",
    "ThresholdStore",
    "detect_alerts",
    "history_point_from_report",
    "load_thresholds",
    "monitor_compliance",
]
