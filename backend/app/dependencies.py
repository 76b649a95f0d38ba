# backend/app/dependencies.py
from fastapi import Request

from app.monitor import MonitorRegistry, ThresholdStore
from infotrace_log import SessionEventLog


def get_event_log(request: Request) -> SessionEventLog:
    return request.app.state.event_log


def get_monitors(request: Request) -> MonitorRegistry:
    return request.app.state.monitors


def get_thresholds(request: Request) -> ThresholdStore:
    return request.app.state.monitors.thresholds
