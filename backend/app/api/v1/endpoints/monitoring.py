# backend/app/api/v1/endpoints/monitoring.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from app.dependencies import get_monitors, get_thresholds
from app.monitor import MonitorRegistry, ThresholdStore
from app.schemas.monitoring import (
    ComplianceHistoryPoint,
    ComplianceThresholds,
    MonitorStartRequest,
    MonitorStatus,
)

router = APIRouter()


@router.get("/thresholds", response_model=ComplianceThresholds)
def get_compliance_thresholds(thresholds: ThresholdStore = Depends(get_thresholds)):
    return thresholds.get()


@router.put("/thresholds", response_model=ComplianceThresholds)
def set_compliance_thresholds(
    body: ComplianceThresholds, thresholds: ThresholdStore = Depends(get_thresholds)
):
    return thresholds.set(body)


@router.get("/{session_id}/history", response_model=List[ComplianceHistoryPoint])
def get_compliance_history(session_id: str, monitors: MonitorRegistry = Depends(get_monitors)):
    return monitors.history.get(session_id)


@router.delete("/{session_id}/history")
def clear_compliance_history(session_id: str, monitors: MonitorRegistry = Depends(get_monitors)):
    monitors.history.clear(session_id)
    return {"session_id": session_id, "cleared": True}


# Start/stop are async so the polling task lives on the server's event loop.
@router.post("/{session_id}/start", response_model=MonitorStatus)
async def start_monitoring(
    session_id: str,
    request: Request,
    body: Optional[MonitorStartRequest] = None,
    monitors: MonitorRegistry = Depends(get_monitors),
):
    if body is None:
        settings = request.app.state.settings
        body = MonitorStartRequest(
            interval_seconds=settings.MONITOR_INTERVAL_SECONDS,
            level=settings.DEFAULT_COMPLIANCE_LEVEL,
        )
    monitor = monitors.start(session_id, body.interval_seconds, body.level, body.thresholds)
    return monitor.status()


@router.post("/{session_id}/stop", response_model=MonitorStatus)
async def stop_monitoring(session_id: str, monitors: MonitorRegistry = Depends(get_monitors)):
    if not monitors.stop(session_id):
        raise HTTPException(status_code=404, detail="No monitor for session")
    return monitors.status(session_id)


@router.delete("/{session_id}")
async def remove_monitor(session_id: str, monitors: MonitorRegistry = Depends(get_monitors)):
    if not monitors.remove(session_id):
        raise HTTPException(status_code=404, detail="No monitor for session")
    return {"session_id": session_id, "removed": True}


@router.get("/{session_id}/status", response_model=MonitorStatus)
def monitoring_status(session_id: str, monitors: MonitorRegistry = Depends(get_monitors)):
    return monitors.status(session_id)


@router.delete("/{session_id}/alerts")
def clear_alerts(session_id: str, monitors: MonitorRegistry = Depends(get_monitors)):
    monitors.clear_alerts(session_id)
    return {"session_id": session_id, "cleared": True}
