# backend/app/api/v1/endpoints/compliance.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from app.compliance import generate_compliance_report
from app.dependencies import get_event_log, get_thresholds
from app.models.enums import ComplianceLevel
from app.monitor import ThresholdStore, detect_alerts
from app.schemas.compliance import ComplianceReport, ReportRequest
from app.schemas.monitoring import AlertRequest, ComplianceAlert
from infotrace_log import SessionEventLog

router = APIRouter()


@router.post("/report", response_model=ComplianceReport)
def create_report(body: ReportRequest, request: Request):
    settings = request.app.state.settings
    events = [e.to_event() for e in body.events]
    return generate_compliance_report(
        events, body.level, require_end_event=settings.STRICT_SESSION_END_CHECK
    )


@router.post("/alerts", response_model=List[ComplianceAlert])
def evaluate_alerts(body: AlertRequest, thresholds: ThresholdStore = Depends(get_thresholds)):
    return detect_alerts(body.report, body.thresholds or thresholds.get())


@router.get("/{session_id}", response_model=ComplianceReport)
def session_report(
    session_id: str,
    request: Request,
    level: Optional[ComplianceLevel] = Query(None),
    log: SessionEventLog = Depends(get_event_log),
):
    settings = request.app.state.settings
    level = level or settings.DEFAULT_COMPLIANCE_LEVEL
    return generate_compliance_report(
        log.query(session_id), level, require_end_event=settings.STRICT_SESSION_END_CHECK
    )
