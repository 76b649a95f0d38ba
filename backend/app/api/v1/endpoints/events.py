from typing import List

from fastapi import APIRouter, Depends

from app.dependencies import get_event_log
from app.schemas.event import SessionEventIn, SessionEventRead
from infotrace_log import SessionEventLog

router = APIRouter()


@router.post("/", response_model=SessionEventRead, status_code=201)
def append_event(event: SessionEventIn, log: SessionEventLog = Depends(get_event_log)):
    stored = log.append(event.to_event())
    return SessionEventRead.from_event(stored)


@router.get("/{session_id}", response_model=List[SessionEventRead])
def list_session_events(session_id: str, log: SessionEventLog = Depends(get_event_log)):
    return [SessionEventRead.from_event(e) for e in log.query(session_id)]


@router.delete("/{session_id}")
def clear_session_events(session_id: str, log: SessionEventLog = Depends(get_event_log)):
    deleted = log.clear(session_id)
    return {"session_id": session_id, "deleted": deleted}
