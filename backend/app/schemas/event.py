# backend/app/schemas/event.py
from typing import Any

from pydantic import BaseModel, Field, field_validator

from infotrace_sdk.events import SessionEvent


class SessionEventIn(BaseModel):
    session_id: str = Field(..., min_length=1)
    info_code: str = Field("", description="Missing or null is stored as empty and flagged at report time")
    event_type: str = Field(..., min_length=1)
    timestamp: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("info_code", mode="before")
    @classmethod
    def null_info_code_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_event(self) -> SessionEvent:
        return SessionEvent(
            session_id=self.session_id,
            info_code=self.info_code,
            event_type=self.event_type,
            timestamp=self.timestamp,
            details=self.details,
        )


class SessionEventRead(SessionEventIn):
    timestamp: str

    @classmethod
    def from_event(cls, event: SessionEvent) -> "SessionEventRead":
        return cls(**event.to_dict())
