"""
infotrace_log/store.py - Append-only session event log

Responsibilities:
- Insert immutable rows, one transaction per event
- Return a session's events in insertion order
- Bulk clear by session (the only delete)

No updates. Rows are never modified once written.
"""
import json
import logging
from datetime import datetime
from typing import List

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, create_engine, distinct
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from infotrace_sdk.events import SessionEvent

from .errors import EventLogError


logger = logging.getLogger(__name__)

Base = declarative_base()


class SessionEventRow(Base):
    """Immutable event storage row."""
    __tablename__ = "session_events"

    # Insertion order
    position = Column(Integer, primary_key=True, autoincrement=True)

    session_id = Column(String(64), nullable=False, index=True)
    info_code = Column(String(255), nullable=False, default="")
    event_type = Column(String(128), nullable=False)
    timestamp = Column(String(64), nullable=False)
    details_json = Column(Text, nullable=False, default="{}")

    logged_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_session_position", "session_id", "position"),
    )

    def to_event(self) -> SessionEvent:
        return SessionEvent(
            session_id=self.session_id,
            info_code=self.info_code or "",
            event_type=self.event_type,
            timestamp=self.timestamp,
            details=json.loads(self.details_json or "{}"),
        )


def _engine_kwargs(database_url: str) -> dict:
    if not database_url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every pooled connection gets its own empty database
        kwargs["poolclass"] = StaticPool
    return kwargs


class SessionEventLog:
    """
    Append-only session event log.

    Invariants:
    - Rows are NEVER updated
    - Rows are only deleted by clear(session_id), and only that session's
    - query() order == append() order
    """

    def __init__(self, database_url: str = "sqlite://"):
        self.engine = create_engine(database_url, **_engine_kwargs(database_url))
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine)

    def append(self, event: SessionEvent) -> SessionEvent:
        """
        Persist one event. A missing timestamp is assigned here.

        Returns the event as stored.

        Raises:
            EventLogError: if the write fails. Nothing is persisted in that case.
        """
        stored = event.with_timestamp()
        db = self.Session()
        try:
            db.add(
                SessionEventRow(
                    session_id=stored.session_id,
                    info_code=stored.info_code or "",
                    event_type=stored.event_type,
                    timestamp=stored.timestamp,
                    details_json=json.dumps(stored.details, default=str),
                )
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Failed to append %s for session %s", stored.event_type, stored.session_id)
            raise EventLogError(f"append failed for session {stored.session_id}") from e
        finally:
            db.close()

        logger.debug("[%s] %s", stored.info_code, stored.event_type)
        return stored

    def query(self, session_id: str) -> List[SessionEvent]:
        db = self.Session()
        try:
            rows = (
                db.query(SessionEventRow)
                .filter(SessionEventRow.session_id == session_id)
                .order_by(SessionEventRow.position.asc())
                .all()
            )
            return [row.to_event() for row in rows]
        except SQLAlchemyError as e:
            logger.exception("Failed to read events for session %s", session_id)
            raise EventLogError(f"query failed for session {session_id}") from e
        finally:
            db.close()

    def clear(self, session_id: str) -> int:
        """Delete every event of one session. Returns the number removed."""
        db = self.Session()
        try:
            removed = (
                db.query(SessionEventRow)
                .filter(SessionEventRow.session_id == session_id)
                .delete(synchronize_session=False)
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Failed to clear events for session %s", session_id)
            raise EventLogError(f"clear failed for session {session_id}") from e
        finally:
            db.close()

        logger.info("Cleared %d events for session %s", removed, session_id)
        return removed

    def session_ids(self) -> List[str]:
        db = self.Session()
        try:
            return [row[0] for row in db.query(distinct(SessionEventRow.session_id)).all()]
        except SQLAlchemyError as e:
            logger.exception("Failed to list sessions")
            raise EventLogError("session listing failed") from e
        finally:
            db.close()
