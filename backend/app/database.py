import logging

from infotrace_log import SessionEventLog

from .config import settings

logger = logging.getLogger(__name__)


def create_event_log(database_url: str | None = None) -> SessionEventLog:
    url = database_url or settings.EVENT_LOG_URL
    logger.info("Opening session event log: %s", url.split("@")[-1])
    return SessionEventLog(url)
