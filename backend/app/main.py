import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.api import router as api_router
from app.config import Settings, settings as default_settings
from app.database import create_event_log
from app.monitor import ComplianceHistory, MonitorRegistry, ThresholdStore, load_thresholds
from infotrace_log import EventLogError, SessionEventLog

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    event_log: SessionEventLog | None = None,
) -> FastAPI:
    settings = settings or default_settings

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log = event_log or create_event_log(settings.EVENT_LOG_URL)
        thresholds = ThresholdStore(load_thresholds(settings.MONITOR_CONFIG_PATH))
        app.state.settings = settings
        app.state.event_log = log
        app.state.monitors = MonitorRegistry(
            log.query,
            thresholds,
            ComplianceHistory(settings.HISTORY_LIMIT),
            require_end_event=settings.STRICT_SESSION_END_CHECK,
        )
        logger.info("InfoTrace compliance API started")
        yield
        app.state.monitors.stop_all()
        logger.info("InfoTrace compliance API stopped")

    app = FastAPI(title="InfoTrace Compliance API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(EventLogError)
    async def event_log_error_handler(request: Request, exc: EventLogError):
        return JSONResponse(status_code=503, content={"detail": f"Event log unavailable: {exc}"})

    # Health check route
    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    # Include v1 routers
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
