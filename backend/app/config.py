from typing import List

from pydantic_settings import BaseSettings

from app.models.enums import ComplianceLevel


class Settings(BaseSettings):
    # Event log
    EVENT_LOG_URL: str = "sqlite:///./infotrace_events.db"

    # Compliance
    DEFAULT_COMPLIANCE_LEVEL: ComplianceLevel = ComplianceLevel.AGAD_L2
    STRICT_SESSION_END_CHECK: bool = False

    # Monitoring
    MONITOR_INTERVAL_SECONDS: float = 60
    MONITOR_CONFIG_PATH: str = "monitoring.yaml"
    HISTORY_LIMIT: int = 100

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "allow"  # Allow extra environment variables


settings = Settings()
