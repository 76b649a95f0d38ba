"""
thresholds.py - Alert threshold configuration.

Defaults come from monitoring.yaml when present:

    version: "1.0.0"
    thresholds:
      overall_compliance: 80
      critical_violations: 1
      ...

A missing file falls back to the built-in defaults. A file that is not a
YAML mapping raises ValueError; the service must not start on a broken
config.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import yaml

from app.schemas.monitoring import ComplianceThresholds

logger = logging.getLogger(__name__)


def load_thresholds(config_path: str | Path) -> ComplianceThresholds:
    path = Path(config_path)
    if not path.exists():
        logger.info("Monitoring config not found at %s, using default thresholds", path)
        return ComplianceThresholds()

    config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(config, dict):
        raise ValueError(f"Monitoring config is not a valid YAML mapping: {path}")

    section = config.get("thresholds") or {}
    if not isinstance(section, dict):
        raise ValueError(f"'thresholds' in {path} must be a mapping")

    # pydantic's ValidationError is a ValueError subclass
    thresholds = ComplianceThresholds(**section)
    logger.info(
        "Monitoring config loaded: version=%s, thresholds=%s",
        config.get("version", "UNKNOWN"),
        thresholds.model_dump(),
    )
    return thresholds


class ThresholdStore:
    """Active thresholds. set() replaces the whole value, never merges."""

    def __init__(self, defaults: ComplianceThresholds | None = None) -> None:
        self._lock = threading.Lock()
        self._thresholds = defaults or ComplianceThresholds()

    def get(self) -> ComplianceThresholds:
        with self._lock:
            return self._thresholds

    def set(self, thresholds: ComplianceThresholds) -> ComplianceThresholds:
        with self._lock:
            self._thresholds = thresholds
        logger.info("Compliance thresholds updated: %s", thresholds.model_dump())
        return thresholds
