"""Compliance engine: metrics, matrix, violations and report assembly."""

from .matrix import build_matrix
from .metrics import compute_metrics
from .report import generate_compliance_report
from .violations import detect_violations

__all__ = ["build_matrix", "compute_metrics", "detect_violations", "generate_compliance_report"]
