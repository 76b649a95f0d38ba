from enum import Enum


class ComplianceLevel(str, Enum):
    AGAD_L1 = "AGAD-L1"
    AGAD_L2 = "AGAD-L2"
    AGAD_L3 = "AGAD-L3"
    COAFI_BASIC = "COAFI-BASIC"
    COAFI_FULL = "COAFI-FULL"


class ComplianceStatus(str, Enum):
    COMPLIANT = "COMPLIANT"
    NON_COMPLIANT = "NON_COMPLIANT"


class RequirementStatus(str, Enum):
    COMPLIANT = "COMPLIANT"
    PARTIAL = "PARTIAL"
    NON_COMPLIANT = "NON_COMPLIANT"


class Priority(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ViolationSeverity(str, Enum):
    CRITICAL = "CRITICAL"  # Breaks the audit trail or exposes data
    MAJOR = "MAJOR"        # Degrades traceability
    MINOR = "MINOR"        # Hygiene


class AlertSeverity(str, Enum):
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    INFO = "INFO"


class TimelineStatus(str, Enum):
    INFO = "INFO"
    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"


class FindingType(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


class IssueImpact(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
