"""Warning letter domain enums."""

from enum import StrEnum


class WarningSeverity(StrEnum):
    """Warning severity enum. Mirrors the warning_letters_severity_check constraint."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class WarningStatus(StrEnum):
    """Warning status enum. Mirrors the warning_letters_status_check constraint."""

    ACTIVE = "active"
    RESOLVED = "resolved"
    REVOKED = "revoked"
