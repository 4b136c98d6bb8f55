"""Security event logging for authentication and authorization.

Security-relevant events are written to a dedicated ``security`` logger so
they can be routed separately from application logs.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID


class SecurityEventType(str, Enum):
    """Types of security events that are logged."""

    # Authentication events
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGIN_RATE_LIMITED = "login_rate_limited"
    TOKEN_REJECTED = "token_rejected"
    HYDRATION_FAILED = "hydration_failed"

    # Authorization events
    ROLE_DENIED = "role_denied"
    RELATIONSHIP_DENIED = "relationship_denied"


security_logger = logging.getLogger("security")


def log_security_event(
    event_type: SecurityEventType,
    employee_id: UUID | str | None = None,
    email: str | None = None,
    target_employee_id: UUID | str | None = None,
    ip_address: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """Log a security event.

    Args:
        event_type: The type of security event
        employee_id: The ID of the employee performing the action
        email: The email used, for login events
        target_employee_id: The employee being acted upon
        ip_address: The client IP address
        details: Additional event-specific details
        success: Whether the operation succeeded
    """
    event_data: dict[str, Any] = {
        "event_type": event_type.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "success": success,
        "actor": {
            "employee_id": str(employee_id) if employee_id else None,
            "email": email,
            "ip_address": ip_address,
        },
    }

    if target_employee_id:
        event_data["target"] = {"employee_id": str(target_employee_id)}

    if details:
        event_data["details"] = details

    if success:
        security_logger.info(
            f"Security event: {event_type.value}",
            extra={"security_event": event_data},
        )
    else:
        security_logger.warning(
            f"Security event (failed): {event_type.value}",
            extra={"security_event": event_data},
        )
