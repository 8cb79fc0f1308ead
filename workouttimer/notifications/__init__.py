"""Notification package."""

from .service import (
    HapticKind,
    NotificationService,
    NullNotificationService,
    COMPLETION_ALERT_ID,
    IMMEDIATE_ALERT_PREFIX,
    ALERT_TITLE,
    SCHEDULED_ALERT_BODY,
    IMMEDIATE_ALERT_BODY,
)

__all__ = [
    "HapticKind",
    "NotificationService",
    "NullNotificationService",
    "COMPLETION_ALERT_ID",
    "IMMEDIATE_ALERT_PREFIX",
    "ALERT_TITLE",
    "SCHEDULED_ALERT_BODY",
    "IMMEDIATE_ALERT_BODY",
]
