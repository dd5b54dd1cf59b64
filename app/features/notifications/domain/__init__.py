"""
Domain subpackage for the notification center.
"""

from .models import (
    Classification,
    ClassifiedNotification,
    NotificationCategory,
    NotificationRecord,
    NotificationType,
    Priority,
    ReadStatus,
    SuggestedAction,
)
from .rules import CATEGORY_RULES, PRIORITY_RULES

__all__ = [
    "CATEGORY_RULES",
    "Classification",
    "ClassifiedNotification",
    "NotificationCategory",
    "NotificationRecord",
    "NotificationType",
    "PRIORITY_RULES",
    "Priority",
    "ReadStatus",
    "SuggestedAction",
]
