"""
Domain models for the notification center.

Category, type, priority and suggested actions are derived per request from
the notification title and are never written back to the notifications table.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationCategory(str, Enum):
    COMPANY_ACTIVITY = "company_activity"
    OPPORTUNITY_STATUS = "opportunity_status"
    APPLICATION = "application"
    SERVICE_INQUIRY = "service_inquiry"
    REMINDER = "reminder"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]

    @property
    def icon(self) -> str:
        return CATEGORY_ICONS[self]


CATEGORY_LABELS = {
    NotificationCategory.COMPANY_ACTIVITY: "Empresarial",
    NotificationCategory.OPPORTUNITY_STATUS: "Oportunidades",
    NotificationCategory.APPLICATION: "Aplicaciones",
    NotificationCategory.SERVICE_INQUIRY: "Servicios",
    NotificationCategory.REMINDER: "Recordatorios",
}

CATEGORY_ICONS = {
    NotificationCategory.COMPANY_ACTIVITY: "building",
    NotificationCategory.OPPORTUNITY_STATUS: "briefcase",
    NotificationCategory.APPLICATION: "users",
    NotificationCategory.SERVICE_INQUIRY: "shopping-bag",
    NotificationCategory.REMINDER: "alert-triangle",
}


class NotificationType(str, Enum):
    COMPANY_ACTIVITY = "company_activity"
    OPPORTUNITY_STATUS = "opportunity_status"
    APPLICATION = "application"
    SERVICE_INQUIRY = "service_inquiry"
    INACTIVITY_REMINDER = "inactivity_reminder"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class ReadStatus(str, Enum):
    ALL = "all"
    READ = "read"
    UNREAD = "unread"


@dataclass(frozen=True, slots=True)
class SuggestedAction:
    """Follow-up offered next to a notification; route None means not available yet."""

    label: str
    route: str | None
    icon: str


@dataclass(frozen=True, slots=True)
class Classification:
    category: NotificationCategory
    type: NotificationType
    priority: Priority
    suggested_actions: tuple[SuggestedAction, ...] = ()


@dataclass(slots=True)
class NotificationRecord:
    """Represents a notifications row."""

    id: str
    user_id: str
    title: str
    message: str
    read: bool
    created_at: datetime
    action_url: str | None = None
    kind: str | None = None


@dataclass(slots=True)
class ClassifiedNotification:
    record: NotificationRecord
    classification: Classification

    @property
    def category(self) -> NotificationCategory:
        return self.classification.category

    @property
    def priority(self) -> Priority:
        return self.classification.priority
