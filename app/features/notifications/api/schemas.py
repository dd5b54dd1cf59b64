"""Request/response models for the notification center endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..domain.models import (
    Classification,
    ClassifiedNotification,
    NotificationCategory,
    NotificationType,
    Priority,
)


class ClassifyRequest(BaseModel):
    title: str = Field(..., max_length=500)
    message: str | None = Field(None, max_length=5000)


class SuggestedActionResponse(BaseModel):
    label: str
    route: str | None = None
    icon: str


class ClassificationResponse(BaseModel):
    category: NotificationCategory
    category_label: str
    category_icon: str
    type: NotificationType
    priority: Priority
    suggested_actions: list[SuggestedActionResponse]

    @classmethod
    def from_classification(cls, classification: Classification) -> "ClassificationResponse":
        return cls(
            category=classification.category,
            category_label=classification.category.label,
            category_icon=classification.category.icon,
            type=classification.type,
            priority=classification.priority,
            suggested_actions=[
                SuggestedActionResponse(label=a.label, route=a.route, icon=a.icon)
                for a in classification.suggested_actions
            ],
        )


class NotificationResponse(ClassificationResponse):
    id: str
    title: str
    message: str
    read: bool
    created_at: datetime
    action_url: str | None = None
    kind: str | None = None

    @classmethod
    def from_classified(cls, item: ClassifiedNotification) -> "NotificationResponse":
        base = ClassificationResponse.from_classification(item.classification)
        record = item.record
        return cls(
            **base.model_dump(),
            id=record.id,
            title=record.title,
            message=record.message,
            read=record.read,
            created_at=record.created_at,
            action_url=record.action_url,
            kind=record.kind,
        )


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    total: int
    unread_count: int


class UnreadCountResponse(BaseModel):
    unread_count: int


class MarkAllReadResponse(BaseModel):
    success: bool
    updated: int
