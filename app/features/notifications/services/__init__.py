from .classifier import (
    NotificationClassifier,
    classifier,
    classify,
    filter_notifications,
    sort_notifications,
)

__all__ = [
    "NotificationClassifier",
    "classifier",
    "classify",
    "filter_notifications",
    "sort_notifications",
]
