"""
Notification classifier - maps a title to category, type, priority and
suggested follow-up actions using the rule tables in domain.rules.
"""

from collections.abc import Iterable, Sequence

from ..domain.models import (
    Classification,
    ClassifiedNotification,
    NotificationCategory,
    NotificationRecord,
    Priority,
    ReadStatus,
)
from ..domain.rules import (
    CATEGORY_RULES,
    DEFAULT_CATEGORY_RULE,
    DEFAULT_PRIORITY,
    PRIORITY_RULES,
    CategoryRule,
    PriorityRule,
)


class NotificationClassifier:
    def __init__(
        self,
        category_rules: Sequence[CategoryRule] = CATEGORY_RULES,
        priority_rules: Sequence[PriorityRule] = PRIORITY_RULES,
        default_category: CategoryRule = DEFAULT_CATEGORY_RULE,
        default_priority: Priority = DEFAULT_PRIORITY,
    ):
        self.category_rules = tuple(category_rules)
        self.priority_rules = tuple(priority_rules)
        self.default_category = default_category
        self.default_priority = default_priority

    def classify(self, title: str | None, message: str | None = None) -> Classification:
        """
        Classify a notification by its title.

        The message is accepted for API symmetry but only the title is matched.
        """
        text = title or ""
        category_rule = next(
            (rule for rule in self.category_rules if rule.matches(text)), self.default_category
        )
        priority = next(
            (rule.priority for rule in self.priority_rules if rule.matches(text)),
            self.default_priority,
        )
        return Classification(
            category=category_rule.category,
            type=category_rule.type,
            priority=priority,
            suggested_actions=category_rule.actions,
        )

    def classify_record(self, record: NotificationRecord) -> ClassifiedNotification:
        return ClassifiedNotification(
            record=record, classification=self.classify(record.title, record.message)
        )


classifier = NotificationClassifier()


def classify(title: str | None, message: str | None = None) -> Classification:
    return classifier.classify(title, message)


def filter_notifications(
    items: Iterable[ClassifiedNotification],
    category: NotificationCategory | None = None,
    priority: Priority | None = None,
    status: ReadStatus = ReadStatus.ALL,
) -> list[ClassifiedNotification]:
    """Apply the notification center's category / priority / read filters."""
    filtered = list(items)
    if category is not None:
        filtered = [n for n in filtered if n.category == category]
    if priority is not None:
        filtered = [n for n in filtered if n.priority == priority]
    if status == ReadStatus.UNREAD:
        filtered = [n for n in filtered if not n.record.read]
    elif status == ReadStatus.READ:
        filtered = [n for n in filtered if n.record.read]
    return filtered


def sort_notifications(items: Iterable[ClassifiedNotification]) -> list[ClassifiedNotification]:
    """Highest priority first, newest first within the same priority."""
    return sorted(
        items,
        key=lambda n: (n.priority.rank, n.record.created_at.timestamp()),
        reverse=True,
    )
