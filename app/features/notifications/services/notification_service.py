"""
Notification center service.
Loads the caller's notifications, classifies them and applies the center's
filters and ordering; also handles read/unread bookkeeping.
"""

from app.auth.context import RequestContext
from app.config import settings
from app.db.helpers import DatabaseError
from app.infrastructure.observability.logging import get_logger

from ..domain.models import ClassifiedNotification, NotificationCategory, Priority, ReadStatus
from ..repository.notification_repository import NotificationRepository
from .classifier import classifier, filter_notifications, sort_notifications

logger = get_logger(__name__)


class NotificationServiceError(Exception):
    """Raised when the notifications table cannot be read or updated."""

    def __init__(self, message: str, user_id: str | None = None, recoverable: bool = False):
        super().__init__(message)
        self.user_id = user_id
        self.recoverable = recoverable


def _wrap(e: DatabaseError, action: str, user_id: str) -> NotificationServiceError:
    logger.error(f"Database error while trying to {action}", user_id=user_id, error=str(e))
    return NotificationServiceError(
        f"Failed to {action}: {e}", user_id=user_id, recoverable=e.recoverable
    )


async def list_notifications(
    ctx: RequestContext,
    category: NotificationCategory | None = None,
    priority: Priority | None = None,
    status: ReadStatus = ReadStatus.ALL,
    limit: int | None = None,
) -> list[ClassifiedNotification]:
    """
    Return the caller's notifications, classified, filtered and sorted by
    priority then recency.
    """
    page_limit = min(limit or settings.NOTIFICATIONS_PAGE_LIMIT, settings.NOTIFICATIONS_PAGE_LIMIT)

    try:
        records = await NotificationRepository.fetch_for_user(ctx.user_id, page_limit)
    except DatabaseError as e:
        raise _wrap(e, "load notifications", ctx.user_id) from e

    classified = [classifier.classify_record(record) for record in records]
    result = sort_notifications(filter_notifications(classified, category, priority, status))

    logger.info(
        "Notifications listed",
        user_id=ctx.user_id,
        loaded=len(records),
        returned=len(result),
        category=category.value if category else None,
        priority=priority.value if priority else None,
        status=status.value,
    )
    return result


async def get_unread_count(ctx: RequestContext) -> int:
    try:
        return await NotificationRepository.count_unread(ctx.user_id)
    except DatabaseError as e:
        raise _wrap(e, "count unread notifications", ctx.user_id) from e


async def mark_notification_read(ctx: RequestContext, notification_id: str) -> bool:
    """Returns False when the notification does not exist or belongs to someone else."""
    try:
        updated = await NotificationRepository.mark_as_read(ctx.user_id, notification_id)
    except DatabaseError as e:
        raise _wrap(e, "mark notification as read", ctx.user_id) from e

    if not updated:
        logger.info(
            "Notification not found for mark-as-read",
            user_id=ctx.user_id,
            notification_id=notification_id,
        )
    return updated


async def mark_all_notifications_read(ctx: RequestContext) -> int:
    try:
        count = await NotificationRepository.mark_all_as_read(ctx.user_id)
    except DatabaseError as e:
        raise _wrap(e, "mark all notifications as read", ctx.user_id) from e

    logger.info("All notifications marked as read", user_id=ctx.user_id, count=count)
    return count


async def delete_notification(ctx: RequestContext, notification_id: str) -> bool:
    try:
        deleted = await NotificationRepository.delete(ctx.user_id, notification_id)
    except DatabaseError as e:
        raise _wrap(e, "delete notification", ctx.user_id) from e

    if deleted:
        logger.info("Notification deleted", user_id=ctx.user_id, notification_id=notification_id)
    return deleted
