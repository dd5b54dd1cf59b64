"""
Repository helpers for the notifications table.
Every query is scoped by user_id so a caller can only touch their own rows.
"""

from typing import Any

from app.db.helpers import execute_query, fetch_all, fetch_val, with_db_retry
from app.infrastructure.observability.logging import get_logger

from ..domain.models import NotificationRecord

logger = get_logger(__name__)


def row_to_record(row: dict[str, Any]) -> NotificationRecord:
    return NotificationRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=row.get("title") or "",
        message=row.get("message") or "",
        read=bool(row.get("read")),
        created_at=row["created_at"],
        action_url=row.get("action_url"),
        kind=row.get("type"),
    )


class NotificationRepository:
    @staticmethod
    @with_db_retry(max_retries=3, base_delay=0.1)
    async def fetch_for_user(user_id: str, limit: int) -> list[NotificationRecord]:
        rows = await fetch_all(
            """
            SELECT id, user_id, type, title, message, read, action_url, created_at
            FROM notifications
            WHERE user_id = %s
            ORDER BY created_at DESC
            LIMIT %s
            """,
            (user_id, limit),
        )
        return [row_to_record(row) for row in rows]

    @staticmethod
    @with_db_retry(max_retries=3, base_delay=0.1)
    async def count_unread(user_id: str) -> int:
        count = await fetch_val(
            "SELECT COUNT(*) FROM notifications WHERE user_id = %s AND read = false",
            (user_id,),
        )
        return int(count or 0)

    @staticmethod
    async def mark_as_read(user_id: str, notification_id: str) -> bool:
        affected = await execute_query(
            """
            UPDATE notifications
            SET read = true
            WHERE id = %s AND user_id = %s
            """,
            (notification_id, user_id),
        )
        return affected > 0

    @staticmethod
    async def mark_all_as_read(user_id: str) -> int:
        affected = await execute_query(
            "UPDATE notifications SET read = true WHERE user_id = %s AND read = false",
            (user_id,),
        )
        logger.debug("Marked notifications as read", user_id=user_id, count=affected)
        return affected

    @staticmethod
    async def delete(user_id: str, notification_id: str) -> bool:
        affected = await execute_query(
            "DELETE FROM notifications WHERE id = %s AND user_id = %s",
            (notification_id, user_id),
        )
        return affected > 0
