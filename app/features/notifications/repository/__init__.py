from .notification_repository import NotificationRepository, row_to_record

__all__ = ["NotificationRepository", "row_to_record"]
