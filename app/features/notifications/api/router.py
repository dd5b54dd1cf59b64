"""
Notification center routes.

    GET    /notifications                 - classified, filtered, sorted list
    GET    /notifications/unread-count
    POST   /notifications/classify        - classify a title without storing anything
    PATCH  /notifications/{id}/read
    POST   /notifications/read-all
    DELETE /notifications/{id}
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.auth.context import RequestContext, get_request_context
from app.infrastructure.observability.logging import get_logger

from ..domain.models import NotificationCategory, Priority, ReadStatus
from ..services.classifier import classify
from ..services.notification_service import (
    NotificationServiceError,
    delete_notification,
    get_unread_count,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .schemas import (
    ClassificationResponse,
    ClassifyRequest,
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = get_logger(__name__)


def _service_unavailable(e: NotificationServiceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        if e.recoverable
        else status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Notifications are temporarily unavailable",
    )


@router.get("", response_model=NotificationListResponse)
async def get_notifications(
    category: NotificationCategory | None = Query(None),
    priority: Priority | None = Query(None),
    read_status: ReadStatus = Query(ReadStatus.ALL, alias="status"),
    limit: int | None = Query(None, ge=1, le=500),
    ctx: RequestContext = Depends(get_request_context),
):
    try:
        items = await list_notifications(
            ctx, category=category, priority=priority, status=read_status, limit=limit
        )
        unread = await get_unread_count(ctx)
    except NotificationServiceError as e:
        raise _service_unavailable(e) from e

    return NotificationListResponse(
        notifications=[NotificationResponse.from_classified(item) for item in items],
        total=len(items),
        unread_count=unread,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(ctx: RequestContext = Depends(get_request_context)):
    try:
        return UnreadCountResponse(unread_count=await get_unread_count(ctx))
    except NotificationServiceError as e:
        raise _service_unavailable(e) from e


@router.post("/classify", response_model=ClassificationResponse)
async def classify_title(
    request: ClassifyRequest, ctx: RequestContext = Depends(get_request_context)
):
    classification = classify(request.title, request.message)
    logger.debug(
        "Notification title classified",
        user_id=ctx.user_id,
        category=classification.category.value,
        priority=classification.priority.value,
    )
    return ClassificationResponse.from_classification(classification)


@router.patch("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(notification_id: str, ctx: RequestContext = Depends(get_request_context)):
    try:
        updated = await mark_notification_read(ctx, notification_id)
    except NotificationServiceError as e:
        raise _service_unavailable(e) from e

    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(ctx: RequestContext = Depends(get_request_context)):
    try:
        updated = await mark_all_notifications_read(ctx)
    except NotificationServiceError as e:
        raise _service_unavailable(e) from e

    return MarkAllReadResponse(success=True, updated=updated)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_notification(
    notification_id: str, ctx: RequestContext = Depends(get_request_context)
):
    try:
        deleted = await delete_notification(ctx, notification_id)
    except NotificationServiceError as e:
        raise _service_unavailable(e) from e

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
