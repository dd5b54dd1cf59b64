"""
Profile completeness routes.

    GET  /profile/completeness          - caller's score and checklist
    GET  /profile/completeness/{id}     - another user's score (admins only)
    POST /profile/completeness/refresh  - rescore and persist to profiles
    POST /profile/completeness/score    - score an unsaved snapshot, no I/O
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.context import RequestContext, get_request_context
from app.infrastructure.observability.logging import get_logger

from ..services.profile_service import (
    ProfileAccessDenied,
    ProfileCompletenessServiceError,
    get_profile_completeness,
    refresh_profile_completeness,
)
from ..services.scoring_service import score_profile
from .schemas import CompletenessRefreshResponse, CompletenessResponse, ProfileSnapshotRequest

router = APIRouter(prefix="/profile/completeness", tags=["profile-completeness"])
logger = get_logger(__name__)


@router.get("", response_model=CompletenessResponse)
async def get_my_completeness(ctx: RequestContext = Depends(get_request_context)):
    try:
        report = await get_profile_completeness(ctx)
    except ProfileCompletenessServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute profile completeness",
        ) from e

    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User profile not found")

    return CompletenessResponse.from_report(report)


@router.post("/refresh", response_model=CompletenessRefreshResponse)
async def refresh_my_completeness(ctx: RequestContext = Depends(get_request_context)):
    try:
        refresh = await refresh_profile_completeness(ctx)
    except ProfileCompletenessServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to refresh profile completeness",
        ) from e

    if refresh is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User profile not found")

    return CompletenessRefreshResponse.from_refresh(refresh)


@router.post("/score", response_model=CompletenessResponse)
async def score_snapshot(
    snapshot: ProfileSnapshotRequest, ctx: RequestContext = Depends(get_request_context)
):
    """Score profile fields the user has not saved yet (wizard preview)."""
    report = score_profile(snapshot.to_signals())
    logger.debug("Scored profile snapshot", user_id=ctx.user_id, score=report.score)
    return CompletenessResponse.from_report(report)


@router.get("/{user_id}", response_model=CompletenessResponse)
async def get_user_completeness(user_id: str, ctx: RequestContext = Depends(get_request_context)):
    try:
        report = await get_profile_completeness(ctx, user_id=user_id)
    except ProfileAccessDenied as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except ProfileCompletenessServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute profile completeness",
        ) from e

    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User profile not found")

    return CompletenessResponse.from_report(report)
