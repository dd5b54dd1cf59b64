"""
Profile completeness service.
Loads the caller's profile signals, scores them and keeps the stored
profiles.profile_completeness column in sync.
"""

from app.auth.context import RequestContext
from app.db.helpers import DatabaseError
from app.infrastructure.observability.logging import get_logger

from ..domain.models import CompletenessRefresh, CompletenessReport
from ..repository.profile_signals_repository import ProfileSignalsRepository
from .scoring_service import completeness_bucket, score_profile

logger = get_logger(__name__)


class ProfileCompletenessServiceError(Exception):
    """Raised when completeness cannot be computed or stored."""

    def __init__(self, message: str, user_id: str | None = None, recoverable: bool = False):
        super().__init__(message)
        self.user_id = user_id
        self.recoverable = recoverable


class ProfileAccessDenied(ProfileCompletenessServiceError):
    """Caller may not read another user's completeness."""


async def get_profile_completeness(
    ctx: RequestContext, user_id: str | None = None
) -> CompletenessReport | None:
    """
    Score a user's profile.

    Args:
        ctx: Caller context
        user_id: Target user, defaults to the caller. Only admins may score others.

    Returns:
        CompletenessReport, or None if the user does not exist
    """
    target_id = user_id or ctx.user_id
    if target_id != ctx.user_id and not ctx.is_admin:
        logger.warning(
            "Completeness access denied", caller_id=ctx.user_id, target_user_id=target_id
        )
        raise ProfileAccessDenied("Not allowed to view this profile", user_id=target_id)

    try:
        signals = await ProfileSignalsRepository.fetch_signals(target_id)
    except DatabaseError as e:
        logger.error("Database error loading profile signals", user_id=target_id, error=str(e))
        raise ProfileCompletenessServiceError(
            f"Failed to load profile: {e}", user_id=target_id, recoverable=e.recoverable
        ) from e

    if signals is None:
        return None

    report = score_profile(signals)
    logger.info(
        "Profile completeness scored",
        user_id=target_id,
        score=report.score,
        missing_count=len(report.missing),
    )
    return report


async def refresh_profile_completeness(ctx: RequestContext) -> CompletenessRefresh | None:
    """
    Score the caller's profile and persist the result when it changed.

    Returns:
        CompletenessRefresh with the previously stored score, or None if the
        caller has no profile
    """
    report = await get_profile_completeness(ctx)
    if report is None:
        return None

    try:
        previous, updated = await ProfileSignalsRepository.sync_stored_score(
            ctx.user_id, report.score
        )
    except DatabaseError as e:
        logger.error("Database error storing completeness", user_id=ctx.user_id, error=str(e))
        raise ProfileCompletenessServiceError(
            f"Failed to store completeness: {e}", user_id=ctx.user_id, recoverable=e.recoverable
        ) from e

    if updated:
        logger.info(
            "Profile completeness updated",
            user_id=ctx.user_id,
            previous_score=previous,
            previous_bucket=completeness_bucket(previous),
            score=report.score,
        )
    elif previous is None:
        logger.warning("No profiles row to store completeness in", user_id=ctx.user_id)
    else:
        logger.debug("Stored completeness already current", user_id=ctx.user_id)

    return CompletenessRefresh(report=report, previous_score=previous, updated=updated)
