"""
Repository for the rows that feed the completeness score.

Reads profiles, talent_profiles, talent_education and the Supabase auth user
metadata in one round trip and maps the result into ProfileSignals.
"""

from typing import Any

from app.db.helpers import db_transaction, execute_query, fetch_one, with_db_retry
from app.infrastructure.observability.logging import get_logger

from ..domain.criteria import is_real_name
from ..domain.models import ProfileSignals

logger = get_logger(__name__)

PROFILE_SIGNALS_QUERY = """
SELECT
    u.id AS user_id,
    u.email,
    p.full_name,
    p.avatar_url,
    p.country,
    p.city,
    u.raw_user_meta_data ->> 'full_name' AS metadata_full_name,
    u.raw_user_meta_data ->> 'avatar_url' AS metadata_avatar_url,
    u.raw_user_meta_data ->> 'country' AS metadata_country,
    tp.primary_category_id,
    tp.title,
    tp.experience_level,
    tp.skills,
    tp.bio,
    EXISTS (
        SELECT 1 FROM talent_education te WHERE te.user_id = u.id
    ) AS has_education
FROM auth.users u
LEFT JOIN profiles p ON p.user_id = u.id
LEFT JOIN talent_profiles tp ON tp.user_id = u.id
WHERE u.id = %s
"""


def _first_present(*values: Any) -> Any:
    for value in values:
        if isinstance(value, str):
            if value.strip():
                return value
        elif value is not None:
            return value
    return None


def _usable_avatar(url: str | None) -> bool:
    # blob: URLs are browser-local previews that never made it to storage
    return bool(url and url.strip() and not url.startswith("blob:"))


def build_profile_signals(row: dict[str, Any]) -> ProfileSignals:
    """Map a PROFILE_SIGNALS_QUERY row into a ProfileSignals snapshot."""
    full_name = _first_present(row.get("full_name"), row.get("metadata_full_name"))
    primary_category_id = row.get("primary_category_id")

    return ProfileSignals(
        has_avatar=_usable_avatar(row.get("avatar_url"))
        or _usable_avatar(row.get("metadata_avatar_url")),
        has_real_name=is_real_name(full_name, row.get("email")),
        country=_first_present(row.get("country"), row.get("metadata_country")),
        city=row.get("city"),
        primary_category_id=str(primary_category_id) if primary_category_id else None,
        professional_title=row.get("title"),
        experience_level=row.get("experience_level"),
        skills=tuple(row.get("skills") or ()),
        bio=row.get("bio"),
        has_education_record=bool(row.get("has_education")),
    )


class ProfileSignalsRepository:
    """Thin wrappers around the profile tables."""

    @staticmethod
    @with_db_retry(max_retries=3, base_delay=0.1)
    async def fetch_signals(user_id: str) -> ProfileSignals | None:
        row = await fetch_one(PROFILE_SIGNALS_QUERY, (user_id,))
        if not row:
            logger.info("User not found for completeness scoring", user_id=user_id)
            return None
        return build_profile_signals(row)

    @staticmethod
    async def sync_stored_score(user_id: str, score: int) -> tuple[int | None, bool]:
        """
        Compare and update profiles.profile_completeness under a row lock.

        Returns:
            (previously stored score, whether the row was updated). A missing
            profiles row gives (None, False).
        """
        async with db_transaction() as conn:
            row = await fetch_one(
                "SELECT profile_completeness FROM profiles WHERE user_id = %s FOR UPDATE",
                (user_id,),
                connection=conn,
            )
            if not row:
                return None, False

            previous = row.get("profile_completeness")
            if previous == score:
                return previous, False

            await execute_query(
                """
                UPDATE profiles
                SET profile_completeness = %s,
                    updated_at = NOW()
                WHERE user_id = %s
                """,
                (score, user_id),
                connection=conn,
            )

        logger.debug("Stored profile completeness", user_id=user_id, score=score, previous=previous)
        return previous, True
