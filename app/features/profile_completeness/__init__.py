"""
Profile completeness feature package.

Scores a talent profile out of 100 from ten fixed checks and keeps the
stored score in profiles.profile_completeness current. Domain rules,
repository, services and the API router live side by side.
"""

from .api.router import router as completeness_router  # noqa: F401
from .domain.models import CompletenessReport, ProfileSignals  # noqa: F401
from .services.scoring_service import CompletenessScorer, score_profile  # noqa: F401
