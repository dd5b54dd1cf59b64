"""
Domain subpackage for the profile completeness feature.
"""

from .criteria import CRITERIA, Criterion, is_real_name
from .models import (
    CompletenessRefresh,
    CompletenessReport,
    CriterionResult,
    ExperienceLevel,
    ProfileSignals,
)

__all__ = [
    "CRITERIA",
    "CompletenessRefresh",
    "CompletenessReport",
    "Criterion",
    "CriterionResult",
    "ExperienceLevel",
    "ProfileSignals",
    "is_real_name",
]
