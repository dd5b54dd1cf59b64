"""
Completeness services: the pure scorer and the database-backed profile service.
"""

from .scoring_service import (
    CompletenessScorer,
    completeness_bucket,
    completeness_label,
    score_profile,
    scoring_service,
)

__all__ = [
    "CompletenessScorer",
    "completeness_bucket",
    "completeness_label",
    "score_profile",
    "scoring_service",
]
