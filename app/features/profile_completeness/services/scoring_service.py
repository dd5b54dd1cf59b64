"""
Completeness scoring - turns a ProfileSignals snapshot into a 0-100 score.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.infrastructure.observability.logging import get_logger

from ..domain.criteria import CRITERIA, Criterion
from ..domain.models import CompletenessReport, CriterionResult, ProfileSignals

logger = get_logger(__name__)

# Lower bounds for the label shown next to the progress bar, highest first
LABEL_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (90, "Excelente"),
    (80, "Muy bueno"),
    (60, "Bueno"),
    (40, "Regular"),
)
DEFAULT_LABEL = "Incompleto"


class CompletenessScorer:
    """Sums ten independent, all-or-nothing checks."""

    def __init__(self, criteria: Iterable[Criterion] = CRITERIA):
        self.criteria = tuple(criteria)

    def score(self, signals: ProfileSignals) -> CompletenessReport:
        results = tuple(self._evaluate(criterion, signals) for criterion in self.criteria)
        total = sum(result.points for result in results if result.completed)
        return CompletenessReport(score=min(total, 100), criteria=results)

    @staticmethod
    def _evaluate(criterion: Criterion, signals: ProfileSignals) -> CriterionResult:
        try:
            completed = bool(criterion.check(signals))
        except (TypeError, AttributeError) as e:
            # Malformed snapshot fields count as missing
            logger.warning(
                "Completeness criterion failed to evaluate", criterion=criterion.key, error=str(e)
            )
            completed = False

        return CriterionResult(
            key=criterion.key,
            title=criterion.title,
            description=criterion.description,
            completed=completed,
            suggestion=criterion.suggestion,
            points=criterion.points,
        )


def completeness_label(score: int) -> str:
    for threshold, label in LABEL_THRESHOLDS:
        if score >= threshold:
            return label
    return DEFAULT_LABEL


def completeness_bucket(score: int | None) -> str:
    """Group a stored score the way the admin user list does."""
    if score == 100:
        return "complete"
    if score and 0 < score < 100:
        return "partial"
    return "empty"


scoring_service = CompletenessScorer()


def score_profile(signals: ProfileSignals) -> CompletenessReport:
    return scoring_service.score(signals)
