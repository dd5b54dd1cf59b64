"""
Domain models for the profile completeness feature.

ProfileSignals is the read-only snapshot the scorer works on. It is rebuilt
from the stored profile rows on every call and never persisted itself; the
repository layer is the only place that knows the row shapes.
"""

from dataclasses import dataclass, field
from enum import Enum


class ExperienceLevel(str, Enum):
    """Canonical experience buckets offered by the talent profile wizard."""

    JUNIOR = "0-1"
    MID = "1-3"
    SENIOR = "3-6"
    EXPERT = "6+"

    @classmethod
    def is_canonical(cls, value: str | None) -> bool:
        return value in {level.value for level in cls}


@dataclass(frozen=True, slots=True)
class ProfileSignals:
    """Snapshot of the profile attributes that drive the completeness score."""

    has_avatar: bool = False
    has_real_name: bool = False
    country: str | None = None
    city: str | None = None
    primary_category_id: str | None = None
    professional_title: str | None = None
    experience_level: str | None = None
    skills: tuple[str, ...] = ()
    bio: str | None = None
    has_education_record: bool = False


@dataclass(frozen=True, slots=True)
class CriterionResult:
    """Outcome of one ten-point completeness check."""

    key: str
    title: str
    description: str
    completed: bool
    suggestion: str
    points: int


@dataclass(frozen=True, slots=True)
class CompletenessReport:
    score: int
    criteria: tuple[CriterionResult, ...] = field(default_factory=tuple)

    @property
    def missing(self) -> list[str]:
        return [c.title for c in self.criteria if not c.completed]

    @property
    def suggestions(self) -> list[str]:
        return [c.suggestion for c in self.criteria if not c.completed]

    @property
    def next_item(self) -> CriterionResult | None:
        return next((c for c in self.criteria if not c.completed), None)


@dataclass(frozen=True, slots=True)
class CompletenessRefresh:
    """Result of rescoring a profile against the stored profile_completeness value."""

    report: CompletenessReport
    previous_score: int | None
    updated: bool
