"""Request/response models for the profile completeness endpoints."""

from pydantic import BaseModel, Field

from ..domain.criteria import is_real_name
from ..domain.models import CompletenessRefresh, CompletenessReport, ProfileSignals
from ..services.scoring_service import completeness_bucket, completeness_label


class ProfileSnapshotRequest(BaseModel):
    """
    Profile fields as the dashboard holds them while the user edits.

    Either pass has_real_name directly or full_name (+ email) and let the
    server apply the name heuristic.
    """

    has_avatar: bool = False
    has_real_name: bool | None = None
    full_name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=320)
    country: str | None = Field(None, max_length=100)
    city: str | None = Field(None, max_length=100)
    primary_category_id: str | None = None
    professional_title: str | None = Field(None, max_length=200)
    experience_level: str | None = Field(None, max_length=20)
    skills: list[str] = Field(default_factory=list, max_length=100)
    bio: str | None = Field(None, max_length=5000)
    has_education_record: bool = False

    def to_signals(self) -> ProfileSignals:
        has_real_name = self.has_real_name
        if has_real_name is None:
            has_real_name = is_real_name(self.full_name, self.email)

        return ProfileSignals(
            has_avatar=self.has_avatar,
            has_real_name=has_real_name,
            country=self.country,
            city=self.city,
            primary_category_id=self.primary_category_id,
            professional_title=self.professional_title,
            experience_level=self.experience_level,
            skills=tuple(self.skills),
            bio=self.bio,
            has_education_record=self.has_education_record,
        )


class CriterionResponse(BaseModel):
    key: str
    title: str
    description: str
    completed: bool
    points: int


class CompletenessResponse(BaseModel):
    """Response for the /profile/completeness endpoints."""

    score: int = Field(..., ge=0, le=100)
    label: str
    bucket: str
    items: list[CriterionResponse]
    missing_fields: list[str]
    suggestions: list[str]
    next_item: CriterionResponse | None = None

    @classmethod
    def from_report(cls, report: CompletenessReport) -> "CompletenessResponse":
        items = [
            CriterionResponse(
                key=c.key,
                title=c.title,
                description=c.description,
                completed=c.completed,
                points=c.points,
            )
            for c in report.criteria
        ]
        next_item = next((item for item in items if not item.completed), None)
        return cls(
            score=report.score,
            label=completeness_label(report.score),
            bucket=completeness_bucket(report.score),
            items=items,
            missing_fields=report.missing,
            suggestions=report.suggestions,
            next_item=next_item,
        )


class CompletenessRefreshResponse(CompletenessResponse):
    """Response for POST /profile/completeness/refresh."""

    previous_score: int | None = None
    previous_bucket: str
    updated: bool

    @classmethod
    def from_refresh(cls, refresh: CompletenessRefresh) -> "CompletenessRefreshResponse":
        base = CompletenessResponse.from_report(refresh.report)
        return cls(
            **base.model_dump(),
            previous_score=refresh.previous_score,
            previous_bucket=completeness_bucket(refresh.previous_score),
            updated=refresh.updated,
        )
