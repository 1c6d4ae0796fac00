"""
Screening outputs: per-investor results, run summaries and stream events.
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Verdict:
    """Verdict tags. "Needs review" always carries a reason suffix."""

    DISQUALIFIED = 'Disqualified'
    QUALIFIED = 'Qualified'
    QUALIFIED_LEAD = 'Qualified: Lead'
    QUALIFIED_CO_LEAD = 'Qualified: Co-lead'
    NEEDS_REVIEW = 'Needs review'

    @staticmethod
    def needs_review(reason: str) -> str:
        return f'{Verdict.NEEDS_REVIEW}: {reason}'

    @staticmethod
    def is_qualified(verdict: str) -> bool:
        return verdict.startswith(Verdict.QUALIFIED)

    @staticmethod
    def is_needs_review(verdict: str) -> bool:
        return verdict.startswith(Verdict.NEEDS_REVIEW)


class ScreeningResult(BaseModel):
    """Outcome of screening one investor for one client. Never mutated."""

    model_config = ConfigDict(frozen=True)

    investor_name: str
    website: str | None = None
    hq: str | None = None
    verdict: str
    relevance_score: int = Field(..., ge=1, le=10)
    reasoning: str
    industry_focus: str = 'unknown'
    check_size_min: int | None = None
    check_size_max: int | None = None
    data_quality_flags: list[str] = Field(default_factory=list)
    screened_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ScreeningSummary(BaseModel):
    """Verdict counts for a run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    qualified: int = 0
    disqualified: int = 0
    needs_review: int = 0
    total: int = 0

    @classmethod
    def from_results(cls, results: list[ScreeningResult]) -> 'ScreeningSummary':
        summary = cls(total=len(results))
        for result in results:
            if Verdict.is_qualified(result.verdict):
                summary.qualified += 1
            elif Verdict.is_needs_review(result.verdict):
                summary.needs_review += 1
            else:
                summary.disqualified += 1
        return summary


class ScreeningRun(BaseModel):
    """Collected results of a non-streaming run."""

    results: list[ScreeningResult] = Field(default_factory=list)
    summary: ScreeningSummary = Field(default_factory=ScreeningSummary)


# =============================================================================
# Stream events
# =============================================================================


class StartEvent(BaseModel):
    type: Literal['start'] = 'start'
    total: int
    message: str = ''


class ProgressEvent(BaseModel):
    type: Literal['progress'] = 'progress'
    current: int
    total: int
    investor: str
    status: str = 'screening'


class ResultEvent(BaseModel):
    type: Literal['result'] = 'result'
    index: int
    result: ScreeningResult


class CompleteEvent(BaseModel):
    type: Literal['complete'] = 'complete'
    results: list[ScreeningResult]
    summary: ScreeningSummary
    message: str = ''


class ErrorEvent(BaseModel):
    type: Literal['error'] = 'error'
    message: str


ScreeningEvent = StartEvent | ProgressEvent | ResultEvent | CompleteEvent | ErrorEvent
