"""
Verdict engine: deterministic rules layered on top of the LLM outputs.

Evaluation has three phases:

1. Guard rules, an ordered list of named checks. The first rule that
   returns a decision ends evaluation.
2. Score accumulation from a neutral 5 (ticket fit, thematic fit, stage
   overlap), clamped to [1, 10].
3. Final selection of the verdict tag from the score, the data-quality
   warning and the secondary-geography flag.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from ..logging import get_logger
from ..models.criteria import ClientCriteria
from ..models.enrichment import EnrichmentData
from ..models.profile import ClientProfile
from ..models.result import Verdict
from ..prompts.assess_fit import FitAssessment
from ..utils import Unparseable
from .fit import CONFIDENCE_POINTS, FitAssessor
from .geography import GeoOutcome, assess_geography
from .normalizer import format_amount, format_ticket_range, normalize_stages

logger = get_logger(__name__)

BASE_SCORE = 5
MIN_SCORE = 1
MAX_SCORE = 10
QUALIFIED_THRESHOLD = 7
DISQUALIFIED_THRESHOLD = 3
# A data-quality warning is only overridden by a near-certain fit
WARNING_OVERRIDE_SCORE = 9
# Investor minimum ticket above this multiple of the raise disqualifies
MAX_TICKET_MULTIPLE = 1.5


@dataclass(frozen=True)
class VerdictDecision:
    verdict: str
    score: int
    reasoning: str
    industry_focus: str = 'unknown'
    check_size_min: int | None = None
    check_size_max: int | None = None


@dataclass
class VerdictContext:
    """Inputs plus the state accumulated while evaluating."""

    enrichment: EnrichmentData | None
    criteria: ClientCriteria
    data_quality_warning: str | None = None
    notes: list[str] = field(default_factory=list)
    secondary_geo: bool = False

    @property
    def client_stages(self) -> list[str]:
        return normalize_stages(self.criteria.stages)

    def decide(self, verdict: str, score: int, reasoning: str) -> VerdictDecision:
        enrichment = self.enrichment
        return VerdictDecision(
            verdict=verdict,
            score=max(MIN_SCORE, min(MAX_SCORE, score)),
            reasoning=reasoning,
            industry_focus=enrichment.industry_focus if enrichment else 'unknown',
            check_size_min=enrichment.check_size_min if enrichment else None,
            check_size_max=enrichment.check_size_max if enrichment else None,
        )


@dataclass(frozen=True)
class Rule:
    name: str
    check: Callable[[VerdictContext], VerdictDecision | None]


# =============================================================================
# Guard rules
# =============================================================================


def _website_unavailable(ctx: VerdictContext) -> VerdictDecision | None:
    if ctx.enrichment is not None:
        return None
    return ctx.decide(
        Verdict.needs_review('website unavailable'),
        BASE_SCORE,
        'Could not extract investor data from the website',
    )


def _no_longer_investing(ctx: VerdictContext) -> VerdictDecision | None:
    if not ctx.enrichment.no_longer_investing:
        return None
    return ctx.decide(Verdict.DISQUALIFIED, 1, 'Investor is no longer making new investments')


def _not_an_investor(ctx: VerdictContext) -> VerdictDecision | None:
    if ctx.enrichment.is_actual_investor:
        return None
    org_type = ctx.enrichment.organization_type.value
    return ctx.decide(
        Verdict.DISQUALIFIED,
        1,
        f'Not an investor (organization type: {org_type})',
    )


def _geography(ctx: VerdictContext) -> VerdictDecision | None:
    decision = assess_geography(ctx.enrichment, ctx.criteria.geo_focus)
    if decision.outcome is GeoOutcome.DISQUALIFY:
        return ctx.decide(Verdict.DISQUALIFIED, 2, decision.note)
    if decision.outcome is GeoOutcome.SECONDARY:
        ctx.secondary_geo = True
    if decision.note:
        ctx.notes.append(decision.note)
    return None


def _hardware_mismatch(ctx: VerdictContext) -> VerdictDecision | None:
    if not (ctx.criteria.is_hardware and ctx.enrichment.software_only):
        return None
    return ctx.decide(
        Verdict.DISQUALIFIED,
        2,
        'Investor only backs software companies; client is hardware',
    )


def _ticket_too_large(ctx: VerdictContext) -> VerdictDecision | None:
    minimum = ctx.enrichment.check_size_min
    raise_amount = ctx.criteria.check_size
    if minimum is None or minimum <= MAX_TICKET_MULTIPLE * raise_amount:
        return None
    return ctx.decide(
        Verdict.DISQUALIFIED,
        2,
        f'Minimum ticket {format_amount(minimum)} exceeds the '
        f'{format_amount(raise_amount)} raise',
    )


def _stage_mismatch(ctx: VerdictContext) -> VerdictDecision | None:
    enrichment = ctx.enrichment
    client_stages = ctx.client_stages
    if enrichment.has_check_size or not client_stages or not enrichment.stages:
        return None
    if set(client_stages) & set(enrichment.stages):
        return None
    return ctx.decide(
        Verdict.DISQUALIFIED,
        2,
        f"Invests at {', '.join(enrichment.stages)}; client is raising "
        f"{', '.join(client_stages)}",
    )


GUARD_RULES: list[Rule] = [
    Rule('website_unavailable', _website_unavailable),
    Rule('no_longer_investing', _no_longer_investing),
    Rule('not_an_investor', _not_an_investor),
    Rule('geography', _geography),
    Rule('hardware_vs_software_only', _hardware_mismatch),
    Rule('ticket_too_large', _ticket_too_large),
    Rule('stage_mismatch', _stage_mismatch),
]


# =============================================================================
# Engine
# =============================================================================


class VerdictEngine:
    """
    Classifies one investor for one client.

    The fit assessor is optional; without one the thematic-fit step is
    skipped and scoring is purely deterministic.
    """

    def __init__(self, fit_assessor: FitAssessor | None = None, rules: list[Rule] | None = None):
        self.fit_assessor = fit_assessor
        self.rules = rules if rules is not None else GUARD_RULES

    async def decide(
        self,
        enrichment: EnrichmentData | None,
        criteria: ClientCriteria,
        data_quality_warning: str | None = None,
        client_profile: ClientProfile | None = None,
        investor_name: str = '',
    ) -> VerdictDecision:
        """
        Decide the verdict for one investor.

        Args:
            enrichment: Normalized, sanity-checked record; None when the
                website yielded nothing usable
            criteria: Client fundraising criteria
            data_quality_warning: Joined sanity warnings, if any
            client_profile: Flat client profile for the fit assessment
            investor_name: Investor name, used in the fit prompt

        Returns:
            VerdictDecision with verdict, score, reasoning, industry focus
            and the echoed check-size bounds
        """
        ctx = VerdictContext(
            enrichment=enrichment,
            criteria=criteria,
            data_quality_warning=data_quality_warning,
        )

        for rule in self.rules:
            decision = rule.check(ctx)
            if decision is not None:
                logger.debug('verdict.rule_fired', rule=rule.name, verdict=decision.verdict)
                return decision

        score = BASE_SCORE

        if self._ticket_fits(enrichment, criteria.check_size):
            score += 2
            ctx.notes.append(
                'Ticket size fits '
                f'({format_ticket_range(enrichment.check_size_min, enrichment.check_size_max)})'
            )

        if self.fit_assessor is not None:
            profile = client_profile or ClientProfile.from_criteria(criteria)
            outcome = await self.fit_assessor.assess(profile, enrichment, investor_name)
            if isinstance(outcome, Unparseable):
                ctx.notes.append('Thematic fit could not be assessed')
            elif outcome.value.is_match:
                score += CONFIDENCE_POINTS[outcome.value.confidence]
                ctx.notes.append(self._fit_note('Sector fit', outcome.value))
            elif outcome.value.confidence == 'high':
                return ctx.decide(
                    Verdict.DISQUALIFIED,
                    2,
                    self._fit_note('Sector mismatch', outcome.value),
                )
            else:
                ctx.notes.append(self._fit_note('Possible sector mismatch', outcome.value))

        client_stages = ctx.client_stages
        overlap = [s for s in client_stages if s in enrichment.stages]
        if overlap:
            score += 1
            ctx.notes.append(f"Invests at {', '.join(overlap)}")

        if enrichment.investment_thesis:
            ctx.notes.append(f'Thesis: {enrichment.investment_thesis}')

        score = max(MIN_SCORE, min(MAX_SCORE, score))
        return self._select(ctx, score)

    @staticmethod
    def _ticket_fits(enrichment: EnrichmentData, raise_amount: int) -> bool:
        low = enrichment.check_size_min
        high = enrichment.check_size_max
        return low is not None and high is not None and low <= raise_amount <= high

    @staticmethod
    def _fit_note(label: str, assessment: FitAssessment) -> str:
        if assessment.rationale:
            return f'{label} ({assessment.confidence}): {assessment.rationale}'
        return f'{label} ({assessment.confidence})'

    def _select(self, ctx: VerdictContext, score: int) -> VerdictDecision:
        enrichment = ctx.enrichment
        notes = list(ctx.notes)

        if ctx.data_quality_warning and score < WARNING_OVERRIDE_SCORE:
            notes.insert(0, f'Data quality: {ctx.data_quality_warning}')
            if score <= DISQUALIFIED_THRESHOLD:
                verdict = Verdict.DISQUALIFIED
            else:
                verdict = Verdict.needs_review('conflicting information on site')
            return ctx.decide(verdict, score, ' | '.join(notes))

        if ctx.data_quality_warning:
            notes.append(f'Data quality: {ctx.data_quality_warning}')

        if score >= QUALIFIED_THRESHOLD:
            high = enrichment.check_size_max
            raise_amount = ctx.criteria.check_size
            if ctx.secondary_geo or (high is not None and high < raise_amount):
                verdict = Verdict.QUALIFIED_CO_LEAD
            elif high is not None:
                verdict = Verdict.QUALIFIED_LEAD
            else:
                verdict = Verdict.QUALIFIED

            if enrichment.has_check_size and not self._ticket_fits(enrichment, raise_amount):
                ticket_range = format_ticket_range(
                    enrichment.check_size_min, enrichment.check_size_max
                )
                notes.append(f'Ticket range {ticket_range}')
            return ctx.decide(verdict, score, ' | '.join(notes))

        if score <= DISQUALIFIED_THRESHOLD:
            return ctx.decide(Verdict.DISQUALIFIED, score, ' | '.join(notes) or 'Weak fit')

        if not enrichment.stages:
            reason = 'stage unclear'
        elif not enrichment.sectors:
            reason = 'sector unclear'
        elif not enrichment.has_check_size:
            reason = 'ticket size unknown'
        else:
            reason = 'partial fit'
        return ctx.decide(Verdict.needs_review(reason), score, ' | '.join(notes) or reason)
