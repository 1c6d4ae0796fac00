"""
Screening orchestrator.

Per investor:
1. Resolve and fetch the investor homepage
2. Pass one: extract an enrichment record from the homepage
3. Clarity check; when unclear, probe the usual subpages and run pass two
   on the combined text
4. Normalize vocabulary, sanity-check the check size
5. Decide the verdict and build the ScreeningResult

Investors are screened one at a time, in input order. Every investor
yields exactly one result; failures degrade to a "Needs review" result.
"""

from collections.abc import AsyncIterator
from datetime import datetime, timezone
from uuid import uuid4

from ..clients.openai_client import OpenAIClient
from ..clients.web_client import PageContent, WebClient
from ..logging import PipelineTimer, get_logger, logging_context
from ..models.criteria import ClientCriteria, InvestorInput, ScreeningRequest
from ..models.enrichment import EnrichmentData
from ..models.profile import ClientProfile, ExtendedClientProfile
from ..models.result import (
    CompleteEvent,
    ProgressEvent,
    ResultEvent,
    ScreeningEvent,
    ScreeningResult,
    ScreeningRun,
    ScreeningSummary,
    StartEvent,
    Verdict,
)
from ..utils import Unparseable
from .enricher import InvestorEnricher, is_verdict_clear
from .fit import FitAssessor
from .normalizer import format_date, normalize_enrichment
from .profiler import ClientProfiler
from .sanity import sanitize
from .verdict import VerdictEngine

logger = get_logger(__name__)

MAX_PAGE_CHARS = 5_000
MAX_COMBINED_CHARS = 20_000


def combine_pages(homepage: PageContent, subpages: list[PageContent]) -> str:
    """Join homepage and subpage text for pass two, capped per page and in total."""
    sections = [
        f'=== PAGE: {page.url} ===\n{page.text[:MAX_PAGE_CHARS]}'
        for page in [homepage, *subpages]
    ]
    return '\n\n'.join(sections)[:MAX_COMBINED_CHARS]


class ScreeningPipeline:
    """
    Screens a list of investors for one client.

    Usage:
        pipeline = ScreeningPipeline(openai_client, web_client)
        async for event in pipeline.stream(request):
            ...
    """

    def __init__(self, openai_client: OpenAIClient, web_client: WebClient):
        """
        Initialize the pipeline with its shared clients.

        Args:
            openai_client: Configured OpenAI client
            web_client: Shared web client
        """
        self.web_client = web_client
        self.enricher = InvestorEnricher(openai_client)
        self.profiler = ClientProfiler(openai_client, web_client)
        self.verdict_engine = VerdictEngine(FitAssessor(openai_client))

    # -------------------------------------------------------------------------
    # Client profile
    # -------------------------------------------------------------------------

    async def resolve_client_profile(
        self,
        criteria: ClientCriteria,
        extended_profile: ExtendedClientProfile | None = None,
    ) -> ClientProfile:
        """
        Pick the client profile used for every fit assessment in a run.

        A supplied extended profile wins; otherwise the client website is
        analyzed; otherwise a minimal profile is built from the criteria.
        """
        if extended_profile is not None:
            return extended_profile.to_simple(fallback_name=criteria.client_name)

        if criteria.client_website:
            outcome = await self.profiler.profile(criteria.client_website, criteria.all_sectors)
            if not isinstance(outcome, Unparseable):
                return outcome.profile.to_simple(fallback_name=criteria.client_name)
            logger.warning('screen.client_profile_unavailable', reason=outcome.reason)

        return ClientProfile.from_criteria(criteria)

    # -------------------------------------------------------------------------
    # Single investor
    # -------------------------------------------------------------------------

    async def screen_investor(
        self,
        investor: InvestorInput,
        criteria: ClientCriteria,
        client_profile: ClientProfile | None = None,
    ) -> ScreeningResult:
        """
        Screen one investor. Never raises.

        Args:
            investor: Investor to screen
            criteria: Client fundraising criteria
            client_profile: Flat client profile for the fit assessment

        Returns:
            ScreeningResult; a "Needs review: screening error" result when
            an unexpected failure occurs
        """
        with logging_context(investor=investor.name):
            try:
                return await self._screen(investor, criteria, client_profile)
            except Exception as e:
                logger.error(
                    'screen.investor_failed',
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return ScreeningResult(
                    investor_name=investor.name,
                    website=investor.website,
                    hq=investor.hq,
                    verdict=Verdict.needs_review('screening error'),
                    relevance_score=5,
                    reasoning=f'Screening failed: {type(e).__name__}: {e}',
                )

    async def _screen(
        self,
        investor: InvestorInput,
        criteria: ClientCriteria,
        client_profile: ClientProfile | None,
    ) -> ScreeningResult:
        timer = PipelineTimer()
        enrichment: EnrichmentData | None = None
        passes = 0

        with timer.stage('fetch'):
            homepage = None
            if investor.website:
                homepage = await self.web_client.resolve_website(investor.website)

        if homepage is not None:
            with timer.stage('pass_one'):
                pass_one = await self.enricher.extract(investor, homepage.text, 'pass_one')
            if not isinstance(pass_one, Unparseable):
                enrichment = pass_one.value
                passes = 1

            if enrichment is None or not is_verdict_clear(enrichment):
                with timer.stage('pass_two'):
                    subpages = await self.web_client.probe_investor_subpages(homepage.url)
                    if subpages:
                        pass_two = await self.enricher.extract(
                            investor, combine_pages(homepage, subpages), 'pass_two'
                        )
                        # An unparseable second pass keeps the first pass record
                        if not isinstance(pass_two, Unparseable):
                            enrichment = pass_two.value
                            passes = 2

        flags: list[str] = []
        warning = None
        if enrichment is not None:
            enrichment, report = sanitize(normalize_enrichment(enrichment))
            flags = list(report.warnings)
            warning = report.joined_warnings

        with timer.stage('verdict'):
            decision = await self.verdict_engine.decide(
                enrichment,
                criteria,
                data_quality_warning=warning,
                client_profile=client_profile,
                investor_name=investor.name,
            )

        logger.info(
            'screen.investor_complete',
            verdict=decision.verdict,
            score=decision.score,
            passes=passes,
            data_quality_flags=len(flags),
            **timer.summary(),
        )

        return ScreeningResult(
            investor_name=investor.name,
            website=homepage.url if homepage else investor.website,
            hq=investor.hq,
            verdict=decision.verdict,
            relevance_score=decision.score,
            reasoning=decision.reasoning,
            industry_focus=decision.industry_focus,
            check_size_min=decision.check_size_min,
            check_size_max=decision.check_size_max,
            data_quality_flags=flags,
        )

    # -------------------------------------------------------------------------
    # Runs
    # -------------------------------------------------------------------------

    async def stream(self, request: ScreeningRequest) -> AsyncIterator[ScreeningEvent]:
        """
        Screen every investor in the request, yielding progress events.

        Yields a start event, then a progress and a result event per
        investor in input order, then a complete event with the summary.
        """
        criteria = request.criteria
        investors = request.investors
        total = len(investors)

        with logging_context(run_id=str(uuid4()), client_name=criteria.client_name):
            logger.info('screen.run_started', investors=total)
            yield StartEvent(
                total=total,
                message=f'Screening {total} investors for {criteria.client_name}',
            )

            client_profile = await self.resolve_client_profile(criteria, request.client_profile)

            results: list[ScreeningResult] = []
            for index, investor in enumerate(investors):
                yield ProgressEvent(current=index + 1, total=total, investor=investor.name)
                result = await self.screen_investor(investor, criteria, client_profile)
                results.append(result)
                yield ResultEvent(index=index, result=result)

            summary = ScreeningSummary.from_results(results)
            logger.info(
                'screen.run_complete',
                qualified=summary.qualified,
                disqualified=summary.disqualified,
                needs_review=summary.needs_review,
            )
            yield CompleteEvent(
                results=results,
                summary=summary,
                message=(
                    f'Screened {total} investors for {criteria.client_name} '
                    f'on {format_date(datetime.now(timezone.utc))}'
                ),
            )

    async def run(self, request: ScreeningRequest) -> ScreeningRun:
        """Screen every investor and collect the results."""
        run = ScreeningRun()
        async for event in self.stream(request):
            if isinstance(event, CompleteEvent):
                run = ScreeningRun(results=event.results, summary=event.summary)
        return run
