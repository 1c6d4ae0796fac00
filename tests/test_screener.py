"""
Tests for the screening orchestrator.

Uses the fake OpenAI client and a mocked WebClient; no network.
"""

from unittest.mock import AsyncMock

import pytest

from investor_screener.errors import OpenAIError
from investor_screener.models.criteria import InvestorInput, ScreeningRequest
from investor_screener.models.profile import ClientProfile, ExtendedClientProfile
from investor_screener.models.result import (
    CompleteEvent,
    ProgressEvent,
    ResultEvent,
    StartEvent,
    Verdict,
)
from investor_screener.pipeline.profiler import ClientProfileOutcome
from investor_screener.pipeline.screener import (
    MAX_COMBINED_CHARS,
    MAX_PAGE_CHARS,
    ScreeningPipeline,
    combine_pages,
)
from investor_screener.utils import Unparseable

CLEAR_RECORD = {
    'sectors': ['climate'],
    'checkSizeMin': 500_000,
    'checkSizeMax': 3_000_000,
    'stages': ['seed'],
    'isActualInvestor': True,
}

THIN_RECORD = {'sectors': ['climate'], 'stages': [], 'isActualInvestor': True}

HIGH_FIT = {'isMatch': True, 'confidence': 'high', 'rationale': 'Climate hardware'}


def _request(criteria, *investors: InvestorInput) -> ScreeningRequest:
    return ScreeningRequest(criteria=criteria, investors=list(investors))


class TestCombinePages:
    """Test pass-two text assembly."""

    def test_caps_each_page_and_total(self, make_page):
        homepage = make_page('https://acme.vc/', 'h' * 8_000)
        subpages = [make_page(f'https://acme.vc/p{i}', 's' * 8_000) for i in range(5)]

        text = combine_pages(homepage, subpages)

        assert text.startswith('=== PAGE: https://acme.vc/ ===\n' + 'h' * MAX_PAGE_CHARS + '\n')
        assert 'h' * (MAX_PAGE_CHARS + 1) not in text
        assert len(text) == MAX_COMBINED_CHARS


class TestScreenInvestor:
    """Test the per-investor two-pass flow."""

    @pytest.mark.asyncio
    async def test_clear_first_pass_skips_subpages(
        self, fake_openai, fake_web, make_page, sample_criteria, sample_investor
    ):
        fake_web.resolve_website.return_value = make_page()
        fake_openai.reply('enrich', CLEAR_RECORD).reply('fit', HIGH_FIT)
        pipeline = ScreeningPipeline(fake_openai, fake_web)

        result = await pipeline.screen_investor(sample_investor, sample_criteria)

        fake_web.probe_investor_subpages.assert_not_awaited()
        assert len(fake_openai.calls_of('enrich')) == 1
        assert result.investor_name == 'Northwind Ventures'
        assert result.website == 'https://northwind.vc/'
        assert result.hq == 'London'
        assert result.verdict == Verdict.QUALIFIED_LEAD
        assert result.check_size_max == 3_000_000

    @pytest.mark.asyncio
    async def test_unclear_first_pass_runs_second_pass(
        self, fake_openai, fake_web, make_page, sample_criteria, sample_investor
    ):
        fake_web.resolve_website.return_value = make_page()
        fake_web.probe_investor_subpages.return_value = [
            make_page('https://northwind.vc/about', 'We write €500K to €3M seed tickets.'),
        ]
        fake_openai.reply('enrich', THIN_RECORD, CLEAR_RECORD).reply('fit', HIGH_FIT)
        pipeline = ScreeningPipeline(fake_openai, fake_web)

        result = await pipeline.screen_investor(sample_investor, sample_criteria)

        fake_web.probe_investor_subpages.assert_awaited_once_with('https://northwind.vc/')
        enrich_calls = fake_openai.calls_of('enrich')
        assert len(enrich_calls) == 2
        assert '=== PAGE: https://northwind.vc/about ===' in enrich_calls[1]['messages'][1]['content']
        # Second pass replaces the first
        assert result.check_size_min == 500_000
        assert result.verdict == Verdict.QUALIFIED_LEAD

    @pytest.mark.asyncio
    async def test_unparseable_second_pass_keeps_first(
        self, fake_openai, fake_web, make_page, sample_criteria, sample_investor
    ):
        fake_web.resolve_website.return_value = make_page()
        fake_web.probe_investor_subpages.return_value = [make_page('https://northwind.vc/about')]
        fake_openai.reply('enrich', THIN_RECORD, 'no json here').reply('fit', HIGH_FIT)
        pipeline = ScreeningPipeline(fake_openai, fake_web)

        result = await pipeline.screen_investor(sample_investor, sample_criteria)

        assert result.industry_focus == 'climate'
        assert result.verdict != 'Needs review: website unavailable'

    @pytest.mark.asyncio
    async def test_unreachable_website(self, fake_openai, fake_web, sample_criteria, sample_investor):
        pipeline = ScreeningPipeline(fake_openai, fake_web)

        result = await pipeline.screen_investor(sample_investor, sample_criteria)

        assert result.verdict == 'Needs review: website unavailable'
        assert result.relevance_score == 5
        assert result.industry_focus == 'unknown'
        assert fake_openai.calls == []

    @pytest.mark.asyncio
    async def test_investor_without_website(self, fake_openai, fake_web, sample_criteria):
        pipeline = ScreeningPipeline(fake_openai, fake_web)

        result = await pipeline.screen_investor(InvestorInput(name='Ghost Capital'), sample_criteria)

        fake_web.resolve_website.assert_not_awaited()
        assert result.verdict == 'Needs review: website unavailable'

    @pytest.mark.asyncio
    async def test_sanity_warnings_become_flags(
        self, fake_openai, fake_web, make_page, sample_criteria, sample_investor
    ):
        fake_web.resolve_website.return_value = make_page()
        fake_openai.reply(
            'enrich',
            {**CLEAR_RECORD, 'checkSizeMin': 5_000_000, 'checkSizeMax': 1_000_000},
        ).reply('fit', {'isMatch': True, 'confidence': 'low'})
        pipeline = ScreeningPipeline(fake_openai, fake_web)

        result = await pipeline.screen_investor(sample_investor, sample_criteria)

        assert result.check_size_min is None
        assert result.check_size_max is None
        assert result.data_quality_flags
        assert result.verdict == 'Needs review: conflicting information on site'

    @pytest.mark.asyncio
    async def test_unexpected_failure_degrades(
        self, fake_openai, fake_web, sample_criteria, sample_investor
    ):
        fake_web.resolve_website.side_effect = RuntimeError('socket exploded')
        pipeline = ScreeningPipeline(fake_openai, fake_web)

        result = await pipeline.screen_investor(sample_investor, sample_criteria)

        assert result.verdict == 'Needs review: screening error'
        assert 'socket exploded' in result.reasoning


class TestResolveClientProfile:
    """Test client profile selection."""

    @pytest.mark.asyncio
    async def test_supplied_profile_wins(self, fake_openai, fake_web, sample_criteria):
        pipeline = ScreeningPipeline(fake_openai, fake_web)
        extended = ExtendedClientProfile(one_liner='Solar heat for industry')

        profile = await pipeline.resolve_client_profile(sample_criteria, extended)

        assert profile.company_name == 'Heliostat Labs'
        assert profile.description == 'Solar heat for industry'
        fake_web.fetch_site.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_website_is_analyzed(self, fake_openai, fake_web, sample_criteria):
        criteria = sample_criteria.model_copy(update={'client_website': 'heliostat.io'})
        pipeline = ScreeningPipeline(fake_openai, fake_web)
        pipeline.profiler.profile = AsyncMock(
            return_value=ClientProfileOutcome(
                profile=ExtendedClientProfile(company_name='Heliostat', sector='Climate'),
                page_urls=['https://heliostat.io/'],
            )
        )

        profile = await pipeline.resolve_client_profile(criteria)

        assert profile.company_name == 'Heliostat'
        assert profile.sector == 'Climate'

    @pytest.mark.asyncio
    async def test_falls_back_to_criteria(self, fake_openai, fake_web, sample_criteria):
        criteria = sample_criteria.model_copy(update={'client_website': 'heliostat.io'})
        pipeline = ScreeningPipeline(fake_openai, fake_web)
        pipeline.profiler.profile = AsyncMock(return_value=Unparseable(reason='website_unreachable'))

        profile = await pipeline.resolve_client_profile(criteria)

        assert profile == ClientProfile.from_criteria(criteria)


class TestStream:
    """Test event ordering across a run."""

    @pytest.mark.asyncio
    async def test_one_result_per_investor_in_order(
        self, fake_openai, fake_web, make_page, sample_criteria
    ):
        investors = [
            InvestorInput(name='Alpha Fund', website='alpha.vc'),
            InvestorInput(name='Beta Partners', website='beta.vc'),
            InvestorInput(name='Gamma Capital'),
        ]

        async def resolve(website):
            return make_page(f'https://{website}/') if website == 'alpha.vc' else None

        fake_web.resolve_website.side_effect = resolve
        # Every LLM call fails; results must still arrive
        fake_openai.reply('enrich', OpenAIError('down')).reply('fit', OpenAIError('down'))
        pipeline = ScreeningPipeline(fake_openai, fake_web)

        events = [e async for e in pipeline.stream(_request(sample_criteria, *investors))]

        assert isinstance(events[0], StartEvent)
        assert events[0].total == 3
        body = events[1:-1]
        assert [type(e) for e in body] == [ProgressEvent, ResultEvent] * 3
        assert [e.investor for e in body if isinstance(e, ProgressEvent)] == [
            'Alpha Fund',
            'Beta Partners',
            'Gamma Capital',
        ]
        results = [e for e in body if isinstance(e, ResultEvent)]
        assert [e.index for e in results] == [0, 1, 2]
        assert [e.result.investor_name for e in results] == [
            'Alpha Fund',
            'Beta Partners',
            'Gamma Capital',
        ]

        complete = events[-1]
        assert isinstance(complete, CompleteEvent)
        assert len(complete.results) == 3
        assert complete.summary.total == 3
        assert complete.summary.needs_review == 3

    @pytest.mark.asyncio
    async def test_run_collects_results(
        self, fake_openai, fake_web, make_page, sample_criteria, sample_investor
    ):
        fake_web.resolve_website.return_value = make_page()
        fake_openai.reply('enrich', {'noLongerInvesting': True})
        pipeline = ScreeningPipeline(fake_openai, fake_web)

        run = await pipeline.run(_request(sample_criteria, sample_investor))

        assert [r.verdict for r in run.results] == [Verdict.DISQUALIFIED]
        assert run.summary.disqualified == 1
