"""
Tests for request, enrichment and profile models.
"""

import pytest
from pydantic import ValidationError

from investor_screener.models import (
    ClientCriteria,
    ClientProfile,
    EnrichmentData,
    ExtendedClientProfile,
    OrganizationType,
    ScreeningRequest,
    ScreeningResult,
    ScreeningSummary,
    Verdict,
    parse_amount,
)


class TestParseAmount:
    """Test check-size amount parsing."""

    @pytest.mark.parametrize(
        'raw,expected',
        [
            (2_000_000, 2_000_000),
            ('€2M', 2_000_000),
            ('500k', 500_000),
            ('1,000,000', 1_000_000),
            ('$1.5 million', 1_500_000),
            ('£3bn', 3_000_000_000),
        ],
    )
    def test_parses_amounts(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize('raw', [None, True, 'undisclosed', 5, 999, '750'])
    def test_rejects_unusable_amounts(self, raw):
        assert parse_amount(raw) is None


class TestEnrichmentData:
    """Test lenient parsing of extracted investor records."""

    def test_comma_separated_lists(self):
        record = EnrichmentData.model_validate({'sectors': 'AI, Climate ,', 'stages': None})

        assert record.sectors == ['AI', 'Climate']
        assert record.stages == []

    def test_null_like_restriction_becomes_none(self):
        record = EnrichmentData.model_validate({'geographicRestrictions': 'N/A'})

        assert record.geographic_restrictions is None

    def test_null_investor_flag_defaults_to_investor(self):
        record = EnrichmentData.model_validate({'isActualInvestor': None})

        assert record.is_actual_investor is True

    @pytest.mark.parametrize(
        'raw,expected',
        [
            ('VC', OrganizationType.VC),
            ('Family Office', OrganizationType.FAMILY_OFFICE),
            ('corporate venture capital', OrganizationType.CVC),
            ('NGO', OrganizationType.NON_PROFIT),
            ('space agency', OrganizationType.UNKNOWN),
            (None, OrganizationType.UNKNOWN),
        ],
    )
    def test_organization_type_aliases(self, raw, expected):
        record = EnrichmentData.model_validate({'organizationType': raw})

        assert record.organization_type is expected

    def test_industry_focus_uses_first_three_sectors(self):
        record = EnrichmentData(sectors=['ai', 'climate', 'robotics', 'saas'])

        assert record.industry_focus == 'ai, climate, robotics'
        assert EnrichmentData().industry_focus == 'unknown'


class TestClientCriteria:
    """Test client criteria validation."""

    def test_accepts_camel_case_body(self):
        criteria = ClientCriteria.model_validate(
            {
                'clientName': 'Heliostat Labs',
                'checkSize': 2_000_000,
                'customSectors': ['Solar thermal'],
                'sectors': ['Climate'],
                'geoFocus': ['UK'],
                'isHardware': True,
            }
        )

        assert criteria.client_name == 'Heliostat Labs'
        assert criteria.all_sectors == ['Climate', 'Solar thermal']
        assert criteria.is_hardware is True

    def test_check_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            ClientCriteria(client_name='Acme', check_size=0)

    def test_screening_request_needs_investors(self):
        with pytest.raises(ValidationError):
            ScreeningRequest.model_validate(
                {'criteria': {'clientName': 'Acme', 'checkSize': 1_000_000}, 'investors': []}
            )


class TestClientProfile:
    """Test profile flattening."""

    def test_extended_profile_flattens(self):
        extended = ExtendedClientProfile.model_validate(
            {
                'companyName': 'Heliostat Labs',
                'oneLiner': 'Concentrated solar heat for industry',
                'sector': 'Climate',
                'subSectors': ['Industrial heat', 'Solar'],
                'technology': {'core': 'Heliostat optics', 'description': 'Mirror fields'},
                'product': {'type': 'Hardware'},
                'businessModel': {'type': 'B2B', 'revenueModel': 'Heat-as-a-service'},
                'targetMarket': {'industries': ['Food processing', 'Chemicals']},
                'investorFitKeywords': ['industrial decarbonisation'],
            }
        )

        profile = extended.to_simple()

        assert profile.company_name == 'Heliostat Labs'
        assert profile.description == 'Concentrated solar heat for industry'
        assert profile.sector == 'Climate (Industrial heat, Solar)'
        assert profile.technology == 'Heliostat optics: Mirror fields'
        assert profile.business_model == 'B2B (Heat-as-a-service)'
        assert profile.target_market == 'Food processing, Chemicals'
        assert profile.keywords == ['industrial decarbonisation']

    def test_fallback_name(self):
        profile = ExtendedClientProfile().to_simple(fallback_name='Acme')

        assert profile.company_name == 'Acme'

    def test_from_criteria(self, sample_criteria):
        profile = ClientProfile.from_criteria(sample_criteria)

        assert profile.company_name == 'Heliostat Labs'
        assert profile.product_type == 'Hardware'
        assert '- Sector: Climate, Hardware' in profile.to_prompt_text()


class TestSummary:
    """Test verdict counting."""

    def test_counts_by_verdict_family(self):
        results = [
            ScreeningResult(investor_name='A', verdict=Verdict.QUALIFIED_LEAD, relevance_score=9, reasoning=''),
            ScreeningResult(investor_name='B', verdict=Verdict.QUALIFIED_CO_LEAD, relevance_score=7, reasoning=''),
            ScreeningResult(investor_name='C', verdict=Verdict.DISQUALIFIED, relevance_score=1, reasoning=''),
            ScreeningResult(
                investor_name='D',
                verdict=Verdict.needs_review('partial fit'),
                relevance_score=5,
                reasoning='',
            ),
        ]

        summary = ScreeningSummary.from_results(results)

        assert (summary.qualified, summary.disqualified, summary.needs_review, summary.total) == (2, 1, 1, 4)
        assert summary.model_dump(by_alias=True)['needsReview'] == 1

    def test_score_bounds_enforced(self):
        with pytest.raises(ValidationError):
            ScreeningResult(investor_name='A', verdict=Verdict.QUALIFIED, relevance_score=11, reasoning='')
