"""
Pipeline components for investor enrichment, sanity checks and verdicts.
"""

from .describer import InvestorDescriber, build_investor_context
from .enricher import InvestorEnricher, is_verdict_clear
from .fit import FitAssessor
from .geography import GeoDecision, GeoOutcome, assess_geography
from .normalizer import (
    format_amount,
    format_date,
    format_ticket_range,
    normalize_enrichment,
    normalize_sector,
    normalize_stage,
)
from .profiler import ClientProfileOutcome, ClientProfiler
from .sanity import SanityReport, sanitize
from .screener import ScreeningPipeline, combine_pages
from .verdict import GUARD_RULES, Rule, VerdictDecision, VerdictEngine

__all__ = [
    # Main Pipeline
    'ScreeningPipeline',
    'combine_pages',
    # LLM components
    'InvestorEnricher',
    'is_verdict_clear',
    'ClientProfiler',
    'ClientProfileOutcome',
    'FitAssessor',
    'InvestorDescriber',
    'build_investor_context',
    # Normalization and sanity checks
    'normalize_enrichment',
    'normalize_sector',
    'normalize_stage',
    'format_amount',
    'format_ticket_range',
    'format_date',
    'SanityReport',
    'sanitize',
    # Verdicts
    'VerdictEngine',
    'VerdictDecision',
    'Rule',
    'GUARD_RULES',
    'GeoDecision',
    'GeoOutcome',
    'assess_geography',
]
