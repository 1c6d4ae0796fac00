"""
Data models for the investor screening pipeline.
"""

from .criteria import ClientCriteria, InvestorInput, ScreeningRequest, SingleScreeningRequest
from .enrichment import EnrichmentData, InvestorRecord, OrganizationType, parse_amount
from .profile import ClientProfile, ExtendedClientProfile
from .result import (
    CompleteEvent,
    ErrorEvent,
    ProgressEvent,
    ResultEvent,
    ScreeningEvent,
    ScreeningResult,
    ScreeningRun,
    ScreeningSummary,
    StartEvent,
    Verdict,
)

__all__ = [
    'ClientCriteria',
    'InvestorInput',
    'ScreeningRequest',
    'SingleScreeningRequest',
    'EnrichmentData',
    'InvestorRecord',
    'OrganizationType',
    'parse_amount',
    'ClientProfile',
    'ExtendedClientProfile',
    'ScreeningResult',
    'ScreeningRun',
    'ScreeningSummary',
    'Verdict',
    'ScreeningEvent',
    'StartEvent',
    'ProgressEvent',
    'ResultEvent',
    'CompleteEvent',
    'ErrorEvent',
]
