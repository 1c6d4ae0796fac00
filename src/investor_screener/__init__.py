"""
Investor Screener

Screens a list of investors against one client's fundraising criteria:
website fetching, LLM-based enrichment with a second pass when data is thin,
check-size sanity checks and a deterministic verdict engine.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline import (
    ScreeningPipeline,
    InvestorEnricher,
    ClientProfiler,
    FitAssessor,
    InvestorDescriber,
    VerdictEngine,
    VerdictDecision,
)
from .clients import OpenAIClient, WebClient
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    PipelineTimer,
)
from .errors import (
    InvestorScreenerError,
    ClientError,
    OpenAIError,
    FetchError,
    PipelineError,
    ExtractionError,
)

__all__ = [
    # Version
    '__version__',
    # Main Pipeline
    'ScreeningPipeline',
    # Components
    'InvestorEnricher',
    'ClientProfiler',
    'FitAssessor',
    'InvestorDescriber',
    'VerdictEngine',
    'VerdictDecision',
    # Clients
    'OpenAIClient',
    'WebClient',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'PipelineTimer',
    # Errors
    'InvestorScreenerError',
    'ClientError',
    'OpenAIError',
    'FetchError',
    'PipelineError',
    'ExtractionError',
]
