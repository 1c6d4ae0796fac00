"""
LLM prompts for the investor screening pipeline.
"""

from .assess_fit import (
    FIT_SYSTEM_PROMPT,
    ConfidenceLevel,
    FitAssessment,
    build_fit_prompt,
)
from .client_profile import build_client_profile_prompt
from .describe_investor import DESCRIPTION_SYSTEM_PROMPT, build_description_prompt
from .enrich_investor import ENRICHMENT_SYSTEM_PROMPT, build_enrichment_prompt

__all__ = [
    # Investor enrichment
    'ENRICHMENT_SYSTEM_PROMPT',
    'build_enrichment_prompt',
    # Client analysis
    'build_client_profile_prompt',
    # Fit assessment
    'FIT_SYSTEM_PROMPT',
    'ConfidenceLevel',
    'FitAssessment',
    'build_fit_prompt',
    # Investor descriptions
    'DESCRIPTION_SYSTEM_PROMPT',
    'build_description_prompt',
]
