"""
Fit assessment prompt and response model.

Judges thematic fit between a client and an investor, independent of
ticket size, stage and geography (those are checked deterministically).
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..models.enrichment import EnrichmentData
from ..models.profile import ClientProfile

ConfidenceLevel = Literal['high', 'medium', 'low']


class FitAssessment(BaseModel):
    """Qualitative match judgement between a client and an investor."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_match: bool = Field(
        ...,
        description='True if the investor would plausibly invest in this kind of company.',
    )
    confidence: ConfidenceLevel = Field(
        default='low',
        description='How clearly the website supports the judgement.',
    )
    rationale: str = Field(
        default='',
        description='One or two sentences explaining the judgement.',
    )

    @field_validator('confidence', mode='before')
    @classmethod
    def _normalize_confidence(cls, value: Any) -> str:
        text = str(value or '').strip().lower()
        return text if text in ('high', 'medium', 'low') else 'low'

    @field_validator('rationale', mode='before')
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        return '' if value is None else str(value).strip()


FIT_SYSTEM_PROMPT = """You are an expert at matching startups with investors.

Given a CLIENT company and an INVESTOR profile, decide whether the investor's thematic focus fits the client's business: sector, technology, product type, business model and target market.

Ignore ticket size, funding stage and geography; those are checked separately.

Confidence:
- high: the investor's stated focus clearly includes or clearly excludes this kind of company
- medium: the fit is likely but rests on adjacent sectors or general statements
- low: the investor's focus is vague or generalist

Respond with ONE JSON object:
{
  "isMatch": true | false,
  "confidence": "high" | "medium" | "low",
  "rationale": "1-2 sentences"
}"""

FIT_USER_PROMPT_TEMPLATE = """<client>
{client_text}
</client>

<investor>
- Name: {investor_name}
- Type: {organization_type}
- Sectors: {sectors}
- Stages: {stages}
- Thesis: {thesis}
- Description: {description}
</investor>

Does this investor's focus fit the client?"""


def build_fit_prompt(
    profile: ClientProfile,
    enrichment: EnrichmentData,
    investor_name: str,
) -> list[dict[str, str]]:
    """
    Build the fit assessment prompt messages for OpenAI.

    Args:
        profile: Flat client profile
        enrichment: Normalized investor record
        investor_name: Investor name

    Returns:
        List of message dicts for OpenAI chat completion
    """
    user_prompt = FIT_USER_PROMPT_TEMPLATE.format(
        client_text=profile.to_prompt_text() or '- No profile available',
        investor_name=investor_name,
        organization_type=enrichment.organization_type.value,
        sectors=', '.join(enrichment.sectors) or 'not stated',
        stages=', '.join(enrichment.stages) or 'not stated',
        thesis=enrichment.investment_thesis or 'not stated',
        description=enrichment.description or 'not stated',
    )

    return [
        {'role': 'system', 'content': FIT_SYSTEM_PROMPT},
        {'role': 'user', 'content': user_prompt},
    ]
