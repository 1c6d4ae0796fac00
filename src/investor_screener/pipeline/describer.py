"""
Investor description generation for stored investor records.
"""

from ..clients.openai_client import OpenAIClient
from ..errors import ExtractionError, OpenAIError
from ..logging import get_logger
from ..models.enrichment import InvestorRecord
from ..prompts.describe_investor import build_description_prompt
from .normalizer import format_amount

logger = get_logger(__name__)

DESCRIPTION_TEMPERATURE = 0.7
DESCRIPTION_MAX_TOKENS = 300


def build_investor_context(investor: InvestorRecord) -> str:
    """Render a stored investor record as labelled lines."""
    lines = [
        f'Investor: {investor.name}',
        f"Type: {investor.organization_type or 'VC'}",
        f"HQ: {investor.hq or 'Unknown'}",
        f"Website: {investor.website or 'Unknown'}",
        f"Sectors: {investor.sectors or 'Various'}",
        f'Check Size: {format_amount(investor.check_size_min)} - '
        f'{format_amount(investor.check_size_max)}',
        f"Stages: {investor.stages or 'Various'}",
        f"Geographic Focus: {investor.geo_focus or 'Global'}",
    ]
    if investor.geographic_restrictions:
        lines.append(f'Geographic Restrictions: {investor.geographic_restrictions}')
    if investor.portfolio_signals:
        lines.append(f'Notable Portfolio: {investor.portfolio_signals}')
    return '\n'.join(lines)


class InvestorDescriber:
    """Writes a short third-person description of an investor."""

    def __init__(self, openai_client: OpenAIClient):
        self.openai_client = openai_client

    async def describe(self, investor: InvestorRecord) -> str:
        """
        Generate a 3-5 sentence description.

        Returns:
            The description text

        Raises:
            OpenAIError: If the LLM call fails
            ExtractionError: If the model returned an empty reply
        """
        messages = build_description_prompt(build_investor_context(investor))
        try:
            response = await self.openai_client.chat_completion(
                messages=messages,
                temperature=DESCRIPTION_TEMPERATURE,
                max_tokens=DESCRIPTION_MAX_TOKENS,
            )
        except OpenAIError as e:
            logger.warning('describe.llm_failed', investor=investor.name, error=str(e))
            raise

        description = response.strip()
        if not description:
            raise ExtractionError('Empty description', context={'investor': investor.name})
        return description
