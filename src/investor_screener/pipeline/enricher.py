"""
Structured enrichment extraction.

Turns an investor's website text into an EnrichmentData record using one
JSON-mode LLM call. The same extractor serves both passes; pass two simply
receives more text.
"""

from ..clients.openai_client import OpenAIClient
from ..errors import OpenAIError
from ..logging import get_logger
from ..models.criteria import InvestorInput
from ..models.enrichment import EnrichmentData
from ..prompts.enrich_investor import build_enrichment_prompt
from ..utils import Parsed, Unparseable, parse_model

logger = get_logger(__name__)

ENRICHMENT_MAX_TOKENS = 1500


class InvestorEnricher:
    """Extracts investor facts from website text."""

    def __init__(self, openai_client: OpenAIClient):
        """
        Initialize the enricher.

        Args:
            openai_client: Configured OpenAI client
        """
        self.openai_client = openai_client

    async def extract(
        self,
        investor: InvestorInput,
        text: str,
        pass_label: str = 'pass_one',
    ) -> Parsed[EnrichmentData] | Unparseable:
        """
        Extract an enrichment record for one investor.

        Args:
            investor: Investor being screened
            text: Website text (homepage, or homepage plus subpages)
            pass_label: Label used in log events

        Returns:
            Parsed EnrichmentData, or Unparseable when the call fails or the
            response holds no usable record
        """
        if not text.strip():
            return Unparseable(reason='no_website_text')

        messages = build_enrichment_prompt(
            investor_name=investor.name,
            website_text=text,
            website=investor.website,
            hq=investor.hq,
        )

        try:
            response = await self.openai_client.chat_completion(
                messages=messages,
                temperature=0.0,
                max_tokens=ENRICHMENT_MAX_TOKENS,
                json_mode=True,
            )
        except OpenAIError as e:
            logger.warning('enrich.llm_failed', pass_label=pass_label, error=str(e))
            return Unparseable(reason='llm_call_failed', raw=str(e))

        outcome = parse_model(response, EnrichmentData)
        if isinstance(outcome, Unparseable):
            logger.warning('enrich.unparseable', pass_label=pass_label, reason=outcome.reason)
        else:
            logger.debug(
                'enrich.extracted',
                pass_label=pass_label,
                sectors=outcome.value.sectors,
                stages=outcome.value.stages,
                has_check_size=outcome.value.has_check_size,
            )
        return outcome


def is_verdict_clear(enrichment: EnrichmentData) -> bool:
    """
    Whether a pass-one record already settles the verdict.

    A record is clear when it disqualifies on its own (no longer investing,
    not an investor, geographic restriction) or when check size, stages and
    sectors are all known.
    """
    if enrichment.no_longer_investing or not enrichment.is_actual_investor:
        return True
    if enrichment.geographic_restrictions:
        return True
    return enrichment.has_check_size and bool(enrichment.stages) and bool(enrichment.sectors)
