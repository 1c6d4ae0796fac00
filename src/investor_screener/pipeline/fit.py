"""
Qualitative fit assessment between a client and an investor.
"""

from ..clients.openai_client import OpenAIClient
from ..errors import OpenAIError
from ..logging import get_logger
from ..models.enrichment import EnrichmentData
from ..models.profile import ClientProfile
from ..prompts.assess_fit import FitAssessment, build_fit_prompt
from ..utils import Parsed, Unparseable, parse_model

logger = get_logger(__name__)

FIT_MAX_TOKENS = 400

# Score contribution of a positive assessment
CONFIDENCE_POINTS = {'high': 3, 'medium': 2, 'low': 1}


class FitAssessor:
    """Asks the LLM whether an investor's focus fits the client's business."""

    def __init__(self, openai_client: OpenAIClient):
        self.openai_client = openai_client

    async def assess(
        self,
        profile: ClientProfile,
        enrichment: EnrichmentData,
        investor_name: str,
    ) -> Parsed[FitAssessment] | Unparseable:
        messages = build_fit_prompt(profile, enrichment, investor_name)

        try:
            response = await self.openai_client.chat_completion(
                messages=messages,
                temperature=0.0,
                max_tokens=FIT_MAX_TOKENS,
                json_mode=True,
            )
        except OpenAIError as e:
            logger.warning('fit.llm_failed', error=str(e))
            return Unparseable(reason='llm_call_failed', raw=str(e))

        outcome = parse_model(response, FitAssessment)
        if isinstance(outcome, Unparseable):
            logger.warning('fit.unparseable', reason=outcome.reason)
        return outcome
