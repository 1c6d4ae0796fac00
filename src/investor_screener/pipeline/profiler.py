"""
Client website analysis.

Fetches the client's homepage and discovered subpages, then asks the LLM
for an ExtendedClientProfile.
"""

from dataclasses import dataclass, field

from ..clients.openai_client import OpenAIClient
from ..clients.web_client import WebClient
from ..errors import OpenAIError
from ..logging import get_logger
from ..models.profile import ExtendedClientProfile
from ..prompts.client_profile import build_client_profile_prompt
from ..utils import Unparseable, parse_model

logger = get_logger(__name__)

PROFILE_MAX_TOKENS = 4000


@dataclass
class ClientProfileOutcome:
    """A parsed client profile plus the pages it was built from."""

    profile: ExtendedClientProfile
    page_urls: list[str] = field(default_factory=list)

    @property
    def pages_analyzed(self) -> int:
        return len(self.page_urls)


class ClientProfiler:
    """Builds a client profile from the client's own website."""

    def __init__(self, openai_client: OpenAIClient, web_client: WebClient):
        """
        Initialize the profiler.

        Args:
            openai_client: Configured OpenAI client
            web_client: Shared web client used to fetch the site
        """
        self.openai_client = openai_client
        self.web_client = web_client

    async def profile(
        self,
        website: str,
        keywords: list[str] | None = None,
    ) -> ClientProfileOutcome | Unparseable:
        """
        Analyze a client website.

        Args:
            website: Client website, bare host or full URL
            keywords: Optional sector keywords selected by the user

        Returns:
            ClientProfileOutcome, or Unparseable with reason
            'website_unreachable' when the homepage cannot be fetched, or the
            parse failure reason otherwise
        """
        pages = await self.web_client.fetch_site(website)
        if not pages:
            return Unparseable(reason='website_unreachable')

        messages = build_client_profile_prompt(pages, keywords)
        try:
            response = await self.openai_client.chat_completion(
                messages=messages,
                temperature=0.0,
                max_tokens=PROFILE_MAX_TOKENS,
                json_mode=True,
            )
        except OpenAIError as e:
            logger.warning('profile.llm_failed', website=website, error=str(e))
            return Unparseable(reason='llm_call_failed', raw=str(e))

        outcome = parse_model(response, ExtendedClientProfile)
        if isinstance(outcome, Unparseable):
            logger.warning('profile.unparseable', website=website, reason=outcome.reason)
            return outcome

        logger.info(
            'profile.built',
            website=website,
            pages=len(pages),
            company_name=outcome.value.company_name,
        )
        return ClientProfileOutcome(
            profile=outcome.value,
            page_urls=[page.url for page in pages],
        )
