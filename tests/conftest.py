"""
Pytest configuration and shared fixtures.

Key fixtures:
- fake_openai: OpenAI client double that answers by prompt type
- fake_web: WebClient double with AsyncMock fetch methods
- sample_criteria: Client criteria for a UK climate-hardware seed raise
- make_enrichment: Factory for EnrichmentData records

No test touches the network.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

os.environ.setdefault('OPENAI_API_KEY', 'sk-test')

from investor_screener.clients.web_client import PageContent
from investor_screener.models.criteria import ClientCriteria, InvestorInput
from investor_screener.models.enrichment import EnrichmentData
from investor_screener.prompts.assess_fit import FIT_SYSTEM_PROMPT
from investor_screener.prompts.describe_investor import DESCRIPTION_SYSTEM_PROMPT
from investor_screener.prompts.enrich_investor import ENRICHMENT_SYSTEM_PROMPT


class FakeOpenAIClient:
    """
    Stands in for OpenAIClient.

    Each prompt type has its own queue of replies. A reply is a string, a
    dict (serialized to JSON) or an exception instance (raised). The last
    reply in a queue repeats once the queue is exhausted.
    """

    def __init__(self):
        self.replies: dict[str, list[Any]] = {
            'enrich': [],
            'fit': [],
            'profile': [],
            'describe': [],
        }
        self.calls: list[dict[str, Any]] = []

    def reply(self, kind: str, *replies: Any) -> 'FakeOpenAIClient':
        self.replies[kind].extend(replies)
        return self

    @staticmethod
    def kind_of(messages: list[dict[str, str]]) -> str:
        system = messages[0]['content'] if messages[0]['role'] == 'system' else ''
        if system == ENRICHMENT_SYSTEM_PROMPT:
            return 'enrich'
        if system == FIT_SYSTEM_PROMPT:
            return 'fit'
        if system == DESCRIPTION_SYSTEM_PROMPT:
            return 'describe'
        return 'profile'

    def calls_of(self, kind: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c['kind'] == kind]

    async def chat_completion(
        self,
        messages,
        model=None,
        temperature=0.0,
        max_tokens=None,
        json_mode=False,
    ) -> str:
        kind = self.kind_of(messages)
        self.calls.append(
            {
                'kind': kind,
                'messages': messages,
                'temperature': temperature,
                'max_tokens': max_tokens,
                'json_mode': json_mode,
            }
        )
        queue = self.replies[kind]
        if not queue:
            return ''
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply)
        return reply


@pytest.fixture
def fake_openai() -> FakeOpenAIClient:
    """OpenAI client double with empty reply queues."""
    return FakeOpenAIClient()


@pytest.fixture
def fake_web() -> MagicMock:
    """WebClient double; every fetch finds nothing unless configured."""
    web = MagicMock()
    web.resolve_website = AsyncMock(return_value=None)
    web.probe_investor_subpages = AsyncMock(return_value=[])
    web.fetch_site = AsyncMock(return_value=[])
    web.close = AsyncMock()
    return web


@pytest.fixture
def sample_criteria() -> ClientCriteria:
    """A UK climate-hardware company raising €2M at seed."""
    return ClientCriteria(
        client_name='Heliostat Labs',
        sectors=['Climate', 'Hardware'],
        check_size=2_000_000,
        stages=['Seed'],
        geo_focus=['UK'],
        is_hardware=True,
    )


@pytest.fixture
def sample_investor() -> InvestorInput:
    return InvestorInput(name='Northwind Ventures', website='northwind.vc', hq='London')


@pytest.fixture
def make_enrichment():
    """Factory for enrichment records; keyword arguments override defaults."""

    def _make(**overrides: Any) -> EnrichmentData:
        values: dict[str, Any] = {
            'sectors': ['climate', 'hardware'],
            'check_size_min': 500_000,
            'check_size_max': 3_000_000,
            'stages': ['Seed', 'Series A'],
            'geo_focus': ['europe'],
            'investment_thesis': 'Backs hardware that decarbonises heavy industry',
            'organization_type': 'vc',
        }
        values.update(overrides)
        return EnrichmentData(**values)

    return _make


@pytest.fixture
def make_page():
    """Factory for fetched pages."""

    def _make(url: str = 'https://northwind.vc/', text: str = 'Northwind backs climate hardware.') -> PageContent:
        return PageContent(url=url, title='Northwind', text=text, html=f'<html><body>{text}</body></html>')

    return _make
