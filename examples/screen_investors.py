#!/usr/bin/env python3
"""
Example: Screen a short investor list for one client.

This script demonstrates:
1. Building ClientCriteria and an investor list
2. Streaming screening events from the pipeline
3. Printing each verdict and the run summary

Prerequisites:
    - Set environment variables:
        OPENAI_API_KEY=your_key

Usage:
    python examples/screen_investors.py
"""

import asyncio
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from investor_screener.clients.openai_client import OpenAIClient
from investor_screener.clients.web_client import WebClient
from investor_screener.config import config
from investor_screener.models.criteria import ClientCriteria, InvestorInput, ScreeningRequest
from investor_screener.models.result import CompleteEvent, ProgressEvent, ResultEvent
from investor_screener.pipeline import ScreeningPipeline

CRITERIA = ClientCriteria(
    client_name='Heliostat Labs',
    client_website='heliostat.io',
    sectors=['Climate', 'Hardware'],
    check_size=2_000_000,
    stages=['Seed'],
    geo_focus=['UK'],
    is_hardware=True,
)

INVESTORS = [
    InvestorInput(name='Pale Blue Dot', website='paleblue.vc', hq='Malmö'),
    InvestorInput(name='Extantia Capital', website='extantia.com', hq='Berlin'),
    InvestorInput(name='Counteract', website='counteract.vc', hq='London'),
]


async def main():
    """Run the example screening."""
    print("=" * 60)
    print("Investor Screening Example")
    print("=" * 60)

    missing = config.validate()
    if missing:
        print(f"ERROR: {', '.join(missing)} not set")
        return

    openai = OpenAIClient()
    web = WebClient()

    try:
        pipeline = ScreeningPipeline(openai_client=openai, web_client=web)
        request = ScreeningRequest(criteria=CRITERIA, investors=INVESTORS)

        async for event in pipeline.stream(request):
            if isinstance(event, ProgressEvent):
                print(f"\n[{event.current}/{event.total}] {event.investor}...")
            elif isinstance(event, ResultEvent):
                result = event.result
                print(f"  Verdict: {result.verdict} ({result.relevance_score}/10)")
                print(f"  Focus: {result.industry_focus}")
                print(f"  Reasoning: {result.reasoning}")
                for flag in result.data_quality_flags:
                    print(f"  Flag: {flag}")
            elif isinstance(event, CompleteEvent):
                summary = event.summary
                print("\n" + "=" * 60)
                print("Summary")
                print("=" * 60)
                print(f"  Qualified: {summary.qualified}")
                print(f"  Disqualified: {summary.disqualified}")
                print(f"  Needs review: {summary.needs_review}")

    finally:
        await web.close()
        await openai.close()
        print("\nConnections closed.")


if __name__ == "__main__":
    asyncio.run(main())
