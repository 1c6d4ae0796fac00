"""
Client website analysis prompt.

The response is parsed into ExtendedClientProfile.
"""

from ..clients.web_client import PageContent

CLIENT_PROFILE_PROMPT_TEMPLATE = """Analyze this company's website content and extract a comprehensive profile. This will be used to match the company with potential investors.
{keyword_context}

Website content from {page_count} pages:

{combined_content}

Extract and return a JSON object with this exact structure:
{{
  "companyName": "Official company name",
  "oneLiner": "One sentence description of what they do",
  "sector": "Primary sector (e.g., DeepTech, CleanTech, HealthTech, etc.)",
  "subSectors": ["Array of specific sub-sectors/verticals"],
  "technology": {{
    "core": "Main technology or technical approach",
    "description": "2-3 sentence explanation of the technology",
    "differentiators": ["What makes their tech unique"]
  }},
  "product": {{
    "type": "Hardware / Software / Platform / Service / Hybrid",
    "offerings": ["List of main products/services"],
    "description": "What they sell and to whom"
  }},
  "businessModel": {{
    "type": "B2B / B2C / B2B2C",
    "revenueModel": "How they make money (SaaS, hardware sales, licensing, etc.)",
    "description": "Brief explanation"
  }},
  "targetMarket": {{
    "industries": ["Target industries"],
    "customerProfile": "Who buys their product",
    "geographicFocus": "Where they operate/sell"
  }},
  "stage": {{
    "estimated": "Pre-seed / Seed / Series A / Series B / Growth / Mature",
    "signals": ["Evidence for this estimate (team size, production status, customers, etc.)"]
  }},
  "team": {{
    "founders": ["Founder names and roles if found"],
    "size": "Team size if mentioned",
    "location": "HQ location"
  }},
  "traction": {{
    "customers": ["Named customers or partners if mentioned"],
    "milestones": ["Key achievements, awards, metrics"]
  }},
  "investorFitKeywords": ["Keywords that describe ideal investor focus areas"]
}}

Be thorough but only include information you can confidently extract from the content. If information is not available, use null for that field."""


def build_client_profile_prompt(
    pages: list[PageContent],
    keywords: list[str] | None = None,
) -> list[dict[str, str]]:
    """
    Build the client analysis prompt messages for OpenAI.

    Args:
        pages: Fetched client pages, homepage first
        keywords: Optional sector keywords selected by the user

    Returns:
        List of message dicts for OpenAI chat completion
    """
    keyword_context = ''
    if keywords:
        keyword_context = (
            f"\nThe user has selected these keywords as relevant: {', '.join(keywords)}. "
            'Use these as guidance for understanding what aspects of the business are '
            'most important for this analysis.'
        )

    combined_content = '\n\n'.join(
        f'=== PAGE: {page.title} ({page.url}) ===\n{page.text}' for page in pages
    )

    prompt = CLIENT_PROFILE_PROMPT_TEMPLATE.format(
        keyword_context=keyword_context,
        page_count=len(pages),
        combined_content=combined_content,
    )

    return [{'role': 'user', 'content': prompt}]
