"""
Investor enrichment prompt.

Turns investor website text into the JSON shape parsed by EnrichmentData.
"""

ENRICHMENT_SYSTEM_PROMPT = """You are an analyst who extracts structured facts about investors from their website text.

Only report what the text supports. Never guess a check size: if the site does not state ticket sizes, use null.

Return ONE JSON object with exactly these keys:
{
  "sectors": ["sector tags the investor backs, e.g. climate, ai, fintech, robotics"],
  "checkSizeMin": smallest ticket in whole euros as an integer, or null,
  "checkSizeMax": largest ticket in whole euros as an integer, or null,
  "stages": ["funding stages they invest in, e.g. Pre-seed, Seed, Series A, Series B, Growth"],
  "geoFocus": ["regions or countries they invest in, lower case"],
  "investmentThesis": "1-3 sentences summarising their thesis, or empty string",
  "noLongerInvesting": true if the fund is closed, winding down, or explicitly not making new investments,
  "softwareOnly": true if they state they only back software (no hardware),
  "isActualInvestor": false if the organization does not itself invest money (e.g. a co-working space, event organiser, consultancy, media site),
  "organizationType": one of "vc", "cvc", "pe", "angel", "family-office", "accelerator", "incubator", "hub", "co-working", "grant", "government", "non-profit", "unknown",
  "geographicRestrictions": free text of any stated restriction on where portfolio companies must be based (e.g. "DACH only", "UK companies only"), or null,
  "geographicExceptions": true if the restriction admits exceptions (e.g. "primarily Nordics, selectively elsewhere"),
  "description": "2 sentence neutral description of the investor"
}

Guidelines:
- Convert amounts to whole euros: "€500k" -> 500000, "$2M" -> 2000000.
- A single stated ticket ("we invest €1M") sets both checkSizeMin and checkSizeMax.
- Geographic focus is where they prefer to invest; geographicRestrictions is only for hard eligibility limits.
- Respond with the JSON object only."""

ENRICHMENT_USER_PROMPT_TEMPLATE = """Extract the investor profile for {investor_name}.

{additional_context}<website_text>
{website_text}
</website_text>"""


def build_enrichment_prompt(
    investor_name: str,
    website_text: str,
    website: str | None = None,
    hq: str | None = None,
) -> list[dict[str, str]]:
    """
    Build the enrichment prompt messages for OpenAI.

    Args:
        investor_name: Investor name as given in the input list
        website_text: Extracted text of the homepage (and subpages on pass two)
        website: Optional website URL for context
        hq: Optional HQ location for context

    Returns:
        List of message dicts for OpenAI chat completion
    """
    context_parts = []
    if website:
        context_parts.append(f'Website: {website}')
    if hq:
        context_parts.append(f'HQ: {hq}')

    additional_context = '\n'.join(context_parts) + '\n\n' if context_parts else ''

    user_prompt = ENRICHMENT_USER_PROMPT_TEMPLATE.format(
        investor_name=investor_name,
        additional_context=additional_context,
        website_text=website_text,
    )

    return [
        {'role': 'system', 'content': ENRICHMENT_SYSTEM_PROMPT},
        {'role': 'user', 'content': user_prompt},
    ]
