"""
Investor description prompt (free text, moderate temperature).
"""

DESCRIPTION_SYSTEM_PROMPT = (
    'You are a professional investment analyst. Write concise, factual descriptions of '
    'venture capital firms and investors. Use a professional but accessible tone. Focus '
    'on what makes this investor unique and what types of companies they look for.'
)

DESCRIPTION_USER_PROMPT_TEMPLATE = """Write a 3-5 sentence description of this investor based on the following information. Be factual and professional. Don't make up information that isn't provided.

{context}

Write the description in third person (e.g., "They invest in..." not "We invest in...")."""


def build_description_prompt(investor_context: str) -> list[dict[str, str]]:
    """
    Build the description prompt messages for OpenAI.

    Args:
        investor_context: Labelled lines describing the stored investor record

    Returns:
        List of message dicts for OpenAI chat completion
    """
    return [
        {'role': 'system', 'content': DESCRIPTION_SYSTEM_PROMPT},
        {
            'role': 'user',
            'content': DESCRIPTION_USER_PROMPT_TEMPLATE.format(context=investor_context),
        },
    ]
