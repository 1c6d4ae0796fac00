"""
External service clients for the investor screening pipeline.
"""

from .openai_client import OpenAIClient
from .web_client import PageContent, WebClient

__all__ = [
    'OpenAIClient',
    'PageContent',
    'WebClient',
]
