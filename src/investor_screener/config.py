"""
Configuration management for the investor screening pipeline.

Loads settings from environment variables with sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


class Config:
    """Configuration settings loaded from environment."""

    # OpenAI
    OPENAI_API_KEY: str = os.getenv('OPENAI_API_KEY', '')
    OPENAI_CHAT_MODEL: str = os.getenv('OPENAI_CHAT_MODEL', 'gpt-4o-mini')
    OPENAI_MAX_ATTEMPTS: int = int(os.getenv('OPENAI_MAX_ATTEMPTS', '3'))

    # Website fetching
    FETCH_TIMEOUT_SECONDS: float = float(os.getenv('FETCH_TIMEOUT_SECONDS', '12'))
    MAX_CONTENT_CHARS: int = int(os.getenv('MAX_CONTENT_CHARS', '15000'))
    SUBPAGE_BATCH_SIZE: int = int(os.getenv('SUBPAGE_BATCH_SIZE', '5'))
    MIN_SUBPAGE_CHARS: int = int(os.getenv('MIN_SUBPAGE_CHARS', '200'))
    USER_AGENT: str = os.getenv(
        'USER_AGENT', 'Mozilla/5.0 (compatible; InvestorScreenerBot/1.0)'
    )

    # Logging
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate that required configuration is present.

        Returns:
            List of missing required configuration keys
        """
        missing = []
        if not cls.OPENAI_API_KEY:
            missing.append('OPENAI_API_KEY')
        return missing


# Singleton config instance
config = Config()
