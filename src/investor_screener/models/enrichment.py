"""
EnrichmentData: structured facts about one investor, extracted from its website.

Records live only for the duration of one investor's screening. They are
never mutated in place; normalization and check-size clearing produce
copies via ``model_copy``.
"""

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .types import OptionalText, StrList

# Extracted amounts below this are treated as noise ("5" meaning 5M, etc.)
MIN_PLAUSIBLE_AMOUNT = 1_000

_AMOUNT_PATTERN = re.compile(
    r'^(\d+(?:\.\d+)?)\s*(k|thousand|m|mm|mn|million|b|bn|billion)?$'
)
_MULTIPLIERS = {
    None: 1,
    'k': 1_000,
    'thousand': 1_000,
    'm': 1_000_000,
    'mm': 1_000_000,
    'mn': 1_000_000,
    'million': 1_000_000,
    'b': 1_000_000_000,
    'bn': 1_000_000_000,
    'billion': 1_000_000_000,
}


class OrganizationType(str, Enum):
    """What kind of organization the investor is."""

    VC = 'vc'
    CVC = 'cvc'
    PE = 'pe'
    ANGEL = 'angel'
    FAMILY_OFFICE = 'family-office'
    ACCELERATOR = 'accelerator'
    INCUBATOR = 'incubator'
    HUB = 'hub'
    CO_WORKING = 'co-working'
    GRANT = 'grant'
    GOVERNMENT = 'government'
    NON_PROFIT = 'non-profit'
    UNKNOWN = 'unknown'


_ORGANIZATION_ALIASES = {
    'venture-capital': OrganizationType.VC,
    'venture-capital-firm': OrganizationType.VC,
    'corporate-vc': OrganizationType.CVC,
    'corporate-venture-capital': OrganizationType.CVC,
    'private-equity': OrganizationType.PE,
    'angel-investor': OrganizationType.ANGEL,
    'angel-network': OrganizationType.ANGEL,
    'business-angel': OrganizationType.ANGEL,
    'familyoffice': OrganizationType.FAMILY_OFFICE,
    'coworking': OrganizationType.CO_WORKING,
    'innovation-hub': OrganizationType.HUB,
    'grant-provider': OrganizationType.GRANT,
    'government-agency': OrganizationType.GOVERNMENT,
    'public-agency': OrganizationType.GOVERNMENT,
    'nonprofit': OrganizationType.NON_PROFIT,
    'ngo': OrganizationType.NON_PROFIT,
    'foundation': OrganizationType.NON_PROFIT,
}


def parse_amount(value: Any) -> int | None:
    """
    Parse a check-size amount in whole currency units.

    Accepts numbers and strings such as "€2M", "500k", "1,000,000".
    Unparseable values and amounts below MIN_PLAUSIBLE_AMOUNT become None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        amount = int(value)
    elif isinstance(value, str):
        cleaned = value.strip().lower()
        for token in ('€', '$', '£', 'eur', 'usd', 'gbp', ',', ' '):
            cleaned = cleaned.replace(token, '')
        match = _AMOUNT_PATTERN.match(cleaned)
        if not match:
            return None
        amount = int(float(match.group(1)) * _MULTIPLIERS[match.group(2)])
    else:
        return None

    if amount < MIN_PLAUSIBLE_AMOUNT:
        return None
    return amount


class EnrichmentData(BaseModel):
    """Structured investor record produced by website extraction."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sectors: StrList = Field(default_factory=list, description='Sector tags')
    check_size_min: int | None = Field(default=None, description='Smallest ticket')
    check_size_max: int | None = Field(default=None, description='Largest ticket')
    stages: StrList = Field(default_factory=list, description='Funding stage tags')
    geo_focus: StrList = Field(default_factory=list, description='Geography focus tags')
    investment_thesis: str = Field(default='', description='Investment thesis text')
    no_longer_investing: bool = Field(default=False)
    software_only: bool = Field(default=False)
    is_actual_investor: bool = Field(default=True)
    organization_type: OrganizationType = Field(default=OrganizationType.UNKNOWN)
    geographic_restrictions: OptionalText = Field(
        default=None, description='Free-text restriction, e.g. "DACH only"'
    )
    geographic_exceptions: bool = Field(
        default=False, description='Restriction admits exceptions'
    )
    description: str = Field(default='', description='Short description of the investor')

    @field_validator('check_size_min', 'check_size_max', mode='before')
    @classmethod
    def _parse_amount(cls, value: Any) -> int | None:
        return parse_amount(value)

    @field_validator('organization_type', mode='before')
    @classmethod
    def _parse_organization_type(cls, value: Any) -> OrganizationType:
        if isinstance(value, OrganizationType):
            return value
        if not isinstance(value, str):
            return OrganizationType.UNKNOWN
        key = re.sub(r'[\s_/]+', '-', value.strip().lower())
        try:
            return OrganizationType(key)
        except ValueError:
            return _ORGANIZATION_ALIASES.get(key, OrganizationType.UNKNOWN)

    @field_validator('investment_thesis', 'description', mode='before')
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        if value is None:
            return ''
        return str(value).strip()

    @field_validator(
        'no_longer_investing',
        'software_only',
        'geographic_exceptions',
        mode='before',
    )
    @classmethod
    def _false_if_null(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator('is_actual_investor', mode='before')
    @classmethod
    def _true_if_null(cls, value: Any) -> Any:
        return True if value is None else value

    @property
    def has_check_size(self) -> bool:
        return self.check_size_min is not None or self.check_size_max is not None

    @property
    def industry_focus(self) -> str:
        """Display label for the investor's sector focus."""
        if not self.sectors:
            return 'unknown'
        return ', '.join(self.sectors[:3])


class InvestorRecord(BaseModel):
    """
    A stored investor row as kept by the admin table.

    List-like fields are comma-separated text there, so everything except
    the amounts is loose text.
    """

    name: str = Field(..., min_length=1)
    website: OptionalText = None
    hq: OptionalText = None
    sectors: OptionalText = None
    check_size_min: int | None = None
    check_size_max: int | None = None
    stages: OptionalText = None
    geo_focus: OptionalText = None
    geographic_restrictions: OptionalText = None
    organization_type: OptionalText = None
    portfolio_signals: OptionalText = None

    @field_validator('check_size_min', 'check_size_max', mode='before')
    @classmethod
    def _parse_amount(cls, value: Any) -> int | None:
        return parse_amount(value)
