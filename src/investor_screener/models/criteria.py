"""
Screening inputs: the client's fundraising criteria and the investor list.

Request bodies arrive with camelCase keys; Python code uses snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .profile import ExtendedClientProfile


class ClientCriteria(BaseModel):
    """What the client is raising and where. Immutable for a screening run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    client_name: str = Field(..., min_length=1, description='Client company name')
    client_website: str | None = Field(default=None, description='Client website, if known')
    sectors: list[str] = Field(default_factory=list, description='Predefined sector tags')
    custom_sectors: list[str] = Field(
        default_factory=list, description='Free-text sector tags added by the user'
    )
    check_size: int = Field(
        ..., gt=0, description='Target raise in whole currency units (a single amount)'
    )
    stages: list[str] = Field(default_factory=list, description='Target funding stages')
    geo_focus: list[str] = Field(default_factory=list, description='Geography tags')
    is_hardware: bool = Field(default=False, description='Hardware / deep-tech company')
    screened_by: str | None = Field(default=None, description='Who requested the screen')

    @property
    def all_sectors(self) -> list[str]:
        """Predefined and custom sectors together."""
        return [*self.sectors, *self.custom_sectors]


class InvestorInput(BaseModel):
    """One row of the investor list."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description='Investor name (REQUIRED)')
    website: str | None = Field(default=None, description='Investor website')
    hq: str | None = Field(default=None, description='Headquarters location')


class ScreeningRequest(BaseModel):
    """Body of a multi-investor screening request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    criteria: ClientCriteria
    investors: list[InvestorInput] = Field(..., min_length=1)
    client_profile: ExtendedClientProfile | None = Field(
        default=None,
        description='Pre-computed client profile (from /analyze-client)',
    )


class SingleScreeningRequest(BaseModel):
    """Body of a single-investor screening request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    investor: InvestorInput
    criteria: ClientCriteria
    client_profile: ExtendedClientProfile | None = None
