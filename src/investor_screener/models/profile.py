"""
Client company profiles.

ExtendedClientProfile mirrors the JSON produced by website analysis and
edited by the user; ClientProfile is the flat form the fit assessment uses.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .types import OptionalText, StrList

if TYPE_CHECKING:
    from .criteria import ClientCriteria


class _ProfileSection(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TechnologyProfile(_ProfileSection):
    core: OptionalText = None
    description: OptionalText = None
    differentiators: StrList = Field(default_factory=list)


class ProductProfile(_ProfileSection):
    type: OptionalText = None
    offerings: StrList = Field(default_factory=list)
    description: OptionalText = None


class BusinessModelProfile(_ProfileSection):
    type: OptionalText = None
    revenue_model: OptionalText = None
    description: OptionalText = None


class TargetMarketProfile(_ProfileSection):
    industries: StrList = Field(default_factory=list)
    customer_profile: OptionalText = None
    geographic_focus: OptionalText = None


class StageProfile(_ProfileSection):
    estimated: OptionalText = None
    signals: StrList = Field(default_factory=list)


class TeamProfile(_ProfileSection):
    founders: StrList = Field(default_factory=list)
    size: OptionalText = None
    location: OptionalText = None


class TractionProfile(_ProfileSection):
    customers: StrList = Field(default_factory=list)
    milestones: StrList = Field(default_factory=list)


class ExtendedClientProfile(_ProfileSection):
    """Comprehensive company profile extracted from the client's website."""

    company_name: OptionalText = None
    one_liner: OptionalText = None
    sector: OptionalText = None
    sub_sectors: StrList = Field(default_factory=list)
    technology: TechnologyProfile | None = None
    product: ProductProfile | None = None
    business_model: BusinessModelProfile | None = None
    target_market: TargetMarketProfile | None = None
    stage: StageProfile | None = None
    team: TeamProfile | None = None
    traction: TractionProfile | None = None
    investor_fit_keywords: StrList = Field(default_factory=list)

    def to_simple(self, fallback_name: str | None = None) -> 'ClientProfile':
        """Flatten into the ClientProfile used for fit assessment."""
        technology = None
        if self.technology:
            parts = [p for p in (self.technology.core, self.technology.description) if p]
            technology = ': '.join(parts) or None

        business_model = None
        if self.business_model:
            business_model = self.business_model.type
            if self.business_model.revenue_model:
                business_model = (
                    f'{business_model} ({self.business_model.revenue_model})'
                    if business_model
                    else self.business_model.revenue_model
                )

        target_market = None
        if self.target_market:
            target_market = self.target_market.customer_profile or (
                ', '.join(self.target_market.industries) or None
            )

        sector = self.sector
        if self.sub_sectors:
            sub = ', '.join(self.sub_sectors)
            sector = f'{sector} ({sub})' if sector else sub

        return ClientProfile(
            company_name=self.company_name or fallback_name,
            description=self.one_liner or (self.product.description if self.product else None),
            sector=sector,
            technology=technology,
            product_type=self.product.type if self.product else None,
            business_model=business_model,
            target_market=target_market,
            keywords=[*self.investor_fit_keywords],
        )


class ClientProfile(BaseModel):
    """Flat client description passed to the fit assessment."""

    company_name: str | None = None
    description: str | None = None
    sector: str | None = None
    technology: str | None = None
    product_type: str | None = None
    business_model: str | None = None
    target_market: str | None = None
    keywords: list[str] = Field(default_factory=list)

    @classmethod
    def from_criteria(cls, criteria: 'ClientCriteria') -> 'ClientProfile':
        """Minimal profile when neither a stored profile nor a website is available."""
        return cls(
            company_name=criteria.client_name,
            sector=', '.join(criteria.all_sectors) or None,
            product_type='Hardware' if criteria.is_hardware else 'Software',
            keywords=criteria.all_sectors,
        )

    def to_prompt_text(self) -> str:
        """Render as labelled lines for an LLM prompt."""
        lines = [
            ('Company', self.company_name),
            ('Description', self.description),
            ('Sector', self.sector),
            ('Technology', self.technology),
            ('Product type', self.product_type),
            ('Business model', self.business_model),
            ('Target market', self.target_market),
            ('Keywords', ', '.join(self.keywords) if self.keywords else None),
        ]
        return '\n'.join(f'- {label}: {value}' for label, value in lines if value)
