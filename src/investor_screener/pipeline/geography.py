"""
Geography decision table.

Clients name their markets as free-form tags ("UK", "Germany", "Europe");
investors state restrictions as free text ("DACH only", "Europe and North
America"). Both sides are reduced to a small vocabulary here and the
outcome is read off a fixed table:

    client region   investor covers          outcome
    -------------   ----------------------   -----------
    any             no restriction/global    PASS
    unspecified     anything                 INFORMATIVE
    uk              uk or europe             PASS
    uk              EU-only mandate          SECONDARY
    non-EU europe   EU-only mandate          SECONDARY
    rest-of-europe  europe, EU or sub-region PASS
    usa             us                       PASS
    any             none of the above        DISQUALIFY (hard wording,
                                             no exceptions) else SECONDARY

The vocabularies below are data; extend them rather than the logic.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from ..models.enrichment import EnrichmentData


class ClientRegion(str, Enum):
    UK = 'uk'
    EUROPE = 'rest-of-europe'
    USA = 'usa'
    OTHER = 'other'
    UNSPECIFIED = 'unspecified'


class GeoOutcome(str, Enum):
    PASS = 'pass'
    SECONDARY = 'secondary'
    DISQUALIFY = 'disqualify'
    INFORMATIVE = 'informative'


UK_TERMS = (
    'uk',
    'united kingdom',
    'great britain',
    'britain',
    'england',
    'scotland',
    'wales',
    'northern ireland',
    'london',
)

EUROPE_TERMS = (
    'europe',
    'european',
    'eu',
    'eea',
    'germany',
    'france',
    'netherlands',
    'belgium',
    'luxembourg',
    'switzerland',
    'austria',
    'ireland',
    'spain',
    'portugal',
    'italy',
    'greece',
    'sweden',
    'norway',
    'denmark',
    'finland',
    'iceland',
    'estonia',
    'latvia',
    'lithuania',
    'poland',
    'czech republic',
    'czechia',
    'slovakia',
    'hungary',
    'romania',
    'bulgaria',
    'croatia',
    'slovenia',
    'malta',
    'cyprus',
    'liechtenstein',
    'ukraine',
    'serbia',
    'dach',
    'nordics',
    'benelux',
    'baltics',
    'cee',
)

USA_TERMS = ('usa', 'us', 'united states', 'north america')

# European countries outside the EU
NON_EU_EUROPE_TERMS = ('switzerland', 'norway', 'iceland', 'liechtenstein', 'ukraine', 'serbia')

# Sub-region label -> countries it covers (and the label itself)
SUBREGIONS: dict[str, tuple[str, ...]] = {
    'dach': ('dach', 'germany', 'austria', 'switzerland'),
    'nordics': ('nordics', 'nordic', 'sweden', 'norway', 'denmark', 'finland', 'iceland'),
    'benelux': ('benelux', 'belgium', 'netherlands', 'luxembourg'),
    'baltics': ('baltics', 'baltic', 'estonia', 'latvia', 'lithuania'),
    'cee': (
        'cee',
        'central and eastern europe',
        'eastern europe',
        'poland',
        'czech republic',
        'czechia',
        'slovakia',
        'hungary',
        'romania',
        'bulgaria',
        'croatia',
        'slovenia',
        'estonia',
        'latvia',
        'lithuania',
        'ukraine',
        'serbia',
    ),
    'iberia': ('iberia', 'iberian', 'spain', 'portugal'),
    'southern europe': ('southern europe', 'italy', 'spain', 'portugal', 'greece', 'malta', 'cyprus'),
    'france': ('france', 'french'),
    'ireland': ('ireland', 'irish'),
}

# Phrases that mention Europe without covering it
NON_EUROPEAN_PHRASES = ('non-european', 'non european', 'outside europe', 'outside of europe')

EUROPE_COVERAGE_TERMS = ('europe', 'european', 'pan-european', 'emea', 'eea')
EU_ONLY_TERMS = ('eu only', 'eu-only', 'eu member states', 'european union', 'eu-based', 'eu based')
UK_COVERAGE_TERMS = ('uk', 'united kingdom', 'britain', 'british', 'england', 'london', 'scotland')
US_COVERAGE_TERMS = ('us', 'usa', 'united states', 'north america', 'american', 'silicon valley')
GLOBAL_TERMS = ('global', 'globally', 'worldwide', 'world-wide', 'international', 'any geography')
HARD_WORDING = (
    'only',
    'exclusively',
    'solely',
    'must be',
    'restricted to',
    'based in',
    'headquartered in',
)


def _contains(text: str, term: str) -> bool:
    return re.search(rf'(?<![a-z]){re.escape(term)}(?![a-z])', text) is not None


def _contains_any(text: str, terms: tuple[str, ...]) -> bool:
    return any(_contains(text, term) for term in terms)


def _client_tags(geo_focus: list[str]) -> list[str]:
    tags = []
    for g in geo_focus:
        tag = (g or '').strip().lower()
        for phrase in NON_EUROPEAN_PHRASES:
            tag = tag.replace(phrase, ' ')
        if tag.strip():
            tags.append(tag)
    return tags


def classify_client_region(geo_focus: list[str]) -> ClientRegion:
    """Primary region of the client. UK wins over the rest of Europe."""
    tags = _client_tags(geo_focus)
    if not tags:
        return ClientRegion.UNSPECIFIED
    if any(_contains_any(tag, UK_TERMS) for tag in tags):
        return ClientRegion.UK
    if any(_contains_any(tag, EUROPE_TERMS) for tag in tags):
        return ClientRegion.EUROPE
    if any(_contains_any(tag, USA_TERMS) for tag in tags):
        return ClientRegion.USA
    return ClientRegion.OTHER


def client_subregions(geo_focus: list[str]) -> set[str]:
    """Sub-region labels the client's tags fall into."""
    tags = _client_tags(geo_focus)
    return {
        name
        for name, terms in SUBREGIONS.items()
        if any(_contains_any(tag, terms) for tag in tags)
    }


def outside_eu(geo_focus: list[str]) -> bool:
    """True when every client tag names a European country outside the EU."""
    tags = _client_tags(geo_focus)
    return bool(tags) and all(_contains_any(tag, NON_EU_EUROPE_TERMS) for tag in tags)


@dataclass(frozen=True)
class RestrictionFlags:
    """What an investor's restriction text covers."""

    uk_only: bool = False
    covers_europe: bool = False
    eu_only: bool = False
    covers_uk: bool = False
    covers_us: bool = False
    is_global: bool = False
    non_european: bool = False
    hard: bool = False
    subregions: frozenset[str] = field(default_factory=frozenset)


def classify_restriction(text: str) -> RestrictionFlags:
    """Reduce free-text restriction wording to coverage flags."""
    lowered = text.strip().lower()

    non_european = _contains_any(lowered, NON_EUROPEAN_PHRASES)
    europe_text = lowered
    for phrase in NON_EUROPEAN_PHRASES:
        europe_text = europe_text.replace(phrase, ' ')

    eu_only = _contains_any(europe_text, EU_ONLY_TERMS)
    covers_europe = _contains_any(europe_text, EUROPE_COVERAGE_TERMS) and not eu_only
    covers_uk = _contains_any(lowered, UK_COVERAGE_TERMS)
    hard = _contains_any(lowered, HARD_WORDING)
    subregions = frozenset(
        name for name, terms in SUBREGIONS.items() if _contains_any(europe_text, terms)
    )

    return RestrictionFlags(
        uk_only=covers_uk and hard and not covers_europe and not subregions,
        covers_europe=covers_europe,
        eu_only=eu_only,
        covers_uk=covers_uk,
        covers_us=_contains_any(lowered, US_COVERAGE_TERMS),
        is_global=_contains_any(lowered, GLOBAL_TERMS),
        non_european=non_european,
        hard=hard,
        subregions=subregions,
    )


@dataclass(frozen=True)
class GeoDecision:
    outcome: GeoOutcome
    note: str = ''


def _covers(region: ClientRegion, flags: RestrictionFlags, geo_focus: list[str]) -> bool:
    if region is ClientRegion.UK:
        return flags.covers_uk or flags.covers_europe
    if region is ClientRegion.EUROPE:
        if flags.covers_europe or (flags.eu_only and not outside_eu(geo_focus)):
            return True
        return bool(flags.subregions & client_subregions(geo_focus))
    if region is ClientRegion.USA:
        return flags.covers_us
    return False


def assess_geography(enrichment: EnrichmentData, geo_focus: list[str]) -> GeoDecision:
    """
    Compare an investor's geographic restriction with the client's markets.

    Args:
        enrichment: Normalized investor record
        geo_focus: Client geography tags

    Returns:
        GeoDecision with the table outcome and a reasoning note
    """
    restriction = enrichment.geographic_restrictions
    if not restriction:
        return GeoDecision(GeoOutcome.PASS)

    flags = classify_restriction(restriction)
    if flags.is_global:
        return GeoDecision(GeoOutcome.PASS, f'Geography: {restriction}')

    region = classify_client_region(geo_focus)
    if region is ClientRegion.UNSPECIFIED:
        return GeoDecision(GeoOutcome.INFORMATIVE, f'Geographic restriction: {restriction}')

    if _covers(region, flags, geo_focus):
        return GeoDecision(GeoOutcome.PASS, f'Geography fits: {restriction}')

    if flags.eu_only and region in (ClientRegion.UK, ClientRegion.EUROPE):
        return GeoDecision(
            GeoOutcome.SECONDARY,
            f'EU mandate may not cover a company in {", ".join(geo_focus)} ({restriction})',
        )

    if flags.hard and not enrichment.geographic_exceptions:
        return GeoDecision(
            GeoOutcome.DISQUALIFY,
            f'Geographic restriction excludes {", ".join(geo_focus)}: {restriction}',
        )

    return GeoDecision(
        GeoOutcome.SECONDARY,
        f'Outside core geography, possible co-investor ({restriction})',
    )
