"""
Vocabulary normalization and display formatting.

Sector and stage strings from the LLM are free-form. The alias tables fold
known synonyms onto the canonical tags the verdict engine matches on:
lower-case sector tags ("climate", "ai", ...) and title-case stages
("Pre-seed", "Seed", "Series A", ...). Normalizing a canonical tag returns it
unchanged.
"""

import re
from datetime import datetime

from ..models.enrichment import EnrichmentData

CANONICAL_SECTORS = (
    'agritech',
    'climate',
    'robotics',
    'hardware',
    'ai',
    'saas',
    'fintech',
    'healthtech',
    'logistics',
    'defense',
    'biotech',
    'energy',
    'batteries',
    'mobility',
    'spacetech',
    'foodtech',
    'proptech',
    'edtech',
    'cybersecurity',
    'deeptech',
)

SECTOR_ALIASES = {
    'agtech': 'agritech',
    'agri tech': 'agritech',
    'ag tech': 'agritech',
    'agriculture': 'agritech',
    'agrifood': 'agritech',
    'agrifoodtech': 'agritech',
    'climate tech': 'climate',
    'climatetech': 'climate',
    'cleantech': 'climate',
    'clean tech': 'climate',
    'sustainability': 'climate',
    'decarbonization': 'climate',
    'decarbonisation': 'climate',
    'robots': 'robotics',
    'automation': 'robotics',
    'hardtech': 'hardware',
    'hard tech': 'hardware',
    'artificial intelligence': 'ai',
    'ai/ml': 'ai',
    'ai ml': 'ai',
    'machine learning': 'ai',
    'ml': 'ai',
    'generative ai': 'ai',
    'software': 'saas',
    'b2b saas': 'saas',
    'enterprise software': 'saas',
    'fin tech': 'fintech',
    'financial technology': 'fintech',
    'financial services': 'fintech',
    'health tech': 'healthtech',
    'healthcare': 'healthtech',
    'digital health': 'healthtech',
    'medtech': 'healthtech',
    'med tech': 'healthtech',
    'supply chain': 'logistics',
    'freight': 'logistics',
    'defence': 'defense',
    'defense tech': 'defense',
    'defence tech': 'defense',
    'defensetech': 'defense',
    'bio tech': 'biotech',
    'life sciences': 'biotech',
    'energy transition': 'energy',
    'renewables': 'energy',
    'renewable energy': 'energy',
    'energytech': 'energy',
    'battery': 'batteries',
    'energy storage': 'batteries',
    'transport': 'mobility',
    'transportation': 'mobility',
    'automotive': 'mobility',
    'space': 'spacetech',
    'space tech': 'spacetech',
    'food tech': 'foodtech',
    'food': 'foodtech',
    'property tech': 'proptech',
    'real estate': 'proptech',
    'education': 'edtech',
    'ed tech': 'edtech',
    'cyber': 'cybersecurity',
    'cyber security': 'cybersecurity',
    'security': 'cybersecurity',
    'deep tech': 'deeptech',
}

CANONICAL_STAGES = ('Pre-seed', 'Seed', 'Series A', 'Series B', 'Series C', 'Series D', 'Growth')

STAGE_ALIASES = {
    'pre seed': 'Pre-seed',
    'preseed': 'Pre-seed',
    'pre seed stage': 'Pre-seed',
    'seed': 'Seed',
    'seed stage': 'Seed',
    'seed round': 'Seed',
    'series a': 'Series A',
    'series a round': 'Series A',
    'round a': 'Series A',
    'seriesa': 'Series A',
    'series b': 'Series B',
    'series b round': 'Series B',
    'round b': 'Series B',
    'seriesb': 'Series B',
    'series c': 'Series C',
    'series c round': 'Series C',
    'seriesc': 'Series C',
    'series d': 'Series D',
    'series d round': 'Series D',
    'seriesd': 'Series D',
    'growth': 'Growth',
    'growth stage': 'Growth',
    'growth equity': 'Growth',
    'late stage': 'Growth',
    'later stage': 'Growth',
    'expansion': 'Growth',
    'series e': 'Growth',
    'series e+': 'Growth',
    'pre ipo': 'Growth',
}

_SEPARATORS = re.compile(r'[\s_\-]+')


def _fold(value: str) -> str:
    return _SEPARATORS.sub(' ', value.strip().lower()).strip()


def normalize_sector(value: str) -> str:
    """Canonical sector tag; unknown sectors are returned lower-cased."""
    lowered = value.strip().lower()
    if lowered in CANONICAL_SECTORS:
        return lowered
    return SECTOR_ALIASES.get(_fold(value), lowered)


def normalize_stage(value: str) -> str:
    """Canonical stage tag; unknown stages are returned stripped."""
    return STAGE_ALIASES.get(_fold(value), value.strip())


def _dedupe(values: list[str]) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


def normalize_sectors(values: list[str]) -> list[str]:
    return _dedupe([normalize_sector(v) for v in values])


def normalize_stages(values: list[str]) -> list[str]:
    return _dedupe([normalize_stage(v) for v in values])


def normalize_enrichment(record: EnrichmentData) -> EnrichmentData:
    """Return a copy of ``record`` with canonical sector, stage and geography tags."""
    return record.model_copy(
        update={
            'sectors': normalize_sectors(record.sectors),
            'stages': normalize_stages(record.stages),
            'geo_focus': _dedupe([g.strip().lower() for g in record.geo_focus]),
        }
    )


# =============================================================================
# Display formatting
# =============================================================================


def format_amount(value: int | None) -> str:
    """Format an amount in euros: €1.5M, €500K, €900."""
    if value is None:
        return 'unknown'
    thousands = round(value / 1_000)
    if thousands >= 1_000:
        return f'€{value / 1_000_000:.1f}M'
    if value >= 1_000:
        return f'€{thousands}K'
    return f'€{value}'


def format_ticket_range(check_size_min: int | None, check_size_max: int | None) -> str:
    """Format a ticket range such as "€1.0M-€2.0M"."""
    if check_size_min is None and check_size_max is None:
        return 'unknown'
    if check_size_min is None:
        return f'up to {format_amount(check_size_max)}'
    if check_size_max is None:
        return f'from {format_amount(check_size_min)}'
    return f'{format_amount(check_size_min)}-{format_amount(check_size_max)}'


def format_date(value: datetime) -> str:
    """Format a timestamp for display, e.g. "19 Oct 2026 14:05"."""
    return value.strftime('%d %b %Y %H:%M')
