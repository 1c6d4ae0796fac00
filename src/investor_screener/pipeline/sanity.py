"""
Sanity checks for extracted check-size ranges.

Each check runs independently and appends a warning. Any failed check marks
the check size for clearing: both bounds become null and downstream scoring
treats the ticket as unknown. Records are never rejected.
"""

from dataclasses import dataclass, field

from ..models.enrichment import EnrichmentData
from .normalizer import format_amount

ABSOLUTE_MIN_AMOUNT = 1_000
ABSOLUTE_MAX_AMOUNT = 1_000_000_000

# Plausible ticket range per canonical stage
STAGE_CHECK_RANGES: dict[str, tuple[int, int]] = {
    'Pre-seed': (25_000, 1_000_000),
    'Seed': (100_000, 3_000_000),
    'Series A': (1_000_000, 15_000_000),
    'Series B': (5_000_000, 40_000_000),
    'Series C': (10_000_000, 80_000_000),
    'Series D': (20_000_000, 150_000_000),
    'Growth': (10_000_000, 250_000_000),
}


@dataclass
class SanityReport:
    """Result of validating one record."""

    warnings: list[str] = field(default_factory=list)
    should_clear_check_size: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.warnings

    @property
    def joined_warnings(self) -> str | None:
        """Warnings as one display string, or None when there are none."""
        return '; '.join(self.warnings) if self.warnings else None

    def flag(self, warning: str) -> None:
        self.warnings.append(warning)
        self.should_clear_check_size = True


def validate(record: EnrichmentData) -> SanityReport:
    """
    Check a normalized record's check-size range for plausibility.

    Args:
        record: Enrichment record with canonical stage tags

    Returns:
        SanityReport listing every failed check
    """
    report = SanityReport()
    low = record.check_size_min
    high = record.check_size_max

    if low is not None and high is not None and low > high:
        report.flag(
            f'Check size minimum {format_amount(low)} exceeds maximum {format_amount(high)}'
        )

    for label, value in (('minimum', low), ('maximum', high)):
        if value is not None and not ABSOLUTE_MIN_AMOUNT <= value <= ABSOLUTE_MAX_AMOUNT:
            report.flag(f'Check size {label} {format_amount(value)} is outside plausible limits')

    ranges = [STAGE_CHECK_RANGES[s] for s in record.stages if s in STAGE_CHECK_RANGES]
    if ranges:
        lowest_min = min(r[0] for r in ranges)
        lowest_max = min(r[1] for r in ranges)
        highest_max = max(r[1] for r in ranges)
        stages = ', '.join(s for s in record.stages if s in STAGE_CHECK_RANGES)

        if low is not None and low > 2 * lowest_max:
            report.flag(
                f'Check size minimum {format_amount(low)} is implausibly high for {stages}'
            )
        if low is not None and low > 5 * highest_max:
            report.flag(
                f'Check size minimum {format_amount(low)} far exceeds any {stages} ticket'
            )
        if high is not None and high < lowest_min / 10:
            report.flag(
                f'Check size maximum {format_amount(high)} is implausibly low for {stages}'
            )

    return report


def apply(record: EnrichmentData, report: SanityReport) -> EnrichmentData:
    """Return ``record`` with its check size cleared if the report requires it."""
    if not report.should_clear_check_size:
        return record
    return record.model_copy(update={'check_size_min': None, 'check_size_max': None})


def sanitize(record: EnrichmentData) -> tuple[EnrichmentData, SanityReport]:
    """Validate and apply in one step."""
    report = validate(record)
    return apply(record, report), report
