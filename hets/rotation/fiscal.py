"""
Fiscal year and rental agreement numbering rules.

The fiscal year runs April 1 to March 31.
"""

from collections.abc import Iterable
from datetime import date, datetime

FISCAL_YEAR_START_MONTH = 4


def fiscal_year_start(today: date) -> datetime:
    """Start of the fiscal year containing ``today`` (midnight, April 1)."""
    year = today.year if today.month >= FISCAL_YEAR_START_MONTH else today.year - 1
    return datetime(year, FISCAL_YEAR_START_MONTH, 1)


def agreement_fiscal_year(today: date) -> int:
    """Fiscal year label on agreement numbers: the year the fiscal year ends in."""
    return today.year + 1 if today.month >= FISCAL_YEAR_START_MONTH else today.year


def agreement_number_prefix(fiscal_year: int, local_area_number: int) -> str:
    return f"{fiscal_year}-{local_area_number}-"


def format_agreement_number(fiscal_year: int, local_area_number: int, sequence: int) -> str:
    """Format YYYY-#-#### e.g. 2024-7-0001."""
    return f"{agreement_number_prefix(fiscal_year, local_area_number)}{sequence:04d}"


def next_agreement_number(
    existing_numbers: Iterable[str | None],
    fiscal_year: int,
    local_area_number: int,
) -> str:
    """
    Next agreement number in an area for a fiscal year.

    Uses the highest sequence already issued, so numbers keep increasing
    even when earlier agreements are removed.
    """
    prefix = agreement_number_prefix(fiscal_year, local_area_number)

    max_sequence = 0
    for number in existing_numbers:
        value = (number or "").strip()
        if not value.startswith(prefix):
            continue
        suffix = value[len(prefix) :]
        if not suffix.isdigit():
            continue
        max_sequence = max(max_sequence, int(suffix))

    return format_agreement_number(fiscal_year, local_area_number, max_sequence + 1)
