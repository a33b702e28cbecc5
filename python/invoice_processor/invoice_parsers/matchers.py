"""
Primitive Matchers

Date, month-name and currency helpers shared by every invoice parser.
"""

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)


# Portuguese month abbreviations as printed on statements
MONTH_MAP = {
    "JAN": 1, "FEV": 2, "MAR": 3, "ABR": 4, "MAI": 5, "JUN": 6,
    "JUL": 7, "AGO": 8, "SET": 9, "OUT": 10, "NOV": 11, "DEZ": 12,
}

MONTH_NAMES = "|".join(MONTH_MAP)

# 1.234,56 / 26,28 / -10,00
AMOUNT_TOKEN = r"-?(?:\d{1,3}(?:\.\d{3})+|\d+),\d{2}"

# Currency amount anywhere in a line, optionally prefixed with R$
AMOUNT_REGEX = re.compile(rf"(?<![\d.])(?:R\$\s*)?({AMOUNT_TOKEN})(?![\d,])")

# DD/MM or DD/MM/YYYY at the start of a line
SLASH_DATE_REGEX = re.compile(r"^(\d{2})/(\d{2})(?:/(\d{4}|\d{2}))?(?![\d/])")

# DD MMM at the start of a line (30 DEZ)
MONTH_NAME_DATE_REGEX = re.compile(
    rf"^(\d{{2}})\s+({MONTH_NAMES})(?![A-Za-zÀ-ú])",
    re.IGNORECASE,
)


def current_date() -> date:
    """Return today's date. Year inference reads the clock only here."""
    return date.today()


def parse_brl_amount(amount_str: str) -> Decimal:
    """Parse a Brazilian-formatted amount string to Decimal.

    Args:
        amount_str: Amount such as "R$ 1.234,56" or "-26,28"

    Returns:
        Parsed Decimal amount

    Raises:
        ValueError: If the string is not a number
    """
    cleaned = re.sub(r"R\$|\s", "", amount_str or "")
    cleaned = cleaned.replace(".", "").replace(",", ".")

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Cannot parse amount: {amount_str}")


def month_number(token: str) -> int | None:
    """Convert a month abbreviation (JAN, fev, Dez) to its number."""
    return MONTH_MAP.get(token.strip().upper()[:3])


def build_date(day: int | str, month: int | str, year: int | str | None = None) -> date | None:
    """Build a calendar date, defaulting to the current year.

    Args:
        day: Day of month
        month: Month number
        year: Four- or two-digit year; current year when missing

    Returns:
        date, or None when the fields do not form a real calendar day
    """
    if year is None or year == "":
        resolved_year = current_date().year
    else:
        resolved_year = int(year)
        if resolved_year < 100:
            resolved_year += 2000

    try:
        return date(resolved_year, int(month), int(day))
    except ValueError:
        logger.debug(f"Invalid calendar date: {day}/{month}/{resolved_year}")
        return None


def parse_slash_date(date_str: str) -> date | None:
    """Parse DD/MM or DD/MM/YYYY into a date."""
    match = SLASH_DATE_REGEX.match(date_str.strip())
    if not match:
        return None
    day, month, year = match.groups()
    return build_date(day, month, year)


def infer_due_year(month: int) -> int:
    """Pick the year for a due date printed without one.

    A January due date read in December belongs to the next year; every
    other case assumes the current year.
    """
    today = current_date()
    if today.month == 12 and month == 1:
        return today.year + 1
    return today.year


def clean_metadata_amount(value: Decimal | None) -> Decimal | None:
    """Drop metadata amounts that are non-finite or negative."""
    if value is None:
        return None
    if not value.is_finite() or value < 0:
        logger.debug(f"Discarding invalid metadata amount: {value}")
        return None
    return value
