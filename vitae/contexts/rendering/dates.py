"""Month/year formatting for resume date ranges."""

from datetime import datetime
from typing import Optional

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

PRESENT = "Present"
RANGE_SEPARATOR = " – "


def format_date(raw: Optional[str], is_end_date: bool = False) -> str:
    """
    Format a "YYYY-MM" value as "Mon YYYY".

    Empty end dates mean the position is ongoing ("Present"); empty start
    dates stay empty. Unparseable values are returned unchanged. Never raises.

    Examples:
        >>> format_date("2020-01")
        'Jan 2020'
        >>> format_date("", is_end_date=True)
        'Present'
        >>> format_date("Summer 2019")
        'Summer 2019'
    """
    if not raw or not str(raw).strip():
        return PRESENT if is_end_date else ""

    raw = str(raw)
    if raw.strip().lower() == "present":
        return PRESENT

    try:
        parsed = datetime.strptime(f"{raw.strip()}-01", "%Y-%m-%d")
    except ValueError:
        return raw

    # Month names are fixed rather than locale-dependent (%b)
    return f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"


def format_date_range(start: Optional[str], end: Optional[str]) -> str:
    """'Start – End', with an empty end rendered as Present."""
    return f"{format_date(start)}{RANGE_SEPARATOR}{format_date(end, is_end_date=True)}"
