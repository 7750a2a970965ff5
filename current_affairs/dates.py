import calendar
import re
from datetime import date, datetime
from typing import Optional

# "(28 Oct - 03 Nov 2024)" or "(1st Jan 2023)": only the end date is captured
DATE_PATTERN = re.compile(
    r"\((?:.+?-\s*)?(\d{1,2}(?:[a-z]{2})?)\s+([A-Za-z]+)\s+(\d{4})\)",
    re.IGNORECASE,
)
ORDINAL_SUFFIX = re.compile(r"(st|nd|rd|th)", re.IGNORECASE)

MONTH_PREFIXES = {
    name.lower(): number
    for number, name in enumerate(calendar.month_abbr)
    if name
}


def resolve_month(name: str) -> Optional[int]:
    """
    Turn a month word into its number.
    Accepts full names ("November"), abbreviations ("Nov") and anything
    whose first three letters match an abbreviation ("Sept", "Novem").
    """
    for fmt in ("%B", "%b"):
        try:
            return datetime.strptime(name, fmt).month
        except ValueError:
            pass
    if len(name) < 3:
        return None
    return MONTH_PREFIXES.get(name[:3].lower())


def parse_end_date(label: str) -> Optional[date]:
    """
    Parse the end date out of a free-text label.

    Examples:
        "Weekly Current Affairs (28 Oct - 03 Nov, 2024)" -> 2024-11-03
        "Current Affairs (1st Jan 2023)" -> 2023-01-01
        "Miscellaneous Notice" -> None

    Never raises for malformed input; returns None when no date is found.
    """
    if not label:
        return None

    clean = label.replace(",", "")
    match = DATE_PATTERN.search(clean)
    if not match:
        return None

    day, month_name, year = match.groups()
    day = ORDINAL_SUFFIX.sub("", day, count=1)

    month = resolve_month(month_name)
    if month is None:
        return None

    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None


def epoch_seconds(d: date) -> int:
    """Seconds since the Unix epoch at UTC midnight of `d`."""
    return calendar.timegm(d.timetuple())
