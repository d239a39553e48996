import re
from datetime import datetime

DATE_FORMATS = [
    "%Y-%m-%d",  # 2025-01-15
    "%B %d, %Y",  # January 15, 2025
    "%b %d, %Y",  # Jan 15, 2025
    "%A, %B %d, %Y",  # Wednesday, January 15, 2025
    "%a, %b %d, %Y",  # Wed, Jan 15, 2025
    "%d %B %Y",  # 15 January 2025
    "%m/%d/%Y",  # 01/15/2025
]

# A date written with one of the formats above, possibly followed by a time
# or the end of a range ("January 15, 2025 - January 17, 2025").
_LEADING_DATE = re.compile(
    r"^((?:[A-Za-z]+,?\s+)?[A-Za-z]+\.?\s+\d{1,2},\s+\d{4}"
    r"|\d{4}-\d{2}-\d{2}"
    r"|\d{1,2}/\d{1,2}/\d{4}"
    r"|\d{1,2}\s+[A-Za-z]+\s+\d{4})"
)


def normalize_whitespace(text: str) -> str:
    """Collapses runs of whitespace (including non-breaking spaces)."""
    return re.sub(r"\s+", " ", text.replace("\xa0", " ")).strip()


def parse_event_date(date_str: str) -> datetime | None:
    """Parses the date shown for an event.

    Args:
        date_str: Text such as "Wednesday, January 15, 2025",
            "Jan 15, 2025 6:00 PM" or "2025-01-15".

    Returns:
        The date at midnight, or None if no known format matches.
    """
    if not date_str:
        return None

    text = normalize_whitespace(date_str)
    match = _LEADING_DATE.match(text)
    candidates = [text, match.group(1)] if match else [text]

    for candidate in candidates:
        cleaned = candidate.replace(".", "")
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(cleaned, fmt)
            except ValueError:
                continue

    return None


def chronological_key(date_str: str) -> tuple[int, datetime]:
    """Sort key placing parseable dates in order and the rest last.

    Unparseable dates share one key, so a stable sort keeps them in the
    order they were harvested.
    """
    parsed = parse_event_date(date_str)
    if parsed is None:
        return (1, datetime.max)
    return (0, parsed)
