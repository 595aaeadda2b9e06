import datetime
import math
from typing import Iterable, Optional

from babel.dates import format_datetime, get_month_names

from spacetraveling.schemas.blog import ContentSection

PRISMIC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def calculate_reading_time(
    sections: Iterable[ContentSection], words_per_minute: int = 200
) -> int:
    """Minutes needed to read every heading and body block, rounded up."""
    total_words = 0
    for section in sections:
        total_words += len(section.heading.split())
        total_words += sum(len(block.text.split()) for block in section.body)
    return math.ceil(total_words / words_per_minute)


def parse_timestamp(value: str) -> datetime.datetime:
    try:
        return datetime.datetime.strptime(value, PRISMIC_TIMESTAMP_FORMAT)
    except ValueError:
        return datetime.datetime.fromisoformat(value)


def format_publication_date(
    value: Optional[str], pattern: str = "dd MMM yyyy", locale: str = "pt_BR"
) -> Optional[str]:
    if not value:
        return None
    moment = parse_timestamp(value)
    if "MMM" in pattern and "MMMM" not in pattern:
        # CLDR abbreviations carry a trailing period in some locales ("mar.")
        month = get_month_names("abbreviated", locale=locale)[moment.month]
        literal = month.rstrip(".").replace("'", "''")
        pattern = pattern.replace("MMM", f"'{literal}'")
    return format_datetime(moment, pattern, locale=locale)
