"""
Filter normalization for the sales listing

Turns the raw SalesQuery strings into typed FilterCriteria: lists for the
multi-select filters, integer age bounds, and day-aligned datetime bounds.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import List, Optional
import logging
import re

from sales_api.core.errors import FilterValidationError
from sales_api.core.schemas.sales import SalesQuery

logger = logging.getLogger(__name__)

MIN_AGE = 0
MAX_AGE = 150
MAX_TAG_FILTERS = 50

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

START_OF_DAY = time(0, 0, 0)
END_OF_DAY = time(23, 59, 59, 999000)

# Order matters: the escape character itself goes first
LIKE_ESCAPE_CHAR = "\\"
_LIKE_SPECIALS = (LIKE_ESCAPE_CHAR, "%", "_")


@dataclass
class FilterCriteria:
    """Normalized filter state. Empty lists and None mean unconstrained."""
    search: Optional[str] = None
    regions: List[str] = field(default_factory=list)
    genders: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    payment_methods: List[str] = field(default_factory=list)
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None

    def is_empty(self) -> bool:
        return not any([
            self.search,
            self.regions,
            self.genders,
            self.categories,
            self.tags,
            self.payment_methods,
            self.age_min is not None,
            self.age_max is not None,
            self.date_start is not None,
            self.date_end is not None,
        ])


def split_multi_value(raw: Optional[str]) -> List[str]:
    """Split a comma-separated parameter, trimming tokens and dropping empties."""
    if not raw:
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Parse a plain ASCII decimal integer, optionally signed."""
    if raw is None:
        return None
    value = raw.strip()
    if not INTEGER_PATTERN.fullmatch(value):
        return None
    try:
        return int(value)
    except ValueError:
        # Over the interpreter's integer string length limit
        return None


def parse_age(raw: Optional[str]) -> Optional[int]:
    """Parse an age bound; anything outside [0, 150] is treated as absent."""
    value = parse_int(raw)
    if value is None or value < MIN_AGE or value > MAX_AGE:
        if raw is not None and raw.strip():
            logger.debug(f"Ignoring invalid age bound: {raw!r}")
        return None
    return value


def parse_calendar_date(raw: Optional[str]) -> Optional[date]:
    """
    Parse an ISO calendar date.

    A full ISO timestamp is accepted and truncated to its date; one with a
    UTC offset is converted to UTC first, matching the stored dates. Returns
    None for absent or unparseable input.
    """
    if raw is None or not raw.strip():
        return None
    value = raw.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Ignoring invalid date bound: {raw!r}")
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def escape_like(term: str) -> str:
    """Escape LIKE pattern metacharacters so the term matches literally."""
    for special in _LIKE_SPECIALS:
        term = term.replace(special, LIKE_ESCAPE_CHAR + special)
    return term


def normalize_search(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    term = raw.strip()
    return term or None


def normalize_filters(query: SalesQuery, max_tags: int = MAX_TAG_FILTERS) -> FilterCriteria:
    """
    Build FilterCriteria from raw request parameters.

    Args:
        query: Raw query parameters
        max_tags: Cap on the number of tag values; extra values are dropped

    Returns:
        FilterCriteria: Normalized criteria

    Raises:
        FilterValidationError: If the age or date bounds are inverted
    """
    age_min = parse_age(query.first_of("age_min", "min_age"))
    age_max = parse_age(query.first_of("age_max", "max_age"))
    if age_min is not None and age_max is not None and age_min > age_max:
        raise FilterValidationError("Minimum age cannot be greater than maximum age")

    start = parse_calendar_date(query.first_of("date_start", "start_date"))
    end = parse_calendar_date(query.first_of("date_end", "end_date"))
    if start is not None and end is not None and start > end:
        raise FilterValidationError("Start date cannot be after end date")

    tags = split_multi_value(query.tags)
    if len(tags) > max_tags:
        logger.debug(f"Dropping {len(tags) - max_tags} tag filters over the limit of {max_tags}")
        tags = tags[:max_tags]

    return FilterCriteria(
        search=normalize_search(query.search),
        regions=split_multi_value(query.region),
        genders=split_multi_value(query.gender),
        categories=split_multi_value(query.category),
        tags=tags,
        payment_methods=split_multi_value(query.payment_method),
        age_min=age_min,
        age_max=age_max,
        date_start=datetime.combine(start, START_OF_DAY) if start else None,
        date_end=datetime.combine(end, END_OF_DAY) if end else None,
    )
