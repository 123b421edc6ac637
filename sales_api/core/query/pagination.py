"""
Pagination for the sales listing
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import math

from sales_api.core.query.normalizer import parse_int

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def metadata(self, total_records: int) -> Dict[str, Any]:
        """Page metadata for a result set of the given size."""
        total_pages = math.ceil(total_records / self.limit) if total_records else 0
        return {
            "current_page": self.page,
            "total_pages": total_pages,
            "total_records": total_records,
            "records_per_page": self.limit,
            "has_next_page": self.page < total_pages,
            "has_prev_page": self.page > 1,
        }


def resolve_page_window(
    page: Optional[str],
    limit: Optional[str],
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE
) -> PageWindow:
    """
    Clamp the requested page and page size to valid bounds.

    Absent or non-integer values take the defaults: page 1, size 10.
    Page is at least 1; size is within [1, max_limit].
    """
    page_number = parse_int(page)
    if page_number is None:
        page_number = DEFAULT_PAGE

    page_size = parse_int(limit)
    if page_size is None:
        page_size = default_limit

    return PageWindow(
        page=max(1, page_number),
        limit=min(max_limit, max(1, page_size)),
    )
