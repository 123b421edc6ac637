"""
Sort resolution for the sales listing
"""

from dataclasses import dataclass
from typing import List, Optional

from sales_api.models.models import SalesRecord

DEFAULT_SORT_FIELD = "Date"

# Client-facing sort keys mapped to indexed or cheap-to-sort columns
SORT_FIELDS = {
    "Date": SalesRecord.date,
    "Quantity": SalesRecord.quantity,
    "Total Amount": SalesRecord.total_amount,
    "Customer Name": SalesRecord.customer_name,
    "Age": SalesRecord.age,
}

SORT_ALIASES = {
    "date": "Date",
    "quantity": "Quantity",
    "total_amount": "Total Amount",
    "customer_name": "Customer Name",
    "age": "Age",
}


@dataclass(frozen=True)
class SortCriteria:
    field: str
    ascending: bool

    @property
    def direction(self) -> str:
        return "asc" if self.ascending else "desc"

    def order_by(self) -> List:
        column = SORT_FIELDS[self.field]
        primary = column.asc() if self.ascending else column.desc()
        # Primary key tie-breaker keeps page windows stable across requests
        return [primary, SalesRecord.id.asc()]


def resolve_sort(sort_by: Optional[str], sort_order: Optional[str]) -> SortCriteria:
    """
    Resolve a requested sort key and direction against the allow-list.

    Unknown fields fall back to Date; any direction other than "asc" is
    descending.
    """
    field = (sort_by or "").strip()
    if field not in SORT_FIELDS:
        field = SORT_ALIASES.get(field.lower(), DEFAULT_SORT_FIELD)

    ascending = (sort_order or "").strip().lower() == "asc"
    return SortCriteria(field=field, ascending=ascending)
