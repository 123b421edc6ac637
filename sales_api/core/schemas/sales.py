"""
Request-side schemas for the sales listing

Every field is kept as the raw string the client sent. Coercion and
validation happen in the normalizer, so malformed values never reach
query construction as None-by-accident or half-parsed numbers.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SalesQuery(BaseModel):
    """Raw query parameters for GET /api/sales"""
    model_config = ConfigDict(populate_by_name=True)

    search: Optional[str] = None
    region: Optional[str] = None
    gender: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[str] = None
    payment_method: Optional[str] = Field(None, alias="paymentMethod")

    age_min: Optional[str] = Field(None, alias="ageMin")
    age_max: Optional[str] = Field(None, alias="ageMax")
    min_age: Optional[str] = Field(None, alias="minAge")
    max_age: Optional[str] = Field(None, alias="maxAge")

    date_start: Optional[str] = Field(None, alias="dateStart")
    date_end: Optional[str] = Field(None, alias="dateEnd")
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")

    sort_by: Optional[str] = Field(None, alias="sortBy")
    sort_order: Optional[str] = Field(None, alias="sortOrder")
    page: Optional[str] = None
    limit: Optional[str] = None

    def first_of(self, *names: str) -> Optional[str]:
        """Return the first non-blank value among alternative parameter names."""
        for name in names:
            value = getattr(self, name)
            if value is not None and value.strip():
                return value
        return None
