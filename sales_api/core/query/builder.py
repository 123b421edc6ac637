"""
Query construction for the sales listing

Maps FilterCriteria onto SQLAlchemy clauses over SalesRecord. The same
clauses feed the page query, the count, and the statistics query.
"""

from typing import List

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from sales_api.core.query.normalizer import FilterCriteria, LIKE_ESCAPE_CHAR, escape_like
from sales_api.models.models import SalesRecord, SaleTag

# Characters that start a new word inside a customer name
NAME_WORD_SEPARATORS = (" ", "-", "'", ".")


def build_search_clause(term: str) -> ColumnElement:
    """
    Case-insensitive search over the customer and transaction identifiers.

    Customer name matches at its start or at the start of any later word,
    where words are split by NAME_WORD_SEPARATORS; phone number, customer
    id and transaction id match anywhere.
    """
    escaped = escape_like(term)
    name_clauses = [SalesRecord.customer_name.ilike(f"{escaped}%", escape=LIKE_ESCAPE_CHAR)]
    name_clauses.extend(
        SalesRecord.customer_name.ilike(f"%{separator}{escaped}%", escape=LIKE_ESCAPE_CHAR)
        for separator in NAME_WORD_SEPARATORS
    )
    return or_(
        *name_clauses,
        SalesRecord.phone_number.ilike(f"%{escaped}%", escape=LIKE_ESCAPE_CHAR),
        SalesRecord.customer_id.ilike(f"%{escaped}%", escape=LIKE_ESCAPE_CHAR),
        SalesRecord.transaction_id.ilike(f"%{escaped}%", escape=LIKE_ESCAPE_CHAR),
    )


def build_conditions(criteria: FilterCriteria) -> List[ColumnElement]:
    """
    Translate normalized criteria into a list of filter clauses.

    Args:
        criteria: Normalized filter criteria

    Returns:
        List of clauses; an empty list means no constraint
    """
    conditions = []

    if criteria.search:
        conditions.append(build_search_clause(criteria.search))

    if criteria.regions:
        conditions.append(SalesRecord.customer_region.in_(criteria.regions))

    if criteria.genders:
        conditions.append(SalesRecord.gender.in_(criteria.genders))

    if criteria.categories:
        conditions.append(SalesRecord.product_category.in_(criteria.categories))

    if criteria.tags:
        conditions.append(SalesRecord.tags.any(SaleTag.name.in_(criteria.tags)))

    if criteria.payment_methods:
        conditions.append(SalesRecord.payment_method.in_(criteria.payment_methods))

    if criteria.age_min is not None:
        conditions.append(SalesRecord.age >= criteria.age_min)

    if criteria.age_max is not None:
        conditions.append(SalesRecord.age <= criteria.age_max)

    if criteria.date_start is not None:
        conditions.append(SalesRecord.date >= criteria.date_start)

    if criteria.date_end is not None:
        conditions.append(SalesRecord.date <= criteria.date_end)

    return conditions


def build_filter(criteria: FilterCriteria) -> ColumnElement:
    """AND all active clauses together; empty criteria match every record."""
    conditions = build_conditions(criteria)
    if not conditions:
        return true()
    return and_(*conditions)
