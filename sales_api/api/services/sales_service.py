"""
Service layer for sales records operations

Provides the filtered listing, the statistics aggregate, and the filter
option lookups used by the dashboard.
"""

from typing import List, Dict, Any, Optional, Tuple
import asyncio
import logging

from sqlalchemy import select, func, distinct
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from starlette.concurrency import run_in_threadpool

from sales_api.config.settings import Settings
from sales_api.core.errors import InfrastructureError
from sales_api.core.query.builder import build_filter
from sales_api.core.query.normalizer import normalize_filters
from sales_api.core.query.pagination import PageWindow, resolve_page_window
from sales_api.core.query.sorting import SortCriteria, resolve_sort
from sales_api.core.schemas.sales import SalesQuery
from sales_api.db.session import Database
from sales_api.models.models import SalesRecord, SaleTag

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_AGE_RANGE = {"min": 0, "max": 100}


def record_to_dict(record: SalesRecord) -> Dict[str, Any]:
    """Convert a SalesRecord row to a plain dictionary"""
    return {
        "transaction_id": record.transaction_id,
        "date": record.date,
        "customer_id": record.customer_id,
        "customer_name": record.customer_name,
        "phone_number": record.phone_number,
        "gender": record.gender,
        "age": record.age,
        "customer_region": record.customer_region,
        "customer_type": record.customer_type,
        "product_id": record.product_id,
        "product_name": record.product_name,
        "brand": record.brand,
        "product_category": record.product_category,
        "tags": record.tag_names,
        "quantity": record.quantity,
        "price_per_unit": record.price_per_unit,
        "discount_percentage": record.discount_percentage,
        "total_amount": record.total_amount,
        "final_amount": record.final_amount,
        "payment_method": record.payment_method,
        "order_status": record.order_status,
        "delivery_type": record.delivery_type,
        "store_id": record.store_id,
        "store_location": record.store_location,
        "salesperson_id": record.salesperson_id,
        "employee_name": record.employee_name,
    }


class SalesService:
    """
    Service for sales record queries.

    Every query runs against the Database handed in at construction; the
    service itself holds no per-request state.
    """

    def __init__(self, database: Database, settings: Settings):
        self.database = database
        self.settings = settings

    async def query_sales(self, query: SalesQuery) -> Dict[str, Any]:
        """
        Run the filtered, sorted, paginated listing with its statistics.

        Args:
            query: Raw request parameters

        Returns:
            Dict: data, statistics and pagination sections

        Raises:
            FilterValidationError: If the filters are inconsistent
            InfrastructureError: If the database query fails
        """
        criteria = normalize_filters(query, max_tags=self.settings.MAX_TAG_FILTERS)
        sort = resolve_sort(query.sort_by, query.sort_order)
        window = resolve_page_window(
            query.page,
            query.limit,
            default_limit=self.settings.DEFAULT_PAGE_SIZE,
            max_limit=self.settings.MAX_PAGE_SIZE
        )
        where = build_filter(criteria)

        logger.debug(
            f"Querying sales: sort={sort.field} {sort.direction}, "
            f"page={window.page}, limit={window.limit}, filtered={not criteria.is_empty()}"
        )

        try:
            (records, total_count), statistics = await asyncio.gather(
                run_in_threadpool(self.fetch_page, where, sort, window),
                run_in_threadpool(self.get_statistics, where),
            )
        except SQLAlchemyError as e:
            logger.error(f"Error querying sales records: {str(e)}")
            raise InfrastructureError("Failed to fetch sales data", str(e)) from e

        return {
            "data": records,
            "statistics": statistics,
            "pagination": window.metadata(total_count),
        }

    def fetch_page(self, where, sort: SortCriteria, window: PageWindow) -> Tuple[List[Dict[str, Any]], int]:
        """
        Get one window of matching records and the total match count.

        Args:
            where: Filter expression
            sort: Resolved sort criteria
            window: Page window

        Returns:
            Tuple[List[Dict], int]: Records on the page and total count
        """
        with self.database.session_scope() as session:
            total_count = session.scalar(
                select(func.count(SalesRecord.id)).where(where)
            ) or 0

            # Pages past the last match are empty; their offset may not fit a SQL integer
            if window.offset >= total_count:
                return [], total_count

            stmt = (
                select(SalesRecord)
                .where(where)
                .options(selectinload(SalesRecord.tags))
                .order_by(*sort.order_by())
                .offset(window.offset)
                .limit(window.limit)
            )
            records = session.scalars(stmt).all()

            return [record_to_dict(record) for record in records], total_count

    def get_statistics(self, where) -> Dict[str, Any]:
        """
        Aggregate quantity, amount and discount over every matching record.

        Args:
            where: Filter expression, not limited to a page

        Returns:
            Dict: Totals, zero when nothing matches
        """
        discount = SalesRecord.total_amount * func.coalesce(SalesRecord.discount_percentage, 0) / 100.0
        stmt = select(
            func.coalesce(func.sum(SalesRecord.quantity), 0),
            func.coalesce(func.sum(SalesRecord.total_amount), 0),
            func.coalesce(func.sum(discount), 0),
            func.count(SalesRecord.id),
        ).where(where)

        with self.database.session_scope() as session:
            total_quantity, total_amount, total_discount, total_records = session.execute(stmt).one()

        return {
            "total_quantity": int(total_quantity),
            "total_amount": float(total_amount),
            "total_discount": float(total_discount),
            "total_records": int(total_records),
        }

    async def get_filter_options(self) -> Dict[str, Any]:
        """
        Get the distinct values and ranges available for each filter.

        Returns:
            Dict: Sorted option lists plus age and date ranges

        Raises:
            InfrastructureError: If the database query fails
        """
        try:
            return await run_in_threadpool(self._load_filter_options)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching filter options: {str(e)}")
            raise InfrastructureError("Failed to fetch filter options", str(e)) from e

    def _load_filter_options(self) -> Dict[str, Any]:
        with self.database.session_scope() as session:
            options = {
                "regions": self._distinct_values(session, SalesRecord.customer_region),
                "genders": self._distinct_values(session, SalesRecord.gender),
                "categories": self._distinct_values(session, SalesRecord.product_category),
                "tags": self._distinct_values(session, SaleTag.name, limit=self.settings.MAX_TAG_OPTIONS),
                "payment_methods": self._distinct_values(session, SalesRecord.payment_method),
            }

            age_min, age_max = session.execute(
                select(func.min(SalesRecord.age), func.max(SalesRecord.age))
            ).one()
            date_min, date_max = session.execute(
                select(func.min(SalesRecord.date), func.max(SalesRecord.date))
            ).one()

        if age_min is None or age_max is None:
            options["age_range"] = dict(DEFAULT_AGE_RANGE)
        else:
            options["age_range"] = {"min": age_min, "max": age_max}

        options["date_range"] = {"min": date_min, "max": date_max}
        return options

    @staticmethod
    def _distinct_values(session, column, limit: Optional[int] = None) -> List[str]:
        """Distinct non-empty values of a column, sorted."""
        stmt = (
            select(distinct(column))
            .where(column.is_not(None), column != "")
            .order_by(column)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        # Sorted again in Python so ordering does not depend on the database collation
        return sorted(session.scalars(stmt).all())
