"""
FastAPI dependencies

The Database and Settings live on app.state, set once by create_app, and
reach handlers only through these functions.
"""

from fastapi import Depends, Query, Request
from typing import Optional

from sales_api.api.services.sales_service import SalesService
from sales_api.config.settings import Settings
from sales_api.core.schemas.sales import SalesQuery
from sales_api.db.session import Database


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_sales_service(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings)
) -> SalesService:
    return SalesService(database, settings)


def get_sales_query(
    search: Optional[str] = Query(None, description="Customer name, phone, customer or transaction ID"),
    region: Optional[str] = Query(None, description="Comma-separated customer regions"),
    gender: Optional[str] = Query(None, description="Comma-separated genders"),
    category: Optional[str] = Query(None, description="Comma-separated product categories"),
    tags: Optional[str] = Query(None, description="Comma-separated tags; a record matches any of them"),
    payment_method: Optional[str] = Query(None, alias="paymentMethod", description="Comma-separated payment methods"),
    age_min: Optional[str] = Query(None, alias="ageMin"),
    age_max: Optional[str] = Query(None, alias="ageMax"),
    min_age: Optional[str] = Query(None, alias="minAge"),
    max_age: Optional[str] = Query(None, alias="maxAge"),
    date_start: Optional[str] = Query(None, alias="dateStart", description="YYYY-MM-DD"),
    date_end: Optional[str] = Query(None, alias="dateEnd", description="YYYY-MM-DD, inclusive of the whole day"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Date, Quantity, Total Amount, Customer Name or Age"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
    page: Optional[str] = Query(None, description="Page number, default 1"),
    limit: Optional[str] = Query(None, description="Page size, default 10, max 100"),
) -> SalesQuery:
    """Collect the raw listing parameters into a SalesQuery."""
    return SalesQuery(
        search=search,
        region=region,
        gender=gender,
        category=category,
        tags=tags,
        payment_method=payment_method,
        age_min=age_min,
        age_max=age_max,
        min_age=min_age,
        max_age=max_age,
        date_start=date_start,
        date_end=date_end,
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
