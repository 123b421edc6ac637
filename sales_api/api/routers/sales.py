"""
API router for sales records operations

Provides the filtered listing and the filter option lookup.
"""

from fastapi import APIRouter, Depends
import logging

from sales_api.api.dependencies import get_sales_query, get_sales_service
from sales_api.api.models.sales import SalesList, FilterOptionsResponse, ErrorResponse
from sales_api.api.services.sales_service import SalesService
from sales_api.core.schemas.sales import SalesQuery

# Create router
router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=SalesList,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Query sales records",
    description="Search, filter, sort and paginate sales records, with statistics over all matches"
)
async def get_sales(
    query: SalesQuery = Depends(get_sales_query),
    service: SalesService = Depends(get_sales_service)
):
    """
    Query sales records with filtering options

    Args:
        query: Raw listing parameters
        service: Sales service bound to the application database

    Returns:
        SalesList: Page of records, statistics and pagination metadata
    """
    result = await service.query_sales(query)
    return {"success": True, **result}


@router.get(
    "/filters",
    response_model=FilterOptionsResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Filter options",
    description="Distinct values and ranges available for each filter"
)
async def get_filter_options(service: SalesService = Depends(get_sales_service)):
    """
    Get the values used to populate the dashboard filter controls

    Returns:
        FilterOptionsResponse: Option lists, age range and date range
    """
    options = await service.get_filter_options()
    return {"success": True, "data": options}
