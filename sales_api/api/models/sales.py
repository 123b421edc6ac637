"""
API data models for sales records

Field names are snake_case in Python; responses are serialized with the
column names and camelCase keys the dashboard reads.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class SalesRecord(BaseModel):
    """Model for a sales record"""
    transaction_id: str = Field(..., serialization_alias="Transaction ID", description="Unique transaction identifier")
    date: datetime = Field(..., serialization_alias="Date", description="Transaction timestamp")
    customer_id: str = Field(..., serialization_alias="Customer ID")
    customer_name: str = Field(..., serialization_alias="Customer Name")
    phone_number: str = Field(..., serialization_alias="Phone Number")
    gender: Optional[str] = Field(None, serialization_alias="Gender", description="Male, Female, Other or empty")
    age: Optional[int] = Field(None, serialization_alias="Age")
    customer_region: Optional[str] = Field(None, serialization_alias="Customer Region")
    customer_type: Optional[str] = Field(None, serialization_alias="Customer Type")
    product_id: str = Field(..., serialization_alias="Product ID")
    product_name: str = Field(..., serialization_alias="Product Name")
    brand: Optional[str] = Field(None, serialization_alias="Brand")
    product_category: Optional[str] = Field(None, serialization_alias="Product Category")
    tags: List[str] = Field(default_factory=list, serialization_alias="Tags")
    quantity: int = Field(..., serialization_alias="Quantity")
    price_per_unit: float = Field(..., serialization_alias="Price per Unit")
    discount_percentage: float = Field(0, serialization_alias="Discount Percentage")
    total_amount: float = Field(..., serialization_alias="Total Amount")
    final_amount: float = Field(..., serialization_alias="Final Amount")
    payment_method: Optional[str] = Field(None, serialization_alias="Payment Method")
    order_status: Optional[str] = Field(None, serialization_alias="Order Status")
    delivery_type: Optional[str] = Field(None, serialization_alias="Delivery Type")
    store_id: Optional[str] = Field(None, serialization_alias="Store ID")
    store_location: Optional[str] = Field(None, serialization_alias="Store Location")
    salesperson_id: Optional[str] = Field(None, serialization_alias="Salesperson ID")
    employee_name: Optional[str] = Field(None, serialization_alias="Employee Name")


class SalesStatistics(BaseModel):
    """Aggregates over every record matching the filters"""
    total_quantity: int = Field(0, serialization_alias="totalQuantity")
    total_amount: float = Field(0, serialization_alias="totalAmount")
    total_discount: float = Field(0, serialization_alias="totalDiscount")
    total_records: int = Field(0, serialization_alias="totalRecords")


class Pagination(BaseModel):
    current_page: int = Field(..., serialization_alias="currentPage")
    total_pages: int = Field(..., serialization_alias="totalPages")
    total_records: int = Field(..., serialization_alias="totalRecords")
    records_per_page: int = Field(..., serialization_alias="recordsPerPage")
    has_next_page: bool = Field(..., serialization_alias="hasNextPage")
    has_prev_page: bool = Field(..., serialization_alias="hasPrevPage")


class SalesList(BaseModel):
    """Model for the sales listing response"""
    success: bool = True
    data: List[SalesRecord] = Field(..., description="Records on the requested page")
    statistics: SalesStatistics
    pagination: Pagination


class AgeRange(BaseModel):
    min: int
    max: int


class DateRange(BaseModel):
    min: Optional[datetime] = None
    max: Optional[datetime] = None


class FilterOptions(BaseModel):
    regions: List[str]
    genders: List[str]
    categories: List[str]
    tags: List[str]
    payment_methods: List[str] = Field(..., serialization_alias="paymentMethods")
    age_range: AgeRange = Field(..., serialization_alias="ageRange")
    date_range: DateRange = Field(..., serialization_alias="dateRange")


class FilterOptionsResponse(BaseModel):
    success: bool = True
    data: FilterOptions


class ErrorResponse(BaseModel):
    """Uniform error envelope"""
    success: bool = False
    message: str
    error: Optional[str] = None
    error_id: Optional[str] = None
