"""
Database models for the Sales Records API
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from datetime import datetime

from sales_api.db.session import Base


class SalesRecord(Base):
    """Sales record database model, one row per transaction"""
    __tablename__ = "sales_records"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_sales_quantity_non_negative"),
        CheckConstraint("price_per_unit >= 0", name="ck_sales_price_non_negative"),
        CheckConstraint("discount_percentage >= 0 AND discount_percentage <= 100", name="ck_sales_discount_range"),
        CheckConstraint("total_amount >= 0", name="ck_sales_total_non_negative"),
        CheckConstraint("final_amount >= 0", name="ck_sales_final_non_negative"),
        CheckConstraint("age IS NULL OR (age >= 0 AND age <= 150)", name="ck_sales_age_range"),
        Index("ix_sales_region_date", "customer_region", "date"),
        Index("ix_sales_category_date", "product_category", "date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Identifiers
    transaction_id = Column(String(64), nullable=False)
    customer_id = Column(String(64), nullable=False, index=True)
    product_id = Column(String(64), nullable=False)
    store_id = Column(String(64))
    salesperson_id = Column(String(64))

    # Customer attributes
    customer_name = Column(String(255), nullable=False, index=True)
    phone_number = Column(String(32), nullable=False, index=True)
    gender = Column(String(10), index=True)
    age = Column(Integer)
    customer_region = Column(String(100), index=True)
    customer_type = Column(String(100))

    # Product attributes
    product_name = Column(String(255), nullable=False)
    brand = Column(String(100))
    product_category = Column(String(100), index=True)

    # Transaction attributes
    quantity = Column(Integer, nullable=False, default=0)
    price_per_unit = Column(Float, nullable=False, default=0)
    discount_percentage = Column(Float, nullable=False, default=0)
    total_amount = Column(Float, nullable=False, default=0)
    final_amount = Column(Float, nullable=False, default=0)
    date = Column(DateTime, nullable=False, index=True)
    payment_method = Column(String(50), index=True)
    order_status = Column(String(50))
    delivery_type = Column(String(50))
    store_location = Column(String(100))
    employee_name = Column(String(255))

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    tags = relationship("SaleTag", back_populates="record", cascade="all, delete-orphan", order_by="SaleTag.position")

    @property
    def tag_names(self):
        return [tag.name for tag in self.tags]

    def __repr__(self):
        return f"<SalesRecord {self.transaction_id}, customer={self.customer_name}>"


class SaleTag(Base):
    """Free-text label attached to a sales record"""
    __tablename__ = "sale_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sales_record_id = Column(Integer, ForeignKey("sales_records.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    record = relationship("SalesRecord", back_populates="tags")

    def __repr__(self):
        return f"<SaleTag {self.name}>"
