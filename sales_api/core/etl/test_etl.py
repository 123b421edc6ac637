"""
Tests for CSV seeding: extract, transform, load
"""

import pandas as pd
import pytest
from datetime import datetime
from sqlalchemy import func, select

from sales_api.core.etl.extract import DataExtractor, REQUIRED_COLUMNS
from sales_api.core.etl.seed import seed_database
from sales_api.core.etl.transform import DataTransformer, parse_tags
from sales_api.models.models import SalesRecord, SaleTag

NOW = datetime(2025, 1, 1, 0, 0, 0)


def raw_row(**overrides):
    row = {column: "" for column in REQUIRED_COLUMNS}
    row.update({
        "Transaction ID": "1001",
        "Date": "2023-09-15",
        "Customer ID": "CUST-1",
        "Customer Name": "  Neha Gupta ",
        "Phone Number": "9876543210",
        "Gender": "Female",
        "Age": "28",
        "Customer Region": "North",
        "Customer Type": "Loyal",
        "Product ID": "PROD-1",
        "Product Name": "Smartphone",
        "Brand": "Acme",
        "Product Category": "Electronics",
        "Tags": "wireless, gadgets,,portable",
        "Quantity": "3",
        "Price per Unit": "₹1,200.50",
        "Discount Percentage": "15",
        "Total Amount": "3601.50",
        "Final Amount": "3061.28",
        "Payment Method": "UPI",
        "Order Status": "Completed",
        "Delivery Type": "Express",
        "Store ID": "ST-9",
        "Store Location": "Delhi",
        "Salesperson ID": "SP-3",
        "Employee Name": "Ravi Kumar",
    })
    row.update(overrides)
    return row


def transform(*rows):
    return DataTransformer().transform(pd.DataFrame(list(rows)), now=NOW)


def test_parse_tags():
    assert parse_tags('"a, b,,c"') == ["a", "b", "c"]
    assert parse_tags("") == []


def test_transform_cleans_values():
    records, dropped = transform(raw_row())
    assert dropped == 0

    record = records[0]
    assert record["customer_name"] == "Neha Gupta"
    assert record["price_per_unit"] == pytest.approx(1200.50)
    assert record["quantity"] == 3
    assert record["age"] == 28
    assert record["tags"] == ["wireless", "gadgets", "portable"]
    assert record["date"] == datetime(2023, 9, 15)


def test_transform_defaults_for_bad_values():
    records, _ = transform(raw_row(**{
        "Age": "", "Quantity": "n/a", "Total Amount": "oops",
        "Date": "sometime", "Gender": "Unknown", "Discount Percentage": "250",
    }))

    record = records[0]
    assert record["age"] is None
    assert record["quantity"] == 0
    assert record["total_amount"] == 0
    assert record["date"] == NOW
    assert record["gender"] == ""
    assert record["discount_percentage"] == 100


def test_transform_drops_rows_missing_identifiers():
    records, dropped = transform(raw_row(), raw_row(**{"Customer ID": "  "}), raw_row(**{"Product Name": ""}))
    assert len(records) == 1
    assert dropped == 2


def test_extract_rejects_missing_columns(tmp_path):
    path = tmp_path / "broken.csv"
    path.write_text("Transaction ID,Date\n1,2023-01-01\n")

    with pytest.raises(ValueError, match="Missing required columns"):
        DataExtractor().extract_from_file(str(path))


def test_extract_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DataExtractor().extract_from_file(str(tmp_path / "nope.csv"))


def test_seed_database_from_csv(tmp_path, database):
    rows = [raw_row(**{"Transaction ID": str(1000 + i), "Quantity": str(i)}) for i in range(5)]
    path = tmp_path / "sales.csv"
    pd.DataFrame(rows).to_csv(path, index=False)

    summary = seed_database(database, str(path), limit=4, batch_size=2)
    assert summary["inserted"] == 4
    assert summary["failed"] == 0
    assert summary["dropped"] == 0

    with database.session_scope() as session:
        assert session.scalar(select(func.count(SalesRecord.id))) == 4
        assert session.scalar(select(func.count(SaleTag.id))) == 12
        tags = session.scalars(
            select(SaleTag.name).join(SalesRecord).where(SalesRecord.transaction_id == "1000").order_by(SaleTag.position)
        ).all()
        assert tags == ["wireless", "gadgets", "portable"]


def test_seed_replaces_existing_rows(tmp_path, database, seed, make_sale):
    seed([make_sale(i) for i in range(3)])

    path = tmp_path / "sales.csv"
    pd.DataFrame([raw_row()]).to_csv(path, index=False)
    seed_database(database, str(path))

    with database.session_scope() as session:
        assert session.scalar(select(func.count(SalesRecord.id))) == 1


def test_transform_integer_columns_keep_their_value():
    records, _ = transform(
        raw_row(**{"Quantity": "2.0", "Age": "31.0"}),
        raw_row(**{"Quantity": "-5", "Age": "-40"}),
        raw_row(**{"Quantity": "3.7", "Age": "1,2"}),
    )

    assert [record["quantity"] for record in records] == [2, 0, 3]
    assert [record["age"] for record in records] == [31, None, 12]
