"""
Shared fixtures: a file-backed SQLite database per test and an API client
built around it.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from sales_api.api.main import create_app
from sales_api.config.settings import Settings
from sales_api.core.etl.load import DataLoader
from sales_api.db.session import Database


def _make_sale(index, **overrides):
    sale = {
        "transaction_id": f"TXN-{1000 + index}",
        "customer_id": f"CUST-{index:04d}",
        "customer_name": f"Customer {index}",
        "phone_number": f"90000{index:05d}",
        "gender": "Male",
        "age": 30,
        "customer_region": "North",
        "customer_type": "Regular",
        "product_id": f"PROD-{index:04d}",
        "product_name": "Widget",
        "brand": "Acme",
        "product_category": "Electronics",
        "tags": ["Premium"],
        "quantity": 1,
        "price_per_unit": 100.0,
        "discount_percentage": 10.0,
        "total_amount": 100.0,
        "final_amount": 90.0,
        "date": datetime(2024, 1, 1, 12, 0, 0),
        "payment_method": "Cash",
        "order_status": "Completed",
        "delivery_type": "Standard",
        "store_id": "ST-01",
        "store_location": "Mumbai",
        "salesperson_id": "SP-01",
        "employee_name": "Asha Kulkarni",
    }
    sale.update(overrides)
    return sale


@pytest.fixture
def make_sale():
    """Factory for clean record dicts with overridable fields"""
    return _make_sale


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'sales.db'}"


@pytest.fixture
def database(database_url):
    db = Database(database_url)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def settings(database_url):
    return Settings(DATABASE_URL=database_url, LOG_LEVEL="WARNING", ENVIRONMENT="test")


@pytest.fixture
def seed(database):
    """Insert clean record dicts without dropping existing rows"""
    def _seed(records):
        return DataLoader(database, batch_size=100).load(records, replace=False)
    return _seed


@pytest.fixture
def sample_sales(seed):
    records = [
        _make_sale(
            1, customer_name="Priya Sharma", phone_number="9876500001", gender="Female", age=25,
            customer_region="North", product_category="Electronics", tags=["Premium", "Sale"],
            payment_method="Credit Card", quantity=2, total_amount=500.0, discount_percentage=10.0,
            date=datetime(2024, 1, 3, 10, 0, 0),
        ),
        _make_sale(
            2, customer_name="Rahul Verma", phone_number="9123400002", gender="Male", age=35,
            customer_region="South", product_category="Clothing", tags=["Sale"],
            payment_method="Cash", quantity=5, total_amount=1000.0, discount_percentage=20.0,
            date=datetime(2024, 1, 5, 20, 0, 0),
        ),
        _make_sale(
            3, customer_name="Anita Rao", phone_number="9988700003", gender="Female", age=45,
            customer_region="East", product_category="Books", tags=["New Arrival"],
            payment_method="UPI", quantity=1, total_amount=200.0, discount_percentage=0.0,
            date=datetime(2024, 1, 6, 0, 0, 0),
        ),
        _make_sale(
            4, customer_name="Vikram Singh", phone_number="9000000004", gender="Male", age=52,
            customer_region="West", product_category="Electronics", tags=["Premium"],
            payment_method="Debit Card", quantity=3, total_amount=1500.0, discount_percentage=5.0,
            date=datetime(2023, 12, 31, 23, 59, 0),
        ),
        _make_sale(
            5, customer_name="Meera Nair", phone_number="9555500005", gender="Other", age=19,
            customer_region="Central", product_category="Beauty", tags=[],
            payment_method="UPI", quantity=4, total_amount=400.0, discount_percentage=50.0,
            date=datetime(2024, 2, 10, 9, 30, 0),
        ),
        _make_sale(
            6, customer_name="Arjun Mehta", phone_number="9111100006", gender="Male", age=None,
            customer_region="North", product_category="Sports", tags=["Limited Edition", "Sale"],
            payment_method="Net Banking", quantity=7, total_amount=700.0, discount_percentage=0.0,
            date=datetime(2024, 1, 15, 14, 0, 0),
        ),
    ]
    seed(records)
    return records


@pytest.fixture
def client(settings, database):
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client
