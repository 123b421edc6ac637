import pandas as pd
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# CSV header -> model attribute
STRING_COLUMNS = {
    "Transaction ID": "transaction_id",
    "Customer ID": "customer_id",
    "Customer Name": "customer_name",
    "Phone Number": "phone_number",
    "Gender": "gender",
    "Customer Region": "customer_region",
    "Customer Type": "customer_type",
    "Product ID": "product_id",
    "Product Name": "product_name",
    "Brand": "brand",
    "Product Category": "product_category",
    "Payment Method": "payment_method",
    "Order Status": "order_status",
    "Delivery Type": "delivery_type",
    "Store ID": "store_id",
    "Store Location": "store_location",
    "Salesperson ID": "salesperson_id",
    "Employee Name": "employee_name",
}

FLOAT_COLUMNS = {
    "Price per Unit": "price_per_unit",
    "Discount Percentage": "discount_percentage",
    "Total Amount": "total_amount",
    "Final Amount": "final_amount",
}

REQUIRED_FIELDS = [
    "transaction_id", "customer_id", "customer_name",
    "phone_number", "product_id", "product_name",
]

GENDERS = {"Male", "Female", "Other"}


def parse_tags(value: str) -> List[str]:
    """Split a quoted, comma-separated tag cell into trimmed labels."""
    if not value:
        return []
    cleaned = value.strip().strip('"')
    return [tag.strip() for tag in cleaned.split(",") if tag.strip()]


def _clean_numbers(series: pd.Series) -> pd.Series:
    cleaned = series.astype(str).str.replace(r"[^0-9.\-]", "", regex=True)
    return pd.to_numeric(cleaned, errors="coerce").fillna(0.0)


def _clean_integers(series: pd.Series) -> pd.Series:
    """Whole, non-negative counts; fractions are floored, negatives become NaN."""
    cleaned = series.astype(str).str.replace(r"[^0-9.\-]", "", regex=True)
    numbers = pd.to_numeric(cleaned, errors="coerce")
    return numbers.where(numbers >= 0).floordiv(1)


class DataTransformer:
    """Cleans raw CSV rows into records ready for loading"""

    def transform(self, df: pd.DataFrame, now: Optional[datetime] = None) -> Tuple[List[Dict[str, Any]], int]:
        """
        Clean a raw DataFrame.

        Strings are trimmed; numeric cells are stripped of currency symbols
        and separators, with unparseable values becoming 0; missing or
        unparseable dates fall back to the load time. Rows without one of
        the required identifiers are dropped.

        Args:
            df: Raw rows from DataExtractor
            now: Fallback timestamp for missing dates

        Returns:
            Tuple[List[Dict], int]: Clean records and number of dropped rows
        """
        now = now or datetime.utcnow()
        out = pd.DataFrame(index=df.index)

        for header, attr in STRING_COLUMNS.items():
            out[attr] = df[header].astype(str).str.strip()

        out["gender"] = out["gender"].where(out["gender"].isin(GENDERS), "")

        for header, attr in FLOAT_COLUMNS.items():
            out[attr] = _clean_numbers(df[header]).clip(lower=0)
        out["discount_percentage"] = out["discount_percentage"].clip(upper=100)

        out["quantity"] = _clean_integers(df["Quantity"]).fillna(0).astype(int)

        ages = _clean_integers(df["Age"])
        out["age"] = ages.where((ages >= 0) & (ages <= 150))

        # Stored as naive UTC
        dates = pd.to_datetime(
            df["Date"].astype(str).str.strip(), errors="coerce", format="mixed", utc=True
        ).dt.tz_localize(None)
        out["date"] = dates.fillna(pd.Timestamp(now))

        out["tags"] = df["Tags"].astype(str).map(parse_tags)

        complete = (out[REQUIRED_FIELDS] != "").all(axis=1)
        dropped = int((~complete).sum())
        if dropped:
            logger.warning(f"Dropping {dropped} rows missing a required identifier")
        out = out[complete]

        records = []
        for row in out.to_dict("records"):
            row["date"] = row["date"].to_pydatetime()
            row["age"] = None if pd.isna(row["age"]) else int(row["age"])
            row["quantity"] = int(row["quantity"])
            records.append(row)

        logger.info(f"Transformed {len(records)} records")
        return records, dropped
