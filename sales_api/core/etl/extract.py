import pandas as pd
import os
import logging
from typing import Optional

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "Transaction ID", "Date", "Customer ID", "Customer Name", "Phone Number",
    "Gender", "Age", "Customer Region", "Customer Type", "Product ID",
    "Product Name", "Brand", "Product Category", "Tags", "Quantity",
    "Price per Unit", "Discount Percentage", "Total Amount", "Final Amount",
    "Payment Method", "Order Status", "Delivery Type", "Store ID",
    "Store Location", "Salesperson ID", "Employee Name"
]


class DataExtractor:
    """Reads the raw sales CSV into a DataFrame of strings"""

    def extract_from_file(self, file_path: str, limit: Optional[int] = None) -> pd.DataFrame:
        """
        Read a sales CSV export.

        Args:
            file_path: Path to the CSV file
            limit: Maximum number of data rows to keep

        Returns:
            pd.DataFrame: Raw rows, every cell a string

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If required columns are missing
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"CSV file not found: {file_path}")

        df = pd.read_csv(
            file_path,
            dtype=str,
            keep_default_na=False,
            nrows=limit,
            skipinitialspace=True,
            on_bad_lines="warn",
        )
        df.columns = [col.strip() for col in df.columns]

        missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing_columns:
            raise ValueError(f"Missing required columns: {', '.join(missing_columns)}")

        logger.info(f"Extracted {len(df)} rows from {file_path}")
        return df
