import logging
import time
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError

from sales_api.db.session import Database
from sales_api.models.models import SalesRecord, SaleTag

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10000


def build_record(data: Dict[str, Any]) -> SalesRecord:
    """Build a SalesRecord with its tag rows from a clean record dict."""
    fields = {key: value for key, value in data.items() if key != "tags"}
    record = SalesRecord(**fields)
    record.tags = [
        SaleTag(name=name, position=position)
        for position, name in enumerate(data.get("tags") or [])
    ]
    return record


class DataLoader:
    """Handles loading clean records into the database"""

    def __init__(self, database: Database, batch_size: int = 1000):
        self.database = database
        self.batch_size = batch_size

    def load(self, records: List[Dict[str, Any]], replace: bool = True) -> Dict[str, Any]:
        """
        Insert records in batches.

        Args:
            records: Clean records from DataTransformer
            replace: Drop and recreate the tables first

        Returns:
            Dict: Inserted and failed counts and elapsed seconds
        """
        start_time = time.time()

        if replace:
            logger.info("Dropping existing sales tables")
            self.database.drop_tables()
        self.database.create_tables()

        inserted = 0
        failed = 0
        for i in range(0, len(records), self.batch_size):
            batch = records[i:i + self.batch_size]
            try:
                with self.database.session_scope() as session:
                    session.add_all([build_record(data) for data in batch])
                inserted += len(batch)
            except SQLAlchemyError as e:
                # One bad row rejects its whole batch; later batches still load
                failed += len(batch)
                logger.error(f"Failed to load batch starting at row {i}: {str(e)}")

            done = inserted + failed
            if done % PROGRESS_EVERY == 0 or done == len(records):
                logger.info(f"Progress: {done}/{len(records)} ({inserted} inserted, {failed} failed)")

        elapsed = time.time() - start_time
        logger.info(f"Loading completed: {inserted} records inserted, {failed} failed in {elapsed:.1f}s")

        return {"inserted": inserted, "failed": failed, "elapsed_seconds": elapsed}
