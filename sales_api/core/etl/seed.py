"""
Seed the sales database from a CSV export.

Usage:
    python -m sales_api.core.etl.seed --csv sales_data.csv [--limit N] [--keep]
"""

import argparse
import logging
import sys

from sales_api.config.settings import get_settings
from sales_api.core.etl.extract import DataExtractor
from sales_api.core.etl.load import DataLoader
from sales_api.core.etl.transform import DataTransformer
from sales_api.db.session import Database

logger = logging.getLogger(__name__)


def seed_database(database: Database, csv_path: str, limit: int = None, replace: bool = True, batch_size: int = 1000) -> dict:
    """
    Run extract, transform and load for one CSV file.

    Returns:
        dict: Load summary including the number of rows dropped as invalid
    """
    df = DataExtractor().extract_from_file(csv_path, limit=limit)
    records, dropped = DataTransformer().transform(df)
    summary = DataLoader(database, batch_size=batch_size).load(records, replace=replace)
    summary["dropped"] = dropped
    return summary


def main(argv=None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Seed the sales database from a CSV file")
    parser.add_argument("--csv", default=settings.SEED_CSV_PATH, help="Path to the sales CSV")
    parser.add_argument("--limit", type=int, default=settings.SEED_RECORD_LIMIT, help="Maximum rows to load")
    parser.add_argument("--batch-size", type=int, default=settings.BATCH_SIZE, help="Rows per insert batch")
    parser.add_argument("--keep", action="store_true", help="Append instead of dropping existing data")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    database = Database(settings.database_url, echo=settings.SQL_ECHO)
    if not database.check_connection():
        logger.error("Cannot seed: database unreachable")
        return 1

    try:
        summary = seed_database(
            database,
            args.csv,
            limit=args.limit,
            replace=not args.keep,
            batch_size=args.batch_size
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Seeding failed: {str(e)}")
        return 1
    finally:
        database.dispose()

    logger.info(
        f"Seeding finished: {summary['inserted']} inserted, "
        f"{summary['failed']} failed, {summary['dropped']} dropped"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
