from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.exc import SQLAlchemyError
from contextlib import contextmanager
import logging

# Set up logging
logger = logging.getLogger(__name__)


# Base class for models
class Base(DeclarativeBase):
    pass


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one process.

    A single instance is created at startup and handed to every request
    handler, so nothing in the request path reaches for a module-level
    connection.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_options = {"echo": echo, "pool_pre_ping": True}

        if url.startswith("sqlite"):
            # Queries run in the thread pool, so the connection must cross threads
            engine_options["connect_args"] = {"check_same_thread": False}
        else:
            engine_options.update(
                pool_recycle=3600,   # Recycle connections after 1 hour
                pool_size=10,        # Connection pool size
                max_overflow=20      # Max additional connections
            )

        self.engine = create_engine(url, **engine_options)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def session_scope(self):
        """Provide a transactional scope around a series of operations."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database transaction error: {str(e)}")
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create all tables known to the model metadata."""
        # Imported for its side effect of registering the tables
        from sales_api.models import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        from sales_api.models import models  # noqa: F401
        Base.metadata.drop_all(bind=self.engine)

    def check_connection(self) -> bool:
        """
        Check if database connection works

        Returns:
            bool: True if connection is working
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {str(e)}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
