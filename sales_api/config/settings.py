from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List, Optional
from dotenv import load_dotenv
load_dotenv()

class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = "Sales Records API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database Settings
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_NAME: str = "sales"
    # Full SQLAlchemy URL; overrides the DB_* parts when set (e.g. sqlite:///./sales.db)
    DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = False

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173,http://localhost:5000"
    CORS_ORIGIN_REGEX: Optional[str] = r"^https://.*\.vercel\.app$"

    # Query Settings
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    MAX_TAG_FILTERS: int = 50
    MAX_TAG_OPTIONS: int = 100

    # Seeding Settings
    BATCH_SIZE: int = 1000
    SEED_RECORD_LIMIT: int = 430000
    SEED_CSV_PATH: str = "sales_data.csv"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

@lru_cache()
def get_settings():
    return Settings()

settings = get_settings()
