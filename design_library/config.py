from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_FILE = Path(__file__).resolve().parent / "data" / "sample_designs.json"


class Settings(BaseSettings):
    # Catalog snapshot
    CATALOG_DATA_FILE: Path = DEFAULT_DATA_FILE
    CATALOG_CACHE_SECONDS: int = 300

    # Paging
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 200

    # Similar designs must share at least this many tags
    SIMILAR_MIN_SHARED_TAGS: int = 3

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
