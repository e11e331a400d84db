from functools import lru_cache
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    log_level: str = "INFO"
    date_format: str = "%Y-%m-%d"
    datetime_format: str = "%Y-%m-%d %H:%M:%S"
    # raise on result columns that match no record field instead of skipping them
    strict_columns: bool = False

    class Config:
        env_file = ".env"
        env_prefix = "OSM_"
        # Allow both uppercase and lowercase environment variables
        case_sensitive = False

@lru_cache
def get_settings():
    return Settings()
