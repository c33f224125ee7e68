from functools import lru_cache
from typing import Literal
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "CatalogSearch"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Mongo (catalog store); empty URI = no database connection
    MONGO_URI: str = ""
    MONGO_DB: str = "catalog"
    catalog_collection: str = "products"
    events_collection: str = "events"

    # Recommendations
    personalized_recommendations: bool = False  # tag-affinity strategy from user events

    # Redis (optional snapshot cache)
    REDIS_URL: str = ""

    # Catalog fetch
    catalog_fetch_timeout_s: float = 5.0       # per store call; <= 0 disables the timeout

    # Snapshot cache config
    catalog_cache_ttl: int = 0                 # seconds; 0 = always fetch a fresh snapshot
    catalog_cache_prefix: str = "catalog"      # redis key namespace

    # API
    api_prefix: str = "/api"

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
