import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load variables from .env if it exists
load_dotenv()


@dataclass
class Settings:
    """Application settings resolved from the environment.

    Everything reads configuration through `get_settings()` so tests can
    clear the cache and patch the environment.
    """

    database_url: str = "sqlite:///data/cookbook.sqlite"
    environment: str = "local"
    log_level: str = "INFO"
    api_base_url: str = "http://localhost:8000/api"
    recent_recipes: int = 5
    search_debounce_ms: int = 300
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000


@lru_cache()
def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", Settings.database_url),
        environment=os.getenv("ENVIRONMENT", Settings.environment),
        log_level=os.getenv("LOG_LEVEL", Settings.log_level).upper(),
        api_base_url=os.getenv("API_BASE_URL", Settings.api_base_url),
        recent_recipes=int(os.getenv("RECENT_RECIPES", Settings.recent_recipes)),
        search_debounce_ms=int(
            os.getenv("SEARCH_DEBOUNCE_MS", Settings.search_debounce_ms)
        ),
        host=os.getenv("HOST", Settings.host),
        port=int(os.getenv("PORT", Settings.port)),
    )
