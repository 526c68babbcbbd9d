from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKPRACTICE_")

    app_name: str = "DeckPractice"
    debug: bool = False
    log_level: str = "INFO"

    # Official card site: deck pages and card images are both served from here
    card_site_base_url: str = "https://www.pokemon-card.com"
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    fetch_timeout_seconds: float = 15.0

    # Standard play starts with five usable bench slots
    default_bench_capacity: int = 5

    # In-memory table registry cap; oldest tables are evicted first
    max_tables: int = 200


settings = Settings()


# =============================================================================
# TABLE DIMENSIONS
# =============================================================================

DECK_SIZE = 60
PRIZE_COUNT = 6
OPENING_HAND_SIZE = 7

# Bench is a fixed-length array; only the first `bench_capacity` slots are usable
BENCH_SLOTS = 8
MIN_BENCH_CAPACITY = 1
