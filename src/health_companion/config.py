"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_PLACEHOLDER_PREFIXES = ("your_", "your-", "<")
_PLACEHOLDER_VALUES = {"changeme", "change-me", "xxx", "todo", "none", "null"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    edamam_app_id: str | None = None
    edamam_app_key: str | None = None
    edamam_base_url: str = "https://api.edamam.com/api/food-database/v2"
    fdc_api_key: str | None = None
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    off_base_url: str = "https://world.openfoodfacts.org"
    food_search_source: str = "edamam"
    search_result_limit: int = 20
    search_page_size: int = 50
    search_allow_zero_calories: bool = False
    search_require_name_match: bool = True
    off_whole_foods_only: bool = False
    off_max_ingredients: int = 5
    off_excluded_brands: str = ""
    http_user_agent: str = "HealthCompanion/0.1 (personal nutrition tracker)"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def is_missing_credential(value: str | None) -> bool:
    """Return True for unset, blank or placeholder credential values."""
    if value is None:
        return True
    cleaned = value.strip().lower()
    if not cleaned:
        return True
    if cleaned in _PLACEHOLDER_VALUES:
        return True
    return cleaned.startswith(_PLACEHOLDER_PREFIXES)


def parse_csv(raw: str | None) -> list[str]:
    """Parse a comma-separated env value into trimmed, non-empty items."""
    if raw is None:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
