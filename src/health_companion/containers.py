"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from health_companion.adapters.edamam_client import HttpxEdamamClient
from health_companion.adapters.fdc_client import HttpxFdcClient
from health_companion.adapters.http_food_client import HttpxFoodClient
from health_companion.adapters.memory_tracking_repository import (
    InMemoryTrackingRepository,
)
from health_companion.adapters.open_food_facts_client import (
    HttpxOpenFoodFactsClient,
)
from health_companion.adapters.openai_suggestion_client import OpenAISuggestionClient
from health_companion.config import Settings, is_missing_credential, parse_csv
from health_companion.domain.sources import FoodSource
from health_companion.services.cache import InMemoryCache
from health_companion.services.ranking import SearchPolicy
from health_companion.services.search import FoodSearchService
from health_companion.services.stats import StatsService
from health_companion.services.suggestions import SuggestionService
from health_companion.services.tracking import TrackingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_search_service: FoodSearchService
    suggestion_service: SuggestionService
    tracking_service: TrackingService
    stats_service: StatsService
    close_resources: Callable[[], Awaitable[None]]


def build_search_policy(source: FoodSource, settings: Settings) -> SearchPolicy:
    """Return the filtering policy for a source."""
    if source is FoodSource.OPEN_FOOD_FACTS and settings.off_whole_foods_only:
        return SearchPolicy(
            result_limit=settings.search_result_limit,
            allow_zero_calories=settings.search_allow_zero_calories,
            require_name_match=settings.search_require_name_match,
            max_ingredients=settings.off_max_ingredients,
            excluded_brands=tuple(parse_csv(settings.off_excluded_brands)),
        )
    return SearchPolicy(
        result_limit=settings.search_result_limit,
        allow_zero_calories=settings.search_allow_zero_calories,
        require_name_match=settings.search_require_name_match,
    )


def build_food_client(source: FoodSource, settings: Settings) -> HttpxFoodClient:
    """Create the HTTP client for the configured food source."""
    if source is FoodSource.EDAMAM:
        return HttpxEdamamClient.create(
            app_id=settings.edamam_app_id,
            app_key=settings.edamam_app_key,
            base_url=settings.edamam_base_url,
            user_agent=settings.http_user_agent,
            page_size=settings.search_page_size,
        )
    if source is FoodSource.OPEN_FOOD_FACTS:
        return HttpxOpenFoodFactsClient.create(
            base_url=settings.off_base_url,
            user_agent=settings.http_user_agent,
            page_size=settings.search_page_size,
        )
    return HttpxFdcClient.create(
        api_key=settings.fdc_api_key,
        base_url=settings.fdc_base_url,
        user_agent=settings.http_user_agent,
        page_size=settings.search_page_size,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    source = FoodSource(resolved_settings.food_search_source.lower())
    food_client = build_food_client(source, resolved_settings)
    food_search_service = FoodSearchService(
        client=food_client,
        policy=build_search_policy(source, resolved_settings),
        cache=InMemoryCache(),
    )
    suggestion_client = None
    if not is_missing_credential(resolved_settings.openai_api_key):
        suggestion_client = OpenAISuggestionClient.create(
            resolved_settings.openai_api_key
        )
    suggestion_service = SuggestionService(
        client=suggestion_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )
    tracking_repository = InMemoryTrackingRepository()
    tracking_service = TrackingService(tracking_repository)
    stats_service = StatsService(tracking_repository)

    async def close_resources() -> None:
        await food_client.close()
        if suggestion_client is not None:
            await suggestion_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_search_service=food_search_service,
        suggestion_service=suggestion_service,
        tracking_service=tracking_service,
        stats_service=stats_service,
        close_resources=close_resources,
    )
