"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
import pytest

from health_companion.adapters.edamam_client import HttpxEdamamClient
from health_companion.adapters.memory_tracking_repository import (
    InMemoryTrackingRepository,
)
from health_companion.config import Settings
from health_companion.containers import AppContainer
from health_companion.services.cache import InMemoryCache
from health_companion.services.ranking import SearchPolicy
from health_companion.services.search import FoodSearchService
from health_companion.services.stats import StatsService
from health_companion.services.suggestions import SuggestionClient, SuggestionService
from health_companion.services.tracking import TrackingService

Handler = Callable[[httpx.Request], httpx.Response]


def edamam_hint(
    label: str | None,
    kcal: object,
    food_id: str | None = None,
    **nutrients: object,
) -> dict[str, object]:
    """Build an Edamam `hints[]` entry."""
    food: dict[str, object] = {"nutrients": {"ENERC_KCAL": kcal, **nutrients}}
    if label is not None:
        food["label"] = label
    if food_id is not None:
        food["foodId"] = food_id
    return {"food": food}


def edamam_payload(*hints: dict[str, object]) -> dict[str, object]:
    return {"text": "query", "parsed": [], "hints": list(hints)}


@dataclass
class RecordingHandler:
    """MockTransport handler that records requests and returns a fixed reply."""

    payload: object = field(default_factory=lambda: edamam_payload())
    status_code: int = 200
    raw_body: str | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raw_body is not None:
            return httpx.Response(self.status_code, text=self.raw_body)
        return httpx.Response(self.status_code, json=self.payload)


def make_edamam_client(
    handler: Handler,
    app_id: str | None = "test-id",
    app_key: str | None = "test-key",
) -> HttpxEdamamClient:
    return HttpxEdamamClient(
        base_url="https://edamam.test/api/food-database/v2",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        user_agent="HealthCompanionTests/1.0",
        app_id=app_id,
        app_key=app_key,
    )


@dataclass
class FakeSuggestionClient(SuggestionClient):
    """Fake suggestion client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "mealSuggestions": [
                {
                    "name": "Greek yogurt with berries",
                    "description": "Protein-rich snack with antioxidants.",
                    "calories": "Approximately 190 calories",
                    "ingredients": ["Greek yogurt", "Mixed berries"],
                }
            ]
        }
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)
    schema_names: list[str] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        store: bool,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        self.schema_names.append(schema_name)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        edamam_app_id="test-id",
        edamam_app_key="test-key",
        fdc_api_key="fdc-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def search_handler() -> RecordingHandler:
    return RecordingHandler(
        payload=edamam_payload(
            edamam_hint("Apple Juice", 46, food_id="food_juice", SUGAR=9.6),
            edamam_hint("Apple", 52, food_id="food_apple", FIBTG=2.4, PROCNT=0.3),
        )
    )


@pytest.fixture
def suggestion_client() -> FakeSuggestionClient:
    return FakeSuggestionClient()


@pytest.fixture
def tracking_repository() -> InMemoryTrackingRepository:
    return InMemoryTrackingRepository()


@pytest.fixture
def container(
    settings: Settings,
    search_handler: RecordingHandler,
    suggestion_client: FakeSuggestionClient,
    tracking_repository: InMemoryTrackingRepository,
) -> AppContainer:
    food_search_service = FoodSearchService(
        client=make_edamam_client(search_handler),
        policy=SearchPolicy(),
        cache=InMemoryCache(),
    )
    suggestion_service = SuggestionService(
        client=suggestion_client, model=settings.openai_model
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_search_service=food_search_service,
        suggestion_service=suggestion_service,
        tracking_service=TrackingService(tracking_repository),
        stats_service=StatsService(tracking_repository),
        close_resources=close_resources,
    )
