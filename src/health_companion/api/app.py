"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request

from health_companion.api.models import SearchResultModel
from health_companion.api.tracking import router as tracking_router
from health_companion.app_logging import configure_logging
from health_companion.containers import AppContainer
from health_companion.domain.suggestions import (
    GroceryList,
    GroceryPreferences,
    IngredientMeal,
    IngredientPreferences,
    MealPreferences,
    MealSuggestions,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Food search source: %s",
            app.state.container.food_search_service.source_label,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(tracking_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(
        request: Request, q: str = Query(min_length=1)
    ) -> dict[str, object]:
        """Search the configured food database for products."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.food_search_service.search(q)
        return SearchResultModel.from_domain(result).to_payload()

    @app.post(
        "/suggestions/meals",
        response_model=MealSuggestions,
        response_model_by_alias=True,
    )
    async def suggest_meals(
        preferences: MealPreferences, request: Request
    ) -> MealSuggestions:
        """Suggest meals for a time of day."""
        state_container: AppContainer = request.app.state.container
        return await state_container.suggestion_service.suggest_meals(preferences)

    @app.post(
        "/suggestions/grocery-list",
        response_model=GroceryList,
        response_model_by_alias=True,
    )
    async def suggest_grocery_list(
        preferences: GroceryPreferences, request: Request
    ) -> GroceryList:
        """Suggest a categorized grocery list."""
        state_container: AppContainer = request.app.state.container
        return await state_container.suggestion_service.suggest_grocery_list(
            preferences
        )

    @app.post(
        "/suggestions/from-ingredients",
        response_model=IngredientMeal,
        response_model_by_alias=True,
    )
    async def suggest_meal_from_ingredients(
        preferences: IngredientPreferences, request: Request
    ) -> IngredientMeal:
        """Suggest one meal using ingredients on hand."""
        state_container: AppContainer = request.app.state.container
        return await state_container.suggestion_service.suggest_meal_from_ingredients(
            preferences
        )

    return app
