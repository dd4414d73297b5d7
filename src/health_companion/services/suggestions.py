"""AI-backed meal and grocery suggestions."""

import logging
from dataclasses import dataclass
from typing import Protocol, TypeVar

from openai import OpenAIError
from pydantic import BaseModel

from health_companion.domain.suggestions import (
    GroceryList,
    GroceryPreferences,
    IngredientMeal,
    IngredientPreferences,
    MealPreferences,
    MealSuggestions,
)

_logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)

_NULLABLE_STRING = {"anyOf": [{"type": "string"}, {"type": "null"}]}
_NULLABLE_STRING_LIST = {
    "anyOf": [{"type": "array", "items": {"type": "string"}}, {"type": "null"}]
}

MEAL_SUGGESTIONS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "mealSuggestions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "calories": {"type": "string"},
                    "ingredients": _NULLABLE_STRING_LIST,
                },
                "required": ["name", "description", "calories", "ingredients"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["mealSuggestions"],
    "additionalProperties": False,
}

GROCERY_LIST_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "groceryList": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "category": {"type": "string"},
                    "items": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["category", "items"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["groceryList"],
    "additionalProperties": False,
}

INGREDIENT_MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "description": {"type": "string"},
        "calories": _NULLABLE_STRING,
        "ingredientsUsed": _NULLABLE_STRING_LIST,
    },
    "required": ["name", "description", "calories", "ingredientsUsed"],
    "additionalProperties": False,
}

SUGGESTION_ERROR_MEAL = IngredientMeal(
    name="Suggestion Error",
    description=(
        "Could not generate a meal suggestion at this time. The AI might have had "
        "trouble with the request or ingredients list."
    ),
)


class SuggestionClient(Protocol):
    """Interface for structured text generation."""

    async def generate(
        self,
        *,
        model: str,
        store: bool,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return JSON data matching `schema`."""


@dataclass
class SuggestionService:
    """Builds suggestion prompts and validates the generated structures."""

    client: SuggestionClient | None
    model: str
    store: bool = False

    async def suggest_meals(self, preferences: MealPreferences) -> MealSuggestions:
        """Suggest meals for a time of day under a calorie limit."""
        prompt = (
            "You are a meal suggestion expert. Suggest between 5 and 10 meals.\n"
            f"Time of Day: {preferences.time_of_day}\n"
            f"Calorie Limit: {preferences.calorie_limit:g}\n"
            f"Dietary Preferences: {preferences.dietary_preferences or 'None'}\n"
            f"Foods to Avoid: {preferences.avoid_foods or 'None'}\n"
            "Focus on that meal time, keep each suggestion under the calorie limit, "
            "adhere to the dietary preferences and never include avoided foods. "
            "Give calories as a string such as 'Approximately 190 calories' and "
            "list 3-5 key ingredients per meal."
        )
        fallback = MealSuggestions(meal_suggestions=[])
        return await self._generate(
            "meal_suggestions",
            MEAL_SUGGESTIONS_SCHEMA,
            prompt,
            MealSuggestions,
            fallback,
        )

    async def suggest_grocery_list(
        self, preferences: GroceryPreferences
    ) -> GroceryList:
        """Suggest a categorized healthy grocery list."""
        if preferences.logged_food_items:
            logged = "\n".join(f"- {item}" for item in preferences.logged_food_items)
        else:
            logged = (
                "No specific logged items provided. Focus on general healthy eating."
            )
        prompt = (
            "You are a health-focused shopping assistant helping the user build a "
            "healthy grocery list.\n"
            f"Recently logged food items:\n{logged}\n"
            "Custom preferences: "
            f"{preferences.custom_preferences or 'None specified'}\n"
            "Prioritize whole foods and fresh ingredients. Gently steer away from "
            "processed foods without being judgmental. Organize the list into 3 to 5 "
            "grocery store categories with 3 to 7 specific items each."
        )
        fallback = GroceryList(grocery_list=[])
        return await self._generate(
            "grocery_list", GROCERY_LIST_SCHEMA, prompt, GroceryList, fallback
        )

    async def suggest_meal_from_ingredients(
        self, preferences: IngredientPreferences
    ) -> IngredientMeal:
        """Suggest one meal that uses the ingredients on hand."""
        prompt = (
            "You are a creative chef. Suggest ONE meal.\n"
            f"Available Ingredients: {preferences.ingredients}\n"
            f"Desired Meal Type: {preferences.meal_type or 'Any suitable meal'}\n"
            "Dietary Preferences/Restrictions: "
            f"{preferences.dietary_preferences or 'None specified'}\n"
            "Prioritize the provided ingredients; common pantry staples may be "
            "assumed. Include simple step-by-step preparation instructions in the "
            "description."
        )
        return await self._generate(
            "ingredient_meal",
            INGREDIENT_MEAL_SCHEMA,
            prompt,
            IngredientMeal,
            SUGGESTION_ERROR_MEAL,
        )

    async def _generate(
        self,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
        model_type: type[_ModelT],
        fallback: _ModelT,
    ) -> _ModelT:
        if self.client is None:
            _logger.warning("Suggestion client not configured: %s", schema_name)
            return fallback
        try:
            raw = await self.client.generate(
                model=self.model,
                store=self.store,
                schema_name=schema_name,
                schema=schema,
                prompt=prompt,
            )
            return model_type.model_validate(raw)
        except (ValueError, RuntimeError, OpenAIError) as exc:
            _logger.warning(
                "Suggestion %s returned no usable output: %s", schema_name, exc
            )
            return fallback
