"""Models for AI meal and grocery suggestions."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MealPreferences(_CamelModel):
    """Inputs for meal suggestions at a given time of day."""

    calorie_limit: float = Field(gt=0)
    dietary_preferences: str = ""
    time_of_day: str
    avoid_foods: str = ""


class MealSuggestion(_CamelModel):
    """Single suggested meal."""

    name: str
    description: str
    calories: str
    ingredients: list[str] | None = None


class MealSuggestions(_CamelModel):
    """Structured output for meal suggestions."""

    meal_suggestions: list[MealSuggestion]


class GroceryPreferences(_CamelModel):
    """Inputs for grocery list suggestions."""

    logged_food_items: list[str] = Field(default_factory=list, max_length=50)
    custom_preferences: str | None = None


class GroceryCategory(_CamelModel):
    """Grocery store category with suggested items."""

    category: str
    items: list[str] = Field(min_length=1)


class GroceryList(_CamelModel):
    """Structured output for grocery list suggestions."""

    grocery_list: list[GroceryCategory]


class IngredientPreferences(_CamelModel):
    """Inputs for a meal built from ingredients on hand."""

    ingredients: str = Field(min_length=1)
    meal_type: str | None = None
    dietary_preferences: str | None = None


class IngredientMeal(_CamelModel):
    """Single meal suggested from available ingredients."""

    name: str
    description: str
    calories: str | None = None
    ingredients_used: list[str] | None = None
