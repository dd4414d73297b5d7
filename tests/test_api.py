"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from health_companion.api.app import create_app
from health_companion.containers import AppContainer
from tests.conftest import FakeSuggestionClient, RecordingHandler


def _client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def test_health(container: AppContainer) -> None:
    with _client(container) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_search_returns_camel_case_products(
    container: AppContainer, search_handler: RecordingHandler
) -> None:
    with _client(container) as client:
        response = client.get("/foods/search", params={"q": "apple"})

    assert response.status_code == 200
    payload = response.json()
    assert "error" not in payload
    assert set(payload) == {
        "products",
        "apiFetchDurationMs",
        "jsonParseDurationMs",
        "processingDurationMs",
    }
    first = payload["products"][0]
    assert first["id"] == "food_apple"
    assert first["displayName"] == "Apple"
    assert first["nutritionData"]["calories"] == 52
    assert first["nutritionData"]["fiber"] == 2.4
    assert first["nutritionData"]["healthyFats"] is None
    assert first["nutritionData"]["sourceName"] == "Apple"
    assert [p["displayName"] for p in payload["products"]] == ["Apple", "Apple Juice"]
    assert len(search_handler.requests) == 1


def test_search_error_keeps_empty_products(
    container: AppContainer, search_handler: RecordingHandler
) -> None:
    search_handler.status_code = 502
    search_handler.raw_body = "bad gateway"

    with _client(container) as client:
        response = client.get("/foods/search", params={"q": "apple"})

    payload = response.json()
    assert response.status_code == 200
    assert payload["products"] == []
    assert payload["error"].startswith("Edamam API Error: 502")


def test_search_requires_query(container: AppContainer) -> None:
    with _client(container) as client:
        response = client.get("/foods/search", params={"q": ""})

    assert response.status_code == 422


def test_suggest_meals(
    container: AppContainer, suggestion_client: FakeSuggestionClient
) -> None:
    with _client(container) as client:
        response = client.post(
            "/suggestions/meals",
            json={"calorieLimit": 450, "timeOfDay": "Lunch"},
        )

    assert response.status_code == 200
    meal = response.json()["mealSuggestions"][0]
    assert meal["name"] == "Greek yogurt with berries"
    assert suggestion_client.schema_names == ["meal_suggestions"]


def test_suggest_from_ingredients_fallback(
    container: AppContainer, suggestion_client: FakeSuggestionClient
) -> None:
    suggestion_client.error = RuntimeError("OpenAI returned an empty response")

    with _client(container) as client:
        response = client.post(
            "/suggestions/from-ingredients", json={"ingredients": "eggs, spinach"}
        )

    assert response.status_code == 200
    assert response.json()["name"] == "Suggestion Error"


def test_log_product_and_daily_stats(container: AppContainer) -> None:
    product = {
        "id": "food_apple",
        "displayName": "Apple",
        "nutritionData": {"calories": 52, "protein": 0.3, "fiber": 2.4},
    }

    with _client(container) as client:
        created = client.post(
            "/log/2024-05-15/entries",
            json={"product": product, "grams": 150, "mealType": "Breakfast"},
        )
        quick = client.post("/log/2024-05-15/quick", json={"calories": 200})
        daily = client.get("/stats/daily/2024-05-15")
        weekly = client.get("/stats/weekly/2024-05-15")
        series = client.get(
            "/stats/last-days", params={"days": 2, "today": "2024-05-16"}
        )

    assert created.status_code == 201
    entry = created.json()["entries"][0]
    assert entry["foodItemName"] == "Apple"
    assert entry["calories"] == 78
    assert entry["mealType"] == "Breakfast"
    assert quick.json()["totalCalories"] == 278
    assert daily.json()["calories"]["consumed"] == 278
    assert daily.json()["calories"]["target"] == 2000
    assert weekly.json()["weekStart"] == "2024-05-13"
    assert weekly.json()["weekEnd"] == "2024-05-19"
    assert weekly.json()["budget"] == 14000
    assert series.json() == [
        {"date": "2024-05-15", "calories": 278},
        {"date": "2024-05-16", "calories": 0},
    ]


def test_log_product_validation(container: AppContainer) -> None:
    product = {"id": "x", "displayName": "Apple", "nutritionData": {}}

    with _client(container) as client:
        zero_grams = client.post(
            "/log/2024-05-15/entries",
            json={"product": product, "grams": 0, "mealType": "Lunch"},
        )
        bad_meal = client.post(
            "/log/2024-05-15/entries",
            json={"product": product, "grams": 100, "mealType": "Brunch"},
        )

    assert zero_grams.status_code == 422
    assert bad_meal.status_code == 422


def test_remove_entry(container: AppContainer) -> None:
    with _client(container) as client:
        created = client.post("/log/2024-05-15/quick", json={"calories": 300})
        entry_id = created.json()["entries"][0]["id"]
        removed = client.delete(f"/log/2024-05-15/entries/{entry_id}")
        missing = client.delete(f"/log/2024-05-15/entries/{entry_id}")

    assert removed.status_code == 200
    assert removed.json()["entries"] == []
    assert missing.status_code == 404


def test_targets_round_trip(container: AppContainer) -> None:
    with _client(container) as client:
        updated = client.put(
            "/targets", json={"dailyCalorieTarget": 1800, "reminderTime": "08:30"}
        )
        invalid = client.put("/targets", json={"dailyProteinTarget": 0})
        current = client.get("/targets")

    assert updated.status_code == 200
    assert invalid.status_code == 422
    assert current.json()["dailyCalorieTarget"] == 1800
    assert current.json()["reminderTime"] == "08:30"
    assert current.json()["dailyProteinTarget"] == 75


def test_weight_and_waist_trends(container: AppContainer) -> None:
    with _client(container) as client:
        client.post("/weight", json={"date": "2024-05-15", "weightKg": 80})
        client.post("/weight", json={"date": "2024-05-01", "weightKg": 82})
        client.post("/waist", json={"date": "2024-05-02", "waistSizeCm": 91})
        weights = client.get("/weight").json()
        waists = client.get("/waist").json()
        rejected = client.post("/weight", json={"date": "2024-05-03", "weightKg": 0})

    assert [w["date"] for w in weights] == ["2024-05-01", "2024-05-15"]
    assert waists == [{"date": "2024-05-02", "waistSizeCm": 91}]
    assert rejected.status_code == 422


def test_last_days_summary(container: AppContainer) -> None:
    with _client(container) as client:
        client.post("/log/2024-05-14/quick", json={"calories": 1000})
        client.post("/log/2024-05-15/quick", json={"calories": 2000})
        response = client.get(
            "/stats/last-days/summary", params={"days": 7, "today": "2024-05-16"}
        )

    assert response.status_code == 200
    assert response.json() == {
        "days": 7,
        "total": 3000,
        "daysWithLogs": 2,
        "average": 1500,
        "dailyCalorieTarget": 2000,
        "targetPercent": 75,
    }
