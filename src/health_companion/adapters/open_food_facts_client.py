"""Open Food Facts search API client."""

from dataclasses import dataclass
from typing import ClassVar

import httpx

from health_companion.adapters.http_food_client import HttpxFoodClient, payload_list
from health_companion.domain.sources import (
    FoodSource,
    OpenFoodFactsRecord,
    RawFoodRecord,
)

_FIELDS = ",".join(
    [
        "code",
        "product_name",
        "product_name_en",
        "generic_name",
        "brands",
        "ingredients_n",
        "nutriments",
    ]
)


@dataclass
class HttpxOpenFoodFactsClient(HttpxFoodClient):
    """HTTPX-backed client for the Open Food Facts full-text search."""

    source: ClassVar[FoodSource] = FoodSource.OPEN_FOOD_FACTS

    @classmethod
    def create(
        cls, base_url: str, user_agent: str, page_size: int = 50
    ) -> "HttpxOpenFoodFactsClient":
        """Create an Open Food Facts client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            user_agent=user_agent,
            page_size=page_size,
        )

    def search_url(self) -> str:
        return f"{self.base_url}/cgi-bin/search.pl"

    def search_params(self, query: str) -> dict[str, object]:
        return {
            "search_terms": query,
            "search_simple": 1,
            "action": "process",
            "json": 1,
            "page_size": self.page_size,
            "fields": _FIELDS,
        }

    def records_from_payload(self, payload: dict[str, object]) -> list[RawFoodRecord]:
        return [
            OpenFoodFactsRecord.from_payload(product)
            for product in payload_list(payload, "products")
        ]
