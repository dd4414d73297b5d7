"""Edamam Food Database API client."""

from dataclasses import dataclass
from typing import ClassVar

import httpx

from health_companion.adapters.http_food_client import HttpxFoodClient, payload_list
from health_companion.domain.sources import EdamamRecord, FoodSource, RawFoodRecord


@dataclass
class HttpxEdamamClient(HttpxFoodClient):
    """HTTPX-backed client for the Edamam parser endpoint."""

    app_id: str | None = None
    app_key: str | None = None
    source: ClassVar[FoodSource] = FoodSource.EDAMAM

    @classmethod
    def create(
        cls,
        app_id: str | None,
        app_key: str | None,
        base_url: str,
        user_agent: str,
        page_size: int = 50,
    ) -> "HttpxEdamamClient":
        """Create an Edamam client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            user_agent=user_agent,
            app_id=app_id,
            app_key=app_key,
            page_size=page_size,
        )

    def credentials(self) -> dict[str, str | None]:
        return {"app_id": self.app_id, "app_key": self.app_key}

    def search_url(self) -> str:
        return f"{self.base_url}/parser"

    def search_params(self, query: str) -> dict[str, object]:
        # nutrition-type=logging returns nutrients per 100g
        return {
            "app_id": self.app_id,
            "app_key": self.app_key,
            "ingr": query,
            "nutrition-type": "logging",
            "category": ["generic-foods", "packaged-foods"],
        }

    def records_from_payload(self, payload: dict[str, object]) -> list[RawFoodRecord]:
        hints = payload_list(payload, "hints")
        return [EdamamRecord.from_payload(hint) for hint in hints]
