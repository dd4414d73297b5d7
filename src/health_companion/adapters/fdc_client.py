"""USDA FoodData Central API client."""

from dataclasses import dataclass
from typing import ClassVar

import httpx

from health_companion.adapters.http_food_client import HttpxFoodClient, payload_list
from health_companion.domain.sources import FdcRecord, FoodSource, RawFoodRecord


@dataclass
class HttpxFdcClient(HttpxFoodClient):
    """HTTPX-backed FDC client."""

    api_key: str | None = None
    source: ClassVar[FoodSource] = FoodSource.USDA

    @classmethod
    def create(
        cls, api_key: str | None, base_url: str, user_agent: str, page_size: int = 50
    ) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            user_agent=user_agent,
            api_key=api_key,
            page_size=page_size,
        )

    def credentials(self) -> dict[str, str | None]:
        return {"api_key": self.api_key}

    def search_url(self) -> str:
        return f"{self.base_url}/foods/search"

    def search_params(self, query: str) -> dict[str, object]:
        return {"api_key": self.api_key, "query": query, "pageSize": self.page_size}

    def records_from_payload(self, payload: dict[str, object]) -> list[RawFoodRecord]:
        return [FdcRecord.from_payload(food) for food in payload_list(payload, "foods")]
