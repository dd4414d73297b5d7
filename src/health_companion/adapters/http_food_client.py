"""Shared HTTPX plumbing for food database search clients."""

import json
from dataclasses import dataclass
from typing import ClassVar

import httpx

from health_companion.config import is_missing_credential
from health_companion.domain.sources import FoodSource, RawFoodRecord

_REDACTED = "REDACTED"


@dataclass
class HttpxFoodClient:
    """Base class issuing a single GET per search and decoding the JSON body."""

    base_url: str
    http_client: httpx.AsyncClient
    user_agent: str
    page_size: int = 50
    source: ClassVar[FoodSource]

    def credentials(self) -> dict[str, str | None]:
        """Return the credentials this source requires, keyed by param name."""
        return {}

    def has_credentials(self) -> bool:
        """Return True when every required credential is configured."""
        values = self.credentials().values()
        return not any(is_missing_credential(value) for value in values)

    def search_url(self) -> str:
        raise NotImplementedError

    def search_params(self, query: str) -> dict[str, object]:
        raise NotImplementedError

    def records_from_payload(self, payload: dict[str, object]) -> list[RawFoodRecord]:
        raise NotImplementedError

    def describe_request(self, query: str) -> str:
        """Return the request URL with credentials redacted, for logging."""
        params = self.search_params(query)
        for key in self.credentials():
            if key in params:
                params[key] = _REDACTED
        return str(httpx.URL(self.search_url(), params=params))

    async def fetch_search(self, query: str) -> str:
        """Perform the search request and return the raw response body."""
        response = await self.http_client.get(
            self.search_url(),
            params=self.search_params(query),
            headers={"Accept": "application/json", "User-Agent": self.user_agent},
        )
        response.raise_for_status()
        return response.text

    def parse_records(self, body: str) -> list[RawFoodRecord]:
        """Decode a response body into raw source records.

        Raises ValueError when the body is not the expected JSON object.
        """
        payload = json.loads(body)
        if not isinstance(payload, dict):
            raise ValueError("Expected a JSON object in the search response")
        return self.records_from_payload(payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def payload_list(payload: dict[str, object], key: str) -> list[object]:
    """Return `payload[key]` when it is a list, otherwise an empty list."""
    value = payload.get(key)
    return value if isinstance(value, list) else []
