"""Food search service wrapping a single food database source."""

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from health_companion.domain.nutrition import SearchResult
from health_companion.domain.sources import FoodSource, RawFoodRecord
from health_companion.services.cache import Cache
from health_companion.services.ranking import SearchPolicy, rank_products

_ERROR_BODY_LIMIT = 300

_logger = logging.getLogger(__name__)


class FoodDatabaseClient(Protocol):
    """Interface for a food database search integration."""

    source: FoodSource

    def has_credentials(self) -> bool:
        """Return True when the client is configured to make requests."""

    def describe_request(self, query: str) -> str:
        """Return a loggable description of the search request."""

    async def fetch_search(self, query: str) -> str:
        """Perform the search request and return the raw body."""

    def parse_records(self, body: str) -> list[RawFoodRecord]:
        """Decode a response body into raw records."""


@dataclass
class _Timings:
    fetch_ms: float | None = None
    parse_ms: float | None = None
    processing_ms: float | None = None


@dataclass
class FoodSearchService:
    """Search one food source and return ranked, normalized products.

    Every expected failure is reported through `SearchResult.error`; the
    service never raises for upstream problems.
    """

    client: FoodDatabaseClient
    policy: SearchPolicy = field(default_factory=SearchPolicy)
    cache: Cache | None = None

    @property
    def source_label(self) -> str:
        return self.client.source.label

    async def search(self, food_name: str) -> SearchResult:
        """Search for foods matching `food_name`."""
        cache_key = f"{self.client.source.value}:search:{food_name.lower()}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if isinstance(cached, SearchResult):
                return cached

        timings = _Timings()
        try:
            result = await self._search(food_name, timings)
        except Exception as exc:
            _logger.exception(
                "Food search failed unexpectedly: source=%s", self.client.source
            )
            result = self._failure(f"Flow Error: {_describe_exception(exc)}", timings)

        if self.cache is not None and result.ok and result.products:
            self.cache.set(cache_key, result)
        return result

    async def _search(self, food_name: str, timings: _Timings) -> SearchResult:
        label = self.source_label
        if not self.client.has_credentials():
            _logger.error("%s API credentials are missing or placeholders", label)
            return SearchResult(
                error=(
                    f"Server configuration error: {label} API credentials missing. "
                    "Please contact support."
                )
            )

        _logger.info(
            "Food search fetch: source=%s term=%r url=%s",
            self.client.source,
            food_name,
            self.client.describe_request(food_name),
        )
        started = time.perf_counter()
        try:
            body = await self.client.fetch_search(food_name)
        except httpx.HTTPStatusError as exc:
            timings.fetch_ms = _elapsed_ms(started)
            response = exc.response
            _logger.warning(
                "Food search HTTP error: source=%s status=%s",
                self.client.source,
                response.status_code,
            )
            detail = response.text[:_ERROR_BODY_LIMIT]
            return self._failure(
                f"{label} API Error: {response.status_code} "
                f"{response.reason_phrase}. {detail}".rstrip(),
                timings,
            )
        except httpx.TransportError as exc:
            timings.fetch_ms = _elapsed_ms(started)
            _logger.warning(
                "Food search network failure: source=%s error=%s",
                self.client.source,
                exc,
            )
            return self._failure(
                f"Network error while contacting {label}: {_describe_exception(exc)}. "
                "The server may be running in a sandboxed or offline environment "
                "without outbound internet access.",
                timings,
            )
        timings.fetch_ms = _elapsed_ms(started)
        _logger.info("Food search fetch took %.1f ms", timings.fetch_ms)

        started = time.perf_counter()
        try:
            records = self.client.parse_records(body)
        except ValueError:
            timings.parse_ms = _elapsed_ms(started)
            _logger.warning(
                "Food search returned malformed JSON: source=%s", self.client.source
            )
            return self._failure(
                f"Failed to parse the response from {label}.", timings
            )
        timings.parse_ms = _elapsed_ms(started)

        started = time.perf_counter()
        if not records:
            timings.processing_ms = _elapsed_ms(started)
            return self._failure(
                f'No products found for "{food_name}" from {label}.', timings
            )
        ranked = rank_products(records, food_name, self.policy)
        timings.processing_ms = _elapsed_ms(started)
        _logger.info(
            "Food search processed: source=%s raw=%s qualified=%s returned=%s "
            "in %.1f ms",
            self.client.source,
            ranked.raw_count,
            ranked.qualified_count,
            len(ranked.products),
            timings.processing_ms,
        )
        if not ranked.products:
            return self._failure(
                f'No suitable products found for "{food_name}" after processing '
                f"{label} results. Try a broader search term.",
                timings,
            )
        return SearchResult(
            products=ranked.products,
            api_fetch_duration_ms=timings.fetch_ms,
            json_parse_duration_ms=timings.parse_ms,
            processing_duration_ms=timings.processing_ms,
        )

    def _failure(self, message: str, timings: _Timings) -> SearchResult:
        return SearchResult(
            error=message,
            api_fetch_duration_ms=timings.fetch_ms,
            json_parse_duration_ms=timings.parse_ms,
            processing_duration_ms=timings.processing_ms,
        )


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def _describe_exception(exc: BaseException) -> str:
    """Return the exception message, including its cause when present."""
    detail = str(exc) or type(exc).__name__
    if exc.__cause__ is not None:
        detail += f" Cause: {exc.__cause__}"
    return detail
