"""Normalization and relevance ranking of food search candidates."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum

from health_companion.domain.nutrition import ProductCandidate, ProductResult
from health_companion.domain.sources import OpenFoodFactsRecord, RawFoodRecord
from health_companion.services.nutrients import build_profile, record_identity

UNKNOWN_PRODUCT_NAME = "Unknown Product"


class Relevance(IntEnum):
    """Relevance ranks, lower sorts first."""

    EXACT = 0
    PREFIX = 1
    CONTAINS = 2
    NO_MATCH = 3


@dataclass(frozen=True)
class SearchPolicy:
    """Filtering rules applied to one source's results."""

    result_limit: int = 20
    allow_zero_calories: bool = False
    require_name_match: bool = True
    max_ingredients: int | None = None
    excluded_brands: tuple[str, ...] = field(default_factory=tuple)

    def accepts_calories(self, calories: float | None) -> bool:
        if calories is None:
            return False
        if self.allow_zero_calories:
            return calories >= 0
        return calories > 0

    def accepts_record(self, record: RawFoodRecord) -> bool:
        """Apply the optional whole-food filters to Open Food Facts records."""
        if not isinstance(record, OpenFoodFactsRecord):
            return True
        if self.max_ingredients is not None:
            count = record.ingredients_count
            if count is None or count > self.max_ingredients:
                return False
        if self.excluded_brands and record.brands:
            brands = {brand.strip().lower() for brand in record.brands.split(",")}
            if brands & {brand.lower() for brand in self.excluded_brands}:
                return False
        return True


@dataclass(frozen=True)
class RankedProducts:
    """Ranked results plus counts describing what was filtered."""

    products: list[ProductResult]
    raw_count: int
    qualified_count: int


def classify_relevance(name: str, query: str) -> Relevance:
    """Rank a lower-cased product name against a lower-cased query."""
    if name == query:
        return Relevance.EXACT
    if name.startswith(query):
        return Relevance.PREFIX
    if query in name:
        return Relevance.CONTAINS
    return Relevance.NO_MATCH


def rank_products(
    records: Sequence[RawFoodRecord], query: str, policy: SearchPolicy
) -> RankedProducts:
    """Filter, normalize and order raw records for a query.

    Results are ordered by relevance rank, then by upstream position, and
    capped at the policy's result limit.
    """
    lowered_query = query.lower()
    candidates: list[ProductCandidate] = []
    for index, record in enumerate(records):
        profile = build_profile(record)
        if not policy.accepts_calories(profile.calories):
            continue
        product_id, name = record_identity(record, index)
        display_name = name or UNKNOWN_PRODUCT_NAME
        lowered_name = display_name.lower()
        if policy.require_name_match and lowered_query not in lowered_name:
            continue
        if not policy.accepts_record(record):
            continue
        rank = classify_relevance(lowered_name, lowered_query)
        if rank is Relevance.NO_MATCH and policy.require_name_match:
            continue
        candidates.append(
            ProductCandidate(
                id=product_id,
                display_name=display_name,
                nutrition=profile,
                relevance_rank=int(rank),
                source_order=index,
            )
        )

    candidates.sort(key=ProductCandidate.sort_key)
    limited = candidates[: max(policy.result_limit, 0)]
    return RankedProducts(
        products=[candidate.to_result() for candidate in limited],
        raw_count=len(records),
        qualified_count=len(candidates),
    )
