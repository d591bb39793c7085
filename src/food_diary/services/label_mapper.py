"""Mapping of classifier labels to catalog foods."""

import logging
from dataclasses import dataclass

from food_diary.data.label_map import LABEL_TO_FOOD_MAP
from food_diary.domain.foods import FoodItem
from food_diary.domain.vision import LabelMatch
from food_diary.services.catalog import FoodCatalogService
from food_diary.services.portions import (
    DEFAULT_CONFIDENCE,
    clamp_confidence,
    estimate_weight_by_label,
)

_logger = logging.getLogger(__name__)


@dataclass
class LabelMapper:
    """Finds the catalog food behind a classifier label."""

    catalog: FoodCatalogService
    mapped_search_limit: int = 3
    raw_search_limit: int = 5

    async def map_label_to_food(
        self,
        label: str,
        confidence: float = DEFAULT_CONFIDENCE,
        owner_id: str | None = None,
    ) -> LabelMatch:
        """Return the best catalog food for a label and a portion weight.

        Known labels search their canonical name and synonyms in order; other
        labels are searched as-is. Search failures yield ``food=None``.
        """
        normalized = (label or "").strip().lower()
        safe_confidence = clamp_confidence(confidence)
        weight = estimate_weight_by_label(normalized, safe_confidence)
        mapping = LABEL_TO_FOOD_MAP.get(normalized)

        if mapping is None:
            food = await self._first_hit(
                [normalized], self.raw_search_limit, owner_id
            )
            return LabelMatch(food=food, estimated_weight_g=weight, mapping_hit=False)

        terms = [mapping.canonical_name, *mapping.search_terms]
        food = await self._first_hit(terms, self.mapped_search_limit, owner_id)
        return LabelMatch(food=food, estimated_weight_g=weight, mapping_hit=True)

    async def _first_hit(
        self, terms: list[str], limit: int, owner_id: str | None
    ) -> FoodItem | None:
        for term in terms:
            if not term:
                continue
            try:
                result = await self.catalog.search(term, limit=limit, owner_id=owner_id)
            except Exception:
                _logger.exception("Catalog search failed for label term %s", term)
                return None
            if result.foods:
                return result.foods[0]
        return None
