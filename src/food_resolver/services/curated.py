"""Lookup over the curated food table."""

import re
from dataclasses import dataclass

from food_resolver.curated_foods import CURATED_FOODS
from food_resolver.domain.foods import FoodRecord
from food_resolver.domain.query import ResolutionQuery, normalize_text
from food_resolver.services import relevance

SIMPLE_MATCH_LIMIT = 5
COMPOUND_MATCH_LIMIT = 2

_PARENTHETICAL = re.compile(r"\([^)]*\)")


def strip_parenthetical(name: str) -> str:
    """Drop "(...)" qualifiers and normalize whitespace."""
    return normalize_text(_PARENTHETICAL.sub(" ", name))


@dataclass(frozen=True)
class CuratedFoodTable:
    """Read-only table of hand-verified foods."""

    records: tuple[FoodRecord, ...] = CURATED_FOODS

    def search(self, query: ResolutionQuery) -> list[FoodRecord]:
        """Return curated matches for a query."""
        if not query.normalized:
            return []
        if query.is_compound_dish:
            return self._search_compound(query)
        return self._search_simple(query)

    def get(self, name: str) -> FoodRecord | None:
        """Return the record whose name matches exactly (case-insensitive)."""
        wanted = normalize_text(name)
        for record in self.records:
            if normalize_text(record.name) == wanted:
                return record
        return None

    def _search_simple(self, query: ResolutionQuery) -> list[FoodRecord]:
        matches: list[FoodRecord] = []
        for record in self.records:
            name = record.name.lower()
            if query.normalized in name or any(
                token in name for token in query.significant_tokens
            ):
                matches.append(record)
            if len(matches) >= SIMPLE_MATCH_LIMIT:
                break
        return matches

    def _search_compound(self, query: ResolutionQuery) -> list[FoodRecord]:
        required = max(query.word_count - 1, 1)
        matches: list[FoodRecord] = []
        for record in self.records:
            name = record.name.lower()
            base_name = strip_parenthetical(record.name)
            near_exact = query.normalized in name or (
                bool(base_name) and base_name in query.normalized
            )
            present = sum(1 for token in query.significant_tokens if token in name)
            if near_exact or present >= required:
                matches.append(record)
        matches.sort(
            key=lambda record: relevance.score(record.name, query.normalized),
            reverse=True,
        )
        return matches[:COMPOUND_MATCH_LIMIT]
