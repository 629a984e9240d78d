"""Tiered food resolution: curated table, corpus, then generation."""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Protocol

from pydantic import ValidationError

from food_resolver.domain.foods import (
    AccuracyTier,
    FoodId,
    FoodRecord,
    FoodResult,
    GeneratedSource,
    generated_food_id,
)
from food_resolver.domain.generation import GeneratedFood, GeneratedFoods
from food_resolver.domain.nutrition import MacroProfile
from food_resolver.domain.query import ResolutionQuery
from food_resolver.services import relevance, units
from food_resolver.services.accuracy import score_food
from food_resolver.services.curated import CuratedFoodTable
from food_resolver.services.heuristics import (
    categorize_food,
    fallback_record,
    is_liquid_food,
    unit_options_for,
)
from food_resolver.services.portions import default_serving

_logger = logging.getLogger(__name__)

MIN_GENERATION_QUERY_LENGTH = 3
MIN_SIMPLE_RESULTS = 3
NEAR_EQUAL_NAME_LENGTH = 3

GENERATION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "calories": {"type": "number", "minimum": 0},
                    "protein": {"type": "number", "minimum": 0},
                    "carbs": {"type": "number", "minimum": 0},
                    "fat": {"type": "number", "minimum": 0},
                    "category": {"type": "string"},
                    "defaultUnit": {"type": "string"},
                },
                "required": [
                    "name",
                    "calories",
                    "protein",
                    "carbs",
                    "fat",
                    "category",
                    "defaultUnit",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["foods"],
    "additionalProperties": False,
}


class CorpusRepository(Protocol):
    """Persistence interface for the shared food corpus."""

    def search_foods(self, query: str) -> list[FoodRecord]:
        """Return corpus foods whose name matches the query."""

    def store_food(self, record: FoodRecord) -> FoodRecord:
        """Persist a food and return the stored record."""

    def list_foods(self) -> list[FoodRecord]:
        """Return every food in the corpus."""

    def delete_food(self, food_id: FoodId) -> None:
        """Remove a food from the corpus."""


class CompletionClient(Protocol):
    """Interface for structured LLM text completion."""

    async def complete_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return a JSON object matching the schema."""


@dataclass
class _Candidate:
    record: FoodRecord
    relevance: float = 0.0


@dataclass
class FoodResolver:
    """Resolves free-text food queries into ranked results."""

    corpus: CorpusRepository
    completion_client: CompletionClient
    model: str
    reasoning_effort: str | None = None
    store: bool = False
    curated: CuratedFoodTable = field(default_factory=CuratedFoodTable)
    corpus_timeout_seconds: float = 5.0
    generation_timeout_seconds: float = 20.0

    async def search_food(self, query: str, limit: int = 10) -> list[FoodResult]:
        """Resolve a query into at most ``limit`` ranked results."""
        parsed = ResolutionQuery.parse(query)
        if not parsed.normalized or limit <= 0:
            return []

        candidates = self._curated_tier(parsed)
        curated_count = len(candidates)
        corpus_count = await self._corpus_tier(parsed, candidates)
        generated_count = 0
        if self._needs_generation(parsed, candidates):
            generated_count = await self._generated_tier(parsed, candidates)
        if not candidates:
            _logger.info("No tier matched %r; using heuristic estimate", query)
            candidates.append(_Candidate(fallback_record(query)))

        _logger.info(
            "Resolved %r: curated=%s corpus=%s generated=%s",
            query,
            curated_count,
            corpus_count,
            generated_count,
        )
        ranked = _rank(parsed, candidates)
        return [_to_result(candidate) for candidate in ranked[:limit]]

    def _curated_tier(self, query: ResolutionQuery) -> list[_Candidate]:
        return [
            _Candidate(record, relevance.score(record.name, query.normalized))
            for record in self.curated.search(query)
        ]

    async def _corpus_tier(
        self, query: ResolutionQuery, candidates: list[_Candidate]
    ) -> int:
        try:
            hits = await asyncio.wait_for(
                asyncio.to_thread(self.corpus.search_foods, query.raw.strip()),
                timeout=self.corpus_timeout_seconds,
            )
        except TimeoutError:
            _logger.warning("Corpus search timed out for %r", query.raw)
            return 0
        except Exception:
            _logger.exception("Corpus search failed for %r", query.raw)
            return 0

        added = 0
        for hit in hits:
            if _is_duplicate(query, hit, candidates):
                continue
            scored = replace(hit, accuracy=score_food(hit).tier)
            candidates.append(
                _Candidate(scored, relevance.score(scored.name, query.normalized))
            )
            added += 1
        return added

    def _needs_generation(
        self, query: ResolutionQuery, candidates: list[_Candidate]
    ) -> bool:
        if len(query.normalized) < MIN_GENERATION_QUERY_LENGTH:
            return False
        if not candidates:
            return True
        if query.is_compound_dish:
            return not any(
                query.normalized in candidate.record.name.lower()
                for candidate in candidates
            )
        return len(candidates) < MIN_SIMPLE_RESULTS

    async def _generated_tier(
        self, query: ResolutionQuery, candidates: list[_Candidate]
    ) -> int:
        try:
            raw = await asyncio.wait_for(
                self.completion_client.complete_json(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    prompt=_generation_prompt(query.normalized),
                    schema=GENERATION_SCHEMA,
                ),
                timeout=self.generation_timeout_seconds,
            )
        except TimeoutError:
            _logger.warning("Food generation timed out for %r", query.raw)
            return 0
        except ValueError:
            # json.JSONDecodeError is a ValueError
            _logger.warning("Discarding non-JSON generation output for %r", query.raw)
            return 0
        except Exception:
            _logger.exception("Food generation failed for %r", query.raw)
            return 0

        try:
            payload = GeneratedFoods.model_validate(raw)
        except ValidationError as exc:
            _logger.warning(
                "Discarding malformed generation output for %r: %s",
                query.raw,
                exc.error_count(),
            )
            return 0

        existing = {candidate.record.name.lower() for candidate in candidates}
        added = 0
        for index, item in enumerate(payload.foods):
            record = _generated_record(query.normalized, index, item)
            if record.name.lower() in existing:
                continue
            existing.add(record.name.lower())
            await self._write_through(record)
            candidates.append(
                _Candidate(record, relevance.score(record.name, query.normalized))
            )
            added += 1
        return added

    async def _write_through(self, record: FoodRecord) -> None:
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self.corpus.store_food, record),
                timeout=self.corpus_timeout_seconds,
            )
        except Exception:
            _logger.exception("Failed to store generated food %s", record.name)


def _first_token(name: str) -> str:
    return name.lower().split(" ")[0]


def _is_duplicate(
    query: ResolutionQuery, hit: FoodRecord, candidates: list[_Candidate]
) -> bool:
    hit_name = hit.name.lower()
    for candidate in candidates:
        name = candidate.record.name.lower()
        if query.is_compound_dish:
            if name == hit_name:
                return True
            if (
                abs(len(name) - len(hit_name)) <= NEAR_EQUAL_NAME_LENGTH
                and _first_token(name) == _first_token(hit_name)
            ):
                return True
        elif _first_token(hit_name) in name or _first_token(name) in hit_name:
            return True
    return False


def _generated_record(
    normalized_query: str, index: int, item: GeneratedFood
) -> FoodRecord:
    name = item.name.strip()
    category = item.category.strip() or categorize_food(name)
    default_unit = item.default_unit.strip() or "serving (100g)"
    return FoodRecord(
        id=generated_food_id(normalized_query, index),
        name=name,
        category=category,
        per_100=MacroProfile(
            calories=item.calories,
            protein_g=item.protein,
            carbs_g=item.carbs,
            fat_g=item.fat,
        ),
        is_liquid=is_liquid_food(name, category, default_unit),
        default_unit=default_unit,
        common_units=unit_options_for(name, category),
        source=GeneratedSource(query=normalized_query, item_index=index),
        accuracy=AccuracyTier.MEDIUM,
    )


def _rank(query: ResolutionQuery, candidates: list[_Candidate]) -> list[_Candidate]:
    def sort_key(candidate: _Candidate) -> tuple[float, int, bool, int]:
        record = candidate.record
        return (
            -candidate.relevance if query.is_compound_dish else 0.0,
            -record.accuracy.weight,
            record.name.lower() != query.normalized,
            len(record.name),
        )

    return sorted(candidates, key=sort_key)


def _to_result(candidate: _Candidate) -> FoodResult:
    record = candidate.record
    serving = default_serving(record)
    return FoodResult(
        food=record,
        unit=serving.unit,
        quantity=serving.quantity,
        unit_options=serving.unit_options,
        preview=units.normalize(record, serving.unit, serving.quantity),
        relevance=candidate.relevance,
        notes=serving.notes,
    )


def _generation_prompt(normalized_query: str) -> str:
    return (
        f'List up to 3 foods matching "{normalized_query}". '
        "Give nutrition per 100g for solids or per 100ml for liquids: "
        "calories (kcal), protein, carbs and fat in grams. "
        "Use a short common name, a category such as Grains, Protein, Dairy, "
        "Fruits, Vegetables, Nuts, Beverages, Legumes or Main Course, and a "
        'typical serving as defaultUnit with its size, e.g. "bowl (150g)".'
    )
