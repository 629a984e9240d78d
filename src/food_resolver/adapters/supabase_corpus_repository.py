"""Supabase implementation of the shared food corpus."""

from dataclasses import dataclass

from supabase import Client

from food_resolver.domain.foods import (
    CorpusSource,
    FoodId,
    FoodRecord,
    SourceKind,
)
from food_resolver.domain.nutrition import MacroProfile
from food_resolver.services.accuracy import score_nutrients
from food_resolver.services.heuristics import is_liquid_food, unit_options_for
from food_resolver.services.resolver import CorpusRepository

SEARCH_LIMIT = 20


@dataclass
class SupabaseCorpusRepository(CorpusRepository):
    """Supabase-backed repository for persisted foods."""

    client: Client
    table: str = "foods"

    def search_foods(self, query: str) -> list[FoodRecord]:
        """Search foods by case-insensitive name substring."""
        request = self.client.table(self.table).select("*")
        if query.strip():
            request = request.ilike("name", f"%{query.strip()}%")
        response = request.limit(SEARCH_LIMIT).execute()
        return [_parse_food(row) for row in response.data or []]

    def store_food(self, record: FoodRecord) -> FoodRecord:
        """Insert or update a food.

        Generated foods are keyed by their stable hash so repeated stores of
        the same generation update one row. Other foods are keyed by name and
        category.
        """
        conflict = (
            "generated_id"
            if record.id.namespace is SourceKind.GENERATED
            else "name,category"
        )
        response = (
            self.client.table(self.table)
            .upsert(_to_row(record), on_conflict=conflict)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store food entry")
        return _parse_food(response.data[0])

    def list_foods(self) -> list[FoodRecord]:
        """Return all foods ordered by id."""
        response = self.client.table(self.table).select("*").order("id").execute()
        return [_parse_food(row) for row in response.data or []]

    def delete_food(self, food_id: FoodId) -> None:
        """Delete a persisted food by row id or generated id."""
        if food_id.namespace is SourceKind.CORPUS:
            column = "id"
        elif food_id.namespace is SourceKind.GENERATED:
            column = "generated_id"
        else:
            raise ValueError(f"Not a corpus id: {food_id}")
        self.client.table(self.table).delete().eq(column, food_id.value).execute()


def _to_row(record: FoodRecord) -> dict[str, object]:
    """Serialize a record into the foods table shape."""
    row: dict[str, object] = {
        "name": record.name,
        "calories": record.per_100.calories,
        "protein": record.per_100.protein_g,
        "carbs": record.per_100.carbs_g,
        "fat": record.per_100.fat_g,
        "portion_size": "100ml" if record.is_liquid else "100g",
        "category": record.category,
        "default_unit": record.default_unit,
    }
    if record.id.namespace is SourceKind.GENERATED:
        row["generated_id"] = record.id.value
    return row


def _parse_food(row: dict[str, object]) -> FoodRecord:
    """Parse a foods row into a domain model."""
    name = str(row.get("name", ""))
    category = str(row.get("category") or "")
    default_unit = str(row.get("default_unit") or "serving (100g)")
    per_100 = MacroProfile(
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
    )
    row_id = int(row["id"])
    generated_id = row.get("generated_id")
    food_id = (
        FoodId(SourceKind.GENERATED, int(generated_id))
        if generated_id is not None
        else FoodId(SourceKind.CORPUS, row_id)
    )
    is_liquid = str(row.get("portion_size", "")).endswith("ml") or is_liquid_food(
        name, category, default_unit
    )
    return FoodRecord(
        id=food_id,
        name=name,
        category=category,
        per_100=per_100,
        is_liquid=is_liquid,
        default_unit=default_unit,
        common_units=unit_options_for(name, category),
        source=CorpusSource(row_id=row_id),
        accuracy=score_nutrients(name, category, per_100).tier,
    )
