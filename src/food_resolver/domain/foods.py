"""Domain models for resolved foods and their provenance."""

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from food_resolver.domain.nutrition import MacroProfile, PortionResult


class SourceKind(str, Enum):
    """Resolution tier a record came from."""

    CURATED = "curated"
    CORPUS = "corpus"
    GENERATED = "generated"


class AccuracyTier(str, Enum):
    """Confidence classification of a record's nutrition data."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        """Sort weight, higher is more trusted."""
        return _TIER_WEIGHTS[self]


_TIER_WEIGHTS = {
    AccuracyTier.HIGH: 3,
    AccuracyTier.MEDIUM: 2,
    AccuracyTier.LOW: 1,
}


@dataclass(frozen=True)
class CuratedSource:
    """Hand-verified record from the curated table."""

    kind: ClassVar[SourceKind] = SourceKind.CURATED


@dataclass(frozen=True)
class CorpusSource:
    """Record loaded from the persisted corpus."""

    row_id: int
    kind: ClassVar[SourceKind] = SourceKind.CORPUS


@dataclass(frozen=True)
class GeneratedSource:
    """Record produced by the generative tier or keyword heuristics."""

    query: str
    item_index: int
    heuristic: bool = False
    kind: ClassVar[SourceKind] = SourceKind.GENERATED


FoodSource = CuratedSource | CorpusSource | GeneratedSource


@dataclass(frozen=True)
class FoodId:
    """Namespaced identifier so generated ids never collide with row ids."""

    namespace: SourceKind
    value: int

    def __str__(self) -> str:
        return f"{self.namespace.value}:{self.value}"

    @classmethod
    def parse(cls, raw: str) -> "FoodId":
        """Parse a rendered ``namespace:value`` identifier."""
        namespace, _, value = raw.partition(":")
        return cls(namespace=SourceKind(namespace), value=int(value))


def stable_hash(text: str) -> int:
    """Return a deterministic 32-bit integer for a string."""
    return int(hashlib.md5(text.encode("utf-8")).hexdigest()[:8], 16)  # noqa: S324


def generated_food_id(normalized_query: str, item_index: int) -> FoodId:
    """Build the id for the n-th generated item of a query."""
    return FoodId(SourceKind.GENERATED, stable_hash(f"{normalized_query}:{item_index}"))


@dataclass(frozen=True)
class FoodRecord:
    """A food with baseline nutrients per 100 g (solids) or 100 ml (liquids)."""

    id: FoodId
    name: str
    category: str
    per_100: MacroProfile
    is_liquid: bool
    default_unit: str
    common_units: tuple[str, ...]
    source: FoodSource
    accuracy: AccuracyTier

    @property
    def source_kind(self) -> SourceKind:
        """Resolution tier of this record."""
        return self.source.kind


@dataclass(frozen=True)
class FoodResult:
    """Search result annotated with a recommended serving preview."""

    food: FoodRecord
    unit: str
    quantity: float
    unit_options: tuple[str, ...]
    preview: PortionResult
    relevance: float = 0.0
    notes: str = field(default="", compare=False)
