"""Corpus housekeeping: duplicate and low-quality record removal."""

import logging
from collections import defaultdict
from dataclasses import dataclass

from food_resolver.domain.foods import AccuracyTier, FoodId, FoodRecord
from food_resolver.services.accuracy import pick_best, score_food
from food_resolver.services.curated import strip_parenthetical
from food_resolver.services.resolver import CorpusRepository

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanupReport:
    """Summary of a maintenance sweep."""

    scanned: int
    duplicate_groups: int
    removed_duplicates: tuple[FoodId, ...]
    removed_inaccurate: tuple[FoodId, ...]

    @property
    def removed_total(self) -> int:
        """Number of deleted records."""
        return len(self.removed_duplicates) + len(self.removed_inaccurate)


@dataclass
class CorpusMaintenanceService:
    """Keeps the persisted corpus free of duplicate records."""

    corpus: CorpusRepository

    def cleanup_duplicates(self, remove_inaccurate: bool = False) -> CleanupReport:
        """Keep the most plausible record per name and delete the rest."""
        records = self.corpus.list_foods()
        groups: dict[str, list[FoodRecord]] = defaultdict(list)
        for record in records:
            groups[strip_parenthetical(record.name)].append(record)

        removed_duplicates: list[FoodId] = []
        survivors: list[FoodRecord] = []
        duplicate_groups = 0
        for name, group in groups.items():
            best = pick_best(group)
            survivors.append(best)
            if len(group) == 1:
                continue
            duplicate_groups += 1
            for record in group:
                if record is best:
                    continue
                self.corpus.delete_food(record.id)
                removed_duplicates.append(record.id)
            _logger.info("Removed %s duplicates of %r", len(group) - 1, name)

        removed_inaccurate: list[FoodId] = []
        if remove_inaccurate:
            for record in survivors:
                if score_food(record).tier is AccuracyTier.LOW:
                    self.corpus.delete_food(record.id)
                    removed_inaccurate.append(record.id)
            _logger.info("Removed %s low-accuracy foods", len(removed_inaccurate))

        return CleanupReport(
            scanned=len(records),
            duplicate_groups=duplicate_groups,
            removed_duplicates=tuple(removed_duplicates),
            removed_inaccurate=tuple(removed_inaccurate),
        )
