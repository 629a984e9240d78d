"""Tests for tiered food resolution."""

import asyncio

from food_resolver.domain.foods import (
    AccuracyTier,
    GeneratedSource,
    SourceKind,
    generated_food_id,
)
from food_resolver.services.curated import CuratedFoodTable
from food_resolver.services.resolver import GENERATION_SCHEMA, FoodResolver
from tests.conftest import (
    FakeCompletionClient,
    InMemoryCorpusRepository,
    corpus_food,
    toor_dal,
)


def _resolver(
    corpus: InMemoryCorpusRepository,
    client: FakeCompletionClient,
    curated: CuratedFoodTable | None = None,
) -> FoodResolver:
    return FoodResolver(
        corpus=corpus,
        completion_client=client,
        model="gpt-5.2",
        curated=curated or CuratedFoodTable(),
    )


def test_curated_match_ranks_first_for_simple_query(
    corpus: InMemoryCorpusRepository, completion_client: FakeCompletionClient
) -> None:
    resolver = _resolver(
        corpus, completion_client, CuratedFoodTable(records=(toor_dal(),))
    )

    results = asyncio.run(resolver.search_food("dal"))

    first = results[0]
    assert first.food.name == "Toor Dal (Cooked)"
    assert first.food.accuracy is AccuracyTier.HIGH
    assert first.food.source_kind is SourceKind.CURATED
    assert first.unit == "bowl (150g)"
    assert first.quantity == 1
    assert first.preview.calories == 131
    assert first.preview.multiplier == 1.5
    assert [result.food.name for result in results] == [
        "Toor Dal (Cooked)",
        "Hyderabadi Haleem",
    ]


def test_compound_dish_with_curated_hit_skips_generation(
    resolver: FoodResolver, completion_client: FakeCompletionClient
) -> None:
    first = asyncio.run(resolver.search_food("chicken curry"))
    second = asyncio.run(resolver.search_food("chicken curry"))

    assert first[0].food.name == "Chicken Curry"
    assert [r.food.id for r in first] == [r.food.id for r in second]
    assert completion_client.calls == []


def test_generation_fills_gaps_and_writes_through(
    resolver: FoodResolver,
    corpus: InMemoryCorpusRepository,
    completion_client: FakeCompletionClient,
) -> None:
    results = asyncio.run(resolver.search_food("Haleem"))

    assert len(results) == 1
    food = results[0].food
    assert food.name == "Hyderabadi Haleem"
    assert food.id == generated_food_id("haleem", 0)
    assert food.accuracy is AccuracyTier.MEDIUM
    assert food.source == GeneratedSource(query="haleem", item_index=0)
    assert results[0].unit == "bowl (250g)"
    assert results[0].preview.calories == 400
    assert [stored.name for stored in corpus.stored] == ["Hyderabadi Haleem"]
    call = completion_client.calls[0]
    assert call["model"] == "gpt-5.2"
    assert call["schema"] is GENERATION_SCHEMA
    assert "haleem" in str(call["prompt"])


def test_generated_ids_are_deterministic(
    completion_client: FakeCompletionClient,
) -> None:
    first = asyncio.run(
        _resolver(InMemoryCorpusRepository(), completion_client).search_food("haleem")
    )
    second = asyncio.run(
        _resolver(InMemoryCorpusRepository(), completion_client).search_food(
            " HALEEM "
        )
    )

    assert first[0].food.id == second[0].food.id


def test_stored_generation_is_not_stored_twice(
    resolver: FoodResolver, corpus: InMemoryCorpusRepository
) -> None:
    first = asyncio.run(resolver.search_food("haleem"))
    results = asyncio.run(resolver.search_food("haleem"))

    assert len(corpus.stored) == 1
    assert [result.food.name for result in results] == ["Hyderabadi Haleem"]
    assert results[0].food.source_kind is SourceKind.CORPUS
    assert results[0].food.id == first[0].food.id
    assert results[0].food.id == generated_food_id("haleem", 0)


def test_malformed_generation_falls_back_to_heuristics(
    corpus: InMemoryCorpusRepository,
) -> None:
    client = FakeCompletionClient(
        payload={"foods": [{"name": "", "calories": "lots"}]}
    )

    results = asyncio.run(_resolver(corpus, client).search_food("zunka bhakar"))

    assert len(results) == 1
    food = results[0].food
    assert food.name == "zunka bhakar"
    assert food.accuracy is AccuracyTier.LOW
    assert isinstance(food.source, GeneratedSource)
    assert food.source.heuristic
    assert corpus.stored == []


def test_non_object_generation_is_discarded(
    corpus: InMemoryCorpusRepository,
) -> None:
    client = FakeCompletionClient(payload=["Hyderabadi Haleem"])

    results = asyncio.run(_resolver(corpus, client).search_food("haleem"))

    assert results[0].food.accuracy is AccuracyTier.LOW


def test_generation_errors_degrade_to_fallback(
    corpus: InMemoryCorpusRepository,
) -> None:
    for error in (TimeoutError(), RuntimeError("upstream down"), ValueError("json")):
        client = FakeCompletionClient(error=error)

        results = asyncio.run(_resolver(corpus, client).search_food("haleem"))

        assert len(results) == 1
        assert results[0].food.accuracy is AccuracyTier.LOW


def test_corpus_failure_keeps_curated_results(
    completion_client: FakeCompletionClient,
) -> None:
    corpus = InMemoryCorpusRepository(fail_search=True)

    results = asyncio.run(
        _resolver(corpus, completion_client).search_food("chicken curry")
    )

    assert results[0].food.name == "Chicken Curry"
    assert corpus.searches == ["chicken curry"]


def test_write_through_failure_still_returns_generated_food(
    completion_client: FakeCompletionClient,
) -> None:
    corpus = InMemoryCorpusRepository(fail_store=True)

    results = asyncio.run(_resolver(corpus, completion_client).search_food("haleem"))

    assert results[0].food.name == "Hyderabadi Haleem"
    assert corpus.foods == []


def test_simple_query_drops_corpus_duplicates(
    completion_client: FakeCompletionClient,
) -> None:
    corpus = InMemoryCorpusRepository(
        foods=[corpus_food(1, "Toor Dal Tadka"), corpus_food(2, "Masoor Dal")]
    )
    resolver = _resolver(
        corpus, completion_client, CuratedFoodTable(records=(toor_dal(),))
    )

    names = [result.food.name for result in asyncio.run(resolver.search_food("dal"))]

    assert "Toor Dal Tadka" not in names
    assert set(names) == {"Toor Dal (Cooked)", "Masoor Dal", "Hyderabadi Haleem"}


def test_compound_query_ranks_by_relevance_and_drops_near_duplicates(
    resolver: FoodResolver, corpus: InMemoryCorpusRepository
) -> None:
    corpus.foods.extend(
        [
            corpus_food(1, "Chicken Curry"),
            corpus_food(2, "Chicken Currys"),
            corpus_food(3, "Butter Chicken Curry"),
        ]
    )

    results = asyncio.run(resolver.search_food("chicken curry"))

    assert [result.food.name for result in results] == [
        "Chicken Curry",
        "Butter Chicken Curry",
        "Chicken Breast (Cooked)",
    ]
    assert results[0].food.source_kind is SourceKind.CURATED
    assert results[0].relevance == 200


def test_corpus_hits_are_rescored(
    resolver: FoodResolver, corpus: InMemoryCorpusRepository
) -> None:
    corpus.foods.append(
        corpus_food(7, "Kolhapuri Misal", category="Unknown", calories=-5)
    )

    results = asyncio.run(resolver.search_food("misal"))

    misal = next(r for r in results if r.food.name == "Kolhapuri Misal")
    assert misal.food.accuracy is AccuracyTier.LOW


def test_limit_and_blank_queries(
    resolver: FoodResolver, corpus: InMemoryCorpusRepository
) -> None:
    assert len(asyncio.run(resolver.search_food("rice", limit=2))) == 2
    assert asyncio.run(resolver.search_food("rice", limit=0)) == []
    corpus.searches.clear()

    assert asyncio.run(resolver.search_food("   ")) == []
    assert corpus.searches == []


def test_short_query_never_generates(
    resolver: FoodResolver, completion_client: FakeCompletionClient
) -> None:
    results = asyncio.run(resolver.search_food("xy"))

    assert completion_client.calls == []
    assert results[0].food.accuracy is AccuracyTier.LOW
