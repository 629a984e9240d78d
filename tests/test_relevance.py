"""Tests for relevance scoring."""

from food_resolver.services.relevance import score


def test_exact_match_scores_every_bonus() -> None:
    assert score("Chicken Curry", "chicken curry") == 200


def test_exact_match_outranks_other_candidates() -> None:
    query = "paneer butter masala"
    candidates = [
        "Paneer Butter Masala",
        "Butter Paneer Masala",
        "Paneer Butter Masala Dosa",
        "Paneer",
        "Masala Chai",
    ]

    scores = {name: score(name, query) for name in candidates}

    assert max(scores, key=scores.__getitem__) == "Paneer Butter Masala"
    assert all(
        scores["Paneer Butter Masala"] > value
        for name, value in scores.items()
        if name != "Paneer Butter Masala"
    )


def test_short_tokens_are_ignored() -> None:
    assert score("Egg", "an egg") == 75


def test_partial_token_containment() -> None:
    assert score("Chickpeas", "chick") == 60


def test_word_order_bonus() -> None:
    assert score("Rice Basmati", "basmati rice") == 40
    assert score("Basmati Rice", "basmati rice") == 200


def test_unrelated_names_score_zero() -> None:
    assert score("Samosa", "green tea") == 0
    assert score("", "tea") == 0


def test_repeated_name_tokens_do_not_outrank_exact_match() -> None:
    repeated = "Chicken Curry Chicken Curry Chicken Curry Chicken Curry"

    assert score(repeated, "chicken curry") == 100
    assert score(repeated, "chicken curry") < score("Chicken Curry", "chicken curry")
