"""Lexical relevance between a food name and a search query."""

from food_resolver.domain.query import normalize_text, tokenize

EXACT_MATCH_POINTS = 100.0
SUBSTRING_POINTS = 50.0
TOKEN_MATCH_POINTS = 20.0
PARTIAL_TOKEN_POINTS = 10.0
POSITION_POINTS = 5.0
MIN_TOKEN_LENGTH = 3


def score(name: str, query: str) -> float:
    """Return a non-negative relevance score; higher is more relevant."""
    name_text = normalize_text(name)
    query_text = normalize_text(query)
    if not name_text or not query_text:
        return 0.0

    total = 0.0
    if name_text == query_text:
        total += EXACT_MATCH_POINTS
    if query_text in name_text or name_text in query_text:
        total += SUBSTRING_POINTS

    name_tokens = [t for t in tokenize(name_text) if len(t) >= MIN_TOKEN_LENGTH]
    query_tokens = [t for t in tokenize(query_text) if len(t) >= MIN_TOKEN_LENGTH]
    # Each query token scores at most once.
    for query_token in query_tokens:
        if query_token in name_tokens:
            total += TOKEN_MATCH_POINTS
        elif any(
            query_token in name_token or name_token in query_token
            for name_token in name_tokens
        ):
            total += PARTIAL_TOKEN_POINTS

    for name_token, query_token in zip(name_tokens, query_tokens, strict=False):
        if name_token == query_token:
            total += POSITION_POINTS
    return total
