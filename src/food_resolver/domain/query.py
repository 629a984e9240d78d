"""Search query model."""

import re
from dataclasses import dataclass

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

STOP_WORDS = frozenset({"a", "and", "in", "of", "on", "the", "with"})

MODIFIER_WORDS = frozenset(
    {
        "boiled",
        "cold",
        "cooked",
        "fresh",
        "fried",
        "grilled",
        "homemade",
        "hot",
        "large",
        "medium",
        "plain",
        "raw",
        "roasted",
        "small",
        "steamed",
        "whole",
    }
)


def normalize_text(text: str) -> str:
    """Lower-case, trim and collapse whitespace."""
    return " ".join(text.lower().split())


def tokenize(text: str) -> list[str]:
    """Split text into lower-case alphanumeric tokens."""
    return _TOKEN_PATTERN.findall(text.lower())


@dataclass(frozen=True)
class ResolutionQuery:
    """A parsed free-text food query."""

    raw: str
    normalized: str
    tokens: tuple[str, ...]
    significant_tokens: tuple[str, ...]
    is_compound_dish: bool

    @classmethod
    def parse(cls, raw: str) -> "ResolutionQuery":
        """Build a query from user text."""
        normalized = normalize_text(raw)
        tokens = tuple(tokenize(normalized))
        significant = tuple(
            token for token in tokens if len(token) >= 3 and token not in STOP_WORDS
        )
        return cls(
            raw=raw,
            normalized=normalized,
            tokens=tokens,
            significant_tokens=significant,
            is_compound_dish=_is_compound(significant),
        )

    @property
    def word_count(self) -> int:
        """Number of significant words."""
        return len(self.significant_tokens)


def _is_compound(significant: tuple[str, ...]) -> bool:
    if len(significant) < 2:
        return False
    items = [token for token in significant if token not in MODIFIER_WORDS]
    # "boiled egg", "large fresh apple": one item plus modifiers
    return len(items) >= 2
