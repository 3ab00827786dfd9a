"""Difficulty curve and cosmetic rank policy.

Difficulty follows the tier (how many full passes through the word list have
been completed), not xp. Xp only drives the companion's rank.
"""

from enum import Enum

from .config import (
    MIN_TIER, REVEAL_FRACTIONS, DECOYS_BY_TIER,
    RANK_THRESHOLDS, TOP_RANK,
    MOOD_IDLE, MOOD_CORRECT, MOOD_INCORRECT
)


class Rank(str, Enum):
    """Companion rank earned through xp."""
    ESQUIRE = 'esquire'
    KNIGHT = 'knight'
    KING = 'king'


POSES = {
    MOOD_IDLE: 'idle',
    MOOD_CORRECT: 'cheer',
    MOOD_INCORRECT: 'cry',
}


def _lookup(table: dict, tier: int):
    """Step-function lookup; tiers past the table reuse the last entry."""
    tier = max(tier, MIN_TIER)
    if tier in table:
        return table[tier]
    return table[max(table)]


def reveal_fraction(tier: int) -> float:
    """Fraction of the word's letters shown before the player starts."""
    return _lookup(REVEAL_FRACTIONS, tier)


def decoy_count(tier: int) -> int:
    """Number of wrong-letter tiles mixed into the pool."""
    return _lookup(DECOYS_BY_TIER, tier)


def reveal_count(word_length: int, tier: int) -> int:
    """How many letters to pre-fill. At least one blank is always left."""
    count = int(word_length * reveal_fraction(tier))
    return max(0, min(count, word_length - 1))


def rank_for(xp: int) -> Rank:
    for bound, rank in RANK_THRESHOLDS:
        if xp < bound:
            return Rank(rank)
    return Rank(TOP_RANK)


def display_key(rank: Rank, mood: str) -> str:
    """Key the presentation layer uses to pick the companion image."""
    return f"{Rank(rank).value}_{POSES.get(mood, 'idle')}"
