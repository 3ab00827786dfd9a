"""Round construction: letter masking and tile pool generation."""

import random
from typing import Callable

from .config import ALPHABET
from .models import RoundState, Slot, Tile
from .progression import reveal_count, decoy_count


def pick_prefilled_positions(word: str, tier: int, rng: random.Random) -> set[int]:
    """Choose which letter positions start out revealed."""
    indices = list(range(len(word)))
    rng.shuffle(indices)
    return set(indices[:reveal_count(len(word), tier)])


def pick_decoys(word: str, count: int, rng: random.Random) -> list[str]:
    """Distinct letters that do not occur in the word.

    Returns fewer than `count` letters when the alphabet runs out.
    """
    candidates = [c for c in ALPHABET if c not in word]
    return rng.sample(candidates, min(count, len(candidates)))


def build_round(round_id: int, word: str, definition: str, tier: int,
                rng: random.Random, next_tile_id: Callable[[], int]) -> RoundState:
    """Build a fresh round for `word` at the given tier."""
    prefilled = pick_prefilled_positions(word, tier, rng)

    slots = []
    tile_letters = []
    for i, letter in enumerate(word):
        if i in prefilled:
            slots.append(Slot(letter, prefilled=True))
        else:
            slots.append(Slot())
            tile_letters.append((letter, False))

    tile_letters.extend((c, True) for c in pick_decoys(word, decoy_count(tier), rng))
    rng.shuffle(tile_letters)
    tiles = [Tile(next_tile_id(), letter, is_decoy) for letter, is_decoy in tile_letters]

    return RoundState(round_id, word, definition, tier, slots, tiles)
