"""Domain models for kingdom spellers."""

import random

from .config import MIN_TIER, STARTING_LIVES


class Slot:
    """One letter position of the masked word."""

    def __init__(self, letter: str | None = None, prefilled: bool = False):
        self.letter = letter
        self.prefilled = prefilled

    @property
    def is_empty(self) -> bool:
        return self.letter is None

    def to_dict(self) -> dict:
        return {
            'letter': self.letter,
            'prefilled': self.prefilled
        }


class Tile:
    """A tappable letter. slot_index is None while the tile is available."""

    def __init__(self, tile_id: int, letter: str, is_decoy: bool = False):
        self.tile_id = tile_id
        self.letter = letter
        self.is_decoy = is_decoy
        self.slot_index = None

    @property
    def is_placed(self) -> bool:
        return self.slot_index is not None

    def to_dict(self) -> dict:
        # is_decoy stays server-side so clients can't read the answer off the pool
        return {
            'id': self.tile_id,
            'letter': self.letter,
            'placed': self.is_placed,
            'slot_index': self.slot_index
        }


class RoundState:
    """The active puzzle: one attempt at spelling one word."""

    def __init__(self, round_id: int, word: str, definition: str, tier: int,
                 slots: list[Slot], tiles: list[Tile]):
        self.round_id = round_id
        self.word = word
        self.definition = definition
        self.tier = tier
        self.slots = slots
        self.tiles = tiles
        self.locked = False
        self.judged = False

    def get_tile(self, tile_id: int) -> Tile | None:
        for tile in self.tiles:
            if tile.tile_id == tile_id:
                return tile
        return None

    def tile_in_slot(self, slot_index: int) -> Tile | None:
        for tile in self.tiles:
            if tile.slot_index == slot_index:
                return tile
        return None

    def first_empty_slot(self) -> int | None:
        for i, slot in enumerate(self.slots):
            if slot.is_empty:
                return i
        return None

    def last_filled_slot(self) -> int | None:
        """Highest-index slot filled by the player (pre-filled slots never count)."""
        for i in range(len(self.slots) - 1, -1, -1):
            slot = self.slots[i]
            if not slot.prefilled and not slot.is_empty:
                return i
        return None

    def is_complete(self) -> bool:
        return all(not slot.is_empty for slot in self.slots)

    def formed_word(self) -> str:
        return ''.join(slot.letter or '' for slot in self.slots)

    def clear_answer(self) -> None:
        """Empty every player-filled slot and return all tiles to the pool."""
        for slot in self.slots:
            if not slot.prefilled:
                slot.letter = None
        for tile in self.tiles:
            tile.slot_index = None

    def to_dict(self) -> dict:
        return {
            'round_id': self.round_id,
            'definition': self.definition,
            'word_length': len(self.word),
            'slots': [s.to_dict() for s in self.slots],
            'tiles': [t.to_dict() for t in self.tiles],
            'locked': self.locked,
            'judged': self.judged
        }


class Progression:
    """Session-lifetime bookkeeping: xp, lives, tier and the word order."""

    def __init__(self):
        self.xp = 0
        self.lives = STARTING_LIVES
        self.tier = MIN_TIER
        self.word_order = []
        self.cursor = 0
        self.game_over = False

    def reset(self, words: list[str], rng: random.Random) -> None:
        """Start over with a fresh shuffle of the given words."""
        self.xp = 0
        self.lives = STARTING_LIVES
        self.tier = MIN_TIER
        self.game_over = False
        self.reshuffle(words, rng)

    def reshuffle(self, words: list[str], rng: random.Random) -> None:
        order = list(words)
        rng.shuffle(order)
        self.word_order = order
        self.cursor = 0

    @property
    def current_word(self) -> str | None:
        if 0 <= self.cursor < len(self.word_order):
            return self.word_order[self.cursor]
        return None

    def is_last_word(self) -> bool:
        return self.cursor >= len(self.word_order) - 1

    def lose_life(self) -> bool:
        """Take a life away. Returns True if that was the last one."""
        self.lives = max(0, self.lives - 1)
        if self.lives == 0:
            self.game_over = True
        return self.game_over

    def raise_tier(self, max_tier: int | None) -> bool:
        if max_tier is not None and self.tier >= max_tier:
            return False
        self.tier += 1
        return True

    def to_dict(self) -> dict:
        return {
            'xp': self.xp,
            'lives': self.lives,
            'tier': self.tier,
            'cursor': self.cursor,
            'words_total': len(self.word_order),
            'game_over': self.game_over
        }
