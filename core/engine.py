"""Round engine: the puzzle lifecycle and progression bookkeeping."""

import itertools
import logging
import random
from typing import Callable

from .config import (
    MAX_TIER, XP_PER_WORD, CORRECT_DELAY_MS, WRONG_DELAY_MS,
    UNDO_TOGGLE, UNDO_STACK, UNDO_POLICIES,
    MOOD_IDLE, MOOD_CORRECT, MOOD_INCORRECT
)
from .interfaces import Scheduler, Speaker
from .models import Progression, RoundState, Tile
from .progression import rank_for, display_key
from .rounds import build_round
from .scheduler import VirtualScheduler
from .utils import normalize_word_bank

logger = logging.getLogger(__name__)

# Round fields of the snapshot when the bank is empty
EMPTY_ROUND = {
    'round_id': None,
    'definition': '',
    'word_length': 0,
    'slots': [],
    'tiles': [],
    'locked': False,
    'judged': False
}


class SpellingGame:
    """Single-player spelling game.

    Every player input either changes state and notifies listeners, or is
    ignored. Nothing here raises on bad input: a tap on a used tile, an undo
    with nothing to undo, or any input while feedback is showing is a no-op.

    Args:
        word_bank: {word: definition}; invalid words are skipped
        rng: random source for word order, masks and tiles
        scheduler: runs the delayed transitions after a judgment
        speaker: optional pronunciation capability
        undo_policy: UNDO_TOGGLE (take back any placed tile) or
            UNDO_STACK (undo always removes the last filled blank)
        max_tier: highest difficulty tier, or None for no cap
    """

    def __init__(self, word_bank: dict, rng: random.Random | None = None,
                 scheduler: Scheduler | None = None, speaker: Speaker | None = None,
                 undo_policy: str = UNDO_TOGGLE, max_tier: int | None = MAX_TIER,
                 correct_delay_ms: int = CORRECT_DELAY_MS,
                 wrong_delay_ms: int = WRONG_DELAY_MS):
        if undo_policy not in UNDO_POLICIES:
            raise ValueError(f"Unknown undo policy: {undo_policy}")
        self.rng = rng or random.Random()
        self.scheduler = scheduler or VirtualScheduler()
        self.speaker = speaker
        self.undo_policy = undo_policy
        self.max_tier = max_tier
        self.correct_delay_ms = correct_delay_ms
        self.wrong_delay_ms = wrong_delay_ms

        self.word_bank = {}
        self.progression = Progression()
        self.round: RoundState | None = None
        self.mood = MOOD_IDLE
        self._listeners = []
        self._round_ids = itertools.count(1)
        self._tile_ids = itertools.count(1)

        self.switch_bank(word_bank)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[dict], None]) -> None:
        """Call listener(snapshot) after every state change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[dict], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def snapshot(self) -> dict:
        """Read-only view of everything the presentation layer draws."""
        rank = rank_for(self.progression.xp)
        data = self.progression.to_dict()
        data.update({
            'max_tier': self.max_tier,
            'rank': rank.value,
            'mood': self.mood,
            'display_key': display_key(rank, self.mood),
            'undo_policy': self.undo_policy,
        })
        data.update(self.round.to_dict() if self.round else EMPTY_ROUND)
        return data

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def switch_bank(self, word_bank: dict) -> None:
        """Replace the word bank. Progress starts over."""
        self.word_bank = normalize_word_bank(word_bank)
        logger.info(f"Word bank loaded: {len(self.word_bank)} words")
        self.restart()

    def restart(self) -> None:
        """Reset xp, lives and tier, reshuffle the words and start a new round."""
        self.progression.reset(list(self.word_bank), self.rng)
        self.mood = MOOD_IDLE
        if not self.word_bank:
            logger.warning("Word bank is empty; nothing to play")
            self.round = None
            self._notify()
            return
        self.init_round(self.progression.current_word, self.progression.tier)

    def init_round(self, word: str, tier: int) -> RoundState:
        """Start a round for `word` at `tier` and make it the active round."""
        definition = self.word_bank.get(word, '')
        self.round = build_round(next(self._round_ids), word, definition, tier,
                                 self.rng, lambda: next(self._tile_ids))
        self.mood = MOOD_IDLE
        blanks = sum(1 for s in self.round.slots if s.is_empty)
        logger.info(f"Round {self.round.round_id}: tier {tier}, {blanks}/{len(word)} blanks, "
                    f"{len(self.round.tiles)} tiles")
        self._notify()
        return self.round

    def advance(self) -> None:
        """Move to the next word; a finished pass reshuffles and raises the tier."""
        progression = self.progression
        if not progression.word_order or progression.game_over:
            logger.debug("advance ignored: no words or game over")
            return
        if progression.is_last_word():
            progression.reshuffle(list(self.word_bank), self.rng)
            if progression.raise_tier(self.max_tier):
                logger.info(f"Word list finished, tier raised to {progression.tier}")
        else:
            progression.cursor += 1
        self.init_round(progression.current_word, progression.tier)

    # ------------------------------------------------------------------
    # Player input
    # ------------------------------------------------------------------

    def _accepting_input(self) -> bool:
        if self.round is None or self.progression.game_over:
            return False
        return not self.round.locked

    def tap_tile(self, tile_id: int) -> bool:
        """A tap on a tile: place it, or take it back under the toggle policy."""
        if not self._accepting_input():
            return False
        tile = self.round.get_tile(tile_id)
        if tile is None:
            return False
        if not tile.is_placed:
            return self.place_tile(tile_id)
        if self.undo_policy == UNDO_TOGGLE:
            return self.remove_tile(tile.slot_index)
        return False

    def place_tile(self, tile_id: int) -> bool:
        """Put an available tile into the first blank. Returns True if placed."""
        if not self._accepting_input():
            logger.debug(f"place_tile({tile_id}) ignored: input closed")
            return False
        tile = self.round.get_tile(tile_id)
        slot_index = self.round.first_empty_slot()
        if tile is None or tile.is_placed or slot_index is None:
            logger.debug(f"place_tile({tile_id}) ignored: tile unavailable or no blank")
            return False

        tile.slot_index = slot_index
        self.round.slots[slot_index].letter = tile.letter

        if self.round.is_complete() and not self.round.judged:
            self._judge()
        else:
            self._notify()
        return True

    def remove_tile(self, slot_index: int) -> bool:
        """Toggle policy: empty a player-filled slot and free its tile."""
        if self.undo_policy != UNDO_TOGGLE or not self._accepting_input():
            return False
        if not 0 <= slot_index < len(self.round.slots):
            return False
        slot = self.round.slots[slot_index]
        if slot.prefilled or slot.is_empty:
            return False

        tile = self.round.tile_in_slot(slot_index)
        if tile is not None:
            tile.slot_index = None
        slot.letter = None
        self._notify()
        return True

    def undo_last(self) -> bool:
        """Stack policy: empty the last filled blank and hand back a fresh tile."""
        if self.undo_policy != UNDO_STACK or not self._accepting_input():
            return False
        slot_index = self.round.last_filled_slot()
        if slot_index is None:
            return False

        slot = self.round.slots[slot_index]
        old = self.round.tile_in_slot(slot_index)
        if old is not None:
            self.round.tiles.remove(old)
        self.round.tiles.append(
            Tile(next(self._tile_ids), slot.letter, old.is_decoy if old else False))
        slot.letter = None
        self._notify()
        return True

    def speak_word(self) -> None:
        """Pronounce the current word."""
        if self.round is not None:
            self.speak(self.round.word)

    def speak(self, text: str) -> None:
        if not self.speaker or not text:
            return
        try:
            self.speaker.speak(text)
        except Exception as e:
            logger.warning(f"Speech failed for {text!r}: {e}")

    # ------------------------------------------------------------------
    # Judgment
    # ------------------------------------------------------------------

    def _judge(self) -> None:
        current = self.round
        current.judged = True
        current.locked = True
        guess = current.formed_word()

        if guess == current.word:
            self.progression.xp += XP_PER_WORD
            self.mood = MOOD_CORRECT
            logger.info(f"Round {current.round_id}: correct, xp={self.progression.xp}")
            self.scheduler.schedule_after(
                self.correct_delay_ms, lambda: self._after_correct(current.round_id))
        else:
            self.mood = MOOD_INCORRECT
            game_over = self.progression.lose_life()
            logger.info(f"Round {current.round_id}: incorrect, lives={self.progression.lives}")
            if game_over:
                logger.info("Game over")
            self.scheduler.schedule_after(
                self.wrong_delay_ms, lambda: self._after_wrong(current.round_id))
        self._notify()

    def _is_current(self, round_id: int) -> bool:
        return self.round is not None and self.round.round_id == round_id

    def _after_correct(self, round_id: int) -> None:
        if not self._is_current(round_id):
            return
        self.advance()

    def _after_wrong(self, round_id: int) -> None:
        # The round may have been replaced, or the last life lost
        if not self._is_current(round_id) or self.progression.game_over:
            return
        self.round.clear_answer()
        self.round.judged = False
        self.round.locked = False
        self.mood = MOOD_IDLE
        self._notify()
