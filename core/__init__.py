from .models import Slot, Tile, RoundState, Progression
from .interfaces import Speaker, WordBankSource, Scheduler
from .engine import SpellingGame
from .progression import Rank, reveal_fraction, decoy_count, rank_for, display_key
from .scheduler import VirtualScheduler, WallClockScheduler
from .word_banks import StaticWordBankSource
from .config import (
    MIN_TIER, MAX_TIER, XP_PER_WORD, STARTING_LIVES,
    CORRECT_DELAY_MS, WRONG_DELAY_MS,
    UNDO_TOGGLE, UNDO_STACK
)

__all__ = [
    'Slot', 'Tile', 'RoundState', 'Progression',
    'Speaker', 'WordBankSource', 'Scheduler',
    'SpellingGame',
    'Rank', 'reveal_fraction', 'decoy_count', 'rank_for', 'display_key',
    'VirtualScheduler', 'WallClockScheduler',
    'StaticWordBankSource',
    'MIN_TIER', 'MAX_TIER', 'XP_PER_WORD', 'STARTING_LIVES',
    'CORRECT_DELAY_MS', 'WRONG_DELAY_MS',
    'UNDO_TOGGLE', 'UNDO_STACK'
]
