"""Configuration constants for kingdom spellers."""

DEFAULT_GRADE = 1
MIN_TIER = 1
MAX_TIER = 4

# Scoring and lives
XP_PER_WORD = 10
STARTING_LIVES = 3

# Feedback delays before the next transition
CORRECT_DELAY_MS = 1000   # kid can see the reaction
WRONG_DELAY_MS = 700

# Difficulty curve by tier (tiers past the last key reuse the last value)
REVEAL_FRACTIONS = {1: 0.75, 2: 0.5, 3: 0.25, 4: 0.0}
DECOYS_BY_TIER = {1: 3, 2: 5, 3: 7, 4: 7}

# Cosmetic rank thresholds: xp below the bound gets the rank
RANK_THRESHOLDS = [(150, 'esquire'), (300, 'knight')]
TOP_RANK = 'king'

ALPHABET = 'abcdefghijklmnopqrstuvwxyz'
DEFAULT_DEFINITION = 'a word to learn'

# Undo policies
UNDO_TOGGLE = 'toggle'    # tap a placed tile (or slot) to take it back
UNDO_STACK = 'stack'      # undo always removes the last filled blank
UNDO_POLICIES = (UNDO_TOGGLE, UNDO_STACK)

# Companion moods
MOOD_IDLE = 'idle'
MOOD_CORRECT = 'correct'
MOOD_INCORRECT = 'incorrect'
