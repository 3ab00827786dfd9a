"""FastAPI server for kingdom spellers."""

import logging
import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

from core.config import DEFAULT_GRADE, UNDO_TOGGLE, UNDO_POLICIES
from core.engine import SpellingGame
from core.interfaces import Scheduler, Speaker, WordBankSource
from core.scheduler import WallClockScheduler
from core.word_banks import StaticWordBankSource

from server.file_word_banks import FileWordBankSource
from server.speech import NullSpeaker, create_speaker

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Pydantic models for API
class UserRequest(BaseModel):
    user_id: str = "default"


class TileRequest(BaseModel):
    tile_id: int
    user_id: str = "default"


class SlotRequest(BaseModel):
    slot_index: int
    user_id: str = "default"


class GradeRequest(BaseModel):
    grade: int
    user_id: str = "default"


class SlotView(BaseModel):
    letter: Optional[str]
    prefilled: bool


class TileView(BaseModel):
    id: int
    letter: str
    placed: bool
    slot_index: Optional[int]


class StateResponse(BaseModel):
    grade: int
    xp: int
    lives: int
    tier: int
    max_tier: Optional[int]
    rank: str
    mood: str  # idle | correct | incorrect
    display_key: str
    game_over: bool
    locked: bool
    judged: bool
    round_id: Optional[int]
    word_length: int
    cursor: int
    words_total: int
    undo_policy: str
    definition: str
    slots: list[SlotView]
    tiles: list[TileView]


class GradesResponse(BaseModel):
    grades: list[int]


# Global state (one in-memory game per user, nothing persisted)
word_source: WordBankSource = StaticWordBankSource()
speaker: Speaker = NullSpeaker()
scheduler: Scheduler = WallClockScheduler()
undo_policy: str = UNDO_TOGGLE
games: dict[str, SpellingGame] = {}
user_grades: dict[str, int] = {}


app = FastAPI(title="Kingdom Spellers API", description="Spelling puzzles for young learners")


@app.on_event("startup")
async def startup():
    """Read settings from the environment."""
    global word_source, speaker, undo_policy

    bank_file = os.environ.get('SPELLERS_WORD_BANK_FILE')
    if bank_file:
        source = FileWordBankSource(bank_file)
        try:
            grades = source.list_grades()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load word banks: {e}")
            raise RuntimeError(f"SPELLERS_WORD_BANK_FILE is unusable: {e}") from e
        if not grades:
            raise RuntimeError(f"SPELLERS_WORD_BANK_FILE {bank_file} has no grades")
        word_source = source
        logger.info(f"Using word banks from {bank_file} (grades {grades})")
    else:
        word_source = StaticWordBankSource()
        logger.info("Using built-in word banks")

    speaker = create_speaker(os.environ.get('SPELLERS_SPEECH', 'none'))

    policy = os.environ.get('SPELLERS_UNDO_POLICY', UNDO_TOGGLE)
    if policy not in UNDO_POLICIES:
        raise RuntimeError(f"SPELLERS_UNDO_POLICY must be one of {', '.join(UNDO_POLICIES)}")
    undo_policy = policy


def load_bank(grade: int) -> dict[str, str]:
    """Fetch a grade's word bank or fail the request."""
    bank = word_source.get_bank(grade)
    if bank is None:
        raise HTTPException(status_code=404, detail=f"Unknown grade: {grade}")
    if not bank:
        raise HTTPException(status_code=400, detail=f"Grade {grade} has no words")
    return bank


def starting_grade() -> int:
    """DEFAULT_GRADE when the source has it, otherwise its lowest grade."""
    grades = word_source.list_grades()
    if DEFAULT_GRADE in grades or not grades:
        return DEFAULT_GRADE
    return grades[0]


def new_game(user_id: str, grade: int, bank: dict[str, str]) -> SpellingGame:
    games[user_id] = SpellingGame(bank, scheduler=scheduler,
                                  speaker=speaker, undo_policy=undo_policy)
    user_grades[user_id] = grade
    logger.info(f"New game for {user_id} (grade {grade})")
    return games[user_id]


def get_game(user_id: str = "default") -> SpellingGame:
    """Get or create the game for a user, firing any feedback delays that ran out."""
    scheduler.run_due()
    if user_id not in games:
        grade = starting_grade()
        return new_game(user_id, grade, load_bank(grade))
    return games[user_id]


def state_response(user_id: str, game: SpellingGame) -> StateResponse:
    return StateResponse(grade=user_grades[user_id], **game.snapshot())


@app.get("/")
async def root():
    """Health check."""
    return {"service": "kingdom-spellers", "status": "ok"}


@app.get("/api/grades", response_model=GradesResponse)
async def list_grades():
    """List the available word bank grades."""
    return GradesResponse(grades=word_source.list_grades())


@app.get("/api/state", response_model=StateResponse)
async def get_state(user_id: str = "default"):
    """Get the current puzzle and progress."""
    return state_response(user_id, get_game(user_id))


@app.post("/api/tap", response_model=StateResponse)
async def tap_tile(request: TileRequest):
    """Tap a tile: place it, or take it back if already placed."""
    game = get_game(request.user_id)
    game.tap_tile(request.tile_id)
    return state_response(request.user_id, game)


@app.post("/api/place", response_model=StateResponse)
async def place_tile(request: TileRequest):
    """Put a tile into the first blank."""
    game = get_game(request.user_id)
    game.place_tile(request.tile_id)
    return state_response(request.user_id, game)


@app.post("/api/remove", response_model=StateResponse)
async def remove_tile(request: SlotRequest):
    """Empty a filled blank (toggle undo policy)."""
    game = get_game(request.user_id)
    game.remove_tile(request.slot_index)
    return state_response(request.user_id, game)


@app.post("/api/undo", response_model=StateResponse)
async def undo_last(request: UserRequest):
    """Empty the last filled blank (stack undo policy)."""
    game = get_game(request.user_id)
    game.undo_last()
    return state_response(request.user_id, game)


@app.post("/api/restart", response_model=StateResponse)
async def restart(request: UserRequest):
    """Start over: full lives, zero xp, first tier."""
    game = get_game(request.user_id)
    game.restart()
    logger.info(f"Restart for {request.user_id}")
    return state_response(request.user_id, game)


@app.post("/api/grade", response_model=StateResponse)
async def switch_grade(request: GradeRequest):
    """Switch to another grade's word bank. Progress starts over."""
    bank = load_bank(request.grade)
    scheduler.run_due()
    if request.user_id not in games:
        game = new_game(request.user_id, request.grade, bank)
    else:
        game = games[request.user_id]
        user_grades[request.user_id] = request.grade
        game.switch_bank(bank)
        logger.info(f"{request.user_id} switched to grade {request.grade}")
    return state_response(request.user_id, game)


@app.post("/api/speak", response_model=StateResponse)
async def speak_word(request: UserRequest):
    """Pronounce the current word."""
    game = get_game(request.user_id)
    game.speak_word()
    return state_response(request.user_id, game)
