"""Utility functions for kingdom spellers."""

import logging

from .config import DEFAULT_DEFINITION

logger = logging.getLogger(__name__)


def normalize_word_bank(bank: dict) -> dict[str, str]:
    """Lowercase the words and drop anything that isn't a plain alphabetic word.

    Missing definitions fall back to a generic clue.
    """
    cleaned = {}
    for word, definition in (bank or {}).items():
        w = str(word).strip().lower()
        if not w or not w.isascii() or not w.isalpha():
            logger.warning(f"Skipping invalid word bank entry: {word!r}")
            continue
        if definition is not None and not isinstance(definition, str):
            logger.warning(f"Replacing non-text definition for {w!r}: {definition!r}")
            definition = None
        cleaned[w] = (definition or '').strip() or DEFAULT_DEFINITION
    return cleaned
