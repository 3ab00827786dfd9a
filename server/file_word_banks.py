"""File-based word bank source."""

import json
import os

from core.interfaces import WordBankSource


class FileWordBankSource(WordBankSource):
    """Loads grade word banks from a JSON file.

    Expected layout: {"1": {"cat": "a small pet", ...}, "2": {...}}
    """

    def __init__(self, bank_file: str):
        self.bank_file = os.path.expanduser(bank_file)
        self._banks = None

    def _load(self) -> dict[int, dict[str, str]]:
        if self._banks is None:
            if not os.path.exists(self.bank_file):
                raise FileNotFoundError(
                    f"Word bank file not found at {self.bank_file}\n"
                    f'Expected JSON like: {{"1": {{"cat": "a small furry pet"}}}}'
                )
            with open(self.bank_file, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"Word bank file {self.bank_file} must hold a JSON object")
            banks = {}
            for grade, words in data.items():
                if not str(grade).isdigit() or not isinstance(words, dict):
                    raise ValueError(
                        f"Bad grade entry {grade!r} in {self.bank_file}: "
                        f"keys must be grade numbers mapping to word objects"
                    )
                banks[int(grade)] = dict(words)
            self._banks = banks
        return self._banks

    def list_grades(self) -> list[int]:
        return sorted(self._load())

    def get_bank(self, grade: int) -> dict[str, str] | None:
        bank = self._load().get(grade)
        return dict(bank) if bank is not None else None
