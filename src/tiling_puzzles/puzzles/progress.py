from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .catalog import TOTAL_PUZZLES


logger = logging.getLogger(__name__)

# Code that unlocks each puzzle; puzzle 1 is always open.
PASSWORDS: Dict[int, str] = {
    2: "3141",
    3: "2718",
    4: "1618",
    5: "1414",
    6: "1732",
    7: "0693",
}

DEFAULT_STATE_FILE = Path.home() / ".tiling_puzzles" / "unlocked.json"


def is_valid_code(code: str) -> bool:
    if not isinstance(code, str):
        return False
    return len(code) == 4 and all(ch in "0123456789" for ch in code)


def check_password(puzzle_number: int, code: str) -> bool:
    """True iff `code` is the exact 4-digit unlock code of `puzzle_number`."""
    expected = PASSWORDS.get(puzzle_number)
    if expected is None or not is_valid_code(code):
        return False
    return code == expected


def default_unlocked() -> List[bool]:
    return [True] + [False] * (TOTAL_PUZZLES - 1)


class UnlockStore:
    """Which puzzles are unlocked, persisted as a JSON list of booleans."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_STATE_FILE
        self.unlocked = self._load()

    def _load(self) -> List[bool]:
        if not self.path.exists():
            return default_unlocked()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read unlock state from %s: %s", self.path, exc)
            return default_unlocked()
        if not isinstance(data, list) or not all(isinstance(v, bool) for v in data):
            logger.warning("Ignoring malformed unlock state in %s", self.path)
            return default_unlocked()
        # Stored lists from an older, shorter puzzle set are padded
        unlocked = (data + [False] * TOTAL_PUZZLES)[:TOTAL_PUZZLES]
        unlocked[0] = True
        return unlocked

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.unlocked), encoding="utf-8")

    def is_unlocked(self, puzzle_number: int) -> bool:
        if not 1 <= puzzle_number <= TOTAL_PUZZLES:
            return False
        return self.unlocked[puzzle_number - 1]

    def unlock(self, puzzle_number: int) -> None:
        if not 1 <= puzzle_number <= TOTAL_PUZZLES:
            raise ValueError(f"No puzzle numbered {puzzle_number}")
        if self.unlocked[puzzle_number - 1]:
            return
        self.unlocked[puzzle_number - 1] = True
        self.save()
        logger.info("Unlocked puzzle %d", puzzle_number)

    def try_unlock(self, puzzle_number: int, code: str) -> bool:
        if not check_password(puzzle_number, code):
            return False
        self.unlock(puzzle_number)
        return True
