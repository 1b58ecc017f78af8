from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional, Set

from tiling_puzzles.game import PuzzleSession
from tiling_puzzles.puzzles import TOTAL_PUZZLES, PuzzleSpec, UnlockStore, get_puzzle


logger = logging.getLogger(__name__)

CODE_LENGTH = 4
ERROR_DISPLAY_SECONDS = 2.0


class Screen(Enum):
    LOCKED = auto()
    PLAYING = auto()
    PLACEHOLDER = auto()


class AppState:
    """Navigation, lock screen input and the session of the visible puzzle.

    Moving to another puzzle starts a fresh session, so leaving a puzzle
    discards its board.
    """

    def __init__(self, store: UnlockStore, puzzle_number: int = 1) -> None:
        self.store = store
        self.code = ""
        self.error = ""
        self.error_timer = 0.0
        self.marked_solved: Set[int] = set()
        self.puzzle: PuzzleSpec = get_puzzle(puzzle_number)
        self.session: Optional[PuzzleSession] = None
        self.goto(puzzle_number)

    @property
    def screen(self) -> Screen:
        if not self.store.is_unlocked(self.puzzle.number):
            return Screen.LOCKED
        if not self.puzzle.playable:
            return Screen.PLACEHOLDER
        return Screen.PLAYING

    def goto(self, puzzle_number: int) -> None:
        if not 1 <= puzzle_number <= TOTAL_PUZZLES:
            return
        self.puzzle = get_puzzle(puzzle_number)
        self.session = PuzzleSession(self.puzzle.config) if self.puzzle.playable else None
        self.code = ""
        self.error = ""
        self.error_timer = 0.0

    def next_puzzle(self) -> None:
        self.goto(self.puzzle.number + 1)

    def previous_puzzle(self) -> None:
        self.goto(self.puzzle.number - 1)

    # --- lock screen ----------------------------------------------------

    def enter_digit(self, digit: str) -> None:
        if digit.isdigit() and len(digit) == 1 and len(self.code) < CODE_LENGTH:
            self.code += digit

    def backspace(self) -> None:
        self.code = self.code[:-1]

    def submit_code(self) -> bool:
        if self.store.try_unlock(self.puzzle.number, self.code):
            self.code = ""
            return True
        logger.info("Wrong code entered for puzzle %d", self.puzzle.number)
        self.error = "Incorrect Password"
        self.error_timer = ERROR_DISPLAY_SECONDS
        self.code = ""
        return False

    def tick(self, dt: float) -> None:
        if self.error_timer > 0.0:
            self.error_timer = max(0.0, self.error_timer - dt)
            if self.error_timer == 0.0:
                self.error = ""

    # --- solved state ---------------------------------------------------

    def mark_solved(self) -> None:
        if self.screen is Screen.PLACEHOLDER:
            self.marked_solved.add(self.puzzle.number)

    def is_solved(self) -> bool:
        if self.session is not None:
            return self.session.is_solved()
        return self.puzzle.number in self.marked_solved
