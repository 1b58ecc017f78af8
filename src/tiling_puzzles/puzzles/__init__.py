"""Puzzle catalog and unlock progress.

The seven puzzles are presented in order; each one after the first is
locked behind a 4-digit code, and unlocks are persisted to a JSON file.
"""

from .catalog import PUZZLES, TOTAL_PUZZLES, PuzzleSpec, get_puzzle
from .progress import PASSWORDS, UnlockStore, check_password, is_valid_code

__all__ = [
    "PUZZLES",
    "TOTAL_PUZZLES",
    "PuzzleSpec",
    "get_puzzle",
    "PASSWORDS",
    "UnlockStore",
    "check_password",
    "is_valid_code",
]
