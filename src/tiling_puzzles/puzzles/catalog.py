from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from tiling_puzzles.game import PieceType, PuzzleConfig


@dataclass(frozen=True)
class PuzzleSpec:
    """A numbered puzzle as shown to the player.

    `config` is None for puzzles that have no board yet; those can only be
    marked as solved by hand.
    """
    number: int
    title: str
    description: str
    config: Optional[PuzzleConfig] = None

    @property
    def playable(self) -> bool:
        return self.config is not None


PUZZLES: Dict[int, PuzzleSpec] = {
    1: PuzzleSpec(
        number=1,
        title="Domino Tiling",
        description=(
            "Tile the 6x6 grid using 2x1 dominoes without overlapping. "
            "The puzzle is solved when all squares are covered."
        ),
        config=PuzzleConfig(rows=6, cols=6, allowed_types=(PieceType.DOMINO,), lock_when_solved=True),
    ),
    2: PuzzleSpec(
        number=2,
        title="The Mutilated Chessboard",
        description=(
            "Tile this 6x6 grid, with two corners removed, using 2x1 dominoes. "
            "There are 34 squares to cover."
        ),
        config=PuzzleConfig(
            rows=6,
            cols=6,
            allowed_types=(PieceType.DOMINO,),
            excluded_cells=frozenset({(0, 0), (5, 5)}),
        ),
    ),
    3: PuzzleSpec(
        number=3,
        title="T-Tetromino Tiling (8x8)",
        description="Tile the 8x8 grid using T-tetrominoes without overlapping.",
        config=PuzzleConfig(rows=8, cols=8, allowed_types=(PieceType.T_TETROMINO,), lock_when_solved=True),
    ),
    4: PuzzleSpec(
        number=4,
        title="T-Tetromino Tiling (6x6)",
        description="Tile the 6x6 grid using T-tetrominoes without overlapping.",
        config=PuzzleConfig(rows=6, cols=6, allowed_types=(PieceType.T_TETROMINO,), lock_when_solved=True),
    ),
    5: PuzzleSpec(
        number=5,
        title="Fifteen Ts and a Square",
        description="Can we tile an 8x8 grid using 15 T-tetrominoes and one square tetromino?",
        config=PuzzleConfig(
            rows=8,
            cols=8,
            allowed_types=(PieceType.T_TETROMINO, PieceType.SQUARE_TETROMINO),
            singleton_types=frozenset({PieceType.SQUARE_TETROMINO}),
            require_singletons=True,
        ),
    ),
    6: PuzzleSpec(
        number=6,
        title="Puzzle 6",
        description=(
            "The details for this puzzle have not been provided yet. "
            "For now, you can mark it as solved."
        ),
    ),
    7: PuzzleSpec(
        number=7,
        title="Triominoes and a Tile",
        description=(
            "Is it possible to tile a 5x5 grid using 8 straight triominoes and 1 square tile, "
            "given that the square tile cannot be placed in the center cell of the grid?"
        ),
        config=PuzzleConfig(
            rows=5,
            cols=5,
            allowed_types=(PieceType.STRAIGHT_TRIOMINO, PieceType.UNIT_SQUARE),
            singleton_types=frozenset({PieceType.UNIT_SQUARE}),
            restricted_cells=frozenset({(PieceType.UNIT_SQUARE, (2, 2))}),
            require_singletons=True,
        ),
    ),
}

TOTAL_PUZZLES = len(PUZZLES)


def get_puzzle(number: int) -> PuzzleSpec:
    try:
        return PUZZLES[number]
    except KeyError as exc:
        raise ValueError(f"No puzzle numbered {number}; expected 1..{TOTAL_PUZZLES}") from exc
