from __future__ import annotations

from collections import Counter
from functools import cached_property
from typing import FrozenSet, Iterable, Iterator, Tuple

import numpy as np

from .pieces import Cell, PieceType, PlacedPiece


EMPTY = 0
EXCLUDED = -1


class Board:
    """Immutable ordered sequence of placed pieces.

    The piece sequence is the only stored state. Covered cells and per-type
    counts are derived from it and cached on the instance; every change
    produces a new Board via `with_piece`, so the caches never go stale.
    """

    def __init__(self, pieces: Iterable[PlacedPiece] = ()) -> None:
        self._pieces: Tuple[PlacedPiece, ...] = tuple(pieces)

    @property
    def pieces(self) -> Tuple[PlacedPiece, ...]:
        return self._pieces

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[PlacedPiece]:
        return iter(self._pieces)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._pieces == other._pieces

    def __hash__(self) -> int:
        return hash(self._pieces)

    def __repr__(self) -> str:
        return f"Board({list(self._pieces)!r})"

    @cached_property
    def covered_cells(self) -> FrozenSet[Cell]:
        covered = set()
        for piece in self._pieces:
            covered.update(piece.cells())
        return frozenset(covered)

    @cached_property
    def counts(self) -> Counter:
        return Counter(piece.kind for piece in self._pieces)

    def count(self, kind: PieceType) -> int:
        return self.counts[PieceType(kind)]

    def is_covered(self, cell: Cell) -> bool:
        return tuple(cell) in self.covered_cells

    def piece_at(self, cell: Cell) -> PlacedPiece | None:
        cell = tuple(cell)
        for piece in self._pieces:
            if cell in piece.cells():
                return piece
        return None

    def with_piece(self, piece: PlacedPiece) -> "Board":
        return Board(self._pieces + (piece,))

    def occupancy(self, rows: int, cols: int, excluded: Iterable[Cell] = ()) -> np.ndarray:
        """Grid array: 0 empty, -1 excluded, otherwise the covering piece type value.

        Cells outside ``rows x cols`` are ignored.
        """
        grid = np.full((rows, cols), EMPTY, dtype=np.int8)
        for r, c in excluded:
            if 0 <= r < rows and 0 <= c < cols:
                grid[r, c] = EXCLUDED
        for piece in self._pieces:
            for r, c in piece.cells():
                if 0 <= r < rows and 0 <= c < cols:
                    grid[r, c] = int(piece.kind)
        return grid
