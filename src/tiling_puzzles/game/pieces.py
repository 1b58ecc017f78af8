from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple

import numpy as np


Cell = Tuple[int, int]


class PieceType(IntEnum):
    DOMINO = 1
    T_TETROMINO = 2
    SQUARE_TETROMINO = 3
    STRAIGHT_TRIOMINO = 4
    UNIT_SQUARE = 5


# Legal rotations in degrees, in cycle order.
ROTATIONS: Dict[PieceType, Tuple[int, ...]] = {
    PieceType.DOMINO: (0, 90),
    PieceType.T_TETROMINO: (0, 90, 180, 270),
    PieceType.SQUARE_TETROMINO: (0,),
    PieceType.STRAIGHT_TRIOMINO: (0, 90),
    PieceType.UNIT_SQUARE: (0,),
}


def _offsets(*cells: Cell) -> np.ndarray:
    return np.array(cells, dtype=np.int64)


# (row, col) offsets from the anchor; the anchor itself is always listed first.
OFFSETS: Dict[Tuple[PieceType, int], np.ndarray] = {
    (PieceType.DOMINO, 0): _offsets((0, 0), (0, 1)),
    (PieceType.DOMINO, 90): _offsets((0, 0), (1, 0)),
    # Anchor is the centre of the three-block bar
    (PieceType.T_TETROMINO, 0): _offsets((0, 0), (0, -1), (0, 1), (-1, 0)),
    (PieceType.T_TETROMINO, 90): _offsets((0, 0), (-1, 0), (1, 0), (0, 1)),
    (PieceType.T_TETROMINO, 180): _offsets((0, 0), (0, -1), (0, 1), (1, 0)),
    (PieceType.T_TETROMINO, 270): _offsets((0, 0), (-1, 0), (1, 0), (0, -1)),
    (PieceType.SQUARE_TETROMINO, 0): _offsets((0, 0), (0, 1), (1, 0), (1, 1)),
    (PieceType.STRAIGHT_TRIOMINO, 0): _offsets((0, 0), (-1, 0), (1, 0)),
    (PieceType.STRAIGHT_TRIOMINO, 90): _offsets((0, 0), (0, -1), (0, 1)),
    (PieceType.UNIT_SQUARE, 0): _offsets((0, 0)),
}


class ShapeCatalog:
    """Static piece geometry.

    All lookups are pure. Asking for a rotation a piece type does not have is
    a programming error and raises ``ValueError``.
    """

    @staticmethod
    def rotations(kind: PieceType) -> Tuple[int, ...]:
        try:
            return ROTATIONS[PieceType(kind)]
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Unknown piece type: {kind!r}") from exc

    @classmethod
    def offsets(cls, kind: PieceType, rotation: int) -> np.ndarray:
        if rotation not in cls.rotations(kind):
            raise ValueError(f"Invalid rotation {rotation} for {PieceType(kind).name}")
        return OFFSETS[(PieceType(kind), rotation)]

    @classmethod
    def cells(cls, kind: PieceType, anchor: Cell, rotation: int = 0) -> Tuple[Cell, ...]:
        """Absolute cells covered by `kind` anchored at `anchor` with `rotation`."""
        absolute = cls.offsets(kind, rotation) + np.asarray(anchor, dtype=np.int64)
        return tuple((int(r), int(c)) for r, c in absolute)

    @classmethod
    def next_rotation(cls, kind: PieceType, rotation: int) -> int:
        cycle = cls.rotations(kind)
        if rotation not in cycle:
            raise ValueError(f"Invalid rotation {rotation} for {PieceType(kind).name}")
        return cycle[(cycle.index(rotation) + 1) % len(cycle)]

    @classmethod
    def cell_count(cls, kind: PieceType) -> int:
        return int(cls.offsets(kind, cls.rotations(kind)[0]).shape[0])


@dataclass(frozen=True)
class PlacedPiece:
    id: int
    kind: PieceType
    anchor: Cell
    rotation: int = 0

    def cells(self) -> Tuple[Cell, ...]:
        return ShapeCatalog.cells(self.kind, self.anchor, self.rotation)
