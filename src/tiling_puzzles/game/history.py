from __future__ import annotations

import logging
from typing import List, Tuple

from .grid import Board
from .pieces import PlacedPiece


logger = logging.getLogger(__name__)


class HistoryStack:
    """Linear undo/redo history of board snapshots.

    ``snapshots[0]`` is always the empty board and ``cursor`` always indexes
    a stored snapshot. Placing after an undo discards the redo branch.
    """

    def __init__(self) -> None:
        self._snapshots: List[Board] = [Board()]
        self._cursor = 0

    @property
    def current(self) -> Board:
        return self._snapshots[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def snapshots(self) -> Tuple[Board, ...]:
        return tuple(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def __len__(self) -> int:
        return len(self._snapshots)

    def place(self, piece: PlacedPiece) -> Board:
        """Append `piece` to the current board; the caller has validated it."""
        board = self.current.with_piece(piece)
        dropped = len(self._snapshots) - self._cursor - 1
        del self._snapshots[self._cursor + 1 :]
        self._snapshots.append(board)
        self._cursor += 1
        if dropped:
            logger.debug("Discarded %d redo snapshot(s)", dropped)
        return board

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self._cursor += 1
        return True

    def reset(self) -> None:
        self._snapshots = [Board()]
        self._cursor = 0
