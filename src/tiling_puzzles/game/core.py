from __future__ import annotations

import logging
import operator
from enum import IntEnum
from typing import Dict, Optional, Tuple

from .grid import Board
from .history import HistoryStack
from .pieces import Cell, PieceType, PlacedPiece, ShapeCatalog
from .rules import PlacementResult, PuzzleConfig, RejectReason, is_solved, validate_placement


logger = logging.getLogger(__name__)


def _as_cell(anchor: Cell) -> Cell:
    r, c = anchor
    return operator.index(r), operator.index(c)


class Action(IntEnum):
    ROTATE = 0
    UNDO = 1
    REDO = 2
    RESET = 3
    NONE = 4


class PuzzleSession:
    """One player's attempt at one puzzle.

    Holds the piece selection and the placement history. Rejected actions
    never raise: they leave the state untouched and report why.
    """

    def __init__(self, config: PuzzleConfig) -> None:
        self.config = config
        self.history = HistoryStack()
        self.active_type: PieceType = config.default_type
        self._rotations: Dict[PieceType, int] = {}
        self.next_id = 0
        self.reset()

    # --- read accessors -------------------------------------------------

    @property
    def board(self) -> Board:
        return self.history.current

    @property
    def pieces(self) -> Tuple[PlacedPiece, ...]:
        return self.history.current.pieces

    @property
    def active_rotation(self) -> int:
        return self._rotations[self.active_type]

    @property
    def covered_count(self) -> int:
        return len(self.board.covered_cells)

    def is_solved(self) -> bool:
        return is_solved(self.config, self.board)

    def is_type_available(self, kind: PieceType) -> bool:
        """False for types that are not allowed or are singletons already placed."""
        if kind not in self.config.allowed_types:
            return False
        return not (kind in self.config.singleton_types and self.board.count(kind) > 0)

    def _locked(self) -> bool:
        return self.config.lock_when_solved and self.is_solved()

    # --- selection ------------------------------------------------------

    def select_type(self, kind: PieceType) -> bool:
        if kind not in self.config.allowed_types:
            logger.debug("Ignoring selection of disallowed type %r", kind)
            return False
        self.active_type = PieceType(kind)
        return True

    def rotate(self) -> int:
        if not self._locked():
            self._rotations[self.active_type] = ShapeCatalog.next_rotation(
                self.active_type, self.active_rotation
            )
        return self.active_rotation

    # --- placement ------------------------------------------------------

    def check(self, anchor: Cell) -> PlacementResult:
        """Validate the active piece at `anchor` without changing anything."""
        if self.active_type not in self.config.allowed_types:
            return PlacementResult.reject(RejectReason.TYPE_NOT_ALLOWED)
        if self._locked():
            return PlacementResult.reject(RejectReason.PUZZLE_SOLVED)
        return validate_placement(self.config, self.board, self.active_type, self.active_rotation, _as_cell(anchor))

    def place(self, anchor: Cell) -> PlacementResult:
        result = self.check(anchor)
        if not result.accepted:
            logger.debug("Rejected %s at %s: %s", self.active_type.name, _as_cell(anchor), result.reason.value)
            return result
        piece = PlacedPiece(
            id=self.next_id,
            kind=self.active_type,
            anchor=_as_cell(anchor),
            rotation=self.active_rotation,
        )
        self.next_id += 1
        self.history.place(piece)
        logger.debug("Placed %s", piece)
        if self.is_solved():
            logger.info("Puzzle solved with %d pieces", len(self.pieces))
        return result

    def preview_cells(self, anchor: Cell) -> Optional[Tuple[Cell, ...]]:
        result = self.check(anchor)
        return result.cells if result.accepted else None

    # --- history --------------------------------------------------------

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def reset(self) -> None:
        self.history.reset()
        self.next_id = 0
        self.active_type = self.config.default_type
        self._rotations = {kind: ShapeCatalog.rotations(kind)[0] for kind in self.config.allowed_types}

    def step(self, action: Action) -> bool:
        """Apply a keyboard-style action; returns whether anything changed."""
        if action == Action.ROTATE:
            before = self.active_rotation
            return self.rotate() != before
        if action == Action.UNDO:
            return self.undo()
        if action == Action.REDO:
            return self.redo()
        if action == Action.RESET:
            self.reset()
            return True
        return False
