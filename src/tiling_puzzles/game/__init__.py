"""Game module for Tiling Puzzles.

Exports the placement engine and supporting classes:
- PieceType / ShapeCatalog: piece kinds and their geometry under rotation
- PlacedPiece: immutable record of one placement
- Board: ordered piece sequence with derived covered cells
- PuzzleConfig: grid size, allowed pieces and cell constraints
- HistoryStack: undo/redo over board snapshots
- PuzzleSession: selection, placement and history orchestration
"""

from .pieces import Cell, PieceType, PlacedPiece, ShapeCatalog
from .grid import Board
from .rules import PlacementResult, PuzzleConfig, RejectReason, is_solved, validate_placement
from .history import HistoryStack
from .core import Action, PuzzleSession

__all__ = [
    "Cell",
    "PieceType",
    "PlacedPiece",
    "ShapeCatalog",
    "Board",
    "PlacementResult",
    "PuzzleConfig",
    "RejectReason",
    "is_solved",
    "validate_placement",
    "HistoryStack",
    "Action",
    "PuzzleSession",
]
