from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .grid import Board
from .pieces import Cell, PieceType, ShapeCatalog


@dataclass(frozen=True)
class PuzzleConfig:
    """Everything that distinguishes one tiling puzzle from another."""
    rows: int
    cols: int
    allowed_types: Tuple[PieceType, ...]
    excluded_cells: FrozenSet[Cell] = frozenset()
    singleton_types: FrozenSet[PieceType] = frozenset()
    restricted_cells: FrozenSet[Tuple[PieceType, Cell]] = frozenset()
    target_covered_count: Optional[int] = None  # defaults to rows * cols - excluded
    require_singletons: bool = False
    lock_when_solved: bool = False

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid must be non-empty, got {self.rows}x{self.cols}")
        allowed = tuple(PieceType(t) for t in self.allowed_types)
        if not allowed:
            raise ValueError("At least one piece type must be allowed")
        object.__setattr__(self, "allowed_types", allowed)
        object.__setattr__(self, "excluded_cells", frozenset(tuple(c) for c in self.excluded_cells))
        object.__setattr__(self, "singleton_types", frozenset(PieceType(t) for t in self.singleton_types))
        object.__setattr__(
            self,
            "restricted_cells",
            frozenset((PieceType(t), tuple(c)) for t, c in self.restricted_cells),
        )
        unknown = {t for t in self.singleton_types if t not in allowed}
        unknown |= {t for t, _ in self.restricted_cells if t not in allowed}
        if unknown:
            names = sorted(t.name for t in unknown)
            raise ValueError(f"Constrained piece types not in allowed_types: {names}")
        outside = {c for c in self.excluded_cells if not self.in_bounds(c)}
        outside |= {c for _, c in self.restricted_cells if not self.in_bounds(c)}
        if outside:
            raise ValueError(f"Constrained cells outside the {self.rows}x{self.cols} grid: {sorted(outside)}")
        free_cells = self.rows * self.cols - len(self.excluded_cells)
        if self.target_covered_count is None:
            object.__setattr__(self, "target_covered_count", free_cells)
        elif self.target_covered_count > free_cells:
            raise ValueError(f"target_covered_count {self.target_covered_count} exceeds the {free_cells} free cells")

    @property
    def default_type(self) -> PieceType:
        return self.allowed_types[0]

    def in_bounds(self, cell: Cell) -> bool:
        r, c = cell
        return 0 <= r < self.rows and 0 <= c < self.cols


class RejectReason(Enum):
    OUT_OF_BOUNDS = "out_of_bounds"
    EXCLUDED_CELL = "excluded_cell"
    RESTRICTED_CELL = "restricted_cell"
    SINGLETON_VIOLATION = "singleton_violation"
    OVERLAP = "overlap"
    # Session-level refusals, never produced by validate_placement
    TYPE_NOT_ALLOWED = "type_not_allowed"
    PUZZLE_SOLVED = "puzzle_solved"


@dataclass(frozen=True)
class PlacementResult:
    accepted: bool
    reason: Optional[RejectReason] = None
    cells: Tuple[Cell, ...] = field(default=())

    @classmethod
    def reject(cls, reason: RejectReason, cells: Tuple[Cell, ...] = ()) -> "PlacementResult":
        return cls(accepted=False, reason=reason, cells=cells)


def validate_placement(
    config: PuzzleConfig,
    board: Board,
    kind: PieceType,
    rotation: int,
    anchor: Cell,
) -> PlacementResult:
    """Decide whether placing `kind` at `anchor` is legal on `board`.

    Pure: the board is never modified. The order of the checks only decides
    which reason gets reported when several apply.
    """
    shape = ShapeCatalog.cells(kind, anchor, rotation)
    kind = PieceType(kind)

    if not all(config.in_bounds(cell) for cell in shape):
        return PlacementResult.reject(RejectReason.OUT_OF_BOUNDS, shape)
    if any(cell in config.excluded_cells for cell in shape):
        return PlacementResult.reject(RejectReason.EXCLUDED_CELL, shape)
    if any((kind, cell) in config.restricted_cells for cell in shape):
        return PlacementResult.reject(RejectReason.RESTRICTED_CELL, shape)
    if kind in config.singleton_types and board.count(kind) > 0:
        return PlacementResult.reject(RejectReason.SINGLETON_VIOLATION, shape)
    covered = board.covered_cells
    if any(cell in covered for cell in shape):
        return PlacementResult.reject(RejectReason.OVERLAP, shape)
    return PlacementResult(accepted=True, cells=shape)


def is_solved(config: PuzzleConfig, board: Board) -> bool:
    if len(board.covered_cells) != config.target_covered_count:
        return False
    if config.require_singletons:
        return all(board.count(kind) == 1 for kind in config.singleton_types)
    return True
