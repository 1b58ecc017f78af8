from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import pygame

from tiling_puzzles.game import Cell, PlacedPiece, PuzzleSession


Color = Tuple[int, int, int]

PIECE_PALETTE: Tuple[Color, ...] = (
    (255, 107, 107),
    (240, 101, 149),
    (204, 93, 232),
    (132, 94, 247),
    (92, 124, 250),
    (51, 154, 240),
    (34, 184, 207),
    (32, 201, 151),
    (81, 207, 102),
    (148, 216, 45),
    (252, 196, 25),
    (255, 146, 43),
)

BACKGROUND: Color = (15, 15, 20)
EMPTY_CELL: Color = (40, 40, 48)
EXCLUDED_CELL: Color = (15, 15, 20)
RESTRICTED_MARK: Color = (120, 60, 60)
PREVIEW: Color = (230, 230, 230)
TEXT: Color = (230, 230, 230)
ERROR_TEXT: Color = (255, 100, 100)
SOLVED_TEXT: Color = (120, 220, 140)


def piece_color(piece: PlacedPiece) -> Color:
    # Colour follows the id counter after it was advanced for this piece
    return PIECE_PALETTE[(piece.id + 1) % len(PIECE_PALETTE)]


def wrap_text(text: str, width: int) -> List[str]:
    """Greedy word wrap to at most `width` characters per line."""
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if len(candidate) > width and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


class Renderer:
    def __init__(self, cell_size: int = 48, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def cell_at(self, pos: Tuple[int, int], rows: int, cols: int) -> Optional[Cell]:
        """Board cell under the pixel `pos`, or None outside the grid."""
        x, y = pos
        col = (x - self.margin) // self.cell_size
        row = (y - self.margin) // self.cell_size
        if x < self.margin or y < self.margin or not (0 <= row < rows and 0 <= col < cols):
            return None
        return int(row), int(col)

    def _rect(self, cell: Cell, inset: int = 1) -> pygame.Rect:
        r, c = cell
        return pygame.Rect(
            self.margin + c * self.cell_size + inset,
            self.margin + r * self.cell_size + inset,
            self.cell_size - 2 * inset,
            self.cell_size - 2 * inset,
        )

    def draw_board(self, screen: pygame.Surface, session: PuzzleSession) -> None:
        config = session.config
        restricted = {cell for _, cell in config.restricted_cells}
        for r in range(config.rows):
            for c in range(config.cols):
                color = EXCLUDED_CELL if (r, c) in config.excluded_cells else EMPTY_CELL
                pygame.draw.rect(screen, color, self._rect((r, c)))
                if (r, c) in restricted:
                    pygame.draw.rect(screen, RESTRICTED_MARK, self._rect((r, c), inset=6), 2)
        for piece in session.pieces:
            for cell in piece.cells():
                pygame.draw.rect(screen, piece_color(piece), self._rect(cell))

    def draw_preview(self, screen: pygame.Surface, cells: Iterable[Cell]) -> None:
        for cell in cells:
            pygame.draw.rect(screen, PREVIEW, self._rect(cell, inset=3), 2)

    def draw_text(self, screen: pygame.Surface, font: pygame.font.Font, lines: Sequence[str],
                  origin: Tuple[int, int], color: Color = TEXT) -> None:
        x, y = origin
        for i, txt in enumerate(lines):
            img = font.render(txt, True, color)
            screen.blit(img, (x, y + i * (font.get_linesize() + 2)))
