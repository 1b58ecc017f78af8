from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pygame

from tiling_puzzles.game import Action, PieceType
from tiling_puzzles.puzzles import TOTAL_PUZZLES, UnlockStore
from .app_state import AppState, Screen
from .renderer import ERROR_TEXT, SOLVED_TEXT, Renderer, wrap_text


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_r: Action.ROTATE,
    pygame.K_SPACE: Action.ROTATE,
    pygame.K_u: Action.UNDO,
    pygame.K_z: Action.UNDO,
    pygame.K_y: Action.REDO,
    pygame.K_n: Action.RESET,
}

KEY_TO_TYPE_INDEX: Dict[int, int] = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
    pygame.K_5: 4,
}

PIECE_NAMES: Dict[PieceType, str] = {
    PieceType.DOMINO: "Domino",
    PieceType.T_TETROMINO: "T-tetromino",
    PieceType.SQUARE_TETROMINO: "Square tetromino",
    PieceType.STRAIGHT_TRIOMINO: "Straight triomino",
    PieceType.UNIT_SQUARE: "Square tile",
}

PANEL_WIDTH = 360
MAX_GRID = 8


def _panel_lines(state: AppState) -> List[str]:
    puzzle = state.puzzle
    lines = [f"Puzzle {puzzle.number}: {puzzle.title}", ""]
    lines += wrap_text(puzzle.description, 40)
    lines.append("")
    screen = state.screen
    if screen is Screen.LOCKED:
        code = " ".join(state.code.ljust(4, "_"))
        lines += [f"Puzzle {puzzle.number} is locked", "Enter the 4-digit password", "", code]
    elif screen is Screen.PLACEHOLDER:
        lines.append("Solved!" if state.is_solved() else "Press Enter to mark as solved")
    else:
        session = state.session
        for i, kind in enumerate(session.config.allowed_types):
            marker = ">" if kind == session.active_type else " "
            suffix = "" if session.is_type_available(kind) else " (placed)"
            lines.append(f"{marker} {i + 1}: {PIECE_NAMES[kind]}{suffix}")
        lines += [
            f"Rotation: {session.active_rotation} deg",
            f"Covered: {session.covered_count}/{session.config.target_covered_count}",
            "",
            "Select: 1-5   Rotate: R/Space",
            "Undo: U/Z   Redo: Y   Reset: N",
            "Place: left click",
        ]
    lines += ["", "Prev/next puzzle: Left/Right", "Quit: Esc"]
    return lines


def _handle_key(state: AppState, event: pygame.event.Event) -> None:
    if event.key == pygame.K_LEFT:
        state.previous_puzzle()
        return
    if event.key == pygame.K_RIGHT:
        state.next_puzzle()
        return
    screen = state.screen
    if screen is Screen.LOCKED:
        if event.key == pygame.K_BACKSPACE:
            state.backspace()
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            state.submit_code()
        elif event.unicode:
            state.enter_digit(event.unicode)
    elif screen is Screen.PLACEHOLDER:
        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            state.mark_solved()
    else:
        session = state.session
        if event.key in KEY_TO_TYPE_INDEX:
            idx = KEY_TO_TYPE_INDEX[event.key]
            allowed = session.config.allowed_types
            if idx < len(allowed) and session.is_type_available(allowed[idx]):
                session.select_type(allowed[idx])
        elif event.key in KEY_TO_ACTION:
            session.step(KEY_TO_ACTION[event.key])


def run(puzzle_number: int = 1, state_file: Optional[Path] = None, cell_size: int = 48) -> None:
    pygame.init()
    try:
        state = AppState(UnlockStore(state_file), puzzle_number)
        renderer = Renderer(cell_size=cell_size)
        board_px = MAX_GRID * cell_size
        width = renderer.margin * 3 + board_px + PANEL_WIDTH
        height = renderer.margin * 2 + board_px + 40
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Tiling Puzzles")
        font = pygame.font.SysFont(None, 24)

        running = True
        clock = pygame.time.Clock()
        while running:
            dt = clock.tick(60) / 1000.0
            state.tick(dt)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        _handle_key(state, event)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if state.screen is Screen.PLAYING:
                        config = state.session.config
                        cell = renderer.cell_at(event.pos, config.rows, config.cols)
                        if cell is not None:
                            state.session.place(cell)

            screen.fill((15, 15, 20))
            if state.screen is Screen.PLAYING:
                session = state.session
                renderer.draw_board(screen, session)
                hover = renderer.cell_at(pygame.mouse.get_pos(), session.config.rows, session.config.cols)
                if hover is not None:
                    preview = session.preview_cells(hover)
                    if preview:
                        renderer.draw_preview(screen, preview)
            x_text = renderer.margin * 2 + board_px
            renderer.draw_text(screen, font, _panel_lines(state), (x_text, renderer.margin))
            status_pos = (renderer.margin, renderer.margin * 2 + board_px)
            if state.error:
                renderer.draw_text(screen, font, [state.error], status_pos, ERROR_TEXT)
            elif state.is_solved():
                msg = (
                    "Congratulations! You have solved all the puzzles!"
                    if state.puzzle.number == TOTAL_PUZZLES
                    else f"Puzzle {state.puzzle.number} solved! Try to unlock the next one."
                )
                renderer.draw_text(screen, font, [msg], status_pos, SOLVED_TEXT)

            pygame.display.flip()
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the tiling puzzles")
    p.add_argument("--puzzle", type=int, default=1, choices=range(1, TOTAL_PUZZLES + 1))
    p.add_argument("--state-file", type=Path, default=None,
                   help="JSON file holding unlock progress (default: ~/.tiling_puzzles/unlocked.json)")
    p.add_argument("--cell-size", type=int, default=48)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    run(args.puzzle, args.state_file, args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
