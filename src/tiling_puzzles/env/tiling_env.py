from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tiling_puzzles.game import PieceType, PuzzleConfig, PuzzleSession, ShapeCatalog, validate_placement
from tiling_puzzles.puzzles import get_puzzle


# Rotation slot i stands for i * 90 degrees
ROTATION_SLOTS = (0, 90, 180, 270)


def compute_action_mask(session: PuzzleSession) -> np.ndarray:
    """Boolean mask over (type_idx, rotation_slot, row, col) of placements that would be accepted."""
    config = session.config
    types = config.allowed_types
    mask = np.zeros((len(types), len(ROTATION_SLOTS), config.rows, config.cols), dtype=np.bool_)
    if config.lock_when_solved and session.is_solved():
        return mask
    board = session.board
    for t_idx, kind in enumerate(types):
        for rotation in ShapeCatalog.rotations(kind):
            r_idx = ROTATION_SLOTS.index(rotation)
            for row in range(config.rows):
                for col in range(config.cols):
                    result = validate_placement(config, board, kind, rotation, (row, col))
                    mask[t_idx, r_idx, row, col] = result.accepted
    return mask


class TilingPuzzleEnv(gym.Env):
    """Place pieces on one tiling puzzle through a MultiDiscrete action.

    Action: (type_idx, rotation_slot, row, col). The episode terminates when
    the puzzle is solved. Illegal actions leave the board untouched and earn
    `invalid_action_penalty`.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[PuzzleConfig] = None, puzzle: int = 1,
                 render_mode: Optional[str] = None,
                 invalid_action_penalty: float = -0.1,
                 cell_reward: float = 0.1,
                 solved_reward: float = 10.0,
                 max_episode_steps: int = 1000) -> None:
        super().__init__()
        if config is None:
            config = get_puzzle(puzzle).config
            if config is None:
                raise ValueError(f"Puzzle {puzzle} has no board")
        self.session = PuzzleSession(config)
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.cell_reward = float(cell_reward)
        self.solved_reward = float(solved_reward)
        self.max_episode_steps = int(max_episode_steps)

        rows, cols = config.rows, config.cols
        n_types = len(config.allowed_types)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-1, high=len(PieceType), shape=(rows, cols), dtype=np.int8),
                "covered": spaces.Discrete(rows * cols + 1),
            }
        )
        self.action_space = spaces.MultiDiscrete((n_types, len(ROTATION_SLOTS), rows, cols))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        config = self.session.config
        return {
            "grid": self.session.board.occupancy(config.rows, config.cols, config.excluded_cells),
            "covered": self.session.covered_count,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": compute_action_mask(self.session),
            "pieces_placed": len(self.session.pieces),
            "solved": self.session.is_solved(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.session.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        t_idx, r_idx, row, col = map(int, action)
        config = self.session.config
        self._steps += 1

        reward = self.invalid_action_penalty
        reason = None
        placed = False
        if 0 <= t_idx < len(config.allowed_types) and 0 <= r_idx < len(ROTATION_SLOTS):
            kind = config.allowed_types[t_idx]
            rotation = ROTATION_SLOTS[r_idx]
            if rotation in ShapeCatalog.rotations(kind):
                self.session.select_type(kind)
                for _ in ShapeCatalog.rotations(kind):
                    if self.session.active_rotation == rotation:
                        break
                    self.session.rotate()
                result = self.session.place((row, col))
                placed = result.accepted
                if placed:
                    reward = self.cell_reward * len(result.cells)
                else:
                    reason = result.reason.value

        terminated = self.session.is_solved()
        if terminated and placed:
            reward += self.solved_reward
        truncated = self._steps >= self.max_episode_steps and not terminated

        info = self._get_info()
        info["reject_reason"] = reason
        return self._get_obs(), float(reward), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self._get_obs()["grid"]
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(grid[y, x])
                color = (15, 15, 20) if v < 0 else (40, 40, 48) if v == 0 else (70, 200, 120)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
