"""Gymnasium environments for Tiling Puzzles."""

from __future__ import annotations

from gymnasium.envs.registration import register

# One environment per playable puzzle; kwargs select the board
register(
    id="TilingPuzzle-v0",
    entry_point="tiling_puzzles.env.tiling_env:TilingPuzzleEnv",
)

__all__ = ["TilingPuzzle-v0"]
