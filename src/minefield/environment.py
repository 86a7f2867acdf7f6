"""
Gymnasium environment wrapper for the minefield engine.

Lets agents drive a MineField through the standard reset/step interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .field import MineField
from .settings import BEGINNER, BoardSettings


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment around a MineField.

    Observation:
        2D array where:
        - -1 = closed tile
        - -2 = flagged tile
        - 0-8 = opened tile with adjacent mine count
        - 9 = opened mine

    Actions:
        Discrete action space of size width * height.
        Action i activates the tile at (i // width, i % width); the first
        action of an episode also places the mines.

    Rewards:
        - +1 for opening a safe tile
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action on an opened or flagged tile
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        settings: Optional[BoardSettings] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            settings: Board settings (default: beginner).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.settings = settings or BEGINNER
        self.field = MineField(self.settings)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.settings.height, self.settings.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.settings.tile_count)

        self._steps = 0
        self._total_safe_tiles = (
            self.settings.tile_count - self.settings.mine_count
        )

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        # Mine placement draws from the environment's seeded generator
        self.field.rng = self.np_random
        self.field.reset()
        self._steps = 0

        return self.field.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Tile index to activate (row * width + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        observation = self.field.get_observation()
        terminated = self.field.is_won or self.field.is_lost

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        row, col = divmod(int(action), self.settings.width)
        return row, col

    def _calculate_reward(self, row: int, col: int) -> float:
        """
        Activate a tile and score the outcome.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        tile = self.field.get_tile(row, col)
        if tile is None or not tile.is_closed:
            return -0.1

        self.field.activate(row, col)

        if self.field.is_won:
            return 10.0
        if self.field.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        opened = sum(
            1 for tile in self.field.tiles
            if tile.is_opened and not tile.has_mine
        )
        return {
            "steps": self._steps,
            "revealed": opened,
            "total_safe": self._total_safe_tiles,
            "game_state": self.field.state.name,
            "elapsed_seconds": self.field.elapsed_seconds,
            "mines_remaining": self.field.mines_remaining,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        symbols = {-1: ".", -2: "F", 9: "*", 0: " "}
        lines = []
        for row in self.field.get_observation():
            lines.append(
                " ".join(symbols.get(int(val), str(int(val))) for val in row)
            )
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = closed tile.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.field.get_valid_actions():
            mask[row * self.settings.width + col] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    settings: Optional[BoardSettings] = None,
) -> gym.vector.VectorEnv:
    """
    Create a vectorized environment for parallel simulation.

    Args:
        n_envs: Number of parallel environments.
        settings: Board settings.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinefieldEnv:
        return MinefieldEnv(settings=settings)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
