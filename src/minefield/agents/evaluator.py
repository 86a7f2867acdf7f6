"""
Evaluation loop: play agents through whole games and collect metrics.
"""
import logging
from typing import Dict, Optional

from ..environment import MinefieldEnv
from ..settings import BEGINNER, BoardSettings
from .base_agent import BaseAgent


logger = logging.getLogger(__name__)


class Evaluator:
    """
    Evaluate and compare agents on a fixed board setting.
    """

    def __init__(
        self,
        settings: Optional[BoardSettings] = None,
        num_episodes: int = 100,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            settings: Board settings for evaluation.
            num_episodes: Number of games to play.
            seed: Seed for the first episode's mine layout; later episodes
                continue from the same generator.

        Raises:
            ValueError: If num_episodes is less than 1.
        """
        if num_episodes < 1:
            raise ValueError("num_episodes must be at least 1")
        self.settings = settings or BEGINNER
        self.num_episodes = num_episodes
        self.seed = seed
        # Enough for an agent that only picks closed tiles to finish a game
        self.max_steps = self.settings.tile_count

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinefieldEnv(settings=self.settings)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0

        for episode in range(self.num_episodes):
            observation, _ = env.reset(seed=self.seed if episode == 0 else None)
            agent.reset()
            info = {}

            for _ in range(self.max_steps):
                valid_actions = env.get_action_mask()
                action = agent.select_action(observation, valid_actions)
                observation, reward, terminated, truncated, info = env.step(action)

                total_reward += float(reward)
                total_steps += 1

                if terminated or truncated:
                    if info["game_state"] == "WON":
                        wins += 1
                    break

            total_revealed += info.get("revealed", 0)
            logger.debug("Episode %d finished: %s", episode, env.field.state.name)

        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        return {name: self.evaluate(agent) for name, agent in agents.items()}
