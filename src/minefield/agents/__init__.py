"""
Agents that play through MinefieldEnv.

- RandomAgent: Baseline random selection
- Evaluator: Plays agents through full games and reports metrics
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .evaluator import Evaluator

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "Evaluator",
]
