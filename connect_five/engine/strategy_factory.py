"""
AI Strategy Factory

Maps a difficulty (and, for HARD, a personality) to a constructed strategy
through a registry instead of an if/else chain.
"""

import random
from typing import Callable, Dict, Optional

from connect_five.engine.constants import SEARCH_DEPTH
from connect_five.engine.strategies import AIStrategy, EasyStrategy, HardStrategy, MediumStrategy
from connect_five.models.enums import AIDifficulty, AIPersonality

StrategyBuilder = Callable[[Optional[AIPersonality], int, Optional[random.Random]], AIStrategy]


def _build_easy(personality, depth, rng) -> AIStrategy:
    return EasyStrategy(rng)


def _build_medium(personality, depth, rng) -> AIStrategy:
    return MediumStrategy(rng)


def _build_hard(personality, depth, rng) -> AIStrategy:
    return HardStrategy(personality or AIPersonality.BALANCED, depth=depth, rng=rng)


# Strategy Registry
STRATEGIES: Dict[AIDifficulty, StrategyBuilder] = {
    AIDifficulty.EASY: _build_easy,
    AIDifficulty.MEDIUM: _build_medium,
    AIDifficulty.HARD: _build_hard,
}


def create_strategy(difficulty: AIDifficulty,
                    personality: Optional[AIPersonality] = None,
                    depth: int = SEARCH_DEPTH,
                    rng: Optional[random.Random] = None) -> AIStrategy:
    """
    Factory function returning the strategy for a difficulty.
    The personality is ignored below HARD.
    """
    builder = STRATEGIES.get(AIDifficulty(difficulty))
    if builder is None:
        raise ValueError(f"Unsupported difficulty: {difficulty}")
    return builder(AIPersonality(personality) if personality else None, depth, rng)
