from typing import Callable

import pytest

from press_your_luck_simulator.core.agent import Agent
from tests.test_utils import GameScenario


@pytest.fixture
def scenario() -> Callable[..., GameScenario]:
    """Factory fixture to create scenarios."""

    def _builder(
        layouts: list[str],
        agents: list[Agent],
        *,
        seed: int = 0,
        double_chance: float = 0.0,
    ) -> GameScenario:
        return GameScenario(layouts, agents, seed=seed, double_chance=double_chance)

    return _builder
