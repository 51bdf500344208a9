from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, override

from press_your_luck_simulator.core.agent import (
    Agent,
    DecisionContext,
    MoneyDecisionContext,
    SelectionDecisionContext,
)

if TYPE_CHECKING:
    from press_your_luck_simulator.core.state import PlayerState
    from press_your_luck_simulator.engine.space import Space


@dataclass
class RandomAgent(Agent):
    """Coin-flip baseline with its own generator, so it never disturbs the game's."""

    rng: random.Random = field(default_factory=random.Random)
    press_chance: float = 0.5

    @override
    def press_or_pass(self, ctx: DecisionContext) -> bool:
        return self.rng.random() < self.press_chance

    @override
    def choose_move_target(self, ctx: SelectionDecisionContext[Space]) -> Space:
        return self.rng.choice(ctx.options)

    @override
    def money_or_lose_whammy(self, ctx: MoneyDecisionContext) -> bool:
        return self.rng.random() < 0.5

    @override
    def choose_pass_target(
        self, ctx: SelectionDecisionContext[PlayerState]
    ) -> PlayerState:
        return self.rng.choice(ctx.options)
