"""
Self-play estimate of a board's expected values.

Every (space, outcome) pair is forced onto the light a fixed number of times and
resolved for a scratch player with a neutral policy, on a copy of the board whose
prize range is pinned to its midpoint.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, override

from press_your_luck_simulator.core.agent import (
    Agent,
    DecisionContext,
    MoneyDecisionContext,
    SelectionDecisionContext,
)
from press_your_luck_simulator.core.rules import PRIZE_CODE, TRIALS_PER_OUTCOME
from press_your_luck_simulator.core.state import BoardStats, PlayerState
from press_your_luck_simulator.engine.board import Board
from press_your_luck_simulator.engine.resolution import SpinContext, land_on

if TYPE_CHECKING:
    from press_your_luck_simulator.engine.layout import BoardLayout
    from press_your_luck_simulator.engine.space import Space

logger = logging.getLogger("press_your_luck.bootstrap")


class NeutralAgent(Agent):
    """Always presses, takes the most valuable target, takes the money, passes to the first."""

    @override
    def press_or_pass(self, ctx: DecisionContext) -> bool:
        return True

    @override
    def choose_move_target(self, ctx: SelectionDecisionContext[Space]) -> Space:
        def value(space: Space) -> int:
            if space.cash_amount() > 0:
                return space.cash_amount()
            if space.current_value() == PRIZE_CODE:
                return ctx.board.average_prize_value()
            return -1

        # max() keeps the first of equal values
        return max(ctx.options, key=value)

    @override
    def money_or_lose_whammy(self, ctx: MoneyDecisionContext) -> bool:
        return True

    @override
    def choose_pass_target(
        self, ctx: SelectionDecisionContext[PlayerState]
    ) -> PlayerState:
        return ctx.options[0]


def compute_stats(
    layout: BoardLayout,
    rng: random.Random,
    *,
    trials: int = TRIALS_PER_OUTCOME,
) -> BoardStats:
    collapsed = layout.with_collapsed_prizes()
    scratch = PlayerState(idx=0, agent=NeutralAgent(), name="Scratch")

    total_score = 0
    total_spins = 0
    total_whammies = 0

    board = Board.build(collapsed, rng)
    for space_idx, outcomes in enumerate(collapsed.spaces):
        for outcome_idx in range(len(outcomes)):
            for _ in range(trials):
                # A consumed Double rewrites the board, so start over from the layout
                if board.doubles_in_play != collapsed.double_space_count:
                    board = Board.build(collapsed, rng)

                scratch.reset()
                _ = board.stop()
                _ = board.force_light(space_idx, outcome_idx)
                _ = land_on(SpinContext(board, scratch))

                total_score += scratch.score
                total_spins += scratch.earned_spins
                total_whammies += scratch.whammies

    attempts = trials * collapsed.outcome_count
    survived = attempts - total_whammies
    stats = BoardStats(
        expected_cash=total_score / survived if survived else 0.0,
        expected_extra_spin_probability=total_spins / survived if survived else 0.0,
        expected_whammy_probability=total_whammies / attempts if attempts else 0.0,
        outcome_count=collapsed.outcome_count,
    )
    logger.debug(
        "Board stats over %d trials: cash=%.1f spin=%.3f whammy=%.3f",
        attempts,
        stats.expected_cash,
        stats.expected_extra_spin_probability,
        stats.expected_whammy_probability,
    )
    return stats
