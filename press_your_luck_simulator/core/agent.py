from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from press_your_luck_simulator.core.state import PlayerState
    from press_your_luck_simulator.engine.board import Board
    from press_your_luck_simulator.engine.game import Game
    from press_your_luck_simulator.engine.space import Space


@dataclass
class DecisionContext:
    player: PlayerState
    board: Board
    # None while the board bootstraps its statistics outside of any game
    game: Game | None = None


@dataclass
class SelectionDecisionContext[T](DecisionContext):
    options: list[T] = field(default_factory=list)


@dataclass
class MoneyDecisionContext(DecisionContext):
    amount: int = 0


class Agent:
    """
    Decision contract every strategy implements.

    The engine only consults it at real decision points:
    - `press_or_pass` while the player holds earned spins
    - `choose_move_target` when a movement space offers more than one target
    - `money_or_lose_whammy` when the player already has a Whammy
    - `choose_pass_target` when several opponents tie for the lead
    """

    def press_or_pass(self, ctx: DecisionContext) -> bool:
        _ = ctx
        return NotImplemented

    def choose_move_target(self, ctx: SelectionDecisionContext[Space]) -> Space:
        _ = ctx
        return NotImplemented

    def money_or_lose_whammy(self, ctx: MoneyDecisionContext) -> bool:
        _ = ctx
        return NotImplemented

    def choose_pass_target(
        self, ctx: SelectionDecisionContext[PlayerState]
    ) -> PlayerState:
        _ = ctx
        return NotImplemented

    def on_state_changed(self, ctx: DecisionContext) -> None:
        # Observers and learners hook in here
        _ = ctx
