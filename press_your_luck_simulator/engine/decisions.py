"""Engine-side calls into a player's decision contract, with the contract checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from press_your_luck_simulator.core.agent import (
    DecisionContext,
    MoneyDecisionContext,
    SelectionDecisionContext,
)
from press_your_luck_simulator.core.errors import ContractViolationError

if TYPE_CHECKING:
    from press_your_luck_simulator.core.state import PlayerState
    from press_your_luck_simulator.engine.board import Board
    from press_your_luck_simulator.engine.game import Game
    from press_your_luck_simulator.engine.space import Space


def _require_bool(answer: object, call: str, player: PlayerState) -> bool:
    if not isinstance(answer, bool):
        raise ContractViolationError(
            f"{call} for {player.repr} must return a bool, got {answer!r}"
        )
    return answer


def _require_option[T](answer: object, options: list[T], call: str, player: PlayerState) -> T:
    for option in options:
        if answer is option:
            return option
    raise ContractViolationError(
        f"{call} for {player.repr} returned {answer!r}, which was not offered"
    )


def ask_press_or_pass(player: PlayerState, board: Board, game: Game | None) -> bool:
    if player.earned_spins <= 0:
        raise ContractViolationError(
            f"press_or_pass asked of {player.repr} without earned spins"
        )
    answer = player.agent.press_or_pass(DecisionContext(player, board, game))
    return _require_bool(answer, "press_or_pass", player)


def ask_move_target(
    player: PlayerState,
    board: Board,
    game: Game | None,
    options: list[Space],
) -> Space:
    if len(options) < 2:
        raise ContractViolationError(
            f"choose_move_target asked of {player.repr} with {len(options)} option(s)"
        )
    ctx = SelectionDecisionContext(player, board, game, options=list(options))
    answer = player.agent.choose_move_target(ctx)
    return _require_option(answer, options, "choose_move_target", player)


def ask_money_or_lose_whammy(
    player: PlayerState,
    board: Board,
    game: Game | None,
    amount: int,
) -> bool:
    if player.whammies <= 0:
        raise ContractViolationError(
            f"money_or_lose_whammy asked of {player.repr} without any Whammies"
        )
    ctx = MoneyDecisionContext(player, board, game, amount=amount)
    answer = player.agent.money_or_lose_whammy(ctx)
    return _require_bool(answer, "money_or_lose_whammy", player)


def ask_pass_target(
    player: PlayerState,
    board: Board,
    game: Game | None,
    options: list[PlayerState],
) -> PlayerState:
    if len(options) < 2:
        raise ContractViolationError(
            f"choose_pass_target asked of {player.repr} with {len(options)} option(s)"
        )
    ctx = SelectionDecisionContext(player, board, game, options=list(options))
    answer = player.agent.choose_pass_target(ctx)
    return _require_option(answer, options, "choose_pass_target", player)
