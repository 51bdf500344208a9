"""Resolving one spin: charge it, stop the board, follow redirects, pay out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from press_your_luck_simulator.core.rules import WHAMMY_LIMIT
from press_your_luck_simulator.engine.decisions import (
    ask_money_or_lose_whammy,
    ask_move_target,
)

if TYPE_CHECKING:
    from press_your_luck_simulator.core.state import PlayerState
    from press_your_luck_simulator.core.types import OutcomeKind, SpinSource
    from press_your_luck_simulator.engine.board import Board
    from press_your_luck_simulator.engine.game import Game
    from press_your_luck_simulator.engine.space import Space

logger = logging.getLogger("press_your_luck.resolution")


@dataclass(slots=True)
class SpinContext:
    board: Board
    player: PlayerState
    game: Game | None = None

    def log_info(self, msg: str) -> None:
        if self.game is not None:
            self.game.log_info(msg)
        else:
            logger.debug(msg)


@dataclass(frozen=True, slots=True)
class SpinOutcome:
    space_index: int
    code: str
    kind: OutcomeKind
    score_before: int
    score_after: int


def take_spin(ctx: SpinContext) -> tuple[SpinSource, SpinOutcome]:
    player = ctx.player

    # 1. Charge the spin (passed spins are owed first)
    source: SpinSource
    if player.passed_spins > 0:
        player.passed_spins -= 1
        source = "passed"
    elif player.earned_spins > 0:
        player.earned_spins -= 1
        source = "earned"
    else:
        raise ValueError(f"{player.repr} has no spins to take")

    # 2. Stop the board
    space = ctx.board.stop()
    ctx.log_info(f"{player.repr} stops the board on {space.display_name()}")

    # 3-4. Redirect and pay out
    return source, land_on(ctx)


def land_on(ctx: SpinContext) -> SpinOutcome:
    """Resolve whatever the light is on right now for the context's player."""
    space = follow_redirects(ctx)
    return apply_outcome(ctx, space)


def follow_redirects(ctx: SpinContext) -> Space:
    board = ctx.board
    # A chain can revisit spaces, so it is bounded by the board size
    for _ in range(board.size):
        targets = board.move_targets()
        if not targets:
            break
        if len(targets) == 1:
            target = targets[0]
        else:
            target = ask_move_target(ctx.player, board, ctx.game, targets)
        ctx.log_info(
            f"{board.lit_space().display_name()}: light moves to "
            f"#{board.index_of(target)} ({target.display_name()})"
        )
        _ = board.relocate(target)
    return board.lit_space()


def apply_whammy(ctx: SpinContext) -> None:
    player = ctx.player
    player.score = 0
    player.whammies += 1

    if player.whammies >= WHAMMY_LIMIT:
        player.earned_spins = 0
        player.passed_spins = 0
        ctx.log_info(f"!!! {player.repr} is out with {player.whammies} Whammies")
        return

    # Owed spins are never lost to a Whammy; they become the player's own
    if player.passed_spins:
        ctx.log_info(
            f"{player.repr}'s {player.passed_spins} passed spin(s) become earned spins"
        )
    player.earned_spins += player.passed_spins
    player.passed_spins = 0


def apply_outcome(ctx: SpinContext, space: Space) -> SpinOutcome:
    board = ctx.board
    player = ctx.player
    code = space.current_value()
    kind = space.kind
    score_before = player.score

    match kind:
        case "Whammy":
            apply_whammy(ctx)
        case "Prize":
            prize = board.draw_prize()
            player.score += prize
            ctx.log_info(f"{player.repr} wins a Prize worth ${prize:,}")
        case "Double":
            player.score *= 2
            player.earned_spins += 1
            board.consume_double()
        case "AddAOne":
            player.score += 10 ** len(str(player.score))
        case "Cash":
            player.score += space.cash_amount()
        case "CashPlusSpin":
            player.score += space.cash_amount()
            player.earned_spins += 1
        case "CashOrLoseWhammy":
            amount = space.cash_amount()
            if player.whammies == 0 or ask_money_or_lose_whammy(
                player, board, ctx.game, amount
            ):
                player.score += amount
            else:
                player.whammies -= 1
                ctx.log_info(f"{player.repr} loses a Whammy")
        case _:
            # Redirect chain ran out on another movement space
            ctx.log_info(f"{space.display_name()} has no effect")

    ctx.log_info(
        f"{player.repr}: {space.display_name()} -> score ${player.score:,} "
        f"(E:{player.earned_spins} P:{player.passed_spins} W:{player.whammies})"
    )
    return SpinOutcome(
        space_index=board.lit_position,
        code=code,
        kind=kind,
        score_before=score_before,
        score_after=player.score,
    )
