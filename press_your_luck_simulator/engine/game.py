from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from press_your_luck_simulator.core.agent import DecisionContext
from press_your_luck_simulator.core.events import (
    GameEndEvent,
    GameEvent,
    PassEvent,
    RoundEndEvent,
    RoundStartEvent,
    SpinResolvedEvent,
    TurnStartEvent,
    WhammyOutEvent,
)
from press_your_luck_simulator.core.rules import (
    ALLOCATION_DRAWS,
    FAVORED_CHANCE,
    FAVORED_SPINS,
    OTHER_CHANCE,
    OTHER_SPINS,
)
from press_your_luck_simulator.core.state import LogContext
from press_your_luck_simulator.engine import GAME_ID_COUNTER
from press_your_luck_simulator.engine.decisions import (
    ask_pass_target,
    ask_press_or_pass,
)
from press_your_luck_simulator.engine.logging import GAME_LOGGER_NAME, GameLogAdapter
from press_your_luck_simulator.engine.resolution import SpinContext, take_spin
from press_your_luck_simulator.engine.state_vector import build_state_vector

if TYPE_CHECKING:
    from press_your_luck_simulator.core.state import PlayerState
    from press_your_luck_simulator.engine.board import Board


class GameObserver(Protocol):
    def on_event(self, game: Game, event: GameEvent) -> None: ...


@dataclass
class Game:
    players: list[PlayerState]
    boards: list[Board]
    rng: random.Random = field(repr=False)
    observers: list[GameObserver] = field(default_factory=list, repr=False)
    log_context: LogContext | None = None

    round: int = 0
    turn_order: list[PlayerState] = field(default_factory=list)
    current_turn: PlayerState | None = None
    next_turn: PlayerState | None = None

    def __post_init__(self) -> None:
        if self.log_context is None:
            self.log_context = LogContext(game_id=next(GAME_ID_COUNTER))
        self._log = GameLogAdapter(logging.getLogger(GAME_LOGGER_NAME), self.log_context)

    # ---------- Queries ----------

    @property
    def current_board(self) -> Board | None:
        if 1 <= self.round <= len(self.boards):
            return self.boards[self.round - 1]
        return None

    def active_board(self) -> Board:
        board = self.current_board
        if board is None:
            raise RuntimeError(f"No board is in play in round {self.round}")
        return board

    def get_player(self, idx: int) -> PlayerState:
        for p in self.players:
            if p.idx == idx:
                return p
        raise KeyError(f"No player with id {idx}")

    def is_final_round(self) -> bool:
        return self.round == len(self.boards)

    def is_final_spin(self) -> bool:
        return self.is_final_round() and (
            sum(p.earned_spins + p.passed_spins for p in self.players) == 1
        )

    def pass_targets(self, player: PlayerState) -> list[PlayerState]:
        """Opponents still in the round holding the highest score (ties included)."""
        opponents = [p for p in self.turn_order if p is not player]
        if not opponents:
            return []
        top = max(p.score for p in opponents)
        return [p for p in opponents if p.score == top]

    def standings(self) -> list[PlayerState]:
        return sorted(self.players, key=lambda p: (-p.score, p.idx))

    def winners(self) -> list[PlayerState]:
        ranked = self.standings()
        if not ranked:
            return []
        top = ranked[0].score
        return [p for p in ranked if p.score == top]

    def state_vector(self, for_player: PlayerState) -> list[float]:
        return build_state_vector(self, for_player)

    # ---------- Logging & notification ----------

    def log_info(self, msg: str) -> None:
        self._log.info(msg)

    def publish(self, event: GameEvent) -> None:
        for observer in self.observers:
            observer.on_event(self, event)

    def notify_state_changed(self, event: GameEvent) -> None:
        """An atomic state change: every player's contract and every observer hears it."""
        board = self.active_board()
        for p in self.players:
            p.agent.on_state_changed(DecisionContext(p, board, self))
        self.publish(event)

    # ---------- Main Loop ----------

    def play(self) -> list[PlayerState]:
        for p in self.players:
            p.reset()
        self.round = 0
        self.turn_order = []
        self.current_turn = None
        self.next_turn = None

        for _ in self.boards:
            self.start_round()
            self.run_turns()
            self.end_round()

        return self.end_game()

    def start_round(self) -> None:
        self.round += 1
        self.log_context.round = self.round
        self.log_info(f"=== Round {self.round} ===")

        # Whammied-out players stay out for the rest of the game
        self.turn_order = [p for p in self.players if not p.whammied_out]
        self.allocate_spins()
        self.order_turns()

        self.log_info(
            "Turn order: "
            + ", ".join(f"{p.repr} ({p.earned_spins} spins)" for p in self.turn_order)
        )
        self.publish(
            RoundStartEvent(
                round=self.round,
                allocation=tuple((p.idx, p.earned_spins) for p in self.turn_order),
            )
        )

    def allocate_spins(self) -> None:
        if not self.turn_order:
            return
        for _ in range(ALLOCATION_DRAWS):
            favored = self.rng.randrange(len(self.turn_order))
            for i, p in enumerate(self.turn_order):
                if i == favored:
                    if self.rng.random() < FAVORED_CHANCE:
                        p.earned_spins += FAVORED_SPINS
                elif self.rng.random() < OTHER_CHANCE:
                    p.earned_spins += OTHER_SPINS

    def order_turns(self) -> None:
        if self.round == 1:
            # Fewest spins go first in the opening round
            self.turn_order.sort(key=lambda p: (p.earned_spins, p.idx))
        else:
            self.turn_order.sort(key=lambda p: p.sort_key)

    def select_turn(self) -> PlayerState | None:
        self.current_turn = None
        self.next_turn = None
        for i, p in enumerate(self.turn_order):
            if p.has_spins:
                self.current_turn = p
                self.next_turn = next(
                    (q for q in self.turn_order[i + 1 :] if q.has_spins), None
                )
                break
        return self.current_turn

    def run_turns(self) -> None:
        while (player := self.select_turn()) is not None:
            self.play_turn(player)

    def play_turn(self, player: PlayerState) -> None:
        self.log_context.new_turn(player.repr)
        self.log_info(f"{player.repr} is up (E:{player.earned_spins} P:{player.passed_spins})")
        if len(self.turn_order) == 1:
            self.log_info(f"{player.repr} is playing against the house")
        board = self.active_board()
        # On-turn and up-next flags just changed
        self.notify_state_changed(TurnStartEvent(player.idx))

        # 1. Passed spins must be taken
        while player.passed_spins > 0:
            self.spin(player, board)

        # 2. Earned spins: press or pass
        while player.earned_spins > 0:
            if ask_press_or_pass(player, board, self):
                self.log_info(f"{player.repr} presses their luck")
                self.spin(player, board)
            else:
                self.log_info(f"{player.repr} passes")
                self.pass_spins(player, board)

        if player.whammied_out:
            self.turn_order = [p for p in self.turn_order if p is not player]
            self.log_info(f"!!! {player.repr} leaves the game")
            self.publish(WhammyOutEvent(player.idx))

    def spin(self, player: PlayerState, board: Board) -> None:
        whammies_before = player.whammies
        source, outcome = take_spin(SpinContext(board, player, self))
        self.notify_state_changed(
            SpinResolvedEvent(
                player_idx=player.idx,
                source=source,
                space_index=outcome.space_index,
                code=outcome.code,
                kind=outcome.kind,
                score_before=outcome.score_before,
                score_after=outcome.score_after,
                whammies_after=player.whammies,
            )
        )
        if player.whammies > whammies_before:
            self.log_info(f"{player.repr} has {player.whammies} Whammies")

    def pass_spins(self, player: PlayerState, board: Board) -> None:
        targets = self.pass_targets(player)
        spins = player.earned_spins

        if not targets:
            # Last one standing: the spins simply go away
            player.earned_spins = 0
            target = None
            self.log_info(f"{player.repr} has no one to pass to; {spins} spin(s) vanish")
        else:
            if len(targets) == 1:
                target = targets[0]
            else:
                target = ask_pass_target(player, board, self, targets)
            target.passed_spins += spins
            player.earned_spins = 0
            self.log_info(f"The {spins} spin(s) go to {target.repr}")

        self.notify_state_changed(
            PassEvent(
                player_idx=player.idx,
                target_idx=target.idx if target is not None else None,
                spins=spins,
            )
        )

    def end_round(self) -> None:
        self.current_turn = None
        self.next_turn = None
        self.log_info(f"Round {self.round} is over")
        self.publish(RoundEndEvent(self.round))

    def end_game(self) -> list[PlayerState]:
        winners = self.winners()
        if len(winners) == 1:
            self.log_info(f"{winners[0].repr} wins with ${winners[0].score:,}")
        elif winners:
            self.log_info(
                f"Joint winners with ${winners[0].score:,}: "
                + ", ".join(p.repr for p in winners)
            )
        self.publish(
            GameEndEvent(
                winner_idxs=tuple(p.idx for p in winners),
                scores=tuple(p.score for p in self.players),
            )
        )
        return winners
