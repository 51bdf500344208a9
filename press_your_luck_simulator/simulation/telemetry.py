from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import msgspec

from press_your_luck_simulator.core.events import (
    PassEvent,
    SpinResolvedEvent,
    WhammyOutEvent,
)

if TYPE_CHECKING:
    from press_your_luck_simulator.core.events import GameEvent
    from press_your_luck_simulator.engine.game import Game


class SimulationAborted(Exception):
    """Raised by a guard observer to stop a game that ran too long."""


class PlayerResult(msgspec.Struct):
    player_id: int
    agent: str
    final_score: int = 0
    won: bool = False
    spins_taken: int = 0
    passed_spins_taken: int = 0
    whammies_hit: int = 0
    passes: int = 0
    spins_passed_away: int = 0
    whammied_out: bool = False


@dataclass(slots=True)
class SpinLimitGuard:
    """Stops a game once it has resolved `max_spins` spins."""

    max_spins: int
    spins: int = 0

    def on_event(self, game: Game, event: GameEvent) -> None:
        if isinstance(event, SpinResolvedEvent):
            self.spins += 1
            if self.spins > self.max_spins:
                raise SimulationAborted(
                    f"Game exceeded {self.max_spins} spins in round {game.round}"
                )


@dataclass(slots=True)
class StateVectorRecorder:
    """
    Averages the state vector each player sees after every atomic state change.

    Used to calibrate input scaling for learned decision-makers.
    """

    totals: list[float] = field(default_factory=list)
    states_measured: int = 0

    def on_event(self, game: Game, event: GameEvent) -> None:
        if not isinstance(event, (SpinResolvedEvent, PassEvent)):
            return
        for player in game.players:
            vector = game.state_vector(player)
            if not self.totals:
                self.totals = [0.0] * len(vector)
            elif len(vector) != len(self.totals):
                raise ValueError(
                    f"State vector length changed from {len(self.totals)} to {len(vector)}"
                )
            for i, value in enumerate(vector):
                self.totals[i] += value
            self.states_measured += 1

    def average_state(self) -> list[float]:
        if not self.states_measured:
            return list(self.totals)
        return [total / self.states_measured for total in self.totals]


@dataclass(slots=True)
class MetricsAggregator:
    """Accumulates per-player stats directly into PlayerResult objects."""

    results: dict[int, PlayerResult] = field(default_factory=dict)

    def initialize_players(self, game: Game) -> None:
        """
        Pre-populate results for all players in the game.
        MUST be called before the game is played.
        """
        for player in game.players:
            self.results[player.idx] = PlayerResult(
                player_id=player.idx,
                agent=type(player.agent).__name__,
            )

    def on_event(self, game: Game, event: GameEvent) -> None:
        _ = game
        match event:
            case SpinResolvedEvent():
                stats = self.results[event.player_idx]
                stats.spins_taken += 1
                if event.source == "passed":
                    stats.passed_spins_taken += 1
                if event.kind == "Whammy":
                    stats.whammies_hit += 1
            case PassEvent():
                stats = self.results[event.player_idx]
                stats.passes += 1
                stats.spins_passed_away += event.spins
            case WhammyOutEvent():
                self.results[event.player_idx].whammied_out = True
            case _:
                pass

    def finalize_metrics(self, game: Game) -> list[PlayerResult]:
        """Final scores and wins, in seat order."""
        winner_ids = {p.idx for p in game.winners()}
        output: list[PlayerResult] = []
        for player in game.players:
            stats = self.results[player.idx]
            stats.final_score = player.score
            stats.won = player.idx in winner_ids
            output.append(stats)
        return output
