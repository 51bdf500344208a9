from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from press_your_luck_simulator.core.rules import WHAMMY_LIMIT

if TYPE_CHECKING:
    from press_your_luck_simulator.core.agent import Agent


@dataclass(slots=True)
class PlayerState:
    idx: int
    agent: Agent
    name: str = ""
    score: int = 0
    earned_spins: int = 0
    passed_spins: int = 0
    whammies: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            self.name = f"Player {self.idx}"

    @property
    def repr(self) -> str:
        return f"{self.idx}:{self.name}"

    @property
    def sort_key(self) -> tuple[int, int]:
        """Score ascending, then id ascending (lower id wins ties)."""
        return (self.score, self.idx)

    @property
    def has_spins(self) -> bool:
        return self.earned_spins > 0 or self.passed_spins > 0

    @property
    def whammied_out(self) -> bool:
        return self.whammies >= WHAMMY_LIMIT

    def reset(self) -> None:
        self.score = 0
        self.earned_spins = 0
        self.passed_spins = 0
        self.whammies = 0


@dataclass(frozen=True, slots=True)
class BoardStats:
    """Expected values measured once per board by the bootstrap self-play."""

    expected_cash: float = 0.0
    expected_extra_spin_probability: float = 0.0
    expected_whammy_probability: float = 0.0
    # Number of (space, outcome) pairs the averages were taken over
    outcome_count: int = 0


@dataclass(slots=True)
class LogContext:
    game_id: int
    round: int = 0
    total_turn: int = 0
    turn_log_count: int = 0
    current_player_repr: str = "_"

    def new_turn(self, player_repr: str) -> None:
        self.total_turn += 1
        self.turn_log_count = 0
        self.current_player_repr = player_repr

    def inc_log_count(self) -> None:
        self.turn_log_count += 1
