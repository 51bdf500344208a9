"""Configuration schema for batch simulations using msgspec."""

from __future__ import annotations

from pathlib import Path

import msgspec

from press_your_luck_simulator.core.rules import DOUBLE_IN_PLAY_CHANCE
from press_your_luck_simulator.core.types import AgentKind
from press_your_luck_simulator.engine.layout import BoardLayout, get_layout


class SimulationConfig(msgspec.Struct):
    """
    TOML-backed configuration for batch game simulations.

    `boards` lists one entry per round: a built-in layout name or a path to a
    layout file. `agents` lists one agent kind per seat; a single entry is
    used for every seat.
    """

    boards: list[str] = msgspec.field(default_factory=lambda: ["round_one", "round_two"])
    player_count: int = 3
    agents: list[AgentKind] = msgspec.field(default_factory=lambda: ["neutral"])

    games: int = 1000
    seed: int = 0
    double_chance: float = DOUBLE_IN_PLAY_CHANCE

    # Abort a game that takes more spins than this
    max_spins_per_game: int = 2000

    def __post_init__(self) -> None:
        if self.player_count < 1:
            raise msgspec.ValidationError("player_count must be at least 1")
        if not self.boards:
            raise msgspec.ValidationError("at least one board is required")
        if len(self.agents) not in (1, self.player_count):
            raise msgspec.ValidationError(
                f"agents must list 1 or {self.player_count} entries, got {len(self.agents)}"
            )
        if not 0.0 <= self.double_chance <= 1.0:
            raise msgspec.ValidationError("double_chance must be within [0, 1]")

    @classmethod
    def from_toml(cls, path: str) -> SimulationConfig:
        """Load configuration from a TOML file path."""
        with Path(path).open("rb") as f:
            return msgspec.toml.decode(f.read(), type=cls)

    def get_layouts(self) -> list[BoardLayout]:
        """Parse every round's layout once; the results are shared read-only."""
        return [get_layout(entry) for entry in self.boards]

    def get_agent_kinds(self) -> list[AgentKind]:
        if len(self.agents) == 1:
            return self.agents * self.player_count
        return list(self.agents)
