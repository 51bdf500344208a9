"""Build and play independent games from a SimulationConfig."""

from __future__ import annotations

import random
import time
from collections.abc import Iterator, Sequence

import msgspec

from press_your_luck_simulator.ai import AGENT_CLASSES, RandomAgent
from press_your_luck_simulator.core.agent import Agent
from press_your_luck_simulator.core.state import PlayerState
from press_your_luck_simulator.engine.board import Board
from press_your_luck_simulator.engine.game import Game
from press_your_luck_simulator.engine.layout import BoardLayout
from press_your_luck_simulator.simulation.config import SimulationConfig
from press_your_luck_simulator.simulation.telemetry import (
    MetricsAggregator,
    PlayerResult,
    SimulationAborted,
    SpinLimitGuard,
    StateVectorRecorder,
)


class GameResult(msgspec.Struct):
    seed: int
    aborted: bool
    winner_ids: list[int]
    metrics: list[PlayerResult]
    spin_count: int
    execution_time_ms: float


def build_agents(config: SimulationConfig, rng: random.Random) -> list[Agent]:
    agents: list[Agent] = []
    for kind in config.get_agent_kinds():
        if AGENT_CLASSES[kind] is RandomAgent:
            # Seeded from the game's generator to keep the whole run reproducible
            agents.append(RandomAgent(rng=random.Random(rng.getrandbits(64))))
        else:
            agents.append(AGENT_CLASSES[kind]())
    return agents


def build_game(
    config: SimulationConfig,
    seed: int,
    *,
    layouts: Sequence[BoardLayout] | None = None,
) -> Game:
    """Fresh players and boards for one game; layouts are only read."""
    rng = random.Random(seed)
    if layouts is None:
        layouts = config.get_layouts()

    players = [
        PlayerState(idx=i + 1, agent=agent)
        for i, agent in enumerate(build_agents(config, rng))
    ]
    boards = [
        Board.from_layout(layout, rng, double_chance=config.double_chance)
        for layout in layouts
    ]
    return Game(players=players, boards=boards, rng=rng)


def run_single_game(
    config: SimulationConfig,
    seed: int,
    *,
    layouts: Sequence[BoardLayout] | None = None,
    recorder: StateVectorRecorder | None = None,
) -> GameResult:
    start = time.perf_counter()
    game = build_game(config, seed, layouts=layouts)

    metrics = MetricsAggregator()
    metrics.initialize_players(game)
    guard = SpinLimitGuard(config.max_spins_per_game)
    game.observers.extend([guard, metrics])
    if recorder is not None:
        game.observers.append(recorder)

    aborted = False
    winner_ids: list[int] = []
    try:
        winner_ids = [p.idx for p in game.play()]
    except SimulationAborted:
        aborted = True

    return GameResult(
        seed=seed,
        aborted=aborted,
        winner_ids=winner_ids,
        metrics=metrics.finalize_metrics(game),
        spin_count=guard.spins,
        execution_time_ms=(time.perf_counter() - start) * 1000,
    )


def run_batch(
    config: SimulationConfig,
    *,
    recorder: StateVectorRecorder | None = None,
) -> Iterator[GameResult]:
    """Play `config.games` games with consecutive seeds starting at `config.seed`."""
    layouts = config.get_layouts()
    for offset in range(config.games):
        yield run_single_game(
            config, config.seed + offset, layouts=layouts, recorder=recorder
        )
