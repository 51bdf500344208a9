"""Command-line interface for batch simulations."""

import logging
import random
import sys
from dataclasses import dataclass
from pathlib import Path

import cappa
import msgspec
from tqdm import tqdm

from press_your_luck_simulator.core.errors import BoardLayoutError
from press_your_luck_simulator.engine.board import Board
from press_your_luck_simulator.engine.logging import GAME_LOGGER_NAME, configure_logging
from press_your_luck_simulator.simulation.config import SimulationConfig
from press_your_luck_simulator.simulation.runner import GameResult, run_batch
from press_your_luck_simulator.simulation.telemetry import StateVectorRecorder


@dataclass
class Args:
    """Play many self-play games and report win rates and board statistics."""

    config: Path | None = None
    """Path to TOML configuration file (defaults are used without one)"""

    games: int | None = None
    """Override: number of games to play"""

    seed: int | None = None
    """Override: seed of the first game (games use consecutive seeds)"""

    players: int | None = None
    """Override: number of players"""

    output: Path | None = None
    """Write every game result as JSON lines to this file"""

    average_state: bool = False
    """Also report the average state vector seen by the players"""

    verbose: bool = False
    """Log every spin (best with a handful of games)"""

    def load_config(self) -> SimulationConfig:
        config = (
            SimulationConfig.from_toml(str(self.config))
            if self.config is not None
            else SimulationConfig()
        )
        overrides = {
            "games": self.games,
            "seed": self.seed,
            "player_count": self.players,
        }
        changes = {k: v for k, v in overrides.items() if v is not None}
        if changes:
            config = msgspec.structs.replace(config, **changes)
            config.__post_init__()
        return config

    def __call__(self) -> int:
        """Execute batch simulations with progress tracking."""
        if self.config is not None and not self.config.exists():
            print(f"Error: Config file not found: {self.config}", file=sys.stderr)
            return 1

        try:
            config = self.load_config()
            layouts = config.get_layouts()
        except (msgspec.ValidationError, msgspec.DecodeError) as e:
            print(f"Error: Invalid configuration: {e}", file=sys.stderr)
            return 1
        except BoardLayoutError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if self.verbose:
            configure_logging(logging.INFO)
        else:
            # Suppress game engine logs for batch runs
            logging.getLogger(GAME_LOGGER_NAME).setLevel(logging.CRITICAL)

        print(f"Boards: {config.boards}")
        print(f"Players: {config.player_count} ({', '.join(config.get_agent_kinds())})")
        print(f"Games: {config.games} from seed {config.seed}")
        print()

        # Board statistics with Double Your $$ out of play
        rng = random.Random(config.seed)
        for name, layout in zip(config.boards, layouts, strict=True):
            stats = Board.from_layout(layout, rng, double_chance=0.0).stats
            print(
                f"{name}: E[cash]=${stats.expected_cash:,.0f} "
                f"P(spin)={stats.expected_extra_spin_probability:.3f} "
                f"P(whammy)={stats.expected_whammy_probability:.3f}"
            )
        print()

        recorder = StateVectorRecorder() if self.average_state else None
        results: list[GameResult] = []
        encoder = msgspec.json.Encoder()

        out = self.output.open("wb") if self.output is not None else None
        try:
            with tqdm(total=config.games, desc="Simulating", unit="game") as pbar:
                for result in run_batch(config, recorder=recorder):
                    results.append(result)
                    if out is not None:
                        out.write(encoder.encode(result) + b"\n")
                    if result.aborted:
                        tqdm.write(
                            f"[seed {result.seed}] ABORTED after {result.spin_count} spins"
                        )
                    pbar.update(1)
        finally:
            if out is not None:
                out.close()

        self.report(config, results)
        if recorder is not None:
            print("\nAverage state vector:")
            print(", ".join(f"{v:.3f}" for v in recorder.average_state()))
        return 0

    @staticmethod
    def report(config: SimulationConfig, results: list[GameResult]) -> None:
        finished = [r for r in results if not r.aborted]
        aborted = len(results) - len(finished)

        print(f"\nCompleted: {len(finished)}")
        print(f"Aborted:   {aborted}")
        if not finished:
            return

        for seat in range(1, config.player_count + 1):
            metrics = [m for r in finished for m in r.metrics if m.player_id == seat]
            wins = sum(1 for m in metrics if m.won)
            avg_score = sum(m.final_score for m in metrics) / len(metrics)
            whammies = sum(m.whammies_hit for m in metrics) / len(metrics)
            outs = sum(1 for m in metrics if m.whammied_out)
            print(
                f"  Player {seat} ({metrics[0].agent}): "
                f"win rate={wins / len(finished):.1%}, "
                f"avg score=${avg_score:,.0f}, "
                f"whammies/game={whammies:.2f}, "
                f"whammied out={outs}"
            )

        avg_ms = sum(r.execution_time_ms for r in finished) / len(finished)
        print(f"  Average game time: {avg_ms:.2f}ms")


def main():
    """Entry point for CLI."""
    return cappa.invoke(Args)


if __name__ == "__main__":
    sys.exit(main())
