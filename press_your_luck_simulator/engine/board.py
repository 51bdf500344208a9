from __future__ import annotations

import random
from dataclasses import dataclass, field
from pathlib import Path

from press_your_luck_simulator.core.rules import (
    CORNER_SPACES,
    DOUBLE_CODE,
    DOUBLE_IN_PLAY_CHANCE,
    PRIZE_CODE,
)
from press_your_luck_simulator.core.state import BoardStats
from press_your_luck_simulator.engine.layout import BoardLayout, load_layout
from press_your_luck_simulator.engine.space import Space


@dataclass
class Board:
    spaces: list[Space]
    prize_min: int
    prize_max: int
    rng: random.Random = field(repr=False)
    doubles_in_play: int = 0
    stats: BoardStats = field(default_factory=BoardStats)
    lit_position: int = 0

    @classmethod
    def build(
        cls,
        layout: BoardLayout,
        rng: random.Random,
        *,
        stats: BoardStats | None = None,
    ) -> Board:
        """Board for a layout exactly as given (no Double draw, no bootstrap)."""
        return cls(
            spaces=[Space(list(outcomes), rng) for outcomes in layout.spaces],
            prize_min=layout.prize_min,
            prize_max=layout.prize_max,
            rng=rng,
            doubles_in_play=layout.double_space_count,
            stats=stats if stats is not None else BoardStats(),
        )

    @classmethod
    def from_layout(
        cls,
        layout: BoardLayout,
        rng: random.Random,
        *,
        double_chance: float = DOUBLE_IN_PLAY_CHANCE,
    ) -> Board:
        # Imported here to avoid a top-level import cycle (bootstrap plays on Boards)
        from press_your_luck_simulator.engine.bootstrap import compute_stats

        # 1. Is Double Your $$ available on this board?
        if layout.double_space_count and rng.random() >= double_chance:
            layout = layout.without_doubles()

        # 2. Measure the board once, then build the live instance
        stats = compute_stats(layout, rng)
        return cls.build(layout, rng, stats=stats)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        rng: random.Random,
        *,
        double_chance: float = DOUBLE_IN_PLAY_CHANCE,
    ) -> Board:
        return cls.from_layout(load_layout(path), rng, double_chance=double_chance)

    # ---------- Geometry ----------

    @property
    def size(self) -> int:
        return len(self.spaces)

    @property
    def outcome_count(self) -> int:
        return sum(len(s.outcomes) for s in self.spaces)

    @property
    def double_in_play(self) -> bool:
        return self.doubles_in_play > 0

    def lit_space(self) -> Space:
        return self.spaces[self.lit_position]

    def index_of(self, space: Space) -> int:
        for idx, candidate in enumerate(self.spaces):
            if candidate is space:
                return idx
        raise ValueError("Space is not on this board")

    # ---------- Light ----------

    def stop(self) -> Space:
        for space in self.spaces:
            space.randomize()
        self.lit_position = self.rng.randrange(self.size)
        return self.lit_space()

    def force_light(self, position: int, shown_index: int | None = None) -> Space:
        """Put the light on a space (and optionally pick what it shows)."""
        space = self.spaces[position]
        if shown_index is not None:
            space.show(shown_index)
        self.lit_position = position
        return space

    def relocate(self, space: Space) -> Space:
        self.lit_position = self.index_of(space)
        return space

    def move_targets(self) -> list[Space]:
        lit = self.lit_space()
        n = self.size
        match lit.kind:
            case "Move":
                d = lit.move_distance()
                return [
                    self.spaces[(self.lit_position - d) % n],
                    self.spaces[(self.lit_position + d) % n],
                ]
            case "GoBack":
                return [self.spaces[(self.lit_position - lit.move_distance()) % n]]
            case "Advance":
                return [self.spaces[(self.lit_position + lit.move_distance()) % n]]
            case "PickACorner":
                return [self.spaces[i] for i in CORNER_SPACES if i != self.lit_position]
            case "BigBucks":
                # Strictly greatest cash wins, so ties keep the lowest index
                best = 0
                for idx in range(1, n):
                    if self.spaces[idx].cash_amount() > self.spaces[best].cash_amount():
                        best = idx
                return [self.spaces[best]]
            case _:
                return []

    # ---------- Effects ----------

    def consume_double(self) -> None:
        lit = self.lit_space()
        if lit.current_value() != DOUBLE_CODE:
            raise ValueError(
                f"Light is on {lit.display_name()!r}, not Double Your $$ + One Spin"
            )
        self.doubles_in_play = max(0, self.doubles_in_play - 1)
        lit.override_shown(PRIZE_CODE)

    def draw_prize(self) -> int:
        return self.rng.randint(self.prize_min, self.prize_max)

    def average_prize_value(self) -> int:
        return (self.prize_min + self.prize_max) // 2

    # ---------- Statistics ----------

    def expected_cash(self, player_score: int = 0) -> float:
        """Cash EV of one spin, including what a live Double would add to this score."""
        if not self.stats.outcome_count:
            return self.stats.expected_cash
        return (
            self.stats.expected_cash
            + player_score * self.doubles_in_play / self.stats.outcome_count
        )

    def expected_spins(self) -> float:
        return self.stats.expected_extra_spin_probability

    def expected_whammies(self) -> float:
        return self.stats.expected_whammy_probability
