from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from press_your_luck_simulator.core.types import OutcomeKind, SpinSource


class GameEvent:
    """Marker base class."""


@dataclass(frozen=True)
class RoundStartEvent(GameEvent):
    round: int
    # (player_idx, earned_spins) after allocation, in turn order
    allocation: tuple[tuple[int, int], ...]


@dataclass(frozen=True)
class TurnStartEvent(GameEvent):
    player_idx: int


@dataclass(frozen=True)
class SpinResolvedEvent(GameEvent):
    player_idx: int
    source: SpinSource
    space_index: int
    code: str
    kind: OutcomeKind
    score_before: int
    score_after: int
    whammies_after: int


@dataclass(frozen=True)
class PassEvent(GameEvent):
    player_idx: int
    # None when no opponent is left and the spins vanish
    target_idx: int | None
    spins: int


@dataclass(frozen=True)
class WhammyOutEvent(GameEvent):
    player_idx: int


@dataclass(frozen=True)
class RoundEndEvent(GameEvent):
    round: int


@dataclass(frozen=True)
class GameEndEvent(GameEvent):
    winner_idxs: tuple[int, ...]
    scores: tuple[int, ...]
