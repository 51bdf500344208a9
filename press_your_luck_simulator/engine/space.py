"""
One board cell and its "space notation".

A space holds an ordered list of equally likely outcome codes:

- a bare number is cash (`500`)
- a number followed by `S` is cash plus one spin (`750S`)
- a number followed by `L` is cash or lose one Whammy (`1000L`)
- `W` Whammy, `P` Prize, `D` Double Your $$ + One Spin, `A` Add-a-One
- `B` Big Bucks, `C` Pick-a-Corner
- `M<n>`, `<n`, `>n` move / go back / advance n spaces
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from press_your_luck_simulator.core.errors import BoardLayoutError

if TYPE_CHECKING:
    from press_your_luck_simulator.core.types import OutcomeKind

SPACE_CODE_PATTERN = re.compile(r"^(?:[WPDABC]|[M<>][1-9]\d*|\d+[SL]?)$")

_LETTER_KINDS: dict[str, OutcomeKind] = {
    "W": "Whammy",
    "P": "Prize",
    "D": "Double",
    "A": "AddAOne",
    "B": "BigBucks",
    "C": "PickACorner",
}

_MOVE_KINDS: dict[str, OutcomeKind] = {
    "M": "Move",
    "<": "GoBack",
    ">": "Advance",
}

_FIXED_NAMES: dict[OutcomeKind, str] = {
    "Whammy": "Whammy",
    "Prize": "Prize",
    "Double": "Double Your $$ + One Spin",
    "AddAOne": "Add-a-One",
    "BigBucks": "Big Bucks",
    "PickACorner": "Pick-a-Corner",
}

_MOVE_VERBS: dict[OutcomeKind, str] = {
    "Move": "Move",
    "GoBack": "Go Back",
    "Advance": "Advance",
}


def validate_code(code: str) -> str:
    if not SPACE_CODE_PATTERN.match(code):
        raise BoardLayoutError(f"Invalid space code: {code!r}")
    return code


def outcome_kind(code: str) -> OutcomeKind:
    head = code[0]
    if head in _LETTER_KINDS:
        return _LETTER_KINDS[head]
    if head in _MOVE_KINDS:
        return _MOVE_KINDS[head]
    match code[-1]:
        case "S":
            return "CashPlusSpin"
        case "L":
            return "CashOrLoseWhammy"
        case _:
            return "Cash"


def cash_amount(code: str) -> int:
    """Leading number of a cash-bearing code, 0 for anything else."""
    if not code[0].isdigit():
        return 0
    if not code[-1].isdigit():
        return int(code[:-1])
    return int(code)


def move_distance(code: str) -> int:
    """Distance of a Move / Go Back / Advance code, 0 for anything else."""
    if code[0] in _MOVE_KINDS:
        return int(code[1:])
    return 0


def display_name(code: str) -> str:
    kind = outcome_kind(code)
    if kind in _FIXED_NAMES:
        return _FIXED_NAMES[kind]
    if kind in _MOVE_VERBS:
        distance = move_distance(code)
        unit = "Space" if distance == 1 else "Spaces"
        return f"{_MOVE_VERBS[kind]} {distance} {unit}"

    amount = cash_amount(code)
    if kind == "CashPlusSpin":
        return f"${amount:,} + One Spin"
    if kind == "CashOrLoseWhammy":
        return f"${amount:,} or Lose-1-Whammy"
    return f"${amount:,}"


@dataclass(slots=True)
class Space:
    outcomes: list[str]
    rng: random.Random = field(repr=False, compare=False)
    shown_index: int = 0

    def __post_init__(self) -> None:
        if not self.outcomes:
            raise BoardLayoutError("A space needs at least one outcome")
        for code in self.outcomes:
            _ = validate_code(code)
        if not 0 <= self.shown_index < len(self.outcomes):
            raise BoardLayoutError(
                f"Shown index {self.shown_index} out of range for {self.outcomes}"
            )

    @property
    def kind(self) -> OutcomeKind:
        return outcome_kind(self.current_value())

    def current_value(self) -> str:
        return self.outcomes[self.shown_index]

    def randomize(self) -> None:
        self.shown_index = self.rng.randrange(len(self.outcomes))

    def show(self, index: int) -> None:
        if not 0 <= index < len(self.outcomes):
            raise IndexError(f"Outcome index {index} out of range")
        self.shown_index = index

    def override_shown(self, code: str) -> None:
        """Permanently replace the showing outcome (e.g. a used Double becomes a Prize)."""
        self.outcomes[self.shown_index] = validate_code(code)

    def cash_amount(self) -> int:
        return cash_amount(self.current_value())

    def move_distance(self) -> int:
        return move_distance(self.current_value())

    def display_name(self) -> str:
        return display_name(self.current_value())

    def __str__(self) -> str:
        return self.display_name()
