"""
Board layouts: the immutable template a Board is built from.

Text format, one record per line:

    <prize_min>,<prize_max>
    <code>,<code>,...      # one line per space, in board order

Blank lines are ignored. Anything else malformed raises BoardLayoutError.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import get_args

from press_your_luck_simulator.core.errors import BoardLayoutError
from press_your_luck_simulator.core.rules import (
    CANONICAL_BOARD_SIZE,
    DOUBLE_CODE,
    PRIZE_CODE,
)
from press_your_luck_simulator.core.types import BoardName
from press_your_luck_simulator.engine.space import validate_code

BOARD_NAMES: set[str] = set(get_args(BoardName))


@dataclass(frozen=True, slots=True)
class BoardLayout:
    prize_min: int
    prize_max: int
    spaces: tuple[tuple[str, ...], ...]

    def __post_init__(self) -> None:
        if self.prize_min < 0:
            raise BoardLayoutError(f"Prize range must not be negative: {self.prize_min}")
        if self.prize_min > self.prize_max:
            raise BoardLayoutError(
                f"Prize range is reversed: {self.prize_min} > {self.prize_max}"
            )
        if not self.spaces:
            raise BoardLayoutError("Layout has no spaces")
        for outcomes in self.spaces:
            if not outcomes:
                raise BoardLayoutError("A space needs at least one outcome")
            for code in outcomes:
                _ = validate_code(code)
        if self.size != CANONICAL_BOARD_SIZE and any(
            "C" in outcomes for outcomes in self.spaces
        ):
            raise BoardLayoutError(
                f"Pick-a-Corner needs the {CANONICAL_BOARD_SIZE}-space layout, "
                f"got {self.size} spaces"
            )

    @property
    def size(self) -> int:
        return len(self.spaces)

    @property
    def outcome_count(self) -> int:
        return sum(len(outcomes) for outcomes in self.spaces)

    @property
    def double_space_count(self) -> int:
        return sum(1 for outcomes in self.spaces if DOUBLE_CODE in outcomes)

    @property
    def prize_midpoint(self) -> int:
        return (self.prize_min + self.prize_max) // 2

    def without_doubles(self) -> BoardLayout:
        """The same layout with every Double turned into a plain Prize."""
        return BoardLayout(
            self.prize_min,
            self.prize_max,
            tuple(
                tuple(PRIZE_CODE if code == DOUBLE_CODE else code for code in outcomes)
                for outcomes in self.spaces
            ),
        )

    def with_collapsed_prizes(self) -> BoardLayout:
        """Prize range pinned to its midpoint, for deterministic estimates."""
        mid = self.prize_midpoint
        return BoardLayout(mid, mid, self.spaces)


def _parse_int(token: str, line_no: int) -> int:
    try:
        return int(token.strip())
    except ValueError:
        raise BoardLayoutError(
            f"Line {line_no}: expected an integer, got {token.strip()!r}"
        ) from None


def parse_layout(text: str) -> BoardLayout:
    lines = [
        (no, line.strip())
        for no, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    if not lines:
        raise BoardLayoutError("Layout is empty")

    # 1. Prize range
    header_no, header = lines[0]
    tokens = header.split(",")
    if len(tokens) != 2:
        raise BoardLayoutError(
            f"Line {header_no}: expected '<prize_min>,<prize_max>', got {header!r}"
        )
    prize_min = _parse_int(tokens[0], header_no)
    prize_max = _parse_int(tokens[1], header_no)

    # 2. Spaces
    spaces: list[tuple[str, ...]] = []
    for no, line in lines[1:]:
        codes = tuple(token.strip() for token in line.split(","))
        for code in codes:
            if not code:
                raise BoardLayoutError(f"Line {no}: empty space code in {line!r}")
            try:
                _ = validate_code(code)
            except BoardLayoutError as e:
                raise BoardLayoutError(f"Line {no}: {e}") from None
        spaces.append(codes)

    return BoardLayout(prize_min, prize_max, tuple(spaces))


def load_layout(path: str | Path) -> BoardLayout:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BoardLayoutError(f"Cannot read board layout {path}: {e}") from e
    return parse_layout(text)


ROUND_ONE = """\
1500,3000
500S,W,1400S
W,P,1000
750S,W,P
300,400,500
M1,W,P
1000S,W,600
<2,P,800
W,P,A
500S,1000,W
P,700,W
1000,B,M2
W,P,C
500,1500,W
600S,W,P
>4,2500,W
W,D,P
800S,P,W
1250S,W,P
"""

ROUND_TWO = """\
3000,6000
1000S,W,2000
W,P,1500S
3000L,W,P
750S,1250,W
M2,W,P
2500S,W,700
<2,P,4000L
W,P,A
2000S,5000,W
P,1500,W
2000,B,M1
W,P,C
3000S,4000,W
1500S,W,P
>4,5000S,W
W,D,P
2500S,P,W
1000L,W,4000S
"""

LAYOUT_DEFINITIONS: dict[BoardName, str] = {
    "round_one": ROUND_ONE,
    "round_two": ROUND_TWO,
}


def get_layout(name_or_path: str) -> BoardLayout:
    """Resolve a built-in layout name or a layout file path."""
    if name_or_path in BOARD_NAMES:
        return parse_layout(LAYOUT_DEFINITIONS[name_or_path])
    return load_layout(name_or_path)
