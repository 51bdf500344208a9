from pathlib import Path

import pytest

from press_your_luck_simulator.core.errors import BoardLayoutError
from press_your_luck_simulator.core.rules import CANONICAL_BOARD_SIZE
from press_your_luck_simulator.engine.layout import (
    BOARD_NAMES,
    LAYOUT_DEFINITIONS,
    get_layout,
    load_layout,
    parse_layout,
)
from tests.test_utils import layout_text


def test_parse_layout():
    layout = parse_layout(layout_text(100, 300, "W,500", "P", "750S, D"))
    assert layout.prize_min == 100
    assert layout.prize_max == 300
    assert layout.spaces == (("W", "500"), ("P",), ("750S", "D"))
    assert layout.size == 3
    assert layout.outcome_count == 5
    assert layout.double_space_count == 1


def test_blank_lines_are_ignored():
    layout = parse_layout("\n0,10\n\nW\n100\n\n")
    assert layout.spaces == (("W",), ("100",))


@pytest.mark.parametrize("name", sorted(LAYOUT_DEFINITIONS))
def test_builtin_layouts_are_canonical(name: str):
    layout = get_layout(name)
    assert layout.size == CANONICAL_BOARD_SIZE
    assert layout.prize_min < layout.prize_max


@pytest.mark.parametrize(
    "text",
    [
        "",
        "100\nW",
        "100,200,300\nW",
        "a,200\nW",
        "300,100\nW",
        "0,100",
        "0,100\nW,,500",
        "0,100\nW,X",
        "0,100\nC\nW",
        "-500,-100\nP",
    ],
)
def test_malformed_layouts_are_fatal(text: str):
    with pytest.raises(BoardLayoutError):
        parse_layout(text)


def test_load_layout_from_file(tmp_path: Path):
    path = tmp_path / "board.txt"
    path.write_text(layout_text(0, 0, "W", "100"))
    assert load_layout(path).spaces == (("W",), ("100",))
    assert get_layout(str(path)).size == 2


def test_missing_layout_file_is_fatal(tmp_path: Path):
    with pytest.raises(BoardLayoutError):
        load_layout(tmp_path / "missing.txt")


def test_without_doubles():
    layout = parse_layout(layout_text(0, 10, "D,W", "D", "500"))
    plain = layout.without_doubles()
    assert plain.spaces == (("P", "W"), ("P",), ("500",))
    assert plain.double_space_count == 0
    # The original template is untouched
    assert layout.double_space_count == 2


def test_collapsed_prizes_use_midpoint():
    layout = parse_layout(layout_text(1000, 2001, "P"))
    collapsed = layout.with_collapsed_prizes()
    assert collapsed.prize_min == collapsed.prize_max == 1500


def test_every_board_name_has_a_layout():
    assert set(LAYOUT_DEFINITIONS) == BOARD_NAMES


def test_undecodable_layout_file_is_fatal(tmp_path: Path):
    path = tmp_path / "board.txt"
    path.write_bytes(b"0,0\n\xff\xfe100\n")
    with pytest.raises(BoardLayoutError):
        _ = load_layout(path)
