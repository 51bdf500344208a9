import random

import pytest

from press_your_luck_simulator.core.rules import CORNER_SPACES
from press_your_luck_simulator.engine.board import Board
from press_your_luck_simulator.engine.bootstrap import compute_stats
from press_your_luck_simulator.engine.layout import get_layout, parse_layout
from tests.test_utils import layout_text


def build(*spaces: str, prize_min: int = 0, prize_max: int = 0, seed: int = 0) -> Board:
    layout = parse_layout(layout_text(prize_min, prize_max, *spaces))
    return Board.build(layout, random.Random(seed))


def test_move_offers_both_directions():
    board = build("100", "M1", "200", "300", "400")
    _ = board.force_light(1)
    assert board.move_targets() == [board.spaces[0], board.spaces[2]]


def test_move_wraps_around():
    board = build("M2", "100", "200", "300", "400")
    _ = board.force_light(0)
    targets = board.move_targets()
    assert targets[0] is board.spaces[3]
    assert targets[1] is board.spaces[2]


def test_go_back_and_advance_wrap():
    board = build("100", "<2", "200", ">4", "300")
    _ = board.force_light(1)
    assert board.move_targets() == [board.spaces[4]]
    _ = board.force_light(3)
    assert board.move_targets() == [board.spaces[2]]


def test_pick_a_corner_offers_other_corners():
    board = Board.build(get_layout("round_one"), random.Random(0))
    _ = board.force_light(11, shown_index=2)
    assert board.lit_space().kind == "PickACorner"
    targets = board.move_targets()
    assert len(targets) == len(CORNER_SPACES)
    assert all(t is board.spaces[i] for t, i in zip(targets, CORNER_SPACES, strict=True))


def test_pick_a_corner_on_a_corner_skips_itself():
    board = build("C", *["100"] * 17)
    _ = board.force_light(0)
    targets = board.move_targets()
    assert len(targets) == len(CORNER_SPACES) - 1
    assert all(t is not board.spaces[0] for t in targets)


def test_big_bucks_goes_to_lowest_index_of_greatest_cash():
    board = build("500", "B", "2000", "2000S", "100")
    _ = board.force_light(1)
    assert board.move_targets() == [board.spaces[2]]
    assert board.move_targets()[0] is board.spaces[2]


def test_plain_spaces_have_no_targets():
    board = build("W", "P", "500S")
    for idx in range(board.size):
        _ = board.force_light(idx)
        assert board.move_targets() == []


def test_consume_double_turns_it_into_a_prize():
    board = build("W,D", "D", "100")
    assert board.doubles_in_play == 2
    _ = board.force_light(0, shown_index=1)
    board.consume_double()
    assert board.doubles_in_play == 1
    assert board.spaces[0].outcomes == ["W", "P"]
    assert board.lit_space().kind == "Prize"


def test_consume_double_requires_a_lit_double():
    board = build("D", "100")
    _ = board.force_light(1)
    with pytest.raises(ValueError):
        board.consume_double()
    assert board.doubles_in_play == 1


def test_draw_prize_stays_in_range():
    board = build("P", prize_min=100, prize_max=200, seed=3)
    for _ in range(100):
        assert 100 <= board.draw_prize() <= 200
    assert board.average_prize_value() == 150


def test_stop_lights_a_space_on_the_board():
    board = build("W", "P", "100", seed=11)
    for _ in range(50):
        space = board.stop()
        assert 0 <= board.lit_position < board.size
        assert space is board.lit_space()


def test_double_kept_when_drawn():
    layout = parse_layout(layout_text(0, 0, "D", "100"))
    board = Board.from_layout(layout, random.Random(0), double_chance=1.0)
    assert board.doubles_in_play == 1
    assert board.double_in_play


def test_double_removed_when_not_drawn():
    layout = parse_layout(layout_text(0, 0, "D", "100"))
    board = Board.from_layout(layout, random.Random(0), double_chance=0.0)
    assert board.doubles_in_play == 0
    assert board.spaces[0].outcomes == ["P"]
    # The shared template keeps its Double
    assert layout.double_space_count == 1


def test_stats_whammy_and_cash():
    stats = compute_stats(parse_layout(layout_text(0, 0, "W", "100")), random.Random(0))
    assert stats.expected_whammy_probability == pytest.approx(0.5)
    assert stats.expected_cash == pytest.approx(100.0)
    assert stats.expected_extra_spin_probability == 0.0
    assert stats.outcome_count == 2


def test_stats_spin_probability():
    stats = compute_stats(parse_layout(layout_text(0, 0, "100S", "100S")), random.Random(0))
    assert stats.expected_extra_spin_probability == pytest.approx(1.0)
    assert stats.expected_cash == pytest.approx(100.0)
    assert stats.expected_whammy_probability == 0.0


def test_stats_all_whammies_do_not_divide_by_zero():
    stats = compute_stats(parse_layout(layout_text(0, 0, "W")), random.Random(0))
    assert stats.expected_whammy_probability == pytest.approx(1.0)
    assert stats.expected_cash == 0.0
    assert stats.expected_extra_spin_probability == 0.0


def test_stats_use_the_prize_midpoint():
    stats = compute_stats(parse_layout(layout_text(100, 301, "P")), random.Random(0))
    assert stats.expected_cash == pytest.approx(200.0)


def test_expected_cash_includes_live_doubles():
    layout = parse_layout(layout_text(0, 0, "D", "100"))
    board = Board.from_layout(layout, random.Random(0), double_chance=1.0)
    assert board.expected_cash() == pytest.approx(50.0)
    assert board.expected_cash(1000) == pytest.approx(550.0)
    assert board.expected_spins() == pytest.approx(0.5)
    assert board.expected_whammies() == 0.0


def test_stats_are_fixed_once_measured():
    layout = parse_layout(layout_text(0, 0, "D", "100"))
    board = Board.from_layout(layout, random.Random(0), double_chance=1.0)
    before = board.stats
    _ = board.force_light(0)
    board.consume_double()
    assert board.stats is before
    assert board.expected_cash(1000) == pytest.approx(50.0)
