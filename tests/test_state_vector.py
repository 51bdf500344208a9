from collections.abc import Callable

import pytest

from press_your_luck_simulator.engine.state_vector import (
    ABOUT_TO_SPIN,
    BIAS,
    DOUBLE_IN_PLAY,
    EARNED,
    ON_TURN,
    PASS_TARGET,
    PASSED,
    ROUND,
    SCORE,
    SELF_OFFSET,
    UP_NEXT,
    WHAMMY_BITS,
    opponent_offset,
    state_vector_size,
)
from tests.test_utils import GameScenario, ScriptedAgent, layout_text

ScenarioFactory = Callable[..., GameScenario]

DOUBLE_BOARD = layout_text(0, 0, "D", "100")


@pytest.fixture
def three_players(scenario: ScenarioFactory) -> GameScenario:
    s = scenario(
        [DOUBLE_BOARD, DOUBLE_BOARD],
        [ScriptedAgent() for _ in range(3)],
        double_chance=1.0,
    )
    s.start_round([2, 1, 3])
    for player, score in zip(s.players, [300, 500, 500], strict=True):
        player.score = score
    s.get_player(1).whammies = 2
    _ = s.game.select_turn()
    return s


def test_sizes():
    assert state_vector_size(3) == 33
    assert state_vector_size(1) == 13
    assert opponent_offset(0) == 13
    assert opponent_offset(1) == 23


def test_globals(three_players: GameScenario):
    vector = three_players.game.state_vector(three_players.get_player(1))
    assert len(vector) == 33
    assert vector[BIAS] == 1.0
    assert vector[ROUND] == 0.0
    assert vector[DOUBLE_IN_PLAY] == 1.0
    assert vector[ABOUT_TO_SPIN] == 0.0


def test_requesting_player_block(three_players: GameScenario):
    game = three_players.game
    assert game.current_turn is three_players.get_player(2)
    assert game.next_turn is three_players.get_player(1)

    vector = game.state_vector(three_players.get_player(1))
    block = vector[SELF_OFFSET : SELF_OFFSET + 9]
    assert block[ON_TURN] == 0.0
    assert block[UP_NEXT] == 1.0
    assert block[WHAMMY_BITS : WHAMMY_BITS + 4] == [1.0, 1.0, 0.0, 0.0]
    assert block[SCORE] == 300.0
    assert block[EARNED] == 2.0
    assert block[PASSED] == 0.0


def test_opponent_blocks(three_players: GameScenario):
    vector = three_players.game.state_vector(three_players.get_player(1))

    second = opponent_offset(0)
    assert vector[second + ON_TURN] == 1.0
    assert vector[second + SCORE] == 500.0
    assert vector[second + EARNED] == 1.0

    third = opponent_offset(1)
    assert vector[third + ON_TURN] == 0.0
    assert vector[third + UP_NEXT] == 0.0
    assert vector[third + EARNED] == 3.0

    # Both leaders would be offered a pass
    assert vector[second + PASS_TARGET] == 1.0
    assert vector[third + PASS_TARGET] == 1.0


def test_pass_target_bits_follow_the_leader(three_players: GameScenario):
    vector = three_players.game.state_vector(three_players.get_player(2))
    # Opponents of player 2 in game order: player 1, then player 3
    assert vector[opponent_offset(0) + PASS_TARGET] == 0.0
    assert vector[opponent_offset(1) + PASS_TARGET] == 1.0


def test_about_to_spin(three_players: GameScenario):
    player = three_players.get_player(2)
    player.passed_spins = 1
    assert three_players.game.state_vector(player)[ABOUT_TO_SPIN] == 1.0
    # Only the player on turn is about to spin
    other = three_players.get_player(3)
    other.passed_spins = 1
    assert three_players.game.state_vector(other)[ABOUT_TO_SPIN] == 0.0


def test_round_and_double_slots_follow_the_board(three_players: GameScenario):
    s = three_players
    s.start_round([1, 1, 1])
    board = s.board
    _ = board.force_light(0)
    board.consume_double()

    vector = s.game.state_vector(s.get_player(3))
    assert vector[ROUND] == 1.0
    assert vector[DOUBLE_IN_PLAY] == 0.0
