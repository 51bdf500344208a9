"""
Fixed-shape numeric view of a game, as seen by one player.

Learned decision-makers read these slots by position, so the layout is frozen:

    0      bias (always 1)
    1      round index (0 for the first round)
    2      1 if a Double Your $$ is live on the current board
    3      1 if the requesting player is on turn and must take a passed spin
    4..12  requesting player block (9 slots)
    13..   one block of 10 slots per opponent, in game order

Player block (offset `o`):

    o+0    1 if this player is on turn
    o+1    1 if this player is up next
    o+2..5 cumulative Whammy bits (o+2 set at >=1 Whammy, ..., o+5 at 4)
    o+6    score
    o+7    earned spins
    o+8    passed spins
    o+9    (opponents only) 1 if a pass would go to this opponent

A three-player game therefore has 4 + 9 + 10 + 10 = 33 slots.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from press_your_luck_simulator.core.rules import WHAMMY_LIMIT

if TYPE_CHECKING:
    from press_your_luck_simulator.core.state import PlayerState
    from press_your_luck_simulator.engine.game import Game

GLOBAL_SLOTS = 4
SELF_SLOTS = 9
OPPONENT_SLOTS = 10

BIAS = 0
ROUND = 1
DOUBLE_IN_PLAY = 2
ABOUT_TO_SPIN = 3
SELF_OFFSET = GLOBAL_SLOTS

# Offsets inside a player block
ON_TURN = 0
UP_NEXT = 1
WHAMMY_BITS = 2
SCORE = 6
EARNED = 7
PASSED = 8
PASS_TARGET = 9


def state_vector_size(player_count: int) -> int:
    return GLOBAL_SLOTS + SELF_SLOTS + OPPONENT_SLOTS * (player_count - 1)


def opponent_offset(opponent_number: int) -> int:
    """Block offset of the n-th opponent (0-based, in game order)."""
    return SELF_OFFSET + SELF_SLOTS + OPPONENT_SLOTS * opponent_number


def _fill_player_block(
    vector: list[float], offset: int, player: PlayerState, game: Game
) -> None:
    if player is game.current_turn:
        vector[offset + ON_TURN] = 1.0
    elif player is game.next_turn:
        vector[offset + UP_NEXT] = 1.0
    for i in range(min(player.whammies, WHAMMY_LIMIT)):
        vector[offset + WHAMMY_BITS + i] = 1.0
    vector[offset + SCORE] = float(player.score)
    vector[offset + EARNED] = float(player.earned_spins)
    vector[offset + PASSED] = float(player.passed_spins)


def build_state_vector(game: Game, for_player: PlayerState) -> list[float]:
    vector = [0.0] * state_vector_size(len(game.players))

    # 1. Globals
    vector[BIAS] = 1.0
    vector[ROUND] = float(max(game.round - 1, 0))
    board = game.current_board
    if board is not None and board.double_in_play:
        vector[DOUBLE_IN_PLAY] = 1.0
    if for_player is game.current_turn and for_player.passed_spins > 0:
        vector[ABOUT_TO_SPIN] = 1.0

    # 2. Requesting player
    _fill_player_block(vector, SELF_OFFSET, for_player, game)

    # 3. Opponents, with pass-target eligibility
    opponents = [p for p in game.players if p is not for_player]
    targets = game.pass_targets(for_player)
    for n, opponent in enumerate(opponents):
        offset = opponent_offset(n)
        _fill_player_block(vector, offset, opponent, game)
        if any(opponent is t for t in targets):
            vector[offset + PASS_TARGET] = 1.0

    return vector
