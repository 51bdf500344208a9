import random

from press_your_luck_simulator.ai import NeutralAgent, RandomAgent
from press_your_luck_simulator.core.state import LogContext, PlayerState
from press_your_luck_simulator.engine import GAME_ID_COUNTER
from press_your_luck_simulator.engine.board import Board
from press_your_luck_simulator.engine.game import Game
from press_your_luck_simulator.engine.layout import get_layout
from press_your_luck_simulator.engine.logging import configure_logging

if __name__ == "__main__":
    configure_logging()

    rng = random.Random(1)
    players = [
        PlayerState(1, NeutralAgent()),
        PlayerState(2, RandomAgent(random.Random(2))),
        PlayerState(3, RandomAgent(random.Random(3), press_chance=0.7)),
    ]
    boards = [
        Board.from_layout(get_layout("round_one"), rng),
        Board.from_layout(get_layout("round_two"), rng),
    ]
    game = Game(
        players,
        boards,
        rng,
        log_context=LogContext(game_id=next(GAME_ID_COUNTER)),
    )

    game.play()
