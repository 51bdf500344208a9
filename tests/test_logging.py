import logging

import pytest

from press_your_luck_simulator.core.state import LogContext
from press_your_luck_simulator.engine.logging import (
    GAME_LOGGER_NAME,
    GameLogAdapter,
    RichMarkupFormatter,
)
from tests.test_utils import ScriptedAgent, layout_text


def test_adapter_injects_turn_context(caplog: pytest.LogCaptureFixture):
    ctx = LogContext(game_id=9, round=2)
    ctx.new_turn("1:Player 1")
    adapter = GameLogAdapter(logging.getLogger(GAME_LOGGER_NAME), ctx)

    with caplog.at_level(logging.INFO, logger=GAME_LOGGER_NAME):
        adapter.info("first")
        adapter.info("second")

    first, second = caplog.records
    assert (first.game_id, first.round, first.player_repr) == (9, 2, "1:Player 1")
    assert (first.turn_log_count, second.turn_log_count) == (0, 1)
    assert ctx.turn_log_count == 2


def test_formatter_highlights_whammies_and_money():
    record = logging.LogRecord(
        GAME_LOGGER_NAME,
        logging.INFO,
        __file__,
        0,
        "1:Player 1 hits a Whammy after $1,500",
        None,
        None,
    )
    record.game_id = 3
    record.round = 1
    record.total_turn = 4
    record.turn_log_count = 0
    record.player_repr = "1:Player 1"

    text = RichMarkupFormatter().format(record)

    assert text.startswith("[dim]3:1 4.1:Player 1.0[/dim]")
    assert "[bold red]Whammy[/bold red]" in text
    assert "[bold green]$1,500[/bold green]" in text
    assert "[yellow]1:Player 1[/yellow]" in text


def test_game_logs_through_its_context(scenario, caplog: pytest.LogCaptureFixture):
    s = scenario([layout_text(0, 0, "100")], [ScriptedAgent()])
    s.start_round([1])
    with caplog.at_level(logging.INFO, logger=GAME_LOGGER_NAME):
        s.run_round()

    assert caplog.records
    assert all(r.game_id == s.game.log_context.game_id for r in caplog.records)
    assert any("presses their luck" in r.getMessage() for r in caplog.records)
