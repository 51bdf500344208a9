from __future__ import annotations

import logging
import re
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, override

from rich.logging import RichHandler

if TYPE_CHECKING:
    from press_your_luck_simulator.core.state import LogContext

GAME_LOGGER_NAME = "press_your_luck.game"

# Simple color theme for Rich
COLOR = {
    "whammy": "bold red",
    "redirect": "bold magenta",
    "money": "bold green",
    "decision": "bold blue",
    "player": "yellow",
    "prefix": "dim",
}

PLAYER_PATTERN = re.compile(r"\b(\d+:Player \d+)\b")
MONEY_PATTERN = re.compile(r"(\$[\d,]+)")


class GameLogAdapter(logging.LoggerAdapter):
    """Inject per-game runtime context into every log record."""

    def __init__(self, logger: logging.Logger, log_context: LogContext) -> None:
        super().__init__(logger, {})
        self.log_context: LogContext = log_context

    @override
    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        logctx = self.log_context
        kwargs["extra"] = {
            "game_id": logctx.game_id,
            "round": logctx.round,
            "total_turn": logctx.total_turn,
            "turn_log_count": logctx.turn_log_count,
            "player_repr": logctx.current_player_repr,
        }
        logctx.inc_log_count()
        return msg, kwargs


class RichMarkupFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        game_id = getattr(record, "game_id", 0)
        round_no = getattr(record, "round", 0)
        total_turn = getattr(record, "total_turn", 0)
        turn_log_count = getattr(record, "turn_log_count", 0)
        player_repr = getattr(record, "player_repr", "_")

        prefix = f"{game_id}:{round_no} {total_turn}.{player_repr}.{turn_log_count}"

        styled = record.getMessage()

        # Whammies
        styled = re.sub(
            r"\bWhamm(y|ies)\b",
            lambda m: f"[{COLOR['whammy']}]{m.group(0)}[/{COLOR['whammy']}]",
            styled,
        )
        styled = re.sub(r"!!!", f"[{COLOR['whammy']}]!!![/{COLOR['whammy']}]", styled)

        # Redirects
        for word in ("Big Bucks", "Pick-a-Corner", "light moves"):
            styled = styled.replace(
                word, f"[{COLOR['redirect']}]{word}[/{COLOR['redirect']}]"
            )

        # Decisions
        styled = re.sub(
            r"\b(presses|passes)\b",
            rf"[{COLOR['decision']}]\1[/{COLOR['decision']}]",
            styled,
        )

        styled = MONEY_PATTERN.sub(rf"[{COLOR['money']}]\1[/{COLOR['money']}]", styled)
        styled = PLAYER_PATTERN.sub(rf"[{COLOR['player']}]\1[/{COLOR['player']}]", styled)

        if record.levelno >= logging.WARNING:
            styled = f"[{COLOR['whammy']}]{styled}[/{COLOR['whammy']}]"

        return f"[{COLOR['prefix']}]{prefix}[/{COLOR['prefix']}]  {styled}"


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)
    handler = RichHandler(markup=True, show_path=False, show_time=False)
    handler.setFormatter(RichMarkupFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)
