from press_your_luck_simulator.ai.random_agent import RandomAgent
from press_your_luck_simulator.core.types import AgentKind
from press_your_luck_simulator.engine.bootstrap import NeutralAgent

AGENT_CLASSES: dict[AgentKind, type[NeutralAgent] | type[RandomAgent]] = {
    "neutral": NeutralAgent,
    "random": RandomAgent,
}

__all__ = ["AGENT_CLASSES", "NeutralAgent", "RandomAgent"]
