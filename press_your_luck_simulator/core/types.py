from typing import Literal

OutcomeKind = Literal[
    "Whammy",
    "Prize",
    "Double",
    "AddAOne",
    "BigBucks",
    "PickACorner",
    "Move",
    "GoBack",
    "Advance",
    "Cash",
    "CashPlusSpin",
    "CashOrLoseWhammy",
]

BoardName = Literal["round_one", "round_two"]

AgentKind = Literal["neutral", "random"]

SpinSource = Literal["passed", "earned"]
