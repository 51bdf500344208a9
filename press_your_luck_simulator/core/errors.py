class PressYourLuckError(Exception):
    """Base class for all simulator errors."""


class BoardLayoutError(PressYourLuckError):
    """A board layout is missing or malformed; no game can be built from it."""


class ContractViolationError(PressYourLuckError):
    """A decision contract answered outside the offered choices, or was asked out of turn."""
