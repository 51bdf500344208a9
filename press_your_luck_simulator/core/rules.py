"""House rules shared by the board and the game loop."""

# Chance that a layout's "Double Your $$ + One Spin" is available this board
DOUBLE_IN_PLAY_CHANCE: float = 1 / 6

# Canonical 18-space layout and its corners
CANONICAL_BOARD_SIZE: int = 18
CORNER_SPACES: tuple[int, ...] = (0, 5, 9, 14)

# Bootstrap statistics
TRIALS_PER_OUTCOME: int = 30

# Spin allocation (stands in for the question rounds)
ALLOCATION_DRAWS: int = 4
FAVORED_CHANCE: float = 0.6
FAVORED_SPINS: int = 3
OTHER_CHANCE: float = 0.8
OTHER_SPINS: int = 1

WHAMMY_LIMIT: int = 4

DOUBLE_CODE: str = "D"
PRIZE_CODE: str = "P"
