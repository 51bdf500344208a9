import itertools

GAME_ID_COUNTER = itertools.count()
