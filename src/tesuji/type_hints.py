"""Type hints used in Tesuji."""

from typing import List, Literal, Tuple

# Stone color string constants (for runtime use)
BLACK = "black"
WHITE = "white"

# Basically, black or white
Colour = Literal["black", "white"]

# Direction a player moved across a score group
FloatDirection = Literal["up", "down"]
FLOAT_UP = "up"
FLOAT_DOWN = "down"

# Player indices still waiting for an opponent, in seed order
Residual = Tuple[int, ...]
# (table number, expected score of black) per table
Forecast = List[Tuple[int, float]]
