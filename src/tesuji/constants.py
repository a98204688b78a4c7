# Tesuji
# Copyright (C) 2026  Tesuji developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math

# --- Constants ---
# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0
VALID_SCORES = (LOSS_SCORE, DRAW_SCORE, WIN_SCORE)

# Bye scores (configurable per tournament)
FULL_POINT_BYE_SCORE = 1.0
HALF_POINT_BYE_SCORE = 0.5
ZERO_POINT_BYE_SCORE = 0.0
BYE_SCORE = FULL_POINT_BYE_SCORE

# Opponent id recorded in a player's history when they receive a bye
BYE_OPPONENT_ID = "BYE"

# Swiss pairing penalty weights
DEFAULT_REMATCH_PENALTY = 1000.0
DEFAULT_COLOR_REPEAT_PENALTY = 10.0
DEFAULT_RATING_GAP_WEIGHT = 0.05
DEFAULT_SCORE_GAP_WEIGHT = 5.0

# Score difference above which a pairing counts as a float
FLOAT_SCORE_THRESHOLD = 0.5

# Glicko-2 defaults
DEFAULT_RATING = 1500.0
DEFAULT_DEVIATION = 350.0
DEFAULT_VOLATILITY = 0.06
DEFAULT_TAU = 0.5

# Conversion factor between the Glicko and Glicko-2 scales
GLICKO2_SCALE = 173.7178
Q = math.log(10) / 400

# Volatility root finder
CONVERGENCE_TOLERANCE = 1e-6
MAX_BRACKET_STEPS = 100
MAX_ROOT_ITERATIONS = 1000
