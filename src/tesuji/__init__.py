"""Tesuji: Swiss pairing and Glicko-2 rating engines for Go tournaments."""

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

__version__ = "0.1.0"

from tesuji.exceptions import (
    InvalidPairingOptionsException,
    InvalidRatingException,
    InvalidRosterException,
    NumericDivergenceException,
    TesujiException,
)
from tesuji.models import (
    GlickoConfig,
    OpponentResult,
    Pairing,
    PairingOptions,
    PairingResult,
    Rating,
    RatingUpdate,
    SwissPlayer,
)
from tesuji.pairing import generate_pairings
from tesuji.rating import advance_rating_period, expected_score, rate_player
from tesuji.tournament import Tournament

__all__ = [
    "__version__",
    "GlickoConfig",
    "InvalidPairingOptionsException",
    "InvalidRatingException",
    "InvalidRosterException",
    "NumericDivergenceException",
    "OpponentResult",
    "Pairing",
    "PairingOptions",
    "PairingResult",
    "Rating",
    "RatingUpdate",
    "SwissPlayer",
    "TesujiException",
    "Tournament",
    "advance_rating_period",
    "expected_score",
    "generate_pairings",
    "rate_player",
]
