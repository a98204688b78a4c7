"""Glicko-2 rating records and configuration."""

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

from dataclasses import dataclass
from typing import Any, Dict

from tesuji.constants import (
    DEFAULT_DEVIATION,
    DEFAULT_RATING,
    DEFAULT_TAU,
    DEFAULT_VOLATILITY,
)


@dataclass(frozen=True)
class Rating:
    """A Glicko-2 rating on the external (Elo-like) scale.

    Attributes
    ----------
    rating : float
        Mean skill estimate, centered near 1500.
    deviation : float
        Uncertainty of the estimate. Shrinks as games are observed.
    volatility : float
        Expected degree of fluctuation of the rating.
    """

    rating: float = DEFAULT_RATING
    deviation: float = DEFAULT_DEVIATION
    volatility: float = DEFAULT_VOLATILITY

    def confidence_interval(self, z: float = 1.96):
        """Return ``(low, high)`` bounds of the rating, 95% by default."""
        margin = z * self.deviation
        return (self.rating - margin, self.rating + margin)

    def to_dict(self) -> Dict[str, float]:
        return {
            "rating": self.rating,
            "deviation": self.deviation,
            "volatility": self.volatility,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rating":
        return cls(
            rating=float(data.get("rating", DEFAULT_RATING)),
            deviation=float(data.get("deviation", DEFAULT_DEVIATION)),
            volatility=float(data.get("volatility", DEFAULT_VOLATILITY)),
        )


@dataclass(frozen=True)
class OpponentResult:
    """One game of a rating period, seen from the rated player.

    Attributes
    ----------
    opponent : Rating
        The opponent's rating when the game was played.
    score : float
        1 for a win, 0.5 for a draw, 0 for a loss.
    weight : float
        Influence of the game, 1 by default.
    """

    opponent: Rating
    score: float
    weight: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "opponent": self.opponent.to_dict(),
            "score": self.score,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OpponentResult":
        return cls(
            opponent=Rating.from_dict(data["opponent"]),
            score=data["score"],
            weight=data.get("weight", 1.0),
        )


@dataclass(frozen=True)
class RatingUpdate:
    """New rating after a rating period plus signed changes versus the input."""

    rating: Rating
    rating_delta: float
    deviation_delta: float
    volatility_delta: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.rating.to_dict(),
            "rating_delta": self.rating_delta,
            "deviation_delta": self.deviation_delta,
            "volatility_delta": self.volatility_delta,
        }


@dataclass(frozen=True)
class GlickoConfig:
    """Glicko-2 system settings.

    Attributes
    ----------
    tau : float
        Constrains the change in volatility over time.
    default_rating : float
        Rating of unrated players and origin of the internal scale.
    default_deviation : float
        Deviation of unrated players.
    default_volatility : float
        Volatility of unrated players.
    """

    tau: float = DEFAULT_TAU
    default_rating: float = DEFAULT_RATING
    default_deviation: float = DEFAULT_DEVIATION
    default_volatility: float = DEFAULT_VOLATILITY

    def unrated(self) -> Rating:
        """Rating assigned to a player without rated games."""
        return Rating(
            rating=self.default_rating,
            deviation=self.default_deviation,
            volatility=self.default_volatility,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "tau": self.tau,
            "default_rating": self.default_rating,
            "default_deviation": self.default_deviation,
            "default_volatility": self.default_volatility,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlickoConfig":
        return cls(
            tau=float(data.get("tau", DEFAULT_TAU)),
            default_rating=float(data.get("default_rating", DEFAULT_RATING)),
            default_deviation=float(data.get("default_deviation", DEFAULT_DEVIATION)),
            default_volatility=float(
                data.get("default_volatility", DEFAULT_VOLATILITY)
            ),
        )
