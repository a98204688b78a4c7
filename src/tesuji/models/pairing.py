"""Pairing options and PairingResult data classes."""

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

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Tuple

from tesuji.constants import (
    DEFAULT_COLOR_REPEAT_PENALTY,
    DEFAULT_RATING_GAP_WEIGHT,
    DEFAULT_REMATCH_PENALTY,
    DEFAULT_SCORE_GAP_WEIGHT,
)
from tesuji.type_hints import FloatDirection
from tesuji.utils.validation import validate_penalty_weight_strict


@dataclass(frozen=True)
class PairingOptions:
    """Penalty weights of the Swiss pairing search.

    Attributes
    ----------
    avoid_rematch_penalty : float
        Cost of pairing two players who already met. Only charged when no
        rematch-free pairing exists for a search branch.
    color_repeat_penalty : float
        Cost per game of extending a same-color streak of two or more.
    rating_gap_weight : float
        Cost per rating point between the two players.
    score_gap_weight : float
        Cost per point of score between the two players.
    """

    avoid_rematch_penalty: float = DEFAULT_REMATCH_PENALTY
    color_repeat_penalty: float = DEFAULT_COLOR_REPEAT_PENALTY
    rating_gap_weight: float = DEFAULT_RATING_GAP_WEIGHT
    score_gap_weight: float = DEFAULT_SCORE_GAP_WEIGHT

    def validate(self) -> "PairingOptions":
        """Copy with every weight as a float.

        Raises InvalidPairingOptionsException on negative, non-finite or
        non-numeric weights.
        """
        return replace(
            self,
            **{
                option.name: validate_penalty_weight_strict(
                    option.name, getattr(self, option.name)
                )
                for option in fields(self)
            },
        )

    def with_overrides(self, **overrides: Optional[float]) -> "PairingOptions":
        """Copy with the given weights replaced; ``None`` keeps the current one."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, float]:
        return {option.name: getattr(self, option.name) for option in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingOptions":
        known = {option.name for option in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


@dataclass(frozen=True)
class Pairing:
    """One table of a round. Black moves first in Go."""

    table: int
    black: str
    white: str
    float_direction: Optional[FloatDirection] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "table": self.table,
            "black": self.black,
            "white": self.white,
        }
        if self.float_direction is not None:
            data["float"] = self.float_direction
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        return cls(
            table=data["table"],
            black=data["black"],
            white=data["white"],
            float_direction=data.get("float"),
        )


@dataclass(frozen=True)
class PairingResult:
    """Result of a pairing computation for a single round.

    Attributes
    ----------
    pairings : tuple of Pairing
        Tables in the order the search resolved them.
    bye : str or None
        Id of the player sitting out with a bye.
    floated : tuple of str
        Ids of players paired across a score group.
    penalty : float
        Total penalty of the chosen pairing. Values at or above the rematch
        penalty signal that rematches could not be avoided.
    """

    pairings: Tuple[Pairing, ...] = ()
    bye: Optional[str] = None
    floated: Tuple[str, ...] = ()
    penalty: float = 0.0

    @property
    def player_ids(self) -> Tuple[str, ...]:
        """Ids of every paired player, table by table."""
        ids = []
        for pairing in self.pairings:
            ids.extend((pairing.black, pairing.white))
        return tuple(ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pairings": [pairing.to_dict() for pairing in self.pairings],
            "bye": self.bye,
            "floated": list(self.floated),
            "penalty": self.penalty,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingResult":
        return cls(
            pairings=tuple(Pairing.from_dict(p) for p in data.get("pairings", [])),
            bye=data.get("bye"),
            floated=tuple(data.get("floated", [])),
            penalty=float(data.get("penalty", 0.0)),
        )


#  LocalWords:  PairingResult
