"""Player records exchanged with the pairing engine and the tournament store."""

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

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from tesuji.constants import BYE_OPPONENT_ID, DEFAULT_RATING
from tesuji.exceptions import InvalidRosterException
from tesuji.models.rating import Rating
from tesuji.type_hints import BLACK, WHITE, Colour


def _normalise_colours(history) -> Tuple[Colour, ...]:
    colours = []
    for colour in history:
        value = str(colour).lower()
        if value not in (BLACK, WHITE):
            raise InvalidRosterException(f"Unknown stone color in history: {colour!r}")
        colours.append(value)
    return tuple(colours)


@dataclass(frozen=True)
class SwissPlayer:
    """Immutable roster snapshot of one player for a single pairing call.

    Attributes
    ----------
    id : str
        Unique identifier within the roster.
    name : str
        Display name.
    score : float
        Cumulative tournament score.
    rating : float
        Rating used for seeding and the rating-gap penalty.
    opponents : frozenset of str
        Ids of previous opponents. ``"BYE"`` marks a received bye.
    color_history : tuple of str
        Colors played, most recent last.
    can_play : bool
        False when the player sits out this round.
    """

    id: str
    name: str = ""
    score: float = 0.0
    rating: float = DEFAULT_RATING
    opponents: FrozenSet[str] = field(default_factory=frozenset)
    color_history: Tuple[Colour, ...] = ()
    can_play: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "opponents", frozenset(self.opponents))
        object.__setattr__(
            self, "color_history", _normalise_colours(self.color_history)
        )

    @property
    def has_received_bye(self) -> bool:
        return BYE_OPPONENT_ID in self.opponents

    @property
    def colour_imbalance(self) -> int:
        """Black games minus white games played so far."""
        return self.color_history.count(BLACK) - self.color_history.count(WHITE)

    def trailing_streak(self, colour: str) -> int:
        """Number of consecutive most recent games played with ``colour``."""
        streak = 0
        for played in reversed(self.color_history):
            if played != colour:
                break
            streak += 1
        return streak

    def has_played(self, other: "SwissPlayer") -> bool:
        return other.id in self.opponents or self.id in other.opponents

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "rating": self.rating,
            "opponents": sorted(self.opponents),
            "color_history": list(self.color_history),
            "can_play": self.can_play,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwissPlayer":
        """Deserialize player from dictionary."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            score=float(data.get("score", 0.0)),
            rating=float(data.get("rating", DEFAULT_RATING)),
            opponents=frozenset(data.get("opponents", ())),
            color_history=tuple(data.get("color_history", ())),
            can_play=data.get("can_play", True),
        )


class Entrant:
    """A player registered in a tournament.

    Unlike :class:`SwissPlayer` this record is mutable: the tournament store
    updates score, opponents, colors and rating as rounds complete.

    Attributes:
        id: Unique identifier for the player
        name: Player's display name
        rating: Current Glicko-2 rating
        is_active: Whether the player takes part in the next round
        score: Current tournament score
        color_history: Colors played, most recent last
        opponent_ids: Opponent ids in round order (``"BYE"`` for a bye)
        results: Game scores in round order
        has_received_bye: Whether the player has received a bye
    """

    def __init__(
        self,
        player_id: str,
        name: str,
        rating: Rating,
        is_active: bool = True,
    ) -> None:
        self.id: str = player_id
        self.name: str = name
        self.rating: Rating = rating
        self.is_active: bool = is_active

        self.score: float = 0.0
        self.color_history: List[Colour] = []
        self.opponent_ids: List[str] = []
        self.results: List[float] = []
        self.has_received_bye: bool = False

    def __repr__(self) -> str:
        return (
            f"Entrant(id={self.id!r}, name={self.name!r}, score={self.score}, "
            f"rating={self.rating.rating:.1f})"
        )

    def record_game(self, opponent_id: str, colour: Colour, score: float) -> None:
        self.opponent_ids.append(opponent_id)
        self.color_history.append(colour)
        self.results.append(score)
        self.score += score

    def record_bye(self, score: float) -> None:
        self.opponent_ids.append(BYE_OPPONENT_ID)
        self.results.append(score)
        self.score += score
        self.has_received_bye = True

    def to_swiss_player(self) -> SwissPlayer:
        """Take an immutable snapshot for the pairing engine."""
        return SwissPlayer(
            id=self.id,
            name=self.name,
            score=self.score,
            rating=self.rating.rating,
            opponents=frozenset(self.opponent_ids),
            color_history=tuple(self.color_history),
            can_play=self.is_active,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating.to_dict(),
            "is_active": self.is_active,
            "score": self.score,
            "color_history": list(self.color_history),
            "opponent_ids": list(self.opponent_ids),
            "results": list(self.results),
            "has_received_bye": self.has_received_bye,
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], default_rating: Optional[Rating] = None
    ) -> "Entrant":
        rating_data = data.get("rating")
        if rating_data is None:
            rating = default_rating or Rating()
        else:
            rating = Rating.from_dict(rating_data)
        entrant = cls(
            player_id=data["id"],
            name=data.get("name", data["id"]),
            rating=rating,
            is_active=data.get("is_active", True),
        )
        entrant.score = float(data.get("score", 0.0))
        entrant.color_history = list(_normalise_colours(data.get("color_history", ())))
        entrant.opponent_ids = list(data.get("opponent_ids", ()))
        entrant.results = [float(r) for r in data.get("results", ())]
        entrant.has_received_bye = data.get(
            "has_received_bye", BYE_OPPONENT_ID in entrant.opponent_ids
        )
        return entrant
