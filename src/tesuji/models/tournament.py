"""Tournament round, result and configuration data classes."""

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

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from tesuji.constants import BYE_SCORE
from tesuji.exceptions import InvalidConfigurationException
from tesuji.models.pairing import Pairing, PairingOptions, PairingResult
from tesuji.models.rating import GlickoConfig
from tesuji.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class MatchResult:
    """Represents the result of a single game.

    Attributes
    ----------
    table : int
        Table number of the pairing.
    black_id : str
        ID of the black player
    white_id : str
        ID of the white player
    black_score : float
        Score for black (1.0 = win, 0.5 = draw (jigo), 0.0 = loss)
    """

    table: int
    black_id: str
    white_id: str
    black_score: float

    @property
    def white_score(self) -> float:
        """Calculate white's score based on black's score."""
        return 1.0 - self.black_score

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "table": self.table,
            "black_id": self.black_id,
            "white_id": self.white_id,
            "black_score": self.black_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        return cls(
            table=data["table"],
            black_id=data["black_id"],
            white_id=data["white_id"],
            black_score=data["black_score"],
        )


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    pairings : tuple of Pairing
        Tables produced by the pairing engine.
    bye_player_id : str or None
        ID of the player receiving a bye, or None if no bye was assigned.
    floated : tuple of str
        Players paired across a score group.
    penalty : float
        Total pairing penalty of the round.
    results : list of MatchResult
        Recorded game results. Empty until results are recorded.
    is_completed : bool
        Indicates whether the round's results have been recorded.
    is_rated : bool
        Indicates whether the round's games went into a closed rating period.
    """

    round_number: int
    pairings: Tuple[Pairing, ...] = ()
    bye_player_id: Optional[str] = None
    floated: Tuple[str, ...] = ()
    penalty: float = 0.0
    results: List[MatchResult] = field(default_factory=list)
    is_completed: bool = False
    is_rated: bool = False

    @classmethod
    def from_pairing_result(
        cls, round_number: int, result: PairingResult
    ) -> "RoundData":
        return cls(
            round_number=round_number,
            pairings=result.pairings,
            bye_player_id=result.bye,
            floated=result.floated,
            penalty=result.penalty,
        )

    def get_pairing(self, table: int) -> Optional[Pairing]:
        for pairing in self.pairings:
            if pairing.table == table:
                return pairing
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "pairings": [p.to_dict() for p in self.pairings],
            "bye_player_id": self.bye_player_id,
            "floated": list(self.floated),
            "penalty": self.penalty,
            "results": [r.to_dict() for r in self.results],
            "is_completed": self.is_completed,
            "is_rated": self.is_rated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        return cls(
            round_number=data["round_number"],
            pairings=tuple(Pairing.from_dict(p) for p in data.get("pairings", [])),
            bye_player_id=data.get("bye_player_id"),
            floated=tuple(data.get("floated", [])),
            penalty=data.get("penalty", 0.0),
            results=[MatchResult.from_dict(r) for r in data.get("results", [])],
            is_completed=data.get("is_completed", False),
            is_rated=data.get("is_rated", False),
        )


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    num_rounds : int
        Number of rounds in the tournament.
    pairing_options : PairingOptions
        Penalty weights passed to the Swiss pairing engine.
    glicko : GlickoConfig
        Glicko-2 settings used when closing rating periods.
    bye_score : float
        Points credited for a bye.
    """

    name: str
    num_rounds: int
    pairing_options: PairingOptions = field(default_factory=PairingOptions)
    glicko: GlickoConfig = field(default_factory=GlickoConfig)
    bye_score: float = BYE_SCORE

    def __post_init__(self) -> None:
        if not isinstance(self.num_rounds, int) or self.num_rounds < 1:
            raise InvalidConfigurationException(
                f"num_rounds must be a positive integer, got {self.num_rounds!r}"
            )
        if not 0.0 <= self.bye_score <= 1.0:
            raise InvalidConfigurationException(
                f"bye_score must be between 0 and 1, got {self.bye_score!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "num_rounds": self.num_rounds,
            "pairing_options": self.pairing_options.to_dict(),
            "glicko": self.glicko.to_dict(),
            "bye_score": self.bye_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        if "num_rounds" not in data:
            raise InvalidConfigurationException("Missing required key: num_rounds")
        return cls(
            name=data.get("name", "Untitled Tournament"),
            num_rounds=data["num_rounds"],
            pairing_options=PairingOptions.from_dict(data.get("pairing_options", {})),
            glicko=GlickoConfig.from_dict(data.get("glicko", {})),
            bye_score=float(data.get("bye_score", BYE_SCORE)),
        )


def load_config(path: Union[str, Path]) -> TournamentConfig:
    """Load a tournament configuration from a JSON file.

    Raises:
        InvalidConfigurationException: If the file is not valid JSON or
            lacks required keys
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfigurationException(
            f"Cannot parse configuration {path}: {exc}"
        ) from exc
    logger.debug("Loaded tournament configuration from %s", path)
    return TournamentConfig.from_dict(data)


def save_config(config: TournamentConfig, path: Union[str, Path]) -> Path:
    """Write a tournament configuration as JSON and return the path."""
    path = Path(path)
    path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
    logger.debug("Saved tournament configuration to %s", path)
    return path
