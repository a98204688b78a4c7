"""Data records exchanged with the Tesuji engines."""

from tesuji.models.pairing import Pairing, PairingOptions, PairingResult
from tesuji.models.player import Entrant, SwissPlayer
from tesuji.models.rating import GlickoConfig, OpponentResult, Rating, RatingUpdate
from tesuji.models.tournament import (
    MatchResult,
    RoundData,
    TournamentConfig,
    load_config,
    save_config,
)

__all__ = [
    "Entrant",
    "GlickoConfig",
    "MatchResult",
    "OpponentResult",
    "Pairing",
    "PairingOptions",
    "PairingResult",
    "Rating",
    "RatingUpdate",
    "RoundData",
    "SwissPlayer",
    "TournamentConfig",
    "load_config",
    "save_config",
]
