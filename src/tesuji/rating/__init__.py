"""Glicko-2 skill ratings."""

from tesuji.rating.glicko2 import advance_rating_period, expected_score, rate_player

__all__ = ["advance_rating_period", "expected_score", "rate_player"]
