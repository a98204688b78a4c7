"""Validation utilities for Tesuji.

This module provides reusable validation functions with consistent error handling.
Each ``validate_*`` function returns a :class:`ValidationResult`; the
``*_strict`` variants raise the matching package exception instead.
"""

import math
from typing import Any, Optional

from tesuji.constants import BYE_OPPONENT_ID, VALID_SCORES
from tesuji.exceptions import (
    InvalidConfigurationException,
    InvalidPairingOptionsException,
    InvalidRatingException,
    InvalidResultException,
    InvalidRosterException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# ========== Roster Validation ==========


def validate_player_id(player_id: Any) -> ValidationResult:
    """Validate a roster player id.

    Ids must be non-empty strings and may not collide with the bye sentinel
    stored in opponent histories.
    """
    if not isinstance(player_id, str) or not player_id.strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"Player id must be a non-empty string, got {player_id!r}",
        )
    if player_id == BYE_OPPONENT_ID:
        return ValidationResult(
            is_valid=False,
            error_message=f"Player id {BYE_OPPONENT_ID!r} is reserved for byes",
        )
    return ValidationResult(is_valid=True, sanitized_value=player_id)


def validate_player_id_strict(player_id: Any) -> str:
    """Validate a player id and raise if invalid.

    Raises:
        InvalidRosterException: If the id is empty or reserved
    """
    result = validate_player_id(player_id)
    if not result.is_valid:
        raise InvalidRosterException(result.error_message)
    return result.sanitized_value


def validate_player_number(label: str, value: Any) -> ValidationResult:
    """Validate a roster score or rating (an int or float, finite)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ValidationResult(
            is_valid=False,
            error_message=f"{label} must be a number, got {value!r}",
        )
    if not math.isfinite(value):
        return ValidationResult(
            is_valid=False,
            error_message=f"{label} must be finite, got {value!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=float(value))


def validate_penalty_weight(name: str, value: Any) -> ValidationResult:
    """Validate a pairing penalty weight (finite and non-negative)."""
    number = _as_float(value)
    if number is None or not math.isfinite(number):
        return ValidationResult(
            is_valid=False,
            error_message=f"{name} must be a finite number, got {value!r}",
        )
    if number < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{name} must be non-negative, got {number}",
        )
    return ValidationResult(is_valid=True, sanitized_value=number)


def validate_penalty_weight_strict(name: str, value: Any) -> float:
    """Validate a pairing penalty weight and raise if invalid.

    Raises:
        InvalidPairingOptionsException: If the weight is negative or not finite
    """
    result = validate_penalty_weight(name, value)
    if not result.is_valid:
        raise InvalidPairingOptionsException(result.error_message)
    return result.sanitized_value


# ========== Rating Validation ==========


def validate_glicko_rating(
    rating: Any, deviation: Any, volatility: Any
) -> ValidationResult:
    """Validate the three components of a Glicko-2 rating.

    Args:
        rating: Mean skill estimate
        deviation: Rating deviation, must be > 0
        volatility: Rating volatility, must be > 0

    Returns:
        ValidationResult whose sanitized value is a ``(rating, deviation,
        volatility)`` tuple of floats
    """
    values = []
    for label, value in (
        ("rating", rating),
        ("deviation", deviation),
        ("volatility", volatility),
    ):
        number = _as_float(value)
        if number is None or not math.isfinite(number):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid {label}: {value!r} (must be a finite number)",
            )
        values.append(number)

    if values[1] <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid deviation: {values[1]} (must be positive)",
        )
    if values[2] <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid volatility: {values[2]} (must be positive)",
        )
    return ValidationResult(is_valid=True, sanitized_value=tuple(values))


def validate_glicko_rating_strict(rating: Any, deviation: Any, volatility: Any):
    """Validate a Glicko-2 rating and raise if invalid.

    Raises:
        InvalidRatingException: If deviation or volatility is not positive
    """
    result = validate_glicko_rating(rating, deviation, volatility)
    if not result.is_valid:
        raise InvalidRatingException(result.error_message)
    return result.sanitized_value


def validate_tau(tau: Any) -> float:
    """Validate the Glicko-2 system constant.

    Raises:
        InvalidConfigurationException: If tau is not a positive finite number
    """
    number = _as_float(tau)
    if number is None or not math.isfinite(number) or number <= 0:
        raise InvalidConfigurationException(
            f"Invalid tau: {tau!r} (must be a positive number)"
        )
    return number


# ========== Result Validation ==========


def validate_game_score(score: Any) -> ValidationResult:
    """Validate a game outcome score (0 loss, 0.5 draw, 1 win)."""
    number = _as_float(score)
    if number is None or number not in VALID_SCORES:
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid score: {score!r} (must be 0, 0.5 or 1)",
        )
    return ValidationResult(is_valid=True, sanitized_value=number)


def validate_game_score_strict(score: Any) -> float:
    """Validate a game score and raise if invalid.

    Raises:
        InvalidResultException: If the score is not 0, 0.5 or 1
    """
    result = validate_game_score(score)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)
    return result.sanitized_value


def validate_result_weight_strict(weight: Any) -> float:
    """Validate the weight of a game in a rating period.

    Raises:
        InvalidResultException: If the weight is negative or not finite
    """
    number = _as_float(weight)
    if number is None or not math.isfinite(number) or number < 0:
        raise InvalidResultException(
            f"Invalid result weight: {weight!r} (must be a non-negative number)"
        )
    return number
