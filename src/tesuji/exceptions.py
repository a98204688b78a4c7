"""Exceptions for use in Tesuji"""

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


# ========== Base Application Exception ==========


class TesujiException(Exception):
    """Base exception for all Tesuji errors.

    All custom exceptions in the package inherit from this class, so a caller
    can catch every engine or tournament error with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(TesujiException):
    """Base exception for pairing-related errors."""

    pass


class InvalidRosterException(PairingException):
    """Raised when a roster cannot be paired (duplicate or malformed ids)."""

    pass


class InvalidPairingOptionsException(InvalidRosterException):
    """Raised when a pairing penalty weight is negative or not finite."""

    pass


# ========== Rating Exceptions ==========


class RatingException(TesujiException):
    """Base exception for rating-related errors."""

    pass


class InvalidRatingException(RatingException):
    """Raised when a rating has a non-positive deviation or volatility."""

    pass


class NumericDivergenceException(RatingException):
    """Raised when the volatility root finder does not converge."""

    pass


# ========== Result Exceptions ==========


class ResultException(TesujiException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., score out of range)."""

    pass


class DuplicateResultException(ResultException):
    """Raised when attempting to record a result that already exists."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(TesujiException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


class DuplicatePlayerException(TournamentException):
    """Raised when attempting to add a player that already exists."""

    pass


class PlayerNotFoundException(TournamentException):
    """Raised when a requested player cannot be found."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(TesujiException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
