"""Exceptions for use in Swiss Elimination"""

# Swiss Elimination
# Copyright (C) 2025  Swiss Elimination developers
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


class SwissElimException(Exception):
    """Base exception for all Swiss Elimination errors.

    All custom exceptions in the package inherit from this class, so callers
    can catch every package-specific error with a single except clause.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(SwissElimException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class RoundInProgressException(TournamentStateException):
    """Raised when a new round is requested while a game has no result yet."""

    def __init__(self, round_number: int, pending_games: int) -> None:
        self.round_number = round_number
        self.pending_games = pending_games
        super().__init__(
            f"Round {round_number} is still in progress "
            f"({pending_games} game(s) without a result)"
        )


class DuplicateContestantException(TournamentException):
    """Raised when attempting to add a contestant that already exists."""

    pass


# ========== Contestant Exceptions ==========


class ContestantException(SwissElimException):
    """Base exception for contestant-related errors."""

    pass


class ContestantNotFoundException(ContestantException):
    """Raised when a requested contestant cannot be found."""

    pass


# ========== Result Exceptions ==========


class ResultException(SwissElimException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result does not belong to the current round."""

    pass


class DuplicateResultException(ResultException):
    """Raised when attempting to record a result that already exists."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissElimException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
