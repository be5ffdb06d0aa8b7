"""TournamentConfig data class."""

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

from dataclasses import dataclass
from typing import Any, Dict

from swisselim.constants import (
    DEFAULT_ALLOWED_LOSSES,
    DEFAULT_MAX_REPEAT_PAIRINGS,
    DEFAULT_SEARCH_BUDGET,
    DEFAULT_TOURNAMENT_NAME,
    DEFAULT_TRACK_FIRST_MOVE_ADVANTAGE,
)
from swisselim.exceptions import InvalidConfigurationException


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    allowed_losses : int
        Losses after which a contestant is eliminated. Must be at least 1.
    track_first_move_advantage : bool
        Whether first-move preferences are considered and the first move
        is allocated for every pairing.
    max_repeat_pairings : int
        Number of times two contestants may meet again (0 = no rematches).
    search_budget : int
        Candidate evaluations the pairing search may spend on one round.
    """

    name: str = DEFAULT_TOURNAMENT_NAME
    allowed_losses: int = DEFAULT_ALLOWED_LOSSES
    track_first_move_advantage: bool = DEFAULT_TRACK_FIRST_MOVE_ADVANTAGE
    max_repeat_pairings: int = DEFAULT_MAX_REPEAT_PAIRINGS
    search_budget: int = DEFAULT_SEARCH_BUDGET

    def __post_init__(self) -> None:
        if isinstance(self.allowed_losses, bool) or not isinstance(
            self.allowed_losses, int
        ):
            raise InvalidConfigurationException(
                f"allowed_losses must be an integer, got {self.allowed_losses!r}"
            )
        if self.allowed_losses < 1:
            raise InvalidConfigurationException(
                f"allowed_losses must be at least 1, got {self.allowed_losses}"
            )
        if self.max_repeat_pairings < 0:
            raise InvalidConfigurationException(
                "max_repeat_pairings cannot be negative, "
                f"got {self.max_repeat_pairings}"
            )
        if self.search_budget < 1:
            raise InvalidConfigurationException(
                f"search_budget must be at least 1, got {self.search_budget}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "allowed_losses": self.allowed_losses,
            "track_first_move_advantage": self.track_first_move_advantage,
            "max_repeat_pairings": self.max_repeat_pairings,
            "search_budget": self.search_budget,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", DEFAULT_TOURNAMENT_NAME),
            allowed_losses=data.get("allowed_losses", DEFAULT_ALLOWED_LOSSES),
            track_first_move_advantage=data.get(
                "track_first_move_advantage", DEFAULT_TRACK_FIRST_MOVE_ADVANTAGE
            ),
            max_repeat_pairings=data.get(
                "max_repeat_pairings", DEFAULT_MAX_REPEAT_PAIRINGS
            ),
            search_budget=data.get("search_budget", DEFAULT_SEARCH_BUDGET),
        )
