"""Game record data class."""

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
from enum import Enum
from typing import Optional

from swisselim.constants import (
    RESULT_BYE,
    RESULT_IN_PROGRESS,
    RESULT_LOSS,
    RESULT_WIN,
)
from swisselim.type_hints import ContestantId


class GameResult(Enum):
    """Result of a game from one contestant's point of view."""

    WIN = "win"
    LOSS = "loss"
    IN_PROGRESS = "in_progress"

    @property
    def is_terminal(self) -> bool:
        return self is not GameResult.IN_PROGRESS


class FirstMoveAdvantage(Enum):
    """Turn-order side a contestant played with."""

    FIRST = "first"
    LAST = "last"

    def opposite(self) -> "FirstMoveAdvantage":
        if self is FirstMoveAdvantage.FIRST:
            return FirstMoveAdvantage.LAST
        return FirstMoveAdvantage.FIRST


@dataclass
class Game:
    """One round of one contestant's history.

    Attributes
    ----------
    round_number : int
        Round the game belongs to (1-indexed).
    result : GameResult
        Outcome from the owning contestant's point of view.
    opponent_id : str or None
        Identifier of the opponent in the tournament arena, ``None`` for a bye.
        The opponent is only looked up for scoring, never owned.
    advantage : FirstMoveAdvantage or None
        Side played, ``None`` for a bye or when advantage is not tracked.
    """

    round_number: int
    result: GameResult
    opponent_id: Optional[ContestantId] = None
    advantage: Optional[FirstMoveAdvantage] = None

    @property
    def is_bye(self) -> bool:
        return self.opponent_id is None

    @property
    def is_terminal(self) -> bool:
        return self.result.is_terminal

    @property
    def display_result(self) -> str:
        """Short result string for reports."""
        if self.is_bye:
            return RESULT_BYE
        if self.result is GameResult.WIN:
            return RESULT_WIN
        if self.result is GameResult.LOSS:
            return RESULT_LOSS
        return RESULT_IN_PROGRESS
