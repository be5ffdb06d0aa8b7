"""A contestant in a Swiss elimination tournament."""

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

from typing import List, Optional

from swisselim.models.game import FirstMoveAdvantage, Game, GameResult
from swisselim.models.seed import Seed
from swisselim.type_hints import ContestantId
from swisselim.utils import generate_id, setup_logger

logger = setup_logger(__name__)


class Contestant:
    """Represents a contestant in the tournament.

    The contestant exclusively owns its game history. Every derived value is
    recomputed from that history on access; nothing is cached, so the values
    always reflect the latest reported results.

    Attributes:
        id: Unique identifier used by the tournament arena
        name: Display name
        seed: Seeding value, the last-resort tie-break in rankings
        games: Chronological game records, one per round played
    """

    def __init__(
        self,
        name: str,
        seed: Seed,
        contestant_id: Optional[ContestantId] = None,
    ) -> None:
        self.id: ContestantId = contestant_id or generate_id(self.__class__.__name__)
        self.name: str = name
        self.seed: Seed = seed
        self.games: List[Game] = []

    def __repr__(self) -> str:
        return f"Contestant(name={self.name!r}, id={self.id!r}, seed={self.seed})"

    # ========== History ==========

    def add_game(self, game: Game) -> None:
        """Append the game of a new round to the history."""
        self.games.append(game)
        logger.debug(
            f"{self.name}: round {game.round_number} game added ({game.display_result})"
        )

    @property
    def last_game(self) -> Optional[Game]:
        return self.games[-1] if self.games else None

    @property
    def has_game_in_progress(self) -> bool:
        last = self.last_game
        return last is not None and last.result is GameResult.IN_PROGRESS

    # ========== Derived values ==========

    @property
    def win_count(self) -> int:
        return sum(1 for game in self.games if game.result is GameResult.WIN)

    @property
    def loss_count(self) -> int:
        """Losses so far, i.e. terminal games played minus wins."""
        return sum(1 for game in self.games if game.result is GameResult.LOSS)

    @property
    def games_played(self) -> int:
        """Number of games with a terminal result, byes included."""
        return sum(1 for game in self.games if game.is_terminal)

    @property
    def bye_count(self) -> int:
        return sum(1 for game in self.games if game.is_bye)

    @property
    def has_received_bye(self) -> bool:
        return self.bye_count > 0

    @property
    def opponent_ids(self) -> List[ContestantId]:
        """Opponents in round order, byes excluded."""
        return [game.opponent_id for game in self.games if game.opponent_id is not None]

    @property
    def advantage_history(self) -> List[FirstMoveAdvantage]:
        """Sides played in round order, byes and untracked games excluded."""
        return [game.advantage for game in self.games if game.advantage is not None]
