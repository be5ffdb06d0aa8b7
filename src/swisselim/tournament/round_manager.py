"""Round management for Swiss elimination tournaments.

This module handles all round-related operations: elimination of contestants
who reached the loss limit, ranking of the survivors, pairing generation and
the round history.
"""

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

from swisselim.models.contestant import Contestant
from swisselim.models.game import FirstMoveAdvantage, Game, GameResult
from swisselim.models.pairing import Pairing, RoundPairings
from swisselim.pairing.bracket_swiss import create_bracket_pairings
from swisselim.tournament.config import TournamentConfig
from swisselim.tournament.scoring import rank_contestants
from swisselim.type_hints import Arena, ContestantId
from swisselim.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and pairing generation.

    This class is responsible for:
    - Eliminating contestants at the start of each round
    - Generating pairings with the bracket Swiss method
    - Opening the games of a new round (and crediting the bye)
    - Tracking round history
    """

    def __init__(self, config: TournamentConfig):
        """Initialize the round manager.

        Args:
            config: Tournament configuration (loss limit, repeat allowance,
                first-move tracking and search budget)
        """
        self.config = config
        self.rounds: List[RoundPairings] = []

    @property
    def current_round_number(self) -> int:
        """Get the current round number (1-indexed).

        Returns:
            The current round number, or 0 if no rounds have been created.
        """
        return len(self.rounds)

    @property
    def current_round(self) -> Optional[RoundPairings]:
        """The most recently generated round, released or not."""
        return self.rounds[-1] if self.rounds else None

    def eliminate(
        self,
        arena: Arena,
        active_ids: List[ContestantId],
        eliminated_ids: List[ContestantId],
    ) -> List[ContestantId]:
        """Move every active contestant at the loss limit to the eliminated list.

        Both lists are updated in place; elimination is never undone.

        Returns:
            Identifiers of the contestants eliminated by this call
        """
        newly_eliminated = [
            cid
            for cid in active_ids
            if arena[cid].loss_count >= self.config.allowed_losses
        ]
        for cid in newly_eliminated:
            active_ids.remove(cid)
            eliminated_ids.append(cid)
            logger.info(
                f"Eliminated {arena[cid].name} after {arena[cid].loss_count} losses"
            )
        return newly_eliminated

    def create_next_round(
        self,
        arena: Arena,
        active_ids: List[ContestantId],
        eliminated_ids: List[ContestantId],
    ) -> RoundPairings:
        """Eliminate, rank, pair and open the games of the next round.

        The caller guarantees no game of the previous round is in progress.

        Args:
            arena: All contestants of the tournament (id -> Contestant)
            active_ids: Identifiers of the contestants still in the tournament
            eliminated_ids: Identifiers of the eliminated contestants

        Returns:
            The pairings of the new round
        """
        round_number = self.current_round_number + 1
        newly_eliminated = self.eliminate(arena, active_ids, eliminated_ids)

        ranked = rank_contestants((arena[cid] for cid in active_ids), arena)
        logger.info(
            f"Creating round {round_number} with {len(ranked)} active contestants"
        )

        result = create_bracket_pairings(
            ranked,
            track_first_move=self.config.track_first_move_advantage,
            max_repeat_pairings=self.config.max_repeat_pairings,
            search_budget=self.config.search_budget,
        )

        pairings: List[Pairing] = []
        for first, second in result.pairings:
            pairings.append(self._start_game(first, second, round_number))

        bye_id = None
        if result.bye is not None:
            bye_id = self._award_bye(result.bye, round_number)

        round_pairings = RoundPairings(
            round_number=round_number,
            pairings=pairings,
            bye_id=bye_id,
            strong_criteria=result.strong,
            eliminated_ids=newly_eliminated,
        )
        # A round without games has nothing left to report
        if not pairings:
            round_pairings.is_released = True

        self.rounds.append(round_pairings)
        return round_pairings

    def _start_game(
        self, first: Contestant, second: Contestant, round_number: int
    ) -> Pairing:
        """Append an in-progress game to both sides of a pairing."""
        tracked = self.config.track_first_move_advantage
        first.add_game(
            Game(
                round_number=round_number,
                result=GameResult.IN_PROGRESS,
                opponent_id=second.id,
                advantage=FirstMoveAdvantage.FIRST if tracked else None,
            )
        )
        second.add_game(
            Game(
                round_number=round_number,
                result=GameResult.IN_PROGRESS,
                opponent_id=first.id,
                advantage=FirstMoveAdvantage.LAST if tracked else None,
            )
        )
        return Pairing(
            first_id=first.id,
            second_id=second.id,
            first_mover_id=first.id if tracked else None,
        )

    def _award_bye(self, contestant: Contestant, round_number: int) -> ContestantId:
        """Credit a bye, a terminal win with no opponent."""
        if contestant.has_received_bye:
            logger.warning(
                f"{contestant.name} receives a second bye in round {round_number}"
            )
        contestant.add_game(Game(round_number=round_number, result=GameResult.WIN))
        logger.info(f"Round {round_number}: bye for {contestant.name}")
        return contestant.id
